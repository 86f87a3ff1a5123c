import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

logger = logging.getLogger(__name__)

_LINE_SEP_EXPR = re.compile(r"\r\n|\r|\n")
_HEADING_EXPR = re.compile(r"^ {0,3}(#{1,6})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
_TIP_HEADING_EXPR = re.compile(r"^(\d+)\.[ \t]+(.+)$")
_FENCE_OPEN_EXPR = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^\s`]*)")
_ADMONITION_EXPR = re.compile(r"^ {0,3}>[ \t]*\[!(?P<kind>[A-Za-z]+)\][ \t]*$")
_QUOTE_EXPR = re.compile(r"^ {0,3}>[ \t]?")
_INLINE_CODE_EXPR = re.compile(r"(`+)(?:(?!\1).)+?\1")
_LINK_EXPR = re.compile(r"(?<!!)\[(?P<text>[^\]]+)\]\((?P<target>[^)\s]+)(?:[ \t]+\"[^\"]*\")?\)")
_SLUG_STRIP_EXPR = re.compile(r"[^\w\- ]")

PYTHON_LANGUAGES = frozenset({"python", "py", "python3"})


@dataclass
class CodeBlock:
    """A fenced code listing."""

    language: str
    code: str
    line: int

    @property
    def is_python(self) -> bool:
        return self.language in PYTHON_LANGUAGES


@dataclass
class Admonition:
    """A GitHub admonition blockquote such as ``> [!TIP]``."""

    kind: str
    text: str
    line: int


@dataclass
class Heading:
    level: int
    text: str
    line: int
    anchor: str


@dataclass
class Link:
    text: str
    target: str
    line: int

    @property
    def fragment(self) -> Optional[str]:
        """The ``#fragment`` of an internal link, None for external links."""
        if self.target.startswith("#"):
            return self.target[1:]
        return None


@dataclass
class Tip:
    """One numbered entry: heading, explanatory prose, optional listings."""

    number: int
    title: str
    line: int
    anchor: str
    prose: str = ""
    code_blocks: List[CodeBlock] = field(default_factory=list)
    admonitions: List[Admonition] = field(default_factory=list)

    @property
    def heading(self) -> str:
        return f"{self.number}. {self.title}"


@dataclass
class TipDocument:
    title: Optional[str] = None
    tips: List[Tip] = field(default_factory=list)
    headings: List[Heading] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    code_blocks: List[CodeBlock] = field(default_factory=list)
    admonitions: List[Admonition] = field(default_factory=list)
    unclosed_fences: List[int] = field(default_factory=list)
    source: str = ""

    @property
    def anchors(self) -> Set[str]:
        return {heading.anchor for heading in self.headings}

    def get(self, number: int) -> Tip:
        for tip in self.tips:
            if tip.number == number:
                return tip
        raise KeyError(f"no tip numbered {number}")


def slugify(heading: str) -> str:
    """
    Anchor id a repository viewer generates for a heading.

    Link markup keeps its text, everything that is not a word character,
    a space, a hyphen or an underscore is dropped, and spaces become hyphens.
    """
    text = _LINK_EXPR.sub(lambda match: match.group("text"), heading)
    text = _SLUG_STRIP_EXPR.sub("", text.strip().lower())
    return text.replace(" ", "-")


class _Slugger:
    """Hands out unique anchors, suffixing repeats with -1, -2, ..."""

    def __init__(self) -> None:
        self._occurrences: Dict[str, int] = {}

    def slug(self, heading: str) -> str:
        original = slug = slugify(heading)
        while slug in self._occurrences:
            self._occurrences[original] += 1
            slug = f"{original}-{self._occurrences[original]}"
        self._occurrences[slug] = 0
        return slug


def _opens_fence(match: "re.Match[str]", line: str) -> bool:
    # a backtick fence's info string may not contain backticks,
    # otherwise the line is inline code such as ```x```
    if match.group("fence")[0] == "`":
        return "`" not in line[match.end("fence"):]
    return True


class _OpenFence:
    def __init__(self, marker: str, language: str, line: int) -> None:
        self.char = marker[0]
        self.width = len(marker)
        self.language = language
        self.line = line
        self.lines: List[str] = []

    def closed_by(self, line: str) -> bool:
        stripped = line.strip()
        if len(line) - len(line.lstrip(" ")) > 3 or not stripped:
            return False
        return set(stripped) == {self.char} and len(stripped) >= self.width


class _DocumentBuilder:
    def __init__(self, text: str) -> None:
        self.document = TipDocument(source=text)
        self._slugger = _Slugger()
        self._tip: Optional[Tip] = None
        self._prose: List[str] = []
        self._fence: Optional[_OpenFence] = None
        self._admonition: Optional[Admonition] = None
        self._admonition_lines: List[str] = []

    def feed(self, line: str, lineno: int) -> None:
        if self._fence is not None:
            if self._fence.closed_by(line):
                self._close_fence()
            else:
                self._fence.lines.append(line)
            return

        match = _FENCE_OPEN_EXPR.match(line)
        if match and _opens_fence(match, line):
            self._close_admonition()
            self._fence = _OpenFence(
                match.group("fence"), match.group("info").lower(), lineno
            )
            return

        if self._admonition is not None:
            if _QUOTE_EXPR.match(line):
                quoted = _QUOTE_EXPR.sub("", line, count=1)
                self._admonition_lines.append(quoted)
                self._scan_links(quoted, lineno)
                return
            self._close_admonition()

        match = _ADMONITION_EXPR.match(line)
        if match:
            self._admonition = Admonition(match.group("kind").upper(), "", lineno)
            return

        match = _HEADING_EXPR.match(line)
        if match:
            self._heading(len(match.group(1)), match.group(2), lineno)
            return

        self._scan_links(line, lineno)
        if self._tip is not None:
            self._prose.append(line)

    def finish(self) -> TipDocument:
        if self._fence is not None:
            logger.debug("unclosed fence opened on line %s", self._fence.line)
            self.document.unclosed_fences.append(self._fence.line)
            self._fence = None
        self._close_admonition()
        self._close_tip()
        return self.document

    def _heading(self, level: int, text: str, lineno: int) -> None:
        anchor = self._slugger.slug(text)
        self.document.headings.append(Heading(level, text, lineno, anchor))
        if level == 1 and self.document.title is None:
            self.document.title = text
        if level > 2:
            return

        self._close_tip()
        match = _TIP_HEADING_EXPR.match(text) if level == 2 else None
        if match:
            self._tip = Tip(
                number=int(match.group(1)),
                title=match.group(2).strip(),
                line=lineno,
                anchor=anchor,
            )

    def _scan_links(self, line: str, lineno: int) -> None:
        visible = _INLINE_CODE_EXPR.sub("", line)
        for match in _LINK_EXPR.finditer(visible):
            self.document.links.append(
                Link(match.group("text"), match.group("target"), lineno)
            )

    def _close_fence(self) -> None:
        fence = self._fence
        block = CodeBlock(fence.language, "\n".join(fence.lines), fence.line)
        self.document.code_blocks.append(block)
        if self._tip is not None:
            self._tip.code_blocks.append(block)
        self._fence = None

    def _close_admonition(self) -> None:
        if self._admonition is None:
            return
        self._admonition.text = "\n".join(self._admonition_lines).strip()
        self.document.admonitions.append(self._admonition)
        if self._tip is not None:
            self._tip.admonitions.append(self._admonition)
        self._admonition = None
        self._admonition_lines = []

    def _close_tip(self) -> None:
        if self._tip is None:
            return
        self._tip.prose = "\n".join(self._prose).strip()
        self.document.tips.append(self._tip)
        logger.debug("parsed tip %s: %s", self._tip.number, self._tip.title)
        self._tip = None
        self._prose = []


def parse_document(text: str) -> TipDocument:
    """Read a Markdown tips document into a :class:`TipDocument`.

    Numbered level-2 headings (``## 3. Title``) start a tip. Fenced code is
    opaque: headings, links and admonitions inside a fence are ignored.
    An unclosed fence is recorded on the document instead of raising.
    """
    builder = _DocumentBuilder(text)
    for lineno, line in enumerate(_LINE_SEP_EXPR.split(text), start=1):
        builder.feed(line, lineno)
    return builder.finish()


def load_document(path: Union[str, Path]) -> TipDocument:
    return parse_document(Path(path).read_text(encoding="utf-8"))


def render_toc(document: TipDocument) -> str:
    """Markdown bullet list linking every tip."""
    return "\n".join(f"- [{tip.heading}](#{tip.anchor})" for tip in document.tips)
