import ast
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

from fastapi_tips.tip import TipDocument, load_document, parse_document

logger = logging.getLogger(__name__)

ALLOWED_ADMONITIONS = ("NOTE", "TIP", "IMPORTANT", "WARNING", "CAUTION")


@dataclass(frozen=True, order=True)
class Problem:
    line: int
    code: str
    message: str

    def format(self, path: Optional[Union[str, Path]] = None) -> str:
        prefix = f"{path}:{self.line}" if path is not None else f"{self.line}"
        return f"{prefix}: {self.code} {self.message}"


class DocumentLintError(ValueError):
    """Raised by :func:`check_file` when a document has problems."""

    def __init__(self, path: Union[str, Path], problems: List[Problem]) -> None:
        self.path = path
        self.problems = problems
        super().__init__(
            f"{path}: {len(problems)} problem(s)\n"
            + "\n".join(problem.format(path) for problem in problems)
        )


Check = Callable[[TipDocument], Iterator[Problem]]


def _check_sequence(document: TipDocument) -> Iterator[Problem]:
    expected = 1
    for tip in document.tips:
        if tip.number != expected:
            yield Problem(
                tip.line,
                "tip-sequence",
                f"tip numbered {tip.number}, expected {expected}",
            )
        expected = tip.number + 1


def _check_duplicates(document: TipDocument) -> Iterator[Problem]:
    numbers: Dict[int, int] = {}
    titles: Dict[str, int] = {}
    for tip in document.tips:
        if tip.number in numbers:
            yield Problem(
                tip.line,
                "tip-duplicate",
                f"tip number {tip.number} already used on line {numbers[tip.number]}",
            )
        else:
            numbers[tip.number] = tip.line

        key = tip.title.casefold()
        if key in titles:
            yield Problem(
                tip.line,
                "tip-duplicate",
                f"tip title {tip.title!r} already used on line {titles[key]}",
            )
        else:
            titles[key] = tip.line


def _check_empty(document: TipDocument) -> Iterator[Problem]:
    for tip in document.tips:
        if not tip.prose:
            yield Problem(tip.line, "tip-empty", f"tip {tip.number} has no explanation")


def _check_code_syntax(document: TipDocument) -> Iterator[Problem]:
    for block in document.code_blocks:
        if not block.is_python:
            continue
        try:
            ast.parse(block.code)
        except SyntaxError as e:
            # the listing starts one line below its opening fence
            line = block.line + (e.lineno or 1)
            yield Problem(line, "code-syntax", f"invalid Python: {e.msg}")


def _check_fences(document: TipDocument) -> Iterator[Problem]:
    for line in document.unclosed_fences:
        yield Problem(line, "code-fence", "code fence is never closed")


def _check_anchors(document: TipDocument) -> Iterator[Problem]:
    anchors = document.anchors
    for link in document.links:
        fragment = link.fragment
        if fragment is not None and fragment not in anchors:
            yield Problem(
                link.line, "link-anchor", f"link target #{fragment} matches no heading"
            )


def _check_admonitions(document: TipDocument) -> Iterator[Problem]:
    for admonition in document.admonitions:
        if admonition.kind not in ALLOWED_ADMONITIONS:
            yield Problem(
                admonition.line,
                "admonition-kind",
                f"unknown admonition [!{admonition.kind}], "
                f"use one of: {', '.join(ALLOWED_ADMONITIONS)}",
            )


def _check_toc(document: TipDocument) -> Iterator[Problem]:
    linked = {link.fragment for link in document.links}
    for tip in document.tips:
        if tip.anchor not in linked:
            yield Problem(
                tip.line, "toc-missing", f"tip {tip.number} is not linked from anywhere"
            )


CHECKS: Dict[str, Check] = {
    "tip-sequence": _check_sequence,
    "tip-duplicate": _check_duplicates,
    "tip-empty": _check_empty,
    "code-syntax": _check_code_syntax,
    "code-fence": _check_fences,
    "link-anchor": _check_anchors,
    "admonition-kind": _check_admonitions,
    "toc-missing": _check_toc,
}


def lint_document(
    document: TipDocument, checks: Optional[Iterable[str]] = None
) -> List[Problem]:
    """Run the selected checks (all by default) and return problems by line."""
    selected = list(CHECKS) if checks is None else list(checks)
    unknown = [code for code in selected if code not in CHECKS]
    if unknown:
        raise ValueError(f"unknown check(s): {', '.join(unknown)}")

    problems: List[Problem] = []
    for code in selected:
        found = list(CHECKS[code](document))
        logger.debug("check %s: %s problem(s)", code, len(found))
        problems.extend(found)
    return sorted(problems)


def lint_text(text: str, checks: Optional[Iterable[str]] = None) -> List[Problem]:
    return lint_document(parse_document(text), checks)


def lint_file(
    path: Union[str, Path], checks: Optional[Iterable[str]] = None
) -> List[Problem]:
    return lint_document(load_document(path), checks)


def check_file(path: Union[str, Path], checks: Optional[Iterable[str]] = None) -> None:
    problems = lint_file(path, checks)
    if problems:
        raise DocumentLintError(path, problems)
