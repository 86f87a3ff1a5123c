import pytest

from fastapi_tips.lint import (
    CHECKS,
    DocumentLintError,
    Problem,
    check_file,
    lint_file,
    lint_text,
)

CLEAN = """\
# Tips

- [1. One](#1-one)
- [2. Two](#2-two)

## 1. One

Prose.

```python
x = 1
```

## 2. Two

> [!WARNING]
> Careful.

More prose, see [one](#1-one).
"""


def codes(problems):
    return [problem.code for problem in problems]


def test_lint_text_whenClean_thenNoProblems():
    assert lint_text(CLEAN) == []


def test_lint_text_whenGapInNumbering_thenTipSequence():
    text = "[a](#1-a) [c](#3-c)\n\n## 1. A\n\nx\n\n## 3. C\n\ny\n"

    problems = lint_text(text)

    assert problems == [Problem(7, "tip-sequence", "tip numbered 3, expected 2")]


def test_lint_text_whenNotStartingAtOne_thenTipSequence():
    problems = lint_text("## 2. B\n\nx\n", checks=["tip-sequence"])

    assert problems == [Problem(1, "tip-sequence", "tip numbered 2, expected 1")]


def test_lint_text_whenDuplicateNumberAndTitle_thenTipDuplicate():
    text = "## 1. Same\n\nx\n\n## 1. same\n\ny\n"

    problems = lint_text(text, checks=["tip-duplicate"])

    assert codes(problems) == ["tip-duplicate", "tip-duplicate"]
    assert all(problem.line == 5 for problem in problems)
    assert "already used on line 1" in problems[0].message


def test_lint_text_whenTipHasOnlyCode_thenTipEmpty():
    text = "## 1. Bare\n\n```python\npass\n```\n"

    assert codes(lint_text(text, checks=["tip-empty"])) == ["tip-empty"]


def test_lint_text_whenPythonDoesNotParse_thenCodeSyntaxOnOffendingLine():
    text = "## 1. Broken\n\nx\n\n```python\nx = 1\ndef f(:\n```\n\n```bash\nif [ x ]; then\n```\n"

    problems = lint_text(text, checks=["code-syntax"])

    assert codes(problems) == ["code-syntax"]
    assert problems[0].line == 7


def test_lint_text_whenFenceUnclosed_thenCodeFence():
    problems = lint_text("## 1. Open\n\nx\n\n```python\n", checks=["code-fence"])

    assert problems == [Problem(5, "code-fence", "code fence is never closed")]


def test_lint_text_whenLinkTargetsMissingAnchor_thenLinkAnchor():
    problems = lint_text("# T\n\n[gone](#nowhere) [ok](#t) [web](https://x.org)\n")

    assert problems == [
        Problem(3, "link-anchor", "link target #nowhere matches no heading")
    ]


def test_lint_text_whenUnknownAdmonition_thenAdmonitionKind():
    problems = lint_text("> [!HINT]\n> text\n", checks=["admonition-kind"])

    assert codes(problems) == ["admonition-kind"]
    assert "[!HINT]" in problems[0].message


def test_lint_text_whenTipNotLinked_thenTocMissing():
    problems = lint_text("## 1. Lonely\n\nx\n", checks=["toc-missing"])

    assert problems == [Problem(1, "toc-missing", "tip 1 is not linked from anywhere")]


def test_lint_text_whenUnknownCheck_thenValueError():
    with pytest.raises(ValueError, match="unknown check"):
        lint_text(CLEAN, checks=["spelling"])


def test_lint_text_whenSeveralProblems_thenSortedByLine():
    text = "## 2. B\n\n[x](#missing)\n\n```python\n(\n```\n"

    problems = lint_text(text)

    assert [problem.line for problem in problems] == sorted(
        problem.line for problem in problems
    )
    assert set(codes(problems)) == {
        "tip-sequence",
        "link-anchor",
        "code-syntax",
        "toc-missing",
    }


def test_checks_registry_whenListed_thenEveryCodeIsCallable():
    assert sorted(CHECKS) == [
        "admonition-kind",
        "code-fence",
        "code-syntax",
        "link-anchor",
        "tip-duplicate",
        "tip-empty",
        "tip-sequence",
        "toc-missing",
    ]


def test_problem_format_whenPath_thenPrefixed():
    problem = Problem(3, "link-anchor", "bad")

    assert problem.format("README.md") == "README.md:3: link-anchor bad"
    assert problem.format() == "3: link-anchor bad"


def test_check_file_whenProblems_thenDocumentLintError(tmp_path):
    path = tmp_path / "tips.md"
    path.write_text("## 3. Late\n", encoding="utf-8")

    with pytest.raises(DocumentLintError) as excinfo:
        check_file(path)

    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.path == path
    assert codes(excinfo.value.problems) == codes(lint_file(path))


def test_check_file_whenClean_thenReturnsNone(tmp_path):
    path = tmp_path / "tips.md"
    path.write_text(CLEAN, encoding="utf-8")

    assert check_file(path) is None


def test_lint_text_whenTripleBacktickInlineCode_thenNoFalseFenceProblem():
    text = "[a](#1-a)\n\n## 1. A\n\n```x``` is inline code.\n\n## 2. B\n\ny [b](#2-b)\n"

    assert lint_text(text) == []
