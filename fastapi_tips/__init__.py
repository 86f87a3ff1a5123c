from fastapi_tips.lint import DocumentLintError, Problem, lint_document, lint_file
from fastapi_tips.tip import (
    Admonition,
    CodeBlock,
    Tip,
    TipDocument,
    load_document,
    parse_document,
)

__version__ = "0.3.0"

__all__ = [
    "Admonition",
    "CodeBlock",
    "DocumentLintError",
    "Problem",
    "Tip",
    "TipDocument",
    "lint_document",
    "lint_file",
    "load_document",
    "parse_document",
]
