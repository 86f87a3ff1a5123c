"""
Command-line interface for the tips document.

Usage:
    fastapi-tips lint                     # lint README.md
    fastapi-tips -v lint docs/*.md        # several files, debug logging
    fastapi-tips lint --check code-syntax # a single check
    fastapi-tips list README.md           # numbered tip titles
    fastapi-tips toc README.md            # table of contents Markdown
"""
import argparse
import logging
import sys
from typing import List, Optional

from fastapi_tips import __version__
from fastapi_tips.lint import CHECKS, lint_document
from fastapi_tips.tip import TipDocument, load_document, render_toc

logger = logging.getLogger(__name__)

DEFAULT_PATH = "README.md"

EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_UNREADABLE = 2

log_fmt = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
datefmt = "%Y-%m-%d %H:%M:%S"


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastapi-tips",
        description="Check and inspect a Markdown tips document.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    lint = commands.add_parser("lint", help="Check document quality")
    lint.add_argument(
        "paths", nargs="*", default=[DEFAULT_PATH], metavar="PATH",
        help=f"Markdown files to check (default: {DEFAULT_PATH})",
    )
    lint.add_argument(
        "--check", "-c", action="append", choices=sorted(CHECKS), dest="checks",
        help="Run only this check (repeatable)",
    )

    for name, help_text in (
        ("list", "Print the numbered tip titles"),
        ("toc", "Print a table of contents"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument(
            "path", nargs="?", default=DEFAULT_PATH, metavar="PATH",
            help=f"Markdown file (default: {DEFAULT_PATH})",
        )

    return parser


def _load(path: str) -> Optional[TipDocument]:
    """Parse ``path``, reporting an unreadable or undecodable file on stderr."""
    try:
        return load_document(path)
    except OSError as e:
        print(f"{path}: cannot read: {e.strerror or e}", file=sys.stderr)
    except UnicodeDecodeError as e:
        print(f"{path}: cannot read: not UTF-8 ({e.reason})", file=sys.stderr)
    return None


def cmd_lint(args: argparse.Namespace) -> int:
    exit_code = EXIT_OK
    for path in args.paths:
        document = _load(path)
        if document is None:
            exit_code = EXIT_UNREADABLE
            continue

        problems = lint_document(document, args.checks)
        for problem in problems:
            print(problem.format(path))
        logger.info("%s: %s tip(s), %s problem(s)", path, len(document.tips), len(problems))
        if problems and exit_code == EXIT_OK:
            exit_code = EXIT_PROBLEMS
    return exit_code


def cmd_list(args: argparse.Namespace) -> int:
    document = _load(args.path)
    if document is None:
        return EXIT_UNREADABLE
    for tip in document.tips:
        print(tip.heading)
    return EXIT_OK


def cmd_toc(args: argparse.Namespace) -> int:
    document = _load(args.path)
    if document is None:
        return EXIT_UNREADABLE
    print(render_toc(document))
    return EXIT_OK


COMMANDS = {"lint": cmd_lint, "list": cmd_list, "toc": cmd_toc}


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    logging.basicConfig(
        format=log_fmt,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        datefmt=datefmt,
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
