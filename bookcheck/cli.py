"""Command line entry point: book metrics, badge updates and linting."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from termcolor import colored

from .book import BOOK_SRC_DIR, Book
from .errors import LeveledLintError
from .update import update_badges, update_meta_tags

_VERSION = "0.1.0"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookcheck",
        description="Book metrics, badge updates and linting.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    parser.add_argument(
        "-m", "--metrics", action="store_true", help="Print page/diagram count metrics."
    )
    parser.add_argument("-l", "--lint", action="store_true", help="Run custom linter.")
    parser.add_argument(
        "--log-warn",
        action="store_true",
        help="Log linter warnings. If not given, warnings become hard errors.",
    )
    parser.add_argument(
        "-u",
        "--update",
        action="store_true",
        help="Update page/diagram count badges and missing meta tags.",
    )
    parser.add_argument(
        "--src-dir",
        type=Path,
        default=BOOK_SRC_DIR,
        help="Book source directory (default: %(default)s).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool; returns the process exit status."""
    parser = _parser()
    args = parser.parse_args(argv)

    if not (args.metrics or args.lint or args.log_warn or args.update):
        parser.error("one of --metrics, --lint, --log-warn or --update is required")
    if args.log_warn and not args.lint:
        parser.error("--log-warn requires --lint")

    book = Book.load(args.src_dir, args.lint)

    if args.metrics:
        print(f"\n{book.render()}")

    try:
        if args.update:
            update_badges(book, args.src_dir)
            update_meta_tags(book)
            print(f"Updates {colored('OK', 'green')}")

        if args.lint:
            for linter in (
                book.non_chp_linter(),
                book.chp_intro_linter(),
                book.chp_sections_linter(),
                book.svg_linter(),
            ):
                linter.run(args.log_warn)
            print(f"Lint {colored('OK', 'green')}")
    except (LeveledLintError, OSError) as err:
        print(f"{colored('error', 'red')}: {err}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())