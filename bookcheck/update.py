"""Rewrite book files: page/diagram badges and social meta tags."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from .book import BOOK_SRC_DIR, Book
from .chapter import WORDS_PER_PAGE
from .content import Section
from .metatags import prefix_meta_tags, remove_meta_tags, starts_with_meta_tags

BADGE_LINK = "https://example.com/book"
PAGE_BADGE_START = "[![Pages](https://badges.example.com/badge/Pages"
DIAGRAM_BADGE_START = "[![Diagrams](https://badges.example.com/badge/Diagrams"


def _read_lines(path: Path) -> list[str]:
    """Read a file's lines, stopping at the first line that is not UTF-8."""
    raw = path.read_bytes().split(b"\n")
    if raw and raw[-1] == b"":
        raw.pop()
    lines = []
    for chunk in raw:
        try:
            text = chunk.decode("utf-8")
        except UnicodeDecodeError:
            break
        lines.append(text.removesuffix("\r"))
    return lines


def _write_lines(path: Path, lines: list[str]) -> None:
    path.write_bytes(("\n".join(lines) + "\n").encode("utf-8"))


def _badge_line(line: str, page_count: int, diagram_count: int) -> str:
    if line.startswith(PAGE_BADGE_START):
        return f"{PAGE_BADGE_START}-{page_count:,}-purple.svg)]({BADGE_LINK})"
    if line.startswith(DIAGRAM_BADGE_START):
        return f"{DIAGRAM_BADGE_START}-{diagram_count:,}-blue.svg)]({BADGE_LINK})"
    return line


def update_badges(book: Book, src_dir: str | PathLike[str] = BOOK_SRC_DIR) -> None:
    """Update the page and diagram count badges.

    Rewrites ``README.md`` in the parent of ``src_dir`` and ``landing.md``
    inside ``src_dir``. Both files must already exist.
    """
    page_count = book.word_count() // WORDS_PER_PAGE
    diagram_count = book.diagram_count()
    src = Path(src_dir)
    readme_path = src.parent / "README.md"
    landing_path = src / "landing.md"

    for path in (readme_path, landing_path):
        lines = [_badge_line(line, page_count, diagram_count) for line in _read_lines(path)]
        _write_lines(path, lines)


def update_meta_tags(book: Book) -> None:
    """Make every section of the book start with the social meta tags.

    Sections that already start with them are rewritten unchanged; otherwise
    any stray tags are removed and the full set is put at the top.
    """
    for chapter in book.chapters.values():
        for content in chapter.contents:
            if not isinstance(content, Section):
                continue
            current = _read_lines(content.path)
            if starts_with_meta_tags(current):
                updated = current
            else:
                updated = prefix_meta_tags(remove_meta_tags(current))
            _write_lines(content.path, updated)