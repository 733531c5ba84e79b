"""Book data model: chapters gathered from the book source directory."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from termcolor import colored

from .chapter import WORDS_PER_PAGE, Chapter
from .content import Content, Section, Svg
from .errors import Level
from .lint import Linter
from .metatags import META_TAGS
from .rules import (
    rule_footer,
    rule_has_svg,
    rule_header_and_footer,
    rule_heading_sizes,
    rule_md_extension,
    rule_meta_tags,
    rule_no_draft_path,
    rule_nonempty,
    rule_valid_svg,
)

BOOK_SRC_DIR = Path("../../src")

NON_CHP_NUM = 0
APPENDIX_CHP_NUM = 16

_WORD = re.compile(r"[a-zA-Z']+")
_MD_EXTENSIONS = ("md", "MD")
_SVG_EXTENSIONS = ("svg", "SVG")
_INTRO_FILE = "_index.md"
_NON_SECTION_FILES = ("_index.md", "tools.md", "resources.md", "books.md")


def count_words(lines: Iterable[str]) -> int:
    """Count words in the lines, ignoring lines that are social meta tags."""
    return sum(
        len(_WORD.findall(line)) for line in lines if line not in META_TAGS
    )


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


def _extension(path: Path) -> str:
    return path.suffix[1:] if path.suffix else ""


def _book_files(src_dir: Path) -> Iterator[Path]:
    for root, dirs, files in os.walk(src_dir):
        dirs.sort()
        for name in sorted(files):
            path = Path(root, name)
            if _extension(path) in _MD_EXTENSIONS + _SVG_EXTENSIONS and path.is_file():
                yield path


def _sort_key(content: Content) -> int:
    return -content.word_count if isinstance(content, Section) else 0


@dataclass
class Book:
    """The book's chapters, keyed and ordered by chapter number."""

    chapters: dict[int, Chapter] = field(default_factory=dict)

    @classmethod
    def load(
        cls,
        src_dir: str | PathLike[str] = BOOK_SRC_DIR,
        collect_section_data: bool = False,
    ) -> Book:
        """Gather the markdown and SVG files under ``src_dir`` into chapters.

        Lines are kept only when ``collect_section_data`` is true; section
        word counts are always computed. Files with no chapter are left out.
        """
        chapters: dict[int, Chapter] = {}
        for path in _book_files(Path(src_dir)):
            try:
                lines = _read_lines(path)
            except OSError:
                continue
            kept = lines if collect_section_data else None
            content: Content
            if _extension(path) in _SVG_EXTENSIONS:
                content = Svg(path=path, lines=kept)
            else:
                content = Section(path=path, lines=kept, word_count=count_words(lines))

            number = content.chapter()
            if number is None:
                continue
            chapters.setdefault(number, Chapter(number=number)).contents.append(content)

        for chapter in chapters.values():
            chapter.contents.sort(key=_sort_key)

        return cls(chapters=dict(sorted(chapters.items())))

    def word_count(self) -> int:
        """Total words in the book."""
        return sum(chp.word_count() for chp in self.chapters.values())

    def diagram_count(self) -> int:
        """Total diagrams in the book."""
        return sum(chp.diagram_count() for chp in self.chapters.values())

    def _sections(self) -> Iterator[tuple[int, Section]]:
        for number, chapter in self.chapters.items():
            for content in chapter.contents:
                if isinstance(content, Section):
                    yield number, content

    def non_chp_linter(self) -> Linter:
        """Linter for frontmatter that belongs to no chapter."""
        builder = (
            Linter.builder()
            .add_rule(Level.FATAL, rule_md_extension)
            .add_rule(Level.FATAL, rule_no_draft_path)
            .add_rule(Level.FATAL, rule_nonempty)
        )
        for number, section in self._sections():
            if number == NON_CHP_NUM:
                builder.add_content(section)
        return builder.build()

    def chp_intro_linter(self) -> Linter:
        """Linter for chapter intros."""
        builder = (
            Linter.builder()
            .add_rule(Level.FATAL, rule_md_extension)
            .add_rule(Level.FATAL, rule_no_draft_path)
            .add_rule(Level.FATAL, rule_nonempty)
            .add_rule(Level.FATAL, rule_header_and_footer)
            .add_rule(Level.FATAL, rule_heading_sizes)
            .add_rule(Level.FATAL, rule_meta_tags)
            .add_rule(Level.WARNING, rule_has_svg)
        )
        for number, section in self._sections():
            if number in (NON_CHP_NUM, APPENDIX_CHP_NUM):
                continue
            if section.path.name.lower() == _INTRO_FILE:
                builder.add_content(section)
        return builder.build()

    def chp_sections_linter(self) -> Linter:
        """Linter for chapter sections other than intros and reference pages."""
        builder = (
            Linter.builder()
            .add_rule(Level.FATAL, rule_md_extension)
            .add_rule(Level.FATAL, rule_no_draft_path)
            .add_rule(Level.FATAL, rule_nonempty)
            .add_rule(Level.FATAL, rule_footer)
            .add_rule(Level.FATAL, rule_heading_sizes)
        )
        for number, section in self._sections():
            if number == NON_CHP_NUM:
                continue
            name = section.path.name
            if not name:
                continue
            if name.lower() in _NON_SECTION_FILES or name.endswith("PLACEHOLDER.md"):
                continue
            builder.add_content(section)
        return builder.build()

    def svg_linter(self) -> Linter:
        """Linter for every diagram in the book."""
        builder = (
            Linter.builder()
            .add_rule(Level.FATAL, rule_nonempty)
            .add_rule(Level.FATAL, rule_valid_svg)
        )
        for chapter in self.chapters.values():
            for content in chapter.contents:
                if isinstance(content, Svg):
                    builder.add_content(content)
        return builder.build()

    def render(self) -> str:
        """Per-chapter summaries followed by the book totals."""
        words = self.word_count()
        parts = [f"{chapter.render()}\n" for chapter in self.chapters.values()]
        parts.append(
            f"{colored('BOOK TOTAL', 'yellow')}: "
            f"{colored(f'{words:,}', 'light_green')} words "
            f"({colored(f'{words // WORDS_PER_PAGE:,}', 'light_cyan')} pages), "
            f"{colored(f'{self.diagram_count():,}', 'light_blue')} diagrams\n"
        )
        return "".join(parts)

    def __str__(self) -> str:
        return self.render()