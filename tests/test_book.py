import re
from pathlib import Path

import pytest

from bookcheck.book import APPENDIX_CHP_NUM, Book, count_words
from bookcheck.chapter import WORDS_PER_PAGE
from bookcheck.content import Section, Svg
from bookcheck.errors import LeveledLintError
from bookcheck.metatags import META_TAGS

_ANSI = re.compile(r"\x1b\[[0-9;]*m")

VALID_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">\n<rect width="1" height="1"/>\n</svg>\n'

VALID_INTRO = "\n".join(
    [
        *META_TAGS,
        "",
        "# Chapter Title",
        "",
        "Some intro text here.",
        '<p align="center">',
        '<img src="diagram.svg">',
        "</p>",
        "---",
        "## Learning Outcomes",
        "* one",
        "* two",
        "* three",
        "---",
    ]
) + "\n"

VALID_SECTION = "# Section\n\nBody text goes here.\n\n## Sub\n\nMore text.\n\n---\n"


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def book_dir(tmp_path, monkeypatch):
    src = tmp_path / "src"
    write(src / "landing.md", "Welcome to the book\n")
    write(src / "notes.txt", "ignored words here\n")
    write(src / "chp1" / "_index.md", VALID_INTRO)
    write(src / "chp1" / "section.md", VALID_SECTION)
    write(src / "chp1" / "longer.md", VALID_SECTION + "extra words to make this longer\n")
    write(src / "chp1" / "tools.md", "tools list\n")
    write(src / "chp1" / "diagram.svg", VALID_SVG)
    write(src / "chp16_appendix" / "_index.md", "# Appendix\n")
    write(src / "chp16_appendix" / "PAGE_PLACEHOLDER.md", "placeholder\n")
    monkeypatch.chdir(tmp_path)
    return Path("src")


def test_count_words_basic():
    assert count_words(["Hello world", "it's fine"]) == 4


def test_count_words_skips_meta_tags():
    assert count_words(list(META_TAGS)) == 0
    assert count_words([*META_TAGS, "one two"]) == count_words(["one two"])


def test_count_words_ignores_digits_and_punctuation():
    assert count_words(["123 ... !!!", ""]) == 0


def test_load_groups_by_chapter(book_dir):
    book = Book.load(book_dir, True)
    assert list(book.chapters) == [0, 1, APPENDIX_CHP_NUM]
    names = {c.path.name for c in book.chapters[0].contents}
    assert names == {"landing.md"}


def test_load_sorts_contents_by_word_count(book_dir):
    book = Book.load(book_dir, True)
    contents = book.chapters[1].contents
    counts = [c.word_count if isinstance(c, Section) else 0 for c in contents]
    assert counts == sorted(counts, reverse=True)
    assert isinstance(contents[-1], Svg)


def test_load_without_data_keeps_word_counts(book_dir):
    with_data = Book.load(book_dir, True)
    without = Book.load(book_dir, False)
    assert without.word_count() == with_data.word_count()
    assert all(c.lines is None for chp in without.chapters.values() for c in chp.contents)


def test_load_reads_lines(book_dir):
    book = Book.load(book_dir, True)
    landing = book.chapters[0].contents[0]
    assert landing.lines == ["Welcome to the book"]
    assert landing.word_count == count_words(landing.lines)


def test_metrics_sum_chapters(book_dir):
    book = Book.load(book_dir, True)
    assert book.word_count() == sum(c.word_count() for c in book.chapters.values())
    assert book.diagram_count() == 1


def test_linter_contents_selection(book_dir):
    book = Book.load(book_dir, True)
    assert [c.path.name for c in book.non_chp_linter().contents] == ["landing.md"]
    intro = book.chp_intro_linter().contents
    assert [c.path for c in intro] == [Path("src/chp1/_index.md")]
    sections = {c.path.name for c in book.chp_sections_linter().contents}
    assert sections == {"section.md", "longer.md"}
    assert [c.path.name for c in book.svg_linter().contents] == ["diagram.svg"]


def test_valid_book_lints(book_dir, capsys):
    book = Book.load(book_dir, True)
    for linter in (
        book.non_chp_linter(),
        book.chp_intro_linter(),
        book.chp_sections_linter(),
        book.svg_linter(),
    ):
        linter.run(False)
    assert capsys.readouterr().out == ""


def test_broken_intro_fails_lint(book_dir):
    write(book_dir / "chp1" / "_index.md", "# Title only\n")
    book = Book.load(book_dir, True)
    with pytest.raises(LeveledLintError) as info:
        book.chp_intro_linter().run(False)
    assert info.value.is_fatal
    assert info.value.error.reason == "Missing header separator"


def test_linters_fail_without_collected_data(book_dir):
    book = Book.load(book_dir, False)
    with pytest.raises(LeveledLintError) as info:
        book.svg_linter().run(True)
    assert info.value.error.reason == "Empty content"


def test_render_ends_with_totals(book_dir):
    book = Book.load(book_dir, True)
    text = _ANSI.sub("", book.render())
    words = book.word_count()
    assert text.splitlines()[-1] == (
        f"BOOK TOTAL: {words:,} words ({words // WORDS_PER_PAGE:,} pages), "
        f"{book.diagram_count()} diagrams"
    )
    assert text.startswith("(frontmatter):")
    assert str(book) == book.render()


def test_absolute_frontmatter_is_dropped(tmp_path):
    write(tmp_path / "book" / "landing.md", "Welcome\n")
    write(tmp_path / "book" / "chp2" / "a.md", "Hello there\n")
    book = Book.load(tmp_path / "book", False)
    assert list(book.chapters) == [2]