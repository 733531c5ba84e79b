"""Rules the linter can apply to the lines of a book file.

Every rule takes a path and the file's lines, returns ``None`` when the file
passes and raises :class:`~bookcheck.errors.LintError` when it does not.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Iterator, Sequence
from html.parser import HTMLParser
from os import PathLike
from pathlib import PurePath

from .errors import LintError
from .metatags import META_TAGS

Rule = Callable[["str | PathLike[str]", Sequence[str]], None]

_SEPARATOR = "---"
_INTRO_FILE = "_index.md"
_OUTCOMES_HEADING = "## Learning Outcomes"
_MIN_OUTCOMES = 3


def _file_name(path: str | PathLike[str]) -> str | None:
    name = PurePath(path).name
    return name or None


def _is_footnote(line: str) -> bool:
    return line.startswith("[^") and "]:" in line


def _separator_indexes(lines: Sequence[str]) -> list[int]:
    return [idx for idx, line in enumerate(lines) if line.strip() == _SEPARATOR]


def rule_nonempty(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file has at least one line."""
    if not lines:
        raise LintError(path, "Missing data/contents")


def rule_no_draft_path(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file does not mention a draft filesystem path."""
    for idx, line in enumerate(lines):
        if "/book-draft/" in line:
            raise LintError(path, "Contains book draft path", idx, line)


class _ImageSources(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.sources: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "img":
            return
        for name, value in attrs:
            if name == "src" and value is not None:
                self.sources.append(value)
                break


def _image_sources(fragment: str) -> list[str]:
    parser = _ImageSources()
    parser.feed(fragment)
    parser.close()
    return parser.sources


def rule_has_svg(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file holds at least one centred paragraph showing an SVG image."""
    starts = [i for i, line in enumerate(lines) if '<p align="center">' in line.lower()]
    ends = [i for i, line in enumerate(lines) if "</p>" in line.lower()]

    if len(starts) != len(ends):
        raise LintError(path, "Unbalanced paragraph start/end tags")

    for start, end in zip(starts, ends):
        if end < start:
            raise LintError(path, "Paragraph end tag before start tag", end, lines[end])
        paragraph = "\n".join(lines[start : end + 1])
        if any(src.endswith(".svg") for src in _image_sources(paragraph)):
            return

    raise LintError(path, "No centered paragraph SVGs found")


def rule_footer(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file has a footer separator only, and only where mdbook needs one."""
    seps = _separator_indexes(lines)

    if not seps:
        if not any(_is_footnote(line) for line in lines):
            raise LintError(path, "Missing footer separator (no footnotes)")
    elif len(seps) == 1:
        sep = seps[0]
        if any(_is_footnote(line) for line in lines[sep:]):
            raise LintError(
                path,
                "mdbook already adds horizontal rule for above footnotes",
                sep,
                lines[sep],
            )
    else:
        raise LintError(
            path,
            "Cannot have 2+ header/footer separators in a section",
            seps[1],
            lines[seps[1]],
        )


def rule_header_and_footer(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file has a header separator and, where needed, a footer separator."""
    seps = _separator_indexes(lines)

    if not seps:
        raise LintError(path, "Missing header separator")
    if len(seps) == 1:
        sep = seps[0]
        if not any(_is_footnote(line) for line in lines[sep:]):
            raise LintError(
                path,
                "Manual footer horizontal rule must be added if no footnotes",
                sep,
                lines[sep],
            )
    elif len(seps) == 2:
        sep = seps[1]
        if any(_is_footnote(line) for line in lines[sep:]):
            raise LintError(
                path,
                "mdbook already adds horizontal rule for above footnotes",
                sep,
                lines[sep],
            )
    else:
        raise LintError(path, "Cannot have 3+ horizontal rules a section")


class _Heading(enum.IntEnum):
    UNINIT = 0
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4


def _next_heading(
    state: _Heading, path: str | PathLike[str], index: int, line: str
) -> _Heading:
    """Advance the heading state machine by one line.

    Headings may go down one level at a time, stay at the same level, or go
    up to any higher level. H5 and H6 are never allowed.
    """
    if line.startswith("# "):
        return _Heading.H1
    if line.startswith("## "):
        if state >= _Heading.H1:
            return _Heading.H2
        raise LintError(path, "H2 not preceded by H1, H2, or smaller", index, line)
    if line.startswith("### "):
        if state >= _Heading.H2:
            return _Heading.H3
        raise LintError(path, "H3 not preceded by H2, H3, or smaller", index, line)
    if line.startswith("#### "):
        if state >= _Heading.H3:
            return _Heading.H4
        raise LintError(path, "H4 not preceded by H3, H4, or smaller", index, line)
    if line.startswith("##### "):
        raise LintError(path, "H5 should not be used", index, line)
    if line.startswith("###### "):
        raise LintError(path, "H6 should not be used", index, line)
    return state


def rule_heading_sizes(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file starts with an H1 and nests its headings correctly."""
    first = next(
        (i for i, line in enumerate(lines) if line and not line.startswith("<meta")),
        None,
    )
    if first is None:
        raise LintError(path, "Section must be non-empty")

    if not lines[first].startswith("# "):
        raise LintError(path, "Section must start with an H1 heading", first, lines[first])

    if _file_name(path) == _INTRO_FILE:
        outcome_positions = [i for i, line in enumerate(lines) if line == _OUTCOMES_HEADING]
        if not outcome_positions:
            raise LintError(path, 'Chapter intro missing "## Learning Outcomes"')
        outcomes_start = outcome_positions[-1]
        outcomes = sum(1 for line in lines[outcomes_start:] if line.startswith("* "))
        if outcomes < _MIN_OUTCOMES:
            raise LintError(
                path,
                'Chapter intro "## Learning Outcomes" must contain at least 3 outcomes',
                outcomes_start,
                lines[outcomes_start],
            )

    state = _Heading.UNINIT
    for idx, line in enumerate(lines):
        # Reported one line further on, as the book tooling always has.
        state = _next_heading(state, path, idx + 1, line)


def rule_meta_tags(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file carries every social meta tag."""
    for tag in META_TAGS:
        if not any(line.startswith(tag) for line in lines):
            raise LintError(path, f"Section missing meta tag {tag}")


def rule_md_extension(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file name ends in ``.md``."""
    name = _file_name(path)
    if name is not None and not name.endswith(".md"):
        raise LintError(path, f'Unexpected file extension "{name}"')


class _SvgSyntaxError(ValueError):
    """Markup in an SVG document could not be read."""


_TAG_BODY = re.compile(
    r"""\s*(?P<close>/)?\s*
        (?P<name>[A-Za-z_:][\w:.\-]*)
        (?P<attrs>(?:\s+[A-Za-z_:][\w:.\-]*\s*=\s*(?:"[^"]*"|'[^']*'))*)
        \s*/?\s*\Z""",
    re.VERBOSE | re.DOTALL,
)


def _tag_end(data: str, start: int) -> int:
    quote: str | None = None
    for pos in range(start, len(data)):
        char = data[pos]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == ">":
            return pos
    return -1


def _svg_tags(data: str) -> Iterator[str]:
    """Yield the name of every tag in an SVG document, in order."""
    pos = 0
    while True:
        start = data.find("<", pos)
        if start < 0:
            return
        for opener, closer, what in (
            ("<!--", "-->", "comment"),
            ("<![CDATA[", "]]>", "CDATA section"),
            ("<?", "?>", "instruction"),
            ("<!", ">", "declaration"),
        ):
            if data.startswith(opener, start):
                end = data.find(closer, start + len(opener))
                if end < 0:
                    raise _SvgSyntaxError(f"unclosed {what} at offset {start}")
                pos = end + len(closer)
                break
        else:
            end = _tag_end(data, start + 1)
            if end < 0:
                raise _SvgSyntaxError(f"unclosed tag at offset {start}")
            match = _TAG_BODY.match(data, start + 1, end)
            if match is None:
                raise _SvgSyntaxError(f"malformed tag at offset {start}")
            pos = end + 1
            yield match.group("name")


def rule_valid_svg(path: str | PathLike[str], lines: Sequence[str]) -> None:
    """The file is a readable SVG document with no scripts in it."""
    name = _file_name(path)
    if name is not None:
        lowered = name.lower()
        if not lowered.endswith(".svg"):
            raise LintError(path, f'Unexpected file extension "{lowered}"')

    data = "\n".join(lines)
    try:
        for tag in _svg_tags(data):
            if tag.lower() == "script":
                raise LintError(path, f"svg contains JavaScript: <{tag}>")
    except _SvgSyntaxError as exc:
        raise LintError(path, f"svg parse error: {exc}") from exc