"""Data model for book files: markdown sections and SVG diagrams."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .paths import chapter_number


@dataclass
class Content:
    """A book source file, optionally holding its lines."""

    path: Path
    lines: list[str] | None = None

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def chapter(self) -> int | None:
        """Chapter number this content belongs to, if any."""
        return chapter_number(self.path)


@dataclass
class Section(Content):
    """A book section or chapter intro written in markdown."""

    word_count: int = 0


@dataclass
class Svg(Content):
    """A diagram stored as an SVG file."""