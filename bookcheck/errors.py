"""Lint failure types and severity levels."""

from __future__ import annotations

import enum
from os import PathLike
from pathlib import Path


class Level(enum.Enum):
    """Severity of a lint rule."""

    FATAL = "fatal"
    WARNING = "warning"


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


class LintError(Exception):
    """A rule failed for a file, at a given line."""

    def __init__(
        self,
        path: str | PathLike[str],
        reason: str,
        index: int = 0,
        line: str = "N/A",
    ) -> None:
        if index < 0:
            raise ValueError(f"line index must be non-negative, got {index}")
        self.path = Path(path)
        self.reason = reason
        self.line_number = index + 1
        self.line = line
        super().__init__(self.path, reason, self.line_number, line)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LintError):
            return NotImplemented
        return (self.path, self.line_number, self.line, self.reason) == (
            other.path,
            other.line_number,
            other.line,
            other.reason,
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return (
            f"Failed {{ path: {_quote(str(self.path))}, "
            f"line_number: {self.line_number}, "
            f"line: {_quote(self.line)}, "
            f"reason: {_quote(self.reason)} }}"
        )

    def __repr__(self) -> str:
        return str(self)


class LeveledLintError(Exception):
    """A lint failure tagged with the level of the rule that produced it."""

    def __init__(self, level: Level, error: LintError) -> None:
        self.level = level
        self.error = error
        super().__init__(level, error)

    @property
    def is_fatal(self) -> bool:
        return self.level is Level.FATAL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LeveledLintError):
            return NotImplemented
        return self.level is other.level and self.error == other.error

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"{self.level.name.capitalize()}({self.error})"

    def __repr__(self) -> str:
        return str(self)