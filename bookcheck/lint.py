"""Linter that applies leveled rules to book contents."""

from __future__ import annotations

from dataclasses import dataclass, field

from termcolor import colored

from .content import Content
from .errors import Level, LeveledLintError, LintError
from .rules import Rule


@dataclass
class Linter:
    """A set of leveled rules and the contents they are applied to."""

    rules: list[tuple[Level, Rule]] = field(default_factory=list)
    contents: list[Content] = field(default_factory=list)

    @staticmethod
    def builder() -> LinterBuilder:
        """Start building a linter."""
        return LinterBuilder()

    def run(self, log_warn: bool) -> None:
        """Apply every rule to every content.

        Raises LeveledLintError on the first fatal failure. Warnings are
        printed when ``log_warn`` is true and raised otherwise. Content whose
        lines were not collected is a fatal failure.
        """
        for content in self.contents:
            if content.lines is None:
                raise LeveledLintError(
                    Level.FATAL, LintError(content.path, "Empty content")
                )
            for level, rule in self.rules:
                try:
                    rule(content.path, content.lines)
                except LintError as err:
                    if level is Level.WARNING and log_warn:
                        print(f"{colored('WARNING', 'yellow')}: {err!r}")
                        continue
                    raise LeveledLintError(level, err) from err


@dataclass
class LinterBuilder:
    """Fluent builder for :class:`Linter`."""

    rules: list[tuple[Level, Rule]] = field(default_factory=list)
    contents: list[Content] = field(default_factory=list)

    def add_rule(self, level: Level, rule: Rule) -> LinterBuilder:
        """Add a rule applied at the given level."""
        self.rules.append((level, rule))
        return self

    def add_content(self, content: Content) -> LinterBuilder:
        """Add a content for the rules to check."""
        self.contents.append(content)
        return self

    def build(self) -> Linter:
        """Finish building the linter."""
        return Linter(rules=list(self.rules), contents=list(self.contents))