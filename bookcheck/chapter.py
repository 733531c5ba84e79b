"""Chapter data model with word and diagram metrics."""

from __future__ import annotations

from dataclasses import dataclass, field

from termcolor import colored

from .content import Content, Section, Svg

WORDS_PER_PAGE = 500


@dataclass
class Chapter:
    """The contents of one chapter; chapter 0 holds the frontmatter."""

    number: int
    contents: list[Content] = field(default_factory=list)

    def word_count(self) -> int:
        """Total words across the chapter's sections."""
        return sum(c.word_count for c in self.contents if isinstance(c, Section))

    def diagram_count(self) -> int:
        """Number of diagrams in the chapter."""
        return sum(1 for c in self.contents if isinstance(c, Svg))

    def render(self) -> str:
        """Human-readable summary: a metrics line, then one line per section."""
        words = self.word_count()
        if self.number == 0:
            label = colored("(frontmatter):", "yellow") + colored("", "yellow")
        else:
            label = colored("chp ", "yellow") + colored(f"{self.number}:", "yellow")
        out = [
            f"{label} {colored(f'{words:,}', 'light_green')} words "
            f"({colored(f'{words // WORDS_PER_PAGE:,}', 'light_cyan')} pages), "
            f"{colored(f'{self.diagram_count():,}', 'light_blue')} diagrams\n"
        ]
        for content in self.contents:
            if isinstance(content, Section) and content.path.name:
                out.append(
                    f" - {colored(content.path.name, 'light_magenta')}: "
                    f"{colored(f'{content.word_count:,}', 'light_green')}\n"
                )
        return "".join(out)

    def __str__(self) -> str:
        return self.render()