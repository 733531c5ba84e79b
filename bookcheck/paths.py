"""Chapter numbers derived from book source paths."""

from __future__ import annotations

import re
from os import PathLike
from pathlib import PurePath

_CHP_PREFIX = "chp"
_OPT_CHP_SUFFIX = "_appendix"
_NUMBER = re.compile(r"\+?[0-9]+")


def chapter_number(path: str | PathLike[str]) -> int | None:
    """Return the chapter a path belongs to.

    The nearest ``chpN`` (or ``chpN_appendix``) directory decides the chapter.
    Relative paths with no chapter directory belong to chapter 0; absolute
    paths with no chapter directory have no chapter at all.

    Raises ValueError when more than one path component carries the chapter
    prefix, since the chapter would then be ambiguous.
    """
    pure = PurePath(path)
    anchor = pure.anchor
    names = pure.parts[1:] if anchor else pure.parts

    if sum(1 for name in names if name.startswith(_CHP_PREFIX)) >= 2:
        raise ValueError(f"Ambiguous chapter for path: {pure}")

    for name in reversed(names):
        if not name.startswith(_CHP_PREFIX):
            continue
        number = name[len(_CHP_PREFIX):].removesuffix(_OPT_CHP_SUFFIX)
        if _NUMBER.fullmatch(number):
            return int(number)

    return None if anchor else 0