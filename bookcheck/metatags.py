"""Social meta tags expected at the top of every book page."""

from __future__ import annotations

from collections.abc import Iterable

_TITLE = "High Assurance Engineering"
_DESCRIPTION = "Developing Secure and Robust Software"
_SITE_URL = "https://example.com/"
_IMAGE_URL = "https://example.com/img/logo_social.png"

META_TAGS: tuple[str, ...] = (
    f'<meta name="title" content="{_TITLE}">',
    f'<meta name="description" content="{_DESCRIPTION}">',
    f'<meta property="og:title" content="{_TITLE}">',
    f'<meta property="og:description" content="{_DESCRIPTION}">',
    '<meta property="og:type" content="article">',
    f'<meta property="og:url" content="{_SITE_URL}">',
    f'<meta property="og:image" content="{_IMAGE_URL}">',
    f'<meta name="twitter:title" content="{_TITLE}">',
    f'<meta name="twitter:description" content="{_DESCRIPTION}">',
    f'<meta name="twitter:url" content="{_SITE_URL}">',
    '<meta name="twitter:card" content="summary_large_image">',
    f'<meta name="twitter:image" content="{_IMAGE_URL}">',
)


def starts_with_meta_tags(lines: Iterable[str]) -> bool:
    """True unless a leading line differs from the meta tag at its position.

    Only as many lines as there are tags (or fewer) are compared.
    """
    return all(tag == line for tag, line in zip(META_TAGS, lines))


def remove_meta_tags(lines: Iterable[str]) -> list[str]:
    """Drop every line that is exactly one of the meta tags."""
    return [line for line in lines if line not in META_TAGS]


def prefix_meta_tags(lines: Iterable[str]) -> list[str]:
    """Put the meta tags and a blank separator in front of the lines."""
    return [*META_TAGS, "\n", *lines]