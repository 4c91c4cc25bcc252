"""Inline span rewriting for links, images, bold, and italic text."""

from __future__ import annotations

import re

from .constants import BOLD_PATTERN, IMAGE_PATTERN, ITALIC_PATTERN, LINK_PATTERN


def _link(match: re.Match[str]) -> str:
    return f'<a href="{match.group(2)}">{match.group(1)}</a>'


def _image(match: re.Match[str]) -> str:
    return f'<img src="{match.group(2)}" alt="{match.group(1)}">'


def _bold(match: re.Match[str]) -> str:
    return f"<b>{match.group(1)}</b>"


def _italic(match: re.Match[str]) -> str:
    return f"<i>{match.group(1)}</i>"


def convert_links(text: str) -> str:
    """Rewrite ``[label](target)`` spans as anchors.

    Brackets directly preceded by ``!`` are left for `convert_images`.

    Examples:
        convert_links("[home](/)")  # '<a href="/">home</a>'
    """
    return LINK_PATTERN.sub(_link, text)


def convert_images(text: str) -> str:
    """Rewrite ``![alt](target)`` spans as ``<img>`` tags."""
    return IMAGE_PATTERN.sub(_image, text)


def convert_bold(text: str) -> str:
    """Rewrite ``**text**`` spans as ``<b>`` tags."""
    return BOLD_PATTERN.sub(_bold, text)


def convert_italic(text: str) -> str:
    """Rewrite ``*text*`` spans as ``<i>`` tags.

    Must run after `convert_bold`; otherwise ``**text**`` splits into
    single-asterisk matches.
    """
    return ITALIC_PATTERN.sub(_italic, text)


def rewrite_inline(text: str) -> str:
    """Rewrite every inline Markdown span of a line's payload into HTML.

    Applies four passes in a fixed order: links, images, bold, italic. Each
    pass scans the output of the previous one, so spans compose
    (``**[x](y)**`` becomes ``<b><a href="y">x</a></b>``). Matching is
    non-greedy and leftmost-first. Captured text is inserted literally and is
    never HTML-escaped; text without markers is returned unchanged.

    Args:
        text: Payload of a single line, without block markers.

    Returns:
        str: Text with inline spans replaced by HTML tags.

    Examples:
        rewrite_inline("see ![logo](logo.png) and **this**")
        # 'see <img src="logo.png" alt="logo"> and <b>this</b>'
    """
    result = convert_links(text)
    result = convert_images(result)
    result = convert_bold(result)
    return convert_italic(result)
