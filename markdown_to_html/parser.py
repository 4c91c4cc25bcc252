"""Markdown block classification and the per-line block state machine."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from .constants import (
    BLOCKQUOTE_PATTERN,
    CODE_FENCE_PATTERN,
    HEADING_PATTERN,
    ORDERED_LIST_PATTERN,
    UNORDERED_LIST_PATTERN,
)
from .inline import rewrite_inline
from .models import BlockState, ClassifiedLine, ConversionResult, LineKind

logger = logging.getLogger(__name__)

# Container kinds in force-close order: state flag, opening tag, closing tag.
_CONTAINERS = {
    LineKind.ORDERED_ITEM: ("in_ordered_list", "<ol>", "</ol>"),
    LineKind.UNORDERED_ITEM: ("in_unordered_list", "<ul>", "</ul>"),
    LineKind.BLOCKQUOTE: ("in_blockquote", "<blockquote>", "</blockquote>"),
}

CODE_OPEN = "<pre><code>"
CODE_CLOSE = "</code></pre>"


def classify(line: str) -> ClassifiedLine:
    """Classify a single line by its block-level Markdown marker.

    Patterns are tried in a fixed order and the first match wins: ordered
    list item, unordered list item, blockquote, heading, code fence. Anything
    else is plain text. Classification never fails.

    A line starting with ``* `` is always an unordered item, even when it
    also opens an italic span.

    Args:
        line: Raw line without its line terminator.

    Returns:
        ClassifiedLine: Kind of the line plus its payload and heading level.

    Examples:
        classify("2. second")  # ClassifiedLine(LineKind.ORDERED_ITEM, "second")
        classify("### Usage")  # ClassifiedLine(LineKind.HEADING, "Usage", 3)
        classify("####### x")  # ClassifiedLine(LineKind.PLAIN, "####### x")
    """
    match = ORDERED_LIST_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.ORDERED_ITEM, match.group(1))

    match = UNORDERED_LIST_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.UNORDERED_ITEM, match.group(1))

    match = BLOCKQUOTE_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.BLOCKQUOTE, match.group(1))

    match = HEADING_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.HEADING, match.group(2), len(match.group(1)))

    match = CODE_FENCE_PATTERN.match(line)
    if match:
        return ClassifiedLine(LineKind.CODE_FENCE, match.group("info"))

    return ClassifiedLine(LineKind.PLAIN, line)


def _close_containers(state: BlockState, out: list[str]) -> list[str]:
    """Close every open list or blockquote wrapper.

    Args:
        state: Block state to update.
        out: Output buffer receiving closing tags.

    Returns:
        list[str]: Closing tags emitted, in emission order.
    """
    closed = []
    for flag, _, closing_tag in _CONTAINERS.values():
        if getattr(state, flag):
            setattr(state, flag, False)
            out.append(closing_tag)
            closed.append(closing_tag)
    return closed


def _open_container(state: BlockState, kind: LineKind, out: list[str]) -> bool:
    """Make `kind` the open container, closing a different one first.

    Args:
        state: Block state to update.
        kind: One of the container kinds.
        out: Output buffer receiving opening and closing tags.

    Returns:
        bool: True when a new wrapper was opened; False when it was already open.

    Examples:
        _open_container(BlockState(), LineKind.ORDERED_ITEM, [])  # True
    """
    flag, opening_tag, _ = _CONTAINERS[kind]
    if getattr(state, flag):
        return False

    _close_containers(state, out)
    setattr(state, flag, True)
    out.append(opening_tag)
    return True


def _try_code_line(state: BlockState, line: str, out: list[str]) -> bool:
    """Handle a line while a code block is open.

    Fence lines close the block; every other line is emitted verbatim, without
    classification, inline rewriting, or escaping.

    Args:
        state: Block state to update.
        line: Raw line being scanned.
        out: Output buffer.

    Returns:
        bool: True when the line was consumed by the code block.

    Examples:
        state = BlockState(in_code_block=True)
        _try_code_line(state, "**raw**", [])  # True, emitted unchanged
    """
    if not state.in_code_block:
        return False

    if CODE_FENCE_PATTERN.match(line):
        state.in_code_block = False
        out.append(CODE_CLOSE)
        return True

    out.append(line)
    return True


def _try_open_fence(state: BlockState, classified: ClassifiedLine, out: list[str]) -> bool:
    """Open a code block when the line is a fence.

    Any open container is closed before ``<pre><code>`` is emitted. The fence
    line itself, including its language tag, is not part of the output.

    Examples:
        _try_open_fence(BlockState(), classify("```python"), [])  # True
    """
    if state.in_code_block or classified.kind is not LineKind.CODE_FENCE:
        return False

    _close_containers(state, out)
    state.in_code_block = True
    out.append(CODE_OPEN)
    return True


def _apply_line(state: BlockState, line: str, out: list[str]) -> LineKind | None:
    """Run one classify-then-transition step of the block state machine.

    Args:
        state: Block state carried from the previous line.
        line: Raw line without its line terminator.
        out: Output buffer receiving the emitted HTML lines.

    Returns:
        LineKind | None: Kind of the line, or None when the line was consumed
            by an open code block.
    """
    if _try_code_line(state, line, out):
        return None

    classified = classify(line)
    kind = classified.kind

    if kind in _CONTAINERS:
        _open_container(state, kind, out)
        payload = rewrite_inline(classified.text)
        if kind is LineKind.BLOCKQUOTE:
            out.append(f"{payload}<br>")
        else:
            out.append(f"<li>{payload}</li>")
        return kind

    if _try_open_fence(state, classified, out):
        return kind

    # Headings and paragraphs always break list and blockquote context
    _close_containers(state, out)
    if kind is LineKind.HEADING:
        level = classified.level
        out.append(f"<h{level}>{rewrite_inline(classified.text)}</h{level}>")
    else:
        out.append(f"<p>{rewrite_inline(classified.text)}</p>")
    return kind


def _close_all(state: BlockState, out: list[str]) -> list[str]:
    """Force-close every open block at end of document.

    Closing order is fixed: ordered list, unordered list, blockquote, code
    block.

    Returns:
        list[str]: Closing tags emitted, in emission order.
    """
    closed = _close_containers(state, out)
    if state.in_code_block:
        state.in_code_block = False
        out.append(CODE_CLOSE)
        closed.append(CODE_CLOSE)
    return closed


def convert_lines(lines: Iterable[str]) -> ConversionResult:
    """Convert Markdown lines into HTML body fragments.

    Each line is classified and applied to a fresh `BlockState` in order;
    wrappers open and close as block transitions are detected. After the last
    line every block still open is force-closed, so the returned state is
    always fully closed. Malformed Markdown is never an error: unknown blocks
    become paragraphs and unmatched inline markers stay verbatim.

    Args:
        lines: Source lines without line terminators.

    Returns:
        ConversionResult: Emitted body lines, the final block state, and
            per-kind line counts.

    Examples:
        convert_lines(["1. a", "2. b"]).fragments
        # ['<ol>', '<li>a</li>', '<li>b</li>', '</ol>']
    """
    state = BlockState()
    out: list[str] = []
    line_counts: Counter[LineKind] = Counter()

    for line in lines:
        kind = _apply_line(state, line, out)
        if kind is not None:
            line_counts[kind] += 1

    closed = _close_all(state, out)
    if closed:
        logger.debug("Force-closed at end of document: %s", " ".join(closed))
    logger.debug(
        "Classified lines: %s",
        ", ".join(f"{kind.name.lower()}={count}" for kind, count in line_counts.items())
        or "none",
    )

    return ConversionResult(fragments=out, state=state, line_counts=line_counts)
