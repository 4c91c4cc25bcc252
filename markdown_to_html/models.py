"""Data models for markdown-to-html."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto


class LineKind(Enum):
    """Block-level classification of a single Markdown line.

    Attributes:
        ORDERED_ITEM: Numbered list entry such as ``1. item``.
        UNORDERED_ITEM: Bulleted list entry such as ``* item``.
        BLOCKQUOTE: Quoted line such as ``> quote``.
        HEADING: ATX heading with one to six ``#`` characters.
        CODE_FENCE: Triple-backtick line opening or closing a code block.
        PLAIN: Any other line, rendered as a paragraph.
    """

    ORDERED_ITEM = auto()
    UNORDERED_ITEM = auto()
    BLOCKQUOTE = auto()
    HEADING = auto()
    CODE_FENCE = auto()
    PLAIN = auto()


@dataclass(frozen=True)
class ClassifiedLine:
    """Result of classifying one line.

    Attributes:
        kind: Block-level kind of the line.
        text: Payload left after stripping the block marker. For code fences
            this holds the language tag, which is never rendered.
        level: Heading level (1-6); zero for every other kind.
    """

    kind: LineKind
    text: str = ""
    level: int = 0


@dataclass
class BlockState:
    """Block-level modes carried from one line to the next.

    At most one of the container flags (ordered list, unordered list,
    blockquote) is set at a time. ``in_code_block`` is independent of them.

    Attributes:
        in_ordered_list: An ``<ol>`` is open.
        in_unordered_list: A ``<ul>`` is open.
        in_blockquote: A ``<blockquote>`` is open.
        in_code_block: A ``<pre><code>`` is open.
    """

    in_ordered_list: bool = False
    in_unordered_list: bool = False
    in_blockquote: bool = False
    in_code_block: bool = False

    @property
    def is_closed(self) -> bool:
        """True when no block of any kind is open."""
        return not (
            self.in_ordered_list
            or self.in_unordered_list
            or self.in_blockquote
            or self.in_code_block
        )


@dataclass
class ConversionResult:
    """Structured result of converting Markdown lines.

    Attributes:
        fragments: HTML body lines in emission order, without line endings.
        state: Block state after the end-of-document transition.
        line_counts: Number of input lines seen per `LineKind`. Lines consumed
            by an open code block, closing fence included, are not counted.
    """

    fragments: list[str]
    state: BlockState
    line_counts: Counter[LineKind] = field(default_factory=Counter)
