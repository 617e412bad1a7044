"""Formatting kinds, ranges and selections."""

from dataclasses import dataclass
from enum import Enum


class FormattingKind(Enum):
    """Kinds of formatting a span of text can carry."""
    BODY = "body"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"

    @property
    def is_block(self) -> bool:
        return self in BLOCK_KINDS

    @property
    def is_heading(self) -> bool:
        return self in HEADING_KINDS

    @property
    def is_inline(self) -> bool:
        return self in INLINE_KINDS


HEADING_KINDS = frozenset({
    FormattingKind.HEADING1,
    FormattingKind.HEADING2,
    FormattingKind.HEADING3,
})
BLOCK_KINDS = HEADING_KINDS | {FormattingKind.BODY}
INLINE_KINDS = frozenset({
    FormattingKind.BOLD,
    FormattingKind.ITALIC,
    FormattingKind.UNDERLINE,
})


def sorted_kinds(kinds) -> list[FormattingKind]:
    """Kinds in declaration order, for stable output."""
    return [kind for kind in FormattingKind if kind in kinds]


@dataclass(frozen=True)
class FormattingRange:
    """A half-open span [start, end) of text carrying one kind."""
    start: int
    end: int
    kind: FormattingKind

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_valid(self) -> bool:
        return 0 <= self.start < self.end

    def contains(self, index: int) -> bool:
        return self.start <= index < self.end

    def overlaps(self, start: int, end: int) -> bool:
        """True if this range shares at least one position with [start, end)."""
        return self.start < end and self.end > start

    def covers(self, start: int, end: int) -> bool:
        """True if [start, end) lies entirely inside this range."""
        return self.start <= start and self.end >= end

    def with_bounds(self, start: int, end: int) -> "FormattingRange":
        return FormattingRange(start, end, self.kind)


@dataclass(frozen=True)
class Selection:
    """Selected span of text; start == end is a caret."""
    start: int = 0
    end: int = 0

    @classmethod
    def caret(cls, index: int) -> "Selection":
        return cls(index, index)

    @classmethod
    def between(cls, anchor: int, active: int) -> "Selection":
        """Selection from an anchor to the active end, in either direction."""
        if anchor > active:
            anchor, active = active, anchor
        return cls(anchor, active)

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    @property
    def length(self) -> int:
        return self.end - self.start
