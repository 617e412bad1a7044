"""Range engine: keeps formatting ranges consistent with text edits.

Every function here is pure. Range collections are plain tuples of
FormattingRange; callers replace their collection with the returned one
instead of mutating it. Nothing in this module raises for odd geometry:
ranges that end up empty or inverted are dropped.
"""

from typing import Iterable, Optional

from .constants import EditorConstants
from .formatting import (
    BLOCK_KINDS,
    HEADING_KINDS,
    INLINE_KINDS,
    FormattingKind,
    FormattingRange,
    Selection,
)

Ranges = tuple[FormattingRange, ...]

_KIND_ORDER = {kind: i for i, kind in enumerate(FormattingKind)}


def _valid_only(ranges: Iterable[FormattingRange]) -> Ranges:
    return tuple(r for r in ranges if r.is_valid)


def reshape_for_edit(ranges: Iterable[FormattingRange], change_index: int,
                     length_delta: int) -> Ranges:
    """Move and split ranges after the text changed length at change_index.

    Args:
        ranges: Current ranges
        change_index: Text offset where the edit happened
        length_delta: Characters inserted (positive) or removed (negative)

    Returns:
        The reshaped ranges, without any empty or inverted range.
    """
    if length_delta == 0:
        return _valid_only(ranges)

    reshaped: list[FormattingRange] = []
    for r in ranges:
        if r.end <= change_index:
            # Entirely before the edit
            reshaped.append(r)
        elif r.start >= change_index:
            # Entirely after the edit; never pulled back past the edit point
            reshaped.append(r.with_bounds(
                max(r.start + length_delta, change_index),
                max(r.end + length_delta, change_index),
            ))
        else:
            # Straddles the edit point
            reshaped.append(r.with_bounds(r.start, change_index))
            if length_delta > 0:
                reshaped.append(r.with_bounds(change_index + length_delta, r.end + length_delta))
            elif r.end > change_index - length_delta:
                # Deletion left a tail of the range behind it
                reshaped.append(r.with_bounds(change_index, r.end + length_delta))
    return _valid_only(reshaped)


def apply_to_selection(ranges: Iterable[FormattingRange], selection: Selection,
                       kind: FormattingKind) -> Ranges:
    """Apply or toggle a formatting kind over a selected span.

    Block kinds replace every overlapping block range with one range over
    the selection; BODY only clears headings, since no block range already
    means body text. Inline kinds are removed from the selection when one
    range of that kind covers it, and added over the whole selection
    otherwise.
    """
    ranges = tuple(ranges)
    start, end = selection.start, selection.end
    if start >= end:
        return _valid_only(ranges)

    if kind.is_block:
        removable = HEADING_KINDS if kind is FormattingKind.BODY else BLOCK_KINDS
        kept = [r for r in ranges if not (r.kind in removable and r.overlaps(start, end))]
        if kind is not FormattingKind.BODY:
            kept.append(FormattingRange(start, end, kind))
        return _valid_only(kept)

    covering_index = _find_covering(ranges, kind, start, end)
    if covering_index is None:
        return _valid_only(ranges + (FormattingRange(start, end, kind),))

    covering = ranges[covering_index]
    kept = list(ranges[:covering_index] + ranges[covering_index + 1:])
    if covering.start < start:
        kept.append(covering.with_bounds(covering.start, start))
    if covering.end > end:
        kept.append(covering.with_bounds(end, covering.end))
    return _valid_only(kept)


def _find_covering(ranges: Ranges, kind: FormattingKind, start: int, end: int) -> Optional[int]:
    for i, r in enumerate(ranges):
        if r.kind is kind and r.covers(start, end):
            return i
    return None


def normalize_pending(kinds: Iterable[FormattingKind]) -> frozenset[FormattingKind]:
    """Reduce a kind set to exactly one block kind plus any inline kinds."""
    kinds = frozenset(kinds)
    block = next(
        (k for k in EditorConstants.BLOCK_PRECEDENCE if k in kinds),
        EditorConstants.DEFAULT_BLOCK_KIND,
    )
    return (kinds & INLINE_KINDS) | {block}


def kinds_at(ranges: Iterable[FormattingRange], index: int) -> frozenset[FormattingKind]:
    """Kinds of every range containing the character at index."""
    return frozenset(r.kind for r in ranges if r.contains(index))


def current_formatting_at(ranges: Iterable[FormattingRange],
                          selection: Selection) -> frozenset[FormattingKind]:
    """Formatting active at the selection's start.

    Overlapping block ranges resolve to the highest-ranked one; with no
    block range the result carries BODY.
    """
    return normalize_pending(kinds_at(ranges, selection.start))


def toggle_for_typing(pending: Iterable[FormattingKind],
                      kind: FormattingKind) -> frozenset[FormattingKind]:
    """Toggle a kind in the pending set used for text typed at a caret."""
    pending = frozenset(pending)
    if kind.is_block:
        return normalize_pending((pending - BLOCK_KINDS) | {kind})
    return normalize_pending(pending ^ {kind})


def coalesce_ranges(ranges: Iterable[FormattingRange]) -> Ranges:
    """Merge overlapping or touching ranges of the same kind.

    The result is sorted by start, end and kind.
    """
    by_kind: dict[FormattingKind, list[FormattingRange]] = {}
    for r in _valid_only(ranges):
        by_kind.setdefault(r.kind, []).append(r)

    merged: list[FormattingRange] = []
    for kind_ranges in by_kind.values():
        kind_ranges.sort(key=lambda r: (r.start, r.end))
        current = kind_ranges[0]
        for r in kind_ranges[1:]:
            if r.start <= current.end:
                current = current.with_bounds(current.start, max(current.end, r.end))
            else:
                merged.append(current)
                current = r
        merged.append(current)
    merged.sort(key=lambda r: (r.start, r.end, _KIND_ORDER[r.kind]))
    return tuple(merged)


def covered_spans(ranges: Iterable[FormattingRange], kind: FormattingKind) -> list[tuple[int, int]]:
    """Disjoint (start, end) spans covered by ranges of one kind."""
    return [(r.start, r.end) for r in coalesce_ranges(r for r in ranges if r.kind is kind)]
