"""Tests for the formatting active at a position and the typing toggles."""

import itertools

import pytest
from rangemark.formatting import BLOCK_KINDS, FormattingKind, FormattingRange, Selection
from rangemark.ranges import current_formatting_at, normalize_pending, toggle_for_typing

K = FormattingKind


def test_kinds_at_caret():
    ranges = [FormattingRange(0, 5, K.HEADING1), FormattingRange(0, 3, K.BOLD)]
    assert current_formatting_at(ranges, Selection.caret(1)) == {K.HEADING1, K.BOLD}


def test_no_ranges_means_body():
    assert current_formatting_at([], Selection.caret(0)) == {K.BODY}


def test_range_end_is_exclusive():
    ranges = [FormattingRange(0, 5, K.BOLD)]
    assert current_formatting_at(ranges, Selection.caret(5)) == {K.BODY}


def test_range_start_is_inclusive():
    ranges = [FormattingRange(2, 5, K.ITALIC)]
    assert current_formatting_at(ranges, Selection.caret(2)) == {K.BODY, K.ITALIC}


def test_selection_uses_its_start():
    ranges = [FormattingRange(5, 8, K.BOLD)]
    assert current_formatting_at(ranges, Selection(2, 8)) == {K.BODY}
    assert current_formatting_at(ranges, Selection(5, 6)) == {K.BODY, K.BOLD}


def test_overlapping_block_ranges_resolve_to_heading():
    ranges = [FormattingRange(0, 5, K.BODY), FormattingRange(0, 5, K.HEADING2)]
    assert current_formatting_at(ranges, Selection.caret(1)) == {K.HEADING2}
    ranges = [FormattingRange(0, 5, K.HEADING3), FormattingRange(0, 5, K.HEADING1)]
    assert current_formatting_at(ranges, Selection.caret(1)) == {K.HEADING1}


def test_normalize_pending_adds_body():
    assert normalize_pending([K.UNDERLINE]) == {K.BODY, K.UNDERLINE}
    assert normalize_pending([]) == {K.BODY}


def test_toggle_inline_flips_membership():
    pending = toggle_for_typing({K.BODY}, K.BOLD)
    assert pending == {K.BODY, K.BOLD}
    assert toggle_for_typing(pending, K.BOLD) == {K.BODY}


def test_toggle_block_replaces_block_kind():
    assert toggle_for_typing({K.BODY, K.BOLD}, K.HEADING2) == {K.HEADING2, K.BOLD}
    assert toggle_for_typing({K.HEADING2}, K.BODY) == {K.BODY}
    # Asking for the current block kind keeps it
    assert toggle_for_typing({K.HEADING3}, K.HEADING3) == {K.HEADING3}


def test_toggle_repairs_missing_block_kind():
    assert toggle_for_typing(frozenset(), K.ITALIC) == {K.BODY, K.ITALIC}


@pytest.mark.parametrize("sequence", list(itertools.product(list(K), repeat=3)))
def test_toggle_keeps_exactly_one_block_kind(sequence):
    pending = frozenset({K.BODY})
    for kind in sequence:
        pending = toggle_for_typing(pending, kind)
        assert len(pending & BLOCK_KINDS) == 1
