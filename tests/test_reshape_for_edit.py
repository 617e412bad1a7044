import pytest
from rangemark.formatting import FormattingKind, FormattingRange
from rangemark.ranges import reshape_for_edit

BOLD = FormattingKind.BOLD
ITALIC = FormattingKind.ITALIC


def R(start, end, kind=BOLD):
    return FormattingRange(start, end, kind)


def test_range_before_insertion_is_unchanged():
    r = R(0, 3)
    assert reshape_for_edit([r], 5, 4) == (r,)


def test_range_ending_at_insertion_point_is_unchanged():
    """A range whose end touches the edit point stays put."""
    assert reshape_for_edit([R(0, 5)], 5, 2) == (R(0, 5),)


def test_range_after_insertion_shifts():
    assert reshape_for_edit([R(5, 10)], 2, 3) == (R(8, 13),)


def test_range_starting_at_insertion_point_shifts():
    assert reshape_for_edit([R(5, 10)], 5, 2) == (R(7, 12),)


def test_insertion_inside_range_splits_it():
    """Inserted text is not covered; both halves of the range survive."""
    assert reshape_for_edit([R(0, 10)], 5, 3) == (R(0, 5), R(8, 13))


def test_insertion_one_before_range_end_keeps_tail():
    # The last character of the range must keep its formatting
    assert reshape_for_edit([R(0, 6)], 5, 3) == (R(0, 5), R(8, 9))


def test_deletion_clamps_straddling_range():
    # [5,10) with 3 characters removed at 7 keeps only [5,7)
    assert reshape_for_edit([R(5, 10)], 7, -3) == (R(5, 7),)


def test_deletion_inside_range_keeps_tail():
    assert reshape_for_edit([R(5, 12)], 7, -3) == (R(5, 7), R(7, 9))


def test_deletion_before_range_shifts_it_back():
    # "abcdef" with italic "cdef"; removing "b" moves italic to [1,5)
    assert reshape_for_edit([R(2, 6, ITALIC)], 1, -1) == (R(1, 5, ITALIC),)


def test_deletion_covering_whole_range_drops_it():
    assert reshape_for_edit([R(3, 5)], 2, -4) == ()


def test_deletion_never_pulls_range_before_edit_point():
    assert reshape_for_edit([R(4, 9)], 3, -3) == (R(3, 6),)


def test_zero_delta_drops_only_invalid_ranges():
    assert reshape_for_edit([R(0, 4), R(3, 3), R(5, 2)], 2, 0) == (R(0, 4),)


def test_kinds_are_preserved():
    result = reshape_for_edit([R(0, 10, ITALIC)], 4, 2)
    assert all(r.kind is ITALIC for r in result)


@pytest.mark.parametrize("index", range(0, 12))
@pytest.mark.parametrize("added", [1, 2, 5])
def test_insertion_preserves_prefix_and_shifts_suffix(index, added):
    ranges = [R(0, 2), R(2, 4, ITALIC), R(4, 7), R(7, 11, ITALIC)]
    result = reshape_for_edit(ranges, index, added)
    for r in ranges:
        if r.end <= index:
            assert r in result
        elif r.start >= index:
            assert R(r.start + added, r.end + added, r.kind) in result


def test_edits_never_leave_invalid_ranges():
    ranges = [R(0, 1), R(0, 6), R(2, 3), R(3, 9, ITALIC), R(8, 10)]
    for index in range(0, 11):
        for delta in (-10, -5, -3, -1, 1, 4):
            for r in reshape_for_edit(ranges, index, delta):
                assert 0 <= r.start < r.end, (index, delta, r)
