from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace

from .constants import EditorConstants
from .formatting import FormattingKind, FormattingRange, Selection, sorted_kinds
from .ranges import (
    Ranges,
    apply_to_selection,
    coalesce_ranges,
    current_formatting_at,
    kinds_at,
    reshape_for_edit,
    toggle_for_typing,
)


@dataclass(frozen=True)
class EditorState:
    text: str = ""
    selection: Selection = field(default_factory=Selection)
    ranges: Ranges = ()
    # Exactly one block kind plus any inline kinds; stamped onto typed text
    pending_formatting: frozenset = frozenset({EditorConstants.DEFAULT_BLOCK_KIND})
    # True until the first line break of a session that starts with a title
    is_first_line: bool = False


class StateView(ABC):
    """Something that displays an editor state and is told when it changes."""

    @abstractmethod
    def render(self, state: EditorState):
        """Redraw from the given state.

        Called after every state transition, so the state passed in is
        always the latest one.

        """


def initial_state(title_first_line: bool = False) -> EditorState:
    """State of a new, empty editing session.

    With title_first_line the first line is typed as a HEADING1 title and
    the first line break drops back to body text.
    """
    block = EditorConstants.TITLE_BLOCK_KIND if title_first_line else EditorConstants.DEFAULT_BLOCK_KIND
    return EditorState(pending_formatting=frozenset({block}), is_first_line=title_first_line)


def _check_selection(selection: Selection, text: str):
    assert 0 <= selection.start <= selection.end <= len(text), (
        f"selection {selection.start}..{selection.end} outside text of length {len(text)}"
    )


def on_text_changed(state: EditorState, new_text: str, new_selection: Selection,
                    coalesce: bool = False) -> EditorState:
    """Return the state after the text field reported new text and selection.

    Growing text is treated as typed at the end of the old text and gets
    every pending kind. Shrinking text is treated as deleted where the
    edit began: the old selection's start, or the new caret if it moved
    in front of it (backspace).
    """
    _check_selection(new_selection, new_text)
    old_length = len(state.text)
    new_length = len(new_text)
    pending = state.pending_formatting
    is_first_line = state.is_first_line

    if new_length > old_length:
        added = new_length - old_length
        ranges = reshape_for_edit(state.ranges, old_length, added)
        ranges += tuple(
            FormattingRange(old_length, new_length, kind) for kind in sorted_kinds(pending)
        )
        if added == 1 and new_text[old_length] == EditorConstants.LINE_BREAK:
            # Enter after a title or heading goes back to body text
            if is_first_line or _heading_before(state.ranges, old_length):
                pending = frozenset({FormattingKind.BODY})
            is_first_line = False
    elif new_length < old_length:
        edit_start = min(state.selection.start, new_selection.start)
        ranges = reshape_for_edit(state.ranges, edit_start, new_length - old_length)
    else:
        ranges = state.ranges

    if coalesce:
        ranges = coalesce_ranges(ranges)
    if not new_selection.is_caret:
        pending = current_formatting_at(ranges, new_selection)

    return replace(
        state,
        text=new_text,
        selection=new_selection,
        ranges=ranges,
        pending_formatting=pending,
        is_first_line=is_first_line,
    )


def _heading_before(ranges: Ranges, index: int) -> bool:
    if index <= 0:
        return False
    return any(kind.is_heading for kind in kinds_at(ranges, index - 1))


def on_format_command(state: EditorState, kind: FormattingKind,
                      coalesce: bool = False) -> EditorState:
    """Return the state after the user asked for a formatting kind.

    With text selected the kind is applied to the selection; at a caret
    it only changes what the next typed text will look like.
    """
    if state.selection.is_caret:
        return replace(state, pending_formatting=toggle_for_typing(state.pending_formatting, kind))

    ranges = apply_to_selection(state.ranges, state.selection, kind)
    if coalesce:
        ranges = coalesce_ranges(ranges)
    return replace(
        state,
        ranges=ranges,
        pending_formatting=current_formatting_at(ranges, state.selection),
    )


def on_selection_changed(state: EditorState, new_selection: Selection) -> EditorState:
    """Return the state after the caret moved or the selection changed.

    Pending formatting follows a non-empty selection. A bare caret keeps
    the explicitly pending set, so text typed next to a formatted word
    does not pick up its formatting.
    """
    _check_selection(new_selection, state.text)
    if new_selection.is_caret:
        return replace(state, selection=new_selection)
    return replace(
        state,
        selection=new_selection,
        pending_formatting=current_formatting_at(state.ranges, new_selection),
    )
