"""Editing session: the one mutable slot holding the editor state.

The session forwards each UI event to the pure reducers in
:mod:`rangemark.model`, swaps in the returned state and tells the attached
view, if any, to redraw.
"""

import logging
from typing import Optional

from .formatting import FormattingKind, FormattingRange, Selection
from .model import (
    EditorState,
    StateView,
    initial_state,
    on_format_command,
    on_selection_changed,
    on_text_changed,
)
from .settings_persistence import EditorSettings
from .style import resolve_style
from .view import StyledText, StyleResolver, compose_styled_text

logger = logging.getLogger(__name__)


class EditorSession:
    """Owns the current editor state for one editing session.

    Each event handler replaces the state wholesale, so a snapshot taken
    through :attr:`state` is never changed behind the caller's back.
    """

    def __init__(self, settings: Optional[EditorSettings] = None,
                 view: Optional[StateView] = None,
                 resolver: StyleResolver = resolve_style):
        self.settings = settings or EditorSettings()
        self.view = view
        self.resolver = resolver
        self._state = initial_state(title_first_line=self.settings.title_first_line)

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def selection(self) -> Selection:
        return self._state.selection

    @property
    def ranges(self) -> tuple[FormattingRange, ...]:
        return self._state.ranges

    @property
    def pending_formatting(self) -> frozenset:
        return self._state.pending_formatting

    def is_active(self, kind: FormattingKind) -> bool:
        """Whether a toolbar button for kind should show as active."""
        return kind in self._state.pending_formatting

    def _transition(self, new_state: EditorState, event: str):
        self._state = new_state
        logger.debug(
            f"{event}: text length {len(new_state.text)}, "
            f"{len(new_state.ranges)} ranges, selection {new_state.selection.start}..{new_state.selection.end}"
        )
        if self.view is not None:
            self.view.render(new_state)

    def on_text_changed(self, new_text: str, new_selection: Selection):
        self._transition(
            on_text_changed(self._state, new_text, new_selection, coalesce=self.settings.coalesce_ranges),
            "text changed",
        )

    def on_format_command(self, kind: FormattingKind):
        self._transition(
            on_format_command(self._state, kind, coalesce=self.settings.coalesce_ranges),
            f"format {kind.value}",
        )

    def on_selection_changed(self, new_selection: Selection):
        self._transition(on_selection_changed(self._state, new_selection), "selection changed")

    def styled_text(self) -> StyledText:
        """The current text composed with its formatting, for a renderer."""
        return compose_styled_text(self._state.text, self._state.ranges, self.resolver)

    # --- Conveniences for hosts that report keystrokes rather than new text ---

    def type_text(self, text: str):
        """Replace the selection (or insert at the caret) with typed text."""
        selection = self._state.selection
        current = self._state.text
        new_text = current[:selection.start] + text + current[selection.end:]
        self.on_text_changed(new_text, Selection.caret(selection.start + len(text)))

    def backspace(self):
        """Delete the selection, or the character before the caret."""
        selection = self._state.selection
        current = self._state.text
        if not selection.is_caret:
            start, end = selection.start, selection.end
        elif selection.start > 0:
            start, end = selection.start - 1, selection.start
        else:
            return
        self.on_text_changed(current[:start] + current[end:], Selection.caret(start))
