"""Rangemark - formatting ranges for a rich-text editor."""

from .formatting import (
    BLOCK_KINDS,
    HEADING_KINDS,
    INLINE_KINDS,
    FormattingKind,
    FormattingRange,
    Selection,
)
from .ranges import (
    apply_to_selection,
    coalesce_ranges,
    current_formatting_at,
    reshape_for_edit,
    toggle_for_typing,
)
from .model import (
    EditorState,
    StateView,
    initial_state,
    on_format_command,
    on_selection_changed,
    on_text_changed,
)
from .session import EditorSession
from .style import FontScale, StyleDescriptor, resolve_style
from .view import StyledSegment, TerminalRenderer, compose_styled_text

__all__ = [
    'BLOCK_KINDS',
    'HEADING_KINDS',
    'INLINE_KINDS',
    'FormattingKind',
    'FormattingRange',
    'Selection',
    'apply_to_selection',
    'coalesce_ranges',
    'current_formatting_at',
    'reshape_for_edit',
    'toggle_for_typing',
    'EditorState',
    'StateView',
    'initial_state',
    'on_format_command',
    'on_selection_changed',
    'on_text_changed',
    'EditorSession',
    'FontScale',
    'StyleDescriptor',
    'resolve_style',
    'StyledSegment',
    'TerminalRenderer',
    'compose_styled_text',
]
