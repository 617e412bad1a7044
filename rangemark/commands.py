"""Command pattern implementation for key-driven session actions."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .constants import EditorConstants
from .formatting import FormattingKind, Selection
from .keyboard import KeyType

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .session import EditorSession


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            session: Session to act on
            key_event: The key event that triggered this command

        Returns:
            True if the command changed the text or its formatting
        """


class FormatCommand(EditorCommand):
    """Apply a formatting kind to the selection, or toggle it at the caret."""

    def __init__(self, kind: FormattingKind):
        self.kind = kind

    def execute(self, session, key_event):
        session.on_format_command(self.kind)
        return True


class InsertTextCommand(EditorCommand):
    def execute(self, session, key_event):
        session.type_text(key_event.value)
        return True


class InsertNewlineCommand(EditorCommand):
    def execute(self, session, key_event):
        session.type_text(EditorConstants.LINE_BREAK)
        return True


class BackspaceCommand(EditorCommand):
    def execute(self, session, key_event):
        before = session.text
        session.backspace()
        return session.text != before


class MovementCommand(EditorCommand):
    """Base class for caret and selection movement."""

    def execute(self, session, key_event):
        session.on_selection_changed(self._target(session.selection, len(session.text)))
        return False

    @abstractmethod
    def _target(self, selection: Selection, text_length: int) -> Selection:
        """Selection after the movement."""


class LeftCharCommand(MovementCommand):
    def _target(self, selection, text_length):
        if not selection.is_caret:
            return Selection.caret(selection.start)
        return Selection.caret(max(selection.start - 1, 0))


class RightCharCommand(MovementCommand):
    def _target(self, selection, text_length):
        if not selection.is_caret:
            return Selection.caret(selection.end)
        return Selection.caret(min(selection.end + 1, text_length))


class BeginningOfTextCommand(MovementCommand):
    def _target(self, selection, text_length):
        return Selection.caret(0)


class EndOfTextCommand(MovementCommand):
    def _target(self, selection, text_length):
        return Selection.caret(text_length)


class ShiftLeftCommand(MovementCommand):
    """Extend the selection one character to the left."""

    def _target(self, selection, text_length):
        return Selection(max(selection.start - 1, 0), selection.end)


class ShiftRightCommand(MovementCommand):
    """Extend the selection one character to the right."""

    def _target(self, selection, text_length):
        return Selection(selection.start, min(selection.end + 1, text_length))


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfTextCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfTextCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'left'), ShiftLeftCommand())
        self.register((KeyType.SHIFT_SPECIAL, 'right'), ShiftRightCommand())

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # Inline style toggles (Ctrl-I is Tab on terminals, so italic is Alt-I)
        self.register((KeyType.CTRL, 'b'), FormatCommand(FormattingKind.BOLD))
        self.register((KeyType.ALT, 'i'), FormatCommand(FormattingKind.ITALIC))
        self.register((KeyType.CTRL, 'u'), FormatCommand(FormattingKind.UNDERLINE))

        # Block formats: Title, Heading, Subheading, Body
        self.register((KeyType.ALT, '1'), FormatCommand(FormattingKind.HEADING1))
        self.register((KeyType.ALT, '2'), FormatCommand(FormattingKind.HEADING2))
        self.register((KeyType.ALT, '3'), FormatCommand(FormattingKind.HEADING3))
        self.register((KeyType.ALT, '0'), FormatCommand(FormattingKind.BODY))

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, session: 'EditorSession', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the text or its formatting changed
        """
        key_type = KeyType.ALT if key_event.is_alt else key_event.key_type
        command = self.get_command(key_type, key_event.value)
        if command:
            return command.execute(session, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(session, key_event)

        return False
