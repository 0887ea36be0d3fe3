"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .viewport import Direction

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the buffer
        """
        pass


class MoveCommand(EditorCommand):
    """Moves the cursor one step in a fixed direction."""

    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        editor.move_cursor(self.direction)
        return False


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Editing commands may modify the buffer.

        Whether anything actually changed is tracked by the buffer's dirty
        flag; edits outside the buffer are silently ignored there.
        """
        self._edit(editor, key_event)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Filter out control characters
        if ord(char[0]) < 32 and char != '\t':
            return
        editor.buffer.insert(editor.cursor, char)
        editor.move_cursor(Direction.RIGHT)


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.insert(editor.cursor, '\n')
        editor.move_cursor(Direction.RIGHT)


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        if editor.cursor.x > 0 or editor.cursor.y > 0:
            editor.move_cursor(Direction.LEFT)
            editor.buffer.delete(editor.cursor)


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.buffer.delete(editor.cursor)


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify buffer content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement
        self.register((KeyType.SPECIAL, 'left'), MoveCommand(Direction.LEFT))
        self.register((KeyType.SPECIAL, 'right'), MoveCommand(Direction.RIGHT))
        self.register((KeyType.SPECIAL, 'up'), MoveCommand(Direction.UP))
        self.register((KeyType.SPECIAL, 'down'), MoveCommand(Direction.DOWN))
        self.register((KeyType.SPECIAL, 'page_up'), MoveCommand(Direction.PAGE_UP))
        self.register((KeyType.SPECIAL, 'page_down'), MoveCommand(Direction.PAGE_DOWN))
        self.register((KeyType.SPECIAL, 'home'), MoveCommand(Direction.HOME))
        self.register((KeyType.SPECIAL, 'end'), MoveCommand(Direction.END))

        # Editing
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())

        # System
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the buffer was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
