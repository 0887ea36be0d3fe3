"""Main editor controller."""

import logging
import os
import sys
import select
import signal
import termios
import time
from dataclasses import dataclass, field
from typing import Optional

from .buffer import Buffer, FileError, Position
from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings import EditorSettings, get_settings
from .terminal import TerminalInterface
from .version import get_version
from .viewport import Direction, ViewportController

logger = logging.getLogger(__name__)


@dataclass
class StatusMessage:
    text: str
    time: float = field(default_factory=time.time)


class Editor:
    """Editor session: one buffer, one cursor, one terminal."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or get_settings()
        self.viewport = ViewportController(self.terminal.width, self.terminal.height)
        self.buffer = Buffer()
        self.cursor = Position()
        self.offset = Position()
        self.command_registry = CommandRegistry()
        self.running = False
        self.quit_times = self.settings.quit_times
        # Resize pipe, open only while run() is active
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self.status_message = StatusMessage(EditorConstants.HELP_MESSAGE)
        self.prompt_mode = None  # None or 'save_filename'
        self.prompt_input = ""

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame # Unused
        if self._resize_pipe_w is None:
            return
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    # --- State helpers ---

    def set_status(self, text: str):
        self.status_message = StatusMessage(text)

    def move_cursor(self, direction: Direction):
        self.cursor = self.viewport.move_cursor(self.cursor, direction, self.buffer)

    def scroll(self):
        self.offset = self.viewport.scroll(self.cursor, self.offset)

    # --- Main loop ---

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        old_settings = None
        try:
            # Disable flow control so Ctrl-S and Ctrl-Q reach us
            try:
                old_settings = termios.tcgetattr(sys.stdin)
                new_settings = list(old_settings)
                new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            except (termios.error, AttributeError, OSError):
                old_settings = None

            while self.running:
                self.refresh_screen()

                # Wait for input on stdin or resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    logger.debug("Terminal resized to %dx%d", self.terminal.width, self.terminal.height)
                elif 0 in ready:
                    key_event = self.keyboard.get_key_event(timeout=0)
                    if key_event:
                        self._handle_key_event(key_event)
        except KeyboardInterrupt:
            pass
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    logger.debug("Could not restore terminal settings")
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None
            self.terminal.cleanup()

    # --- Drawing ---

    def render_rows(self) -> list[str]:
        """Text rows for the screen, with "~" past the end of the buffer."""
        rows = []
        welcome_row = self.viewport.num_rows // 3
        for y, text in enumerate(self.viewport.visible_rows(self.buffer, self.offset)):
            if text is not None:
                rows.append(text)
            elif self.buffer.is_empty() and y == welcome_row:
                rows.append(self._welcome_line())
            else:
                rows.append(EditorConstants.EMPTY_ROW_MARKER)
        return rows

    def _welcome_line(self) -> str:
        width = self.viewport.num_columns
        welcome = EditorConstants.WELCOME_MESSAGE.format(get_version())
        padding = max(width - len(welcome), 0) // 2
        line = EditorConstants.EMPTY_ROW_MARKER + " " * max(padding - 1, 0) + welcome
        return line[:width]

    def status_bar(self) -> tuple[str, str]:
        """Left and right parts of the status bar."""
        name = self.buffer.file_name or EditorConstants.NO_NAME
        name = name[:EditorConstants.STATUS_NAME_WIDTH]
        modified = " (modified)" if self.buffer.is_dirty() else ""
        left = f"{name} - {len(self.buffer)} lines{modified}"
        right = f"{self.cursor.y + 1}/{len(self.buffer)}"
        return left, right

    def message_line(self, now: Optional[float] = None) -> str:
        """Prompt, or the status message if it has not expired yet."""
        if self.prompt_mode == 'save_filename':
            return EditorConstants.SAVE_PROMPT + self.prompt_input
        if now is None:
            now = time.time()
        msg = self.status_message
        if msg and now - msg.time < self.settings.status_message_seconds:
            return msg.text
        return ""

    def refresh_screen(self):
        """Recompute geometry and scroll, then draw one frame."""
        self.viewport.resize(self.terminal.width, self.terminal.height)
        self.scroll()
        rows = self.render_rows()
        left, right = self.status_bar()
        message = self.message_line()
        if self.prompt_mode:
            cursor = Position(x=len(message), y=len(rows) + 1)
        else:
            cursor = self.viewport.screen_position(self.cursor, self.offset, self.buffer)
        self.terminal.draw_frame(rows, cursor.y, cursor.x,
                                 status_left=left, status_right=right, message=message)

    # --- Key handling ---

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if self.prompt_mode == 'save_filename':
            self._handle_filename_prompt(key_event)
            return

        # Any key other than quit cancels a pending quit countdown
        is_quit = key_event.key_type == KeyType.CTRL and key_event.value == 'q'
        if not is_quit and self.quit_times < self.settings.quit_times:
            self.quit_times = self.settings.quit_times
            self.set_status("")

        self.command_registry.execute(self, key_event)
        self.scroll()

    def request_quit(self):
        """Quit, unless there are unsaved changes and confirmations left."""
        if self.buffer.is_dirty() and self.quit_times > 0:
            self.set_status(EditorConstants.QUIT_WARNING_MESSAGE.format(self.quit_times))
            self.quit_times -= 1
            return
        self.running = False

    # --- Files ---

    def load_file(self, filename: str):
        """Load a file into the editor.

        On failure the editor keeps an empty, untitled buffer and shows an
        error in the message bar.
        """
        try:
            self.buffer = Buffer.open(filename)
        except FileError:
            self.buffer = Buffer()
            self.set_status(EditorConstants.OPEN_FAILED_MESSAGE.format(filename))
        self.cursor = Position()
        self.offset = Position()

    def save_file(self) -> bool:
        """Save the buffer to its file name.

        Returns:
            True if save succeeded, False otherwise
        """
        try:
            self.buffer.save()
        except FileError:
            self.set_status(EditorConstants.SAVE_FAILED_MESSAGE)
            return False
        self.set_status(EditorConstants.SAVE_OK_MESSAGE)
        return True

    def handle_save(self):
        """Handle Ctrl-S save command."""
        if self.buffer.file_name:
            self.save_file()
        else:
            # Need to prompt for filename
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    def _handle_filename_prompt(self, key_event: KeyEvent):
        """Handle keypress during filename prompt."""
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            self.prompt_mode = None
            self.prompt_input = ""
            self.set_status(EditorConstants.SAVE_ABORTED_MESSAGE)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            filename = self.prompt_input
            self.prompt_mode = None
            self.prompt_input = ""
            if not filename:
                self.set_status(EditorConstants.SAVE_ABORTED_MESSAGE)
                return
            self.buffer.file_name = filename
            self.save_file()
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if ord(char[0]) >= 32:
                self.prompt_input += char
