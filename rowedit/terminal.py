"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from .constants import EditorConstants


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    The editor core never writes escape sequences itself; it hands finished
    rows to draw_frame and this class positions, colors and clears.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen, end='')
        self.hide_cursor()
        self.clear_screen()
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Entering the context puts the tty in raw mode
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # Justification: curtsies fails to initialize when stdin is
                # not a tty (CI, pipes). The editor then runs without input
                # rather than crashing.
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.normal, end='')
            self.clear_screen()
            print(self.term.exit_fullscreen, end='')
            self.show_cursor()
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Justification: teardown runs on every exit path, including
                # after errors; failing to leave raw mode must not mask them.
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def clear_screen(self):
        """Clear the entire screen."""
        print(self.term.home + self.term.clear, end='', flush=True)

    def hide_cursor(self):
        print(self.term.hide_cursor, end='', flush=True)

    def show_cursor(self):
        print(self.term.normal_cursor, end='', flush=True)

    def format_status_bar(self, left: str, right: str) -> str:
        """Pad or cut the status text to the full width, right part flush right."""
        width = self.width
        if len(left) + len(right) < width:
            text = left + " " * (width - len(left) - len(right)) + right
        else:
            text = left[:width].ljust(width)
        fg = self.term.color_rgb(*EditorConstants.STATUS_FG_COLOR)
        bg = self.term.on_color_rgb(*EditorConstants.STATUS_BG_COLOR)
        return fg + bg + text + self.term.normal

    def draw_frame(self, rows: list[str], cursor_y: int, cursor_x: int,
                   status_left: str = "", status_right: str = "", message: str = ""):
        """Draw text rows, the status bar and the message bar.

        Args:
            rows: Already rendered rows, one per text row of the screen
            cursor_y: Cursor row on screen (0-based)
            cursor_x: Cursor column on screen (0-based)
            status_left: File information shown on the left of the status bar
            status_right: Position shown on the right of the status bar
            message: Text for the bottom line
        """
        width = self.width
        out = [self.term.hide_cursor, self.term.home]
        for y, row in enumerate(rows):
            out.append(self.term.move(y, 0) + row[:width] + self.term.clear_eol)
        status_y = len(rows)
        out.append(self.term.move(status_y, 0) + self.format_status_bar(status_left, status_right))
        out.append(self.term.move(status_y + 1, 0) + message[:width] + self.term.clear_eol)
        out.append(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None.
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            evt = next(self._curtsies_input)  # blocks
            return str(evt)
        r, _, _ = select.select([sys.stdin], [], [], float(timeout))
        if not r:
            return None
        evt = next(self._curtsies_input)
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Rows available for text (status and message bars excluded)."""
        return max(self.term.height - EditorConstants.RESERVED_BOTTOM_ROWS, 1)
