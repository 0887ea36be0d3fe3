"""Cursor movement and scrolling over a Buffer.

Nothing here keeps state between keypresses. The editor passes in the last
cursor and offset and gets new ones back, so the offset can never drift out
of sync with the cursor.
"""

from dataclasses import replace
from enum import Enum
from typing import Optional

from .buffer import Buffer, Position
from .line import split_graphemes


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


def _line_length(buffer: Buffer, y: int) -> int:
    line = buffer.row(y)
    return len(line) if line is not None else 0


class ViewportController:
    """Maps buffer coordinates onto a num_columns x num_rows window."""

    def __init__(self, num_columns: int = 80, num_rows: int = 24):
        self.num_columns = num_columns
        self.num_rows = num_rows

    def resize(self, num_columns: int, num_rows: int) -> None:
        self.num_columns = max(num_columns, 1)
        self.num_rows = max(num_rows, 1)

    def move_cursor(self, cursor: Position, direction: Direction, buffer: Buffer) -> Position:
        """Return the cursor after one move in the given direction.

        y may reach len(buffer), the empty line past the end. x is always
        clamped to the length of the line it ends up on.
        """
        x, y = cursor.x, cursor.y
        height = len(buffer)
        width = _line_length(buffer, y)

        if direction == Direction.UP:
            y = max(y - 1, 0)
        elif direction == Direction.DOWN:
            if y < height:
                y += 1
        elif direction == Direction.LEFT:
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                x = _line_length(buffer, y)
        elif direction == Direction.RIGHT:
            if x < width:
                x += 1
            elif y < height:
                y += 1
                x = 0
        elif direction == Direction.PAGE_UP:
            y = max(y - self.num_rows, 0)
        elif direction == Direction.PAGE_DOWN:
            y = min(y + self.num_rows, height)
        elif direction == Direction.HOME:
            x = 0
        elif direction == Direction.END:
            x = width

        x = min(x, _line_length(buffer, y))
        return Position(x=x, y=y)

    def scroll(self, cursor: Position, offset: Position) -> Position:
        """Return the smallest offset change that keeps the cursor visible."""
        x, y = offset.x, offset.y
        if cursor.y < y:
            y = cursor.y
        elif cursor.y >= y + self.num_rows:
            y = cursor.y - self.num_rows + 1
        if cursor.x < x:
            x = cursor.x
        elif cursor.x >= x + self.num_columns:
            x = cursor.x - self.num_columns + 1
        return replace(offset, x=x, y=y)

    def visible_rows(self, buffer: Buffer, offset: Position) -> list[Optional[str]]:
        """Rendered text for each terminal row, None past the end of the buffer."""
        rows: list[Optional[str]] = []
        for terminal_row in range(self.num_rows):
            line = buffer.row(offset.y + terminal_row)
            if line is None:
                rows.append(None)
            else:
                rows.append(line.render(offset.x, offset.x + self.num_columns))
        return rows

    def screen_position(self, cursor: Position, offset: Position, buffer: Buffer) -> Position:
        """Cursor position relative to the top-left of the viewport.

        Tabs left of the cursor are counted at their expanded width, capped
        at the last column since drawn rows are cut at num_columns.
        """
        line = buffer.row(cursor.y)
        if line is None:
            x = cursor.x - offset.x
        else:
            x = len(split_graphemes(line.render(offset.x, cursor.x)))
            x = min(x, self.num_columns - 1)
        return Position(x=x, y=cursor.y - offset.y)
