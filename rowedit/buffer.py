"""In-memory line buffer with file identity and dirty tracking."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from typing import Iterator, Optional

from .constants import EditorConstants
from .line import Line

logger = logging.getLogger(__name__)


@dataclass
class Position:
    """Column (grapheme cluster index) and line index.

    Used for both the cursor and the scroll offset.
    """
    x: int = 0
    y: int = 0


class FileError(Exception):
    """Opening or saving a file failed."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"{path}: {reason}" if reason else path
        super().__init__(message)


def split_lines(content: str) -> list[str]:
    """Split file content into lines.

    Lines end at "\\n" with an optional "\\r" before it. A terminator at the
    very end does not start another line, and empty content has no lines.
    """
    if not content:
        return []
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


class Buffer:
    """Ordered sequence of Lines plus the name of the file they came from."""

    def __init__(self, lines: Optional[list[Line]] = None, file_name: Optional[str] = None):
        self._lines: list[Line] = list(lines) if lines else []
        self.file_name = file_name
        self._dirty = False

    @classmethod
    def from_text(cls, text: str, file_name: Optional[str] = None) -> "Buffer":
        return cls([Line.from_text(t) for t in split_lines(text)], file_name=file_name)

    @classmethod
    def open(cls, path: str) -> "Buffer":
        """Read a whole file into a new Buffer.

        Raises:
            FileError: the file is missing, unreadable or not valid text.
        """
        try:
            with open(path, 'r', encoding=EditorConstants.FILE_ENCODING, newline='') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not open %s: %s", path, e)
            raise FileError(path, str(e)) from e
        buf = cls.from_text(content, file_name=path)
        logger.debug("Opened %s (%d lines)", path, len(buf))
        return buf

    # --- Read-only accessors ---

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def row(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def is_empty(self) -> bool:
        return not self._lines

    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def texts(self) -> list[str]:
        return [line.text for line in self._lines]

    # --- Mutation ---

    def insert(self, at: Position, char: str) -> None:
        """Insert one character at a cursor position.

        The line just past the end (at.y == len) is valid: a character there
        starts a new last line. Anything further down is ignored.
        """
        if at.y > len(self._lines):
            return
        if char == "\n":
            self.insert_newline(at)
            return
        if at.y == len(self._lines):
            self._lines.append(Line(char))
        else:
            self._lines[at.y].insert(at.x, char)
        self._dirty = True

    def insert_newline(self, at: Position) -> None:
        # A newline on the line past the end adds nothing. Kept on purpose;
        # see test_newline_at_end_of_buffer_is_noop.
        if at.y >= len(self._lines):
            return
        tail = self._lines[at.y].split(at.x)
        self._lines.insert(at.y + 1, tail)
        self._dirty = True

    def delete(self, at: Position) -> None:
        """Delete the character at a cursor position.

        At the end of a line the next line is joined onto it.
        """
        if at.y >= len(self._lines):
            return
        line = self._lines[at.y]
        if at.x == len(line) and at.y + 1 < len(self._lines):
            next_line = self._lines.pop(at.y + 1)
            line.append(next_line)
            self._dirty = True
        elif 0 <= at.x < len(line):
            line.delete(at.x)
            self._dirty = True

    # --- Persistence ---

    def serialize(self) -> str:
        term = EditorConstants.LINE_TERMINATOR
        return "".join(line.text + term for line in self._lines)

    def save(self) -> None:
        """Write all lines to file_name atomically.

        Does nothing when the buffer has no file name.

        Raises:
            FileError: the write failed. The buffer stays dirty.
        """
        if not self.file_name:
            return
        filename = self.file_name
        content = self.serialize()
        dir_name = os.path.dirname(filename) or '.'
        temp_filename = None
        try:
            # Same directory so the rename stays on one filesystem
            with tempfile.NamedTemporaryFile(mode='w', encoding=EditorConstants.FILE_ENCODING,
                                             newline='', dir=dir_name,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, filename)
        except OSError as e:
            logger.warning("Could not save %s: %s", filename, e)
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.debug("Could not remove temp file %s", temp_filename)
            raise FileError(filename, str(e)) from e
        self._dirty = False
        logger.debug("Saved %s (%d lines)", filename, len(self._lines))
