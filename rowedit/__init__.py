"""Rowedit - A minimal terminal text editor."""

from .line import Line
from .buffer import Buffer, FileError, Position
from .viewport import Direction, ViewportController

__all__ = [
    'Line',
    'Buffer',
    'FileError',
    'Position',
    'Direction',
    'ViewportController',
]
