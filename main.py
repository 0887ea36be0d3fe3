#!/usr/bin/env python3
"""Rowedit - A minimal terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Move the cursor
    Ctrl-S: Save file (prompts for a name if the buffer has none)
    Ctrl-Q: Quit (press repeatedly to discard unsaved changes)
    Type to insert text
    Backspace/Delete: Delete character
    Enter: Split line
"""

from rowedit.__main__ import main


if __name__ == "__main__":
    main()
