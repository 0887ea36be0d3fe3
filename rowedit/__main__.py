"""Rowedit CLI entry point.

Allows running via `python -m rowedit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .version import get_version_string

USAGE = "usage: rowedit [--version] [--keytest] [--log FILE] [FILE]"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value}",
                     f"raw='{_escape_bytes(ev.raw)}'"]
            if ev.is_ctrl:
                parts.append("flags=ctrl")
            print(' '.join(parts) + '\r')
    finally:
        term.cleanup()
    print("Exiting keyboard test.")


def parse_args(args: list[str]) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """Return (action, log_file, filename).

    action is 'version', 'keytest', 'usage' or None for normal editing.
    """
    log_file = None
    filename = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--version", "-V"):
            return 'version', None, None
        if arg in ('--keytest', '--keyboard-test'):
            return 'keytest', log_file, None
        if arg == '--log':
            if i + 1 >= len(args):
                return 'usage', None, None
            log_file = args[i + 1]
            i += 2
            continue
        if arg.startswith('-') or filename is not None:
            return 'usage', None, None
        filename = arg
        i += 1
    return None, log_file, filename


def main() -> None:
    action, log_file, filename = parse_args(sys.argv[1:])
    if action == 'version':
        print(get_version_string())
        return
    if action == 'usage':
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    # The screen belongs to the editor, so logs only go to a file
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )
    else:
        logging.getLogger("rowedit").addHandler(logging.NullHandler())

    if action == 'keytest':
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if filename:
        editor.load_file(filename)
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
