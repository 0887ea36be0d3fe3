"""Test keyboard input handling."""

import pytest
from rowedit.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token,value", [
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<HOME>', 'home'),
    ('<END>', 'end'),
    ('<PAGEUP>', 'page_up'),
    ('<PAGEDOWN>', 'page_down'),
    ('<BACKSPACE>', 'backspace'),
    ('<DELETE>', 'delete'),
])
def test_curtsies_special_keys(handler, token, value):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value
    assert event.is_sequence


@pytest.mark.parametrize("token", ['<Ctrl-j>', '<Ctrl-m>', '\n', '\r'])
def test_enter_variants(handler, token):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'enter'


def test_ctrl_tokens(handler):
    event = handler.parse_key('<Ctrl-q>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 'q'
    assert event.is_ctrl

    event = handler.parse_key('<Ctrl-S>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 's'


def test_raw_control_bytes(handler):
    event = handler.parse_key('\x11')  # Ctrl-Q
    assert event.key_type == KeyType.CTRL
    assert event.value == 'q'

    event = handler.parse_key('\x13')  # Ctrl-S
    assert event.key_type == KeyType.CTRL
    assert event.value == 's'


def test_raw_backspace(handler):
    for raw in ('\x7f', '\x08'):
        event = handler.parse_key(raw)
        assert event.key_type == KeyType.SPECIAL
        assert event.value == 'backspace'


def test_escape(handler):
    for raw in ('<ESC>', '\x1b'):
        event = handler.parse_key(raw)
        assert event.key_type == KeyType.SPECIAL
        assert event.value == 'escape'


def test_tab_and_space_are_regular(handler):
    assert handler.parse_key('<TAB>') == KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
    assert handler.parse_key('\t').value == '\t'
    assert handler.parse_key('<SPACE>') == KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')


def test_printable_characters(handler):
    for ch in ('a', 'Z', '<', '>', 'é', '世'):
        event = handler.parse_key(ch)
        assert event.key_type == KeyType.REGULAR
        assert event.value == ch


def test_unknown_token_is_special(handler):
    event = handler.parse_key('<F5>')
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'f5'


def test_get_key_event_reads_from_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key('<UP>')
    terminal.add_key('x')

    assert handler.get_key_event().value == 'up'
    assert handler.get_key_event().value == 'x'
    assert handler.get_key_event() is None
