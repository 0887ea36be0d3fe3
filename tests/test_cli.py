"""Tests for the command line entry point."""

import logging
from unittest.mock import patch

import pytest
from rowedit import __main__ as cli
from rowedit.version import get_version, get_version_string


def test_parse_args_filename():
    assert cli.parse_args(["notes.txt"]) == (None, None, "notes.txt")


def test_parse_args_no_args():
    assert cli.parse_args([]) == (None, None, None)


def test_parse_args_log_and_filename():
    assert cli.parse_args(["--log", "/tmp/x.log", "a.txt"]) == (None, "/tmp/x.log", "a.txt")


def test_parse_args_version():
    assert cli.parse_args(["--version"])[0] == 'version'
    assert cli.parse_args(["-V"])[0] == 'version'


def test_parse_args_keytest():
    assert cli.parse_args(["--keytest"])[0] == 'keytest'


@pytest.mark.parametrize("args", [["--log"], ["--bogus"], ["a.txt", "b.txt"]])
def test_parse_args_usage_errors(args):
    assert cli.parse_args(args)[0] == 'usage'


def test_main_version(capsys):
    with patch('sys.argv', ['rowedit', '--version']):
        cli.main()
    out = capsys.readouterr().out
    assert out.strip() == get_version_string()


def test_main_usage_error_exits(capsys):
    with patch('sys.argv', ['rowedit', '--bogus']):
        with pytest.raises(SystemExit) as excinfo:
            cli.main()
    assert excinfo.value.code == 2
    assert "usage" in capsys.readouterr().err


def test_main_opens_file_and_runs():
    with patch('sys.argv', ['rowedit', 'notes.txt']):
        with patch('rowedit.editor.Editor') as mock_editor_cls:
            cli.main()
    editor = mock_editor_cls.return_value
    editor.load_file.assert_called_once_with('notes.txt')
    editor.run.assert_called_once_with()


def test_main_without_log_keeps_logs_off_the_screen():
    with patch('sys.argv', ['rowedit']):
        with patch('rowedit.editor.Editor'):
            cli.main()
    handlers = logging.getLogger("rowedit").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_version_string_starts_with_version():
    assert get_version_string().startswith(get_version())
