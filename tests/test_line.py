"""Tests for grapheme-aware line editing."""

import pytest
from rowedit.line import Line, split_graphemes


def test_length_counts_grapheme_clusters():
    # 'e' + combining acute accent is one cluster
    line = Line("cafe\u0301!")
    assert len(line) == 5
    assert line.clusters == ["c", "a", "f", "e\u0301", "!"]


def test_emoji_sequence_is_one_cluster():
    family = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
    line = Line("a" + family + "b")
    assert len(line) == 3
    assert line.clusters[1] == family


def test_crlf_is_one_cluster():
    assert split_graphemes("a\r\nb") == ["a", "\r\n", "b"]


def test_empty_line():
    line = Line()
    assert len(line) == 0
    assert line.is_empty()
    assert line.text == ""


def test_render_full_line():
    assert Line("hello").render(0, 5) == "hello"


def test_render_clamps_end_to_length():
    assert Line("hello").render(1, 100) == "ello"


def test_render_start_past_end_is_empty():
    line = Line("hello")
    assert line.render(5, 10) == ""
    assert line.render(7, 10) == ""


def test_render_start_greater_than_end_is_empty():
    assert Line("hello").render(4, 2) == ""


def test_render_expands_tabs_to_two_spaces():
    assert Line("\tx\ty").render(0, 4) == "  x  y"


def test_render_counts_source_clusters_not_output_width():
    # Window of 2 source clusters: a tab and 'x'
    assert Line("\tx\ty").render(0, 2) == "  x"


def test_render_window_over_combining_characters():
    line = Line("cafe\u0301s")
    assert line.render(3, 4) == "e\u0301"


def test_insert_in_middle():
    line = Line("hllo")
    line.insert(1, "e")
    assert line.text == "hello"
    assert len(line) == 5


def test_insert_at_start():
    line = Line("ello")
    line.insert(0, "h")
    assert line.text == "hello"


def test_insert_past_end_appends():
    line = Line("hell")
    line.insert(99, "o")
    assert line.text == "hello"
    assert len(line) == 5


def test_insert_after_multibyte_cluster():
    line = Line("\u00e9t\u00e9")
    line.insert(2, "!")
    assert line.text == "\u00e9t!\u00e9"


def test_delete_in_middle():
    line = Line("heLllo")
    line.delete(2)
    assert line.text == "hello"
    assert len(line) == 5


def test_delete_removes_whole_cluster():
    line = Line("cafe\u0301!")
    line.delete(3)
    assert line.text == "caf!"
    assert len(line) == 4


def test_delete_past_end_is_noop():
    line = Line("hello")
    line.delete(5)
    line.delete(50)
    assert line.text == "hello"
    assert len(line) == 5


def test_append():
    line = Line("foo")
    line.append(Line("bar"))
    assert line.text == "foobar"
    assert len(line) == 6


def test_split_in_middle():
    line = Line("hello world")
    tail = line.split(5)
    assert line.text == "hello"
    assert tail.text == " world"
    assert len(line) == 5
    assert len(tail) == 6


def test_split_at_end_gives_empty_tail():
    line = Line("ab")
    tail = line.split(2)
    assert line.text == "ab"
    assert tail.text == ""
    assert tail.is_empty()


def test_split_at_start_moves_everything():
    line = Line("ab")
    tail = line.split(0)
    assert line.text == ""
    assert tail.text == "ab"


@pytest.mark.parametrize("text", ["", "abc", "a\tb", "não", "über"])
def test_insert_then_delete_is_identity(text):
    for i in range(len(Line(text)) + 1):
        line = Line(text)
        line.insert(i, "x")
        line.delete(i)
        assert line.text == text
        assert len(line) == len(Line(text))


def test_inserted_combining_mark_joins_previous_cluster():
    # The mark becomes part of "a", so the same index now names "b"
    line = Line("ab")
    line.insert(1, "\u0301")
    assert line.clusters == ["a\u0301", "b"]
    line.delete(1)
    assert line.text == "a\u0301"


@pytest.mark.parametrize("text", ["", "abc", "hello world", "cafe\u0301 ok"])
def test_split_then_append_restores_text(text):
    for at in range(len(Line(text)) + 1):
        line = Line(text)
        tail = line.split(at)
        line.append(tail)
        assert line.text == text


def test_lines_compare_by_text():
    assert Line("abc") == Line("abc")
    assert Line("abc") != Line("abd")
