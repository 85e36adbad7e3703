"""Tests for the editable text box control."""

from __future__ import annotations

import pytest

from termform.tui.document import Document
from termform.tui.editable_text_box import EditableTextBox
from termform.tui.events import KeyResult
from termform.tui.keybindings import MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS
from termform.tui.keys import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DOWN,
    KEY_END,
    KEY_ENTER,
    KEY_HOME,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    Key,
)

CTRL_LEFT = Key(name="left", ctrl=True)
CTRL_RIGHT = Key(name="right", ctrl=True)


def type_text(box: EditableTextBox, text: str) -> None:
    for ch in text:
        box.on_key(Key(name=ch, char=ch))


class TestValue:
    """Tests for value/content handling."""

    def test_value_beats_content(self) -> None:
        box = EditableTextBox(content="", value="abc")
        assert box.get_value() == "abc"

    def test_content_used_without_value(self) -> None:
        box = EditableTextBox(content="hello")
        assert box.get_value() == "hello"
        assert box.get_content() == "hello"

    def test_falsy_non_string_value_kept(self) -> None:
        assert EditableTextBox(value=0).get_value() == "0"  # type: ignore[arg-type]

    def test_empty_by_default(self) -> None:
        assert EditableTextBox().get_value() == ""

    def test_set_value_none_clears(self) -> None:
        box = EditableTextBox(value="abc")
        box.set_value(None)
        assert box.get_value() == ""

    def test_cursor_moves_to_end(self) -> None:
        box = EditableTextBox()
        box.set_content("one\ntwo")
        assert box.cursor == (1, 3)


class TestEditing:
    """Tests for key-driven editing."""

    def test_typing_inserts(self) -> None:
        box = EditableTextBox(width=10)
        type_text(box, "hi there")
        assert box.get_value() == "hi there"

    def test_insert_at_cursor(self) -> None:
        box = EditableTextBox(value="ac", width=10)
        box.on_key(KEY_LEFT)
        type_text(box, "b")
        assert box.get_value() == "abc"

    def test_back_delete_and_delete(self) -> None:
        box = EditableTextBox(value="abcd", width=10)
        box.on_key(KEY_BACKSPACE)
        box.on_key(KEY_HOME)
        box.on_key(KEY_DELETE)
        assert box.get_value() == "bc"

    def test_back_delete_at_start_is_harmless(self) -> None:
        box = EditableTextBox(value="a")
        box.on_key(KEY_HOME)
        assert box.on_key(KEY_BACKSPACE) is KeyResult.CONSUMED
        assert box.get_value() == "a"

    def test_home_end(self) -> None:
        box = EditableTextBox(value="abc", width=10)
        box.on_key(KEY_HOME)
        assert box.cursor == (0, 0)
        box.on_key(KEY_END)
        assert box.cursor == (0, 3)

    def test_left_right_clamp(self) -> None:
        box = EditableTextBox(value="ab", width=10)
        box.on_key(KEY_RIGHT)
        assert box.cursor == (0, 2)
        for _ in range(5):
            box.on_key(KEY_LEFT)
        assert box.cursor == (0, 0)

    def test_word_movement(self) -> None:
        box = EditableTextBox(value="hello big world", width=20)

        box.on_key(CTRL_LEFT)
        assert box.cursor == (0, 10)
        box.on_key(CTRL_LEFT)
        assert box.cursor == (0, 6)

        box.on_key(KEY_HOME)
        box.on_key(CTRL_RIGHT)
        assert box.cursor == (0, 5)
        box.on_key(CTRL_RIGHT)
        assert box.cursor == (0, 9)

    def test_enter_not_handled_on_single_line(self) -> None:
        box = EditableTextBox(value="abc")
        assert box.on_key(KEY_ENTER) is KeyResult.NOT_HANDLED
        assert box.get_value() == "abc"

    def test_arrows_up_down_not_handled_on_single_line(self) -> None:
        box = EditableTextBox()
        assert box.on_key(KEY_UP) is KeyResult.NOT_HANDLED
        assert box.on_key(KEY_DOWN) is KeyResult.NOT_HANDLED

    def test_modified_letters_not_inserted(self) -> None:
        box = EditableTextBox()
        assert box.on_key(Key(name="s", char="s", ctrl=True)) is KeyResult.NOT_HANDLED
        assert box.get_value() == ""

    def test_unknown_bound_action_not_handled(self) -> None:
        box = EditableTextBox(key_bindings={"x": "submit"})
        assert box.on_key(Key(name="x", char="x")) is KeyResult.NOT_HANDLED
        assert box.get_value() == ""

    def test_key_event_reports_consumption(self) -> None:
        box = EditableTextBox()
        assert box.emit("key", Key(name="a", char="a")).interrupted is True
        assert box.emit("key", KEY_ENTER).interrupted is False


class TestMultiLine:
    """Tests for the multi-line key table."""

    @pytest.fixture
    def box(self) -> EditableTextBox:
        return EditableTextBox(
            value="first",
            width=10,
            height=3,
            key_bindings=MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS,
        )

    def test_enter_breaks_line(self, box: EditableTextBox) -> None:
        box.on_key(KEY_ENTER)
        type_text(box, "second")
        assert box.get_value() == "first\nsecond"
        assert box.cursor == (1, 6)

    def test_up_down_clamp_column(self, box: EditableTextBox) -> None:
        box.on_key(KEY_ENTER)
        type_text(box, "ab")
        box.on_key(KEY_UP)
        assert box.cursor == (0, 2)
        box.on_key(KEY_END)
        box.on_key(KEY_DOWN)
        assert box.cursor == (1, 2)

    def test_back_delete_joins_lines(self, box: EditableTextBox) -> None:
        box.on_key(KEY_ENTER)
        box.on_key(KEY_BACKSPACE)
        assert box.get_value() == "first"
        assert box.cursor == (0, 5)

    def test_delete_joins_lines(self, box: EditableTextBox) -> None:
        box.set_value("a\nb")
        box.on_key(KEY_UP)
        box.on_key(KEY_END)
        box.on_key(KEY_DELETE)
        assert box.get_value() == "ab"


class TestRendering:
    """Tests for rendering and cursor placement."""

    def test_pads_to_width(self) -> None:
        box = EditableTextBox(value="ab", width=5)
        assert box.render() == ["ab   "]

    def test_text_and_empty_attrs(self) -> None:
        box = EditableTextBox(width=2, text_attr={"bold": True}, empty_attr={"dim": True})
        assert box.render() == ["\x1b[2m  \x1b[0m"]
        box.set_value("x")
        assert box.render() == ["\x1b[1mx \x1b[0m"]

    def test_hidden_content_true_masks_with_star(self) -> None:
        box = EditableTextBox(value="pw", width=4, hidden_content=True)
        assert box.render() == ["**  "]
        assert box.get_value() == "pw"

    def test_hidden_content_custom_char(self) -> None:
        box = EditableTextBox(value="pw", width=4, hidden_content="•x")
        assert box.render() == ["••  "]

    def test_scrolls_to_cursor(self) -> None:
        box = EditableTextBox(value="abcdef", width=4)
        assert box.render() == ["def "]
        box.on_key(KEY_HOME)
        assert box.render() == ["abcd"]

    def test_extra_rows_are_blank(self) -> None:
        box = EditableTextBox(value="a", width=2, height=2)
        assert box.render() == ["a ", "  "]

    def test_draw_self_cursor(self) -> None:
        box = EditableTextBox(value="abc", x=5, y=2, width=10)
        assert box.draw_self_cursor() == (8, 2)

    def test_drawing_on_edit(self, document: Document) -> None:
        box = EditableTextBox(parent=document, width=10, no_draw=True)
        assert document.draw_count == 0

        box.on_key(Key(name="a", char="a"))
        assert document.draw_count == 1
        assert document.plain_frame[0] == "a" + " " * 9

        box.set_value("b", dont_draw=True)
        assert document.draw_count == 1
