"""Tests for key-binding tables."""

import json

import pytest

from termform.errors import ConfigError
from termform.tui.keybindings import (
    EDITABLE_TEXT_BOX_KEYBINDINGS,
    LABELED_INPUT_KEYBINDINGS,
    MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS,
    SELECT_LIST_KEYBINDINGS,
    KeyBindings,
)
from termform.tui.keys import KEY_ALT_ENTER, KEY_ENTER, KEY_KP_ENTER, Key


class TestKeyBindings:
    """Tests for KeyBindings."""

    def test_normalises_descriptors(self) -> None:
        """Uppercase and underscore forms should land on the canonical key."""
        table = KeyBindings({"CTRL_LEFT": "start_of_word", "KP_ENTER": "submit"})

        assert list(table) == ["ctrl+left", "kp_enter"]

    def test_lookup_with_any_spelling(self) -> None:
        table = KeyBindings({"ctrl+left": "start_of_word"})

        assert table["CTRL_LEFT"] == "start_of_word"
        assert "Ctrl+Left" in table
        assert "ctrl+right" not in table
        assert 42 not in table

    def test_action_for_key_object(self) -> None:
        """A Key with ctrl=True and name='left' should resolve 'ctrl+left'."""
        table = KeyBindings({"ctrl+left": "start_of_word"})

        assert table.action_for(Key(name="left", ctrl=True)) == "start_of_word"
        assert table.action_for(Key(name="left")) is None

    def test_action_for_string(self) -> None:
        table = KeyBindings({"enter": "submit"})

        assert table.action_for("ENTER") == "submit"
        assert table.action_for("tab") is None

    def test_keys_for(self) -> None:
        assert LABELED_INPUT_KEYBINDINGS.keys_for("submit") == ["enter", "kp_enter", "alt+enter"]
        assert LABELED_INPUT_KEYBINDINGS.keys_for("cancel") == []

    def test_immutable(self) -> None:
        table = KeyBindings({"enter": "submit"})

        with pytest.raises(TypeError):
            table["tab"] = "submit"  # type: ignore[index]

    def test_extend_returns_new_table(self) -> None:
        base = KeyBindings({"enter": "submit", "tab": "next"})
        extended = base.extend({"ENTER": "new_line"})

        assert extended["enter"] == "new_line"
        assert extended["tab"] == "next"
        assert base["enter"] == "submit"

    def test_equality_with_mapping(self) -> None:
        table = KeyBindings({"ctrl+left": "start_of_word"})

        assert table == {"CTRL_LEFT": "start_of_word"}
        assert table != KeyBindings({"ctrl+left": "end_of_word"})

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(KeyBindings())

    def test_coerce(self) -> None:
        table = KeyBindings({"enter": "submit"})

        assert KeyBindings.coerce(table) is table
        assert KeyBindings.coerce({"enter": "submit"}) == table

    def test_empty(self) -> None:
        assert len(KeyBindings()) == 0
        assert KeyBindings().action_for(KEY_ENTER) is None


class TestLoad:
    """Tests for loading tables from JSON files."""

    def test_load(self, tmp_path) -> None:
        path = tmp_path / "keys.json"
        path.write_text(json.dumps({"ctrl+s": "submit", "CTRL_ENTER": "submit"}))

        table = KeyBindings.load(path)

        assert table.action_for(Key(name="s", char="s", ctrl=True)) == "submit"
        assert "ctrl+enter" in table

    def test_load_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError):
            KeyBindings.load(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "keys.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError):
            KeyBindings.load(path)

    @pytest.mark.parametrize("payload", [["enter"], {"enter": 1}, "submit"])
    def test_load_wrong_shape(self, tmp_path, payload: object) -> None:
        path = tmp_path / "keys.json"
        path.write_text(json.dumps(payload))

        with pytest.raises(ConfigError, match="must map strings to strings"):
            KeyBindings.load(path)


class TestPresets:
    """Tests for the built-in tables."""

    def test_labeled_input_submits_on_every_enter(self) -> None:
        for key in (KEY_ENTER, KEY_KP_ENTER, KEY_ALT_ENTER):
            assert LABELED_INPUT_KEYBINDINGS.action_for(key) == "submit"
        assert len(LABELED_INPUT_KEYBINDINGS) == 3

    def test_single_line_leaves_enter_unbound(self) -> None:
        assert EDITABLE_TEXT_BOX_KEYBINDINGS.action_for(KEY_ENTER) is None
        assert EDITABLE_TEXT_BOX_KEYBINDINGS["ctrl+left"] == "start_of_word"
        assert EDITABLE_TEXT_BOX_KEYBINDINGS["backspace"] == "back_delete"

    def test_multi_line_adds_line_editing(self) -> None:
        table = MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS

        assert table.action_for(KEY_ENTER) == "new_line"
        assert table.action_for(KEY_KP_ENTER) == "new_line"
        assert table.action_for(KEY_ALT_ENTER) is None
        assert table["up"] == "up"
        for descriptor, action in EDITABLE_TEXT_BOX_KEYBINDINGS.items():
            assert table[descriptor] == action

    def test_select_list(self) -> None:
        assert SELECT_LIST_KEYBINDINGS["up"] == "previous"
        assert SELECT_LIST_KEYBINDINGS["down"] == "next"
        assert SELECT_LIST_KEYBINDINGS.action_for(KEY_ENTER) == "submit"
