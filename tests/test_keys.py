"""Tests for key parsing and descriptors."""

from __future__ import annotations

import pytest

from termform.tui.keys import (
    KEY_ALT_ENTER,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_KP_ENTER,
    KEY_PAGE_UP,
    KEY_SPACE,
    KEY_TAB,
    KEY_UP,
    UNKNOWN,
    Key,
    normalise_descriptor,
    parse_key,
)


class TestKey:
    """Tests for the Key data model."""

    def test_descriptor_plain(self) -> None:
        assert KEY_ENTER.descriptor == "enter"

    def test_descriptor_sorts_modifiers(self) -> None:
        key = Key(name="m", char="m", shift=True, ctrl=True, alt=True)
        assert key.descriptor == "alt+ctrl+shift+m"

    def test_alt_enter_descriptor(self) -> None:
        assert KEY_ALT_ENTER.descriptor == "alt+enter"

    def test_kp_enter_is_its_own_key(self) -> None:
        assert KEY_KP_ENTER.descriptor == "kp_enter"
        assert KEY_KP_ENTER != KEY_ENTER

    def test_printable(self) -> None:
        assert Key(name="a", char="a").printable is True
        assert KEY_SPACE.printable is True

    def test_not_printable(self) -> None:
        assert KEY_ENTER.printable is False
        assert KEY_UP.printable is False
        assert Key(name="a", char="a", ctrl=True).printable is False
        assert Key(name="a", char="a", alt=True).printable is False

    def test_from_descriptor(self) -> None:
        assert Key.from_descriptor("Ctrl+Right") == Key(name="right", ctrl=True)
        assert Key.from_descriptor("enter") == KEY_ENTER
        assert Key.from_descriptor("alt+enter") == KEY_ALT_ENTER
        assert Key.from_descriptor("x") == Key(name="x", char="x")

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            KEY_ENTER.name = "tab"  # type: ignore[misc]


class TestNormaliseDescriptor:
    """Tests for descriptor normalisation."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("ENTER", "enter"),
            ("KP_ENTER", "kp_enter"),
            ("CTRL_LEFT", "ctrl+left"),
            ("Ctrl+Right", "ctrl+right"),
            ("left+ctrl", "ctrl+left"),
            ("Shift+Ctrl+M", "ctrl+shift+m"),
            ("ALT_ENTER", "alt+enter"),
            ("PAGE_UP", "page_up"),
            ("  home ", "home"),
        ],
    )
    def test_forms(self, raw: str, expected: str) -> None:
        assert normalise_descriptor(raw) == expected


class TestParseKey:
    """Tests for parse_key on raw terminal bytes."""

    def test_empty(self) -> None:
        assert parse_key(b"") is UNKNOWN

    def test_printable(self) -> None:
        assert parse_key(b"a") == Key(name="a", char="a")

    def test_utf8(self) -> None:
        assert parse_key("é".encode()) == Key(name="é", char="é")

    def test_space(self) -> None:
        assert parse_key(b" ") == KEY_SPACE

    @pytest.mark.parametrize("data", [b"\r", b"\n"])
    def test_enter(self, data: bytes) -> None:
        assert parse_key(data) == KEY_ENTER

    def test_tab(self) -> None:
        assert parse_key(b"\t") == KEY_TAB

    @pytest.mark.parametrize("data", [b"\x7f", b"\x08"])
    def test_backspace(self, data: bytes) -> None:
        assert parse_key(data) == KEY_BACKSPACE

    def test_ctrl_letter(self) -> None:
        assert parse_key(b"\x01") == Key(name="a", char="a", ctrl=True)

    def test_escape(self) -> None:
        assert parse_key(b"\x1b") == KEY_ESCAPE

    def test_arrows(self) -> None:
        assert parse_key(b"\x1b[A") == KEY_UP
        assert parse_key(b"\x1b[B") == KEY_DOWN

    def test_ctrl_arrow(self) -> None:
        key = parse_key(b"\x1b[1;5D")
        assert key == Key(name="left", ctrl=True)
        assert key.descriptor == "ctrl+left"

    def test_tilde_keys(self) -> None:
        assert parse_key(b"\x1b[3~") == KEY_DELETE
        assert parse_key(b"\x1b[5~") == KEY_PAGE_UP
        assert parse_key(b"\x1b[15~") == Key(name="f5")

    def test_shift_tab(self) -> None:
        assert parse_key(b"\x1b[Z") == Key(name="tab", char="\t", shift=True)

    def test_keypad_enter(self) -> None:
        assert parse_key(b"\x1bOM") == KEY_KP_ENTER

    def test_alt_enter(self) -> None:
        assert parse_key(b"\x1b\r") == KEY_ALT_ENTER

    def test_alt_letter(self) -> None:
        assert parse_key(b"\x1bx") == Key(name="x", char="x", alt=True)

    @pytest.mark.parametrize("data", [b"\x1b[", b"\x1b[9~", b"\x1b[1;xA", b"\x1b[Q", b"\xff"])
    def test_unrecognised(self, data: bytes) -> None:
        assert parse_key(data) == UNKNOWN
