"""
Labeled input widget.

``LabeledInput`` pairs an optional label with exactly one input control,
either an :class:`EditableTextBox` (``type="text"``) or a
:class:`SelectList` (``type="select"``), and gives callers one surface for
both: ``get_value``/``set_value``/``get_content``/``set_content`` and a
``submit`` event.

Key events reach the child control first.  Only when the child does not
consume a key does the widget consult its own table, where the single
recognised action is ``submit``.  This lets the child's editing and
navigation keys win while Enter still submits whenever the child leaves
it alone.

Example:
    document = Document(width=40, height=3)
    name = LabeledInput({"label": "Name: ", "width": 30}, parent=document)
    name.on("submit", lambda value, _, widget: print(value))
    document.give_focus_to(name)
    document.feed(b"B")
    document.feed(b"\\r")       # prints "B"
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from termform.config import LabeledInputConfig
from termform.errors import UnknownInputTypeError
from termform.logging import get_logger
from termform.tui.ansi import Attr
from termform.tui.editable_text_box import EditableTextBox
from termform.tui.element import Element
from termform.tui.events import CLICK, FOCUS, KEY, SUBMIT, ClickData, Emission, KeyResult, Listener
from termform.tui.keybindings import (
    EDITABLE_TEXT_BOX_KEYBINDINGS,
    LABELED_INPUT_KEYBINDINGS,
    MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS,
    SELECT_LIST_KEYBINDINGS,
    KeyBindings,
)
from termform.tui.keys import Key
from termform.tui.select_list import SelectList
from termform.tui.text import Text

logger = get_logger("tui.labeled_input")


class InputType(str, enum.Enum):
    """The two input controls a labeled input can wrap."""

    TEXT = "text"
    SELECT = "select"

    @classmethod
    def resolve(cls, value: str | InputType | None) -> InputType:
        """
        Map a configured type to a member; ``None`` means ``TEXT``.

        Raises
        ------
        UnknownInputTypeError
            For anything other than ``"text"`` or ``"select"``.
        """
        if value is None:
            return cls.TEXT
        try:
            return cls(value)
        except ValueError:
            raise UnknownInputTypeError(value) from None


class InputStatus(enum.Enum):
    """Presentation status of a labeled input."""

    BLURRED = "blurred"
    FOCUSED = "focused"
    # Not entered by any event yet; both style like BLURRED.
    DISABLED = "disabled"
    SUBMITTED = "submitted"


@dataclass(frozen=True)
class LabelStyle:
    """Attributes and padding applied to the label for one status."""

    attr: Attr
    left_padding: str = ""
    right_padding: str = ""


def resolve_label_style(status: InputStatus, styles: Mapping[InputStatus, LabelStyle]) -> LabelStyle:
    """Return the label style for *status*; *styles* must cover every status."""
    return styles[status]


class InputControl(Protocol):
    """What a labeled input needs from its child control."""

    def get_value(self) -> Any: ...

    def set_value(self, value: Any, dont_draw: bool = False) -> None: ...

    def get_content(self) -> str: ...

    def set_content(self, content: str, has_markup: bool = False, dont_draw: bool = False) -> None: ...

    def on(self, event: str, listener: Listener) -> Any: ...

    def off(self, event: str, listener: Listener) -> None: ...

    def emit(self, event: str, *args: Any) -> Emission: ...


class LabeledInput(Element):
    """
    Label plus one input control.

    Parameters
    ----------
    config:
        A :class:`LabeledInputConfig`, or a dict of its options (snake or
        camel case).
    parent:
        Element to attach to, usually a document or a form.
    **options:
        Individual options layered over *config*.

    Raises
    ------
    UnknownInputTypeError
        When ``type`` is neither ``"text"`` nor ``"select"``.  Raised
        before anything is attached to *parent*.
    """

    element_type = "LabeledInput"
    no_child_focus = True
    propagate_z = True
    # Select lists raise their z-index while open; the whole widget follows.
    intercept_temp_z_index = True

    key_bindings: KeyBindings = LABELED_INPUT_KEYBINDINGS
    editable_text_box_key_bindings: KeyBindings = EDITABLE_TEXT_BOX_KEYBINDINGS
    multi_line_editable_text_box_key_bindings: KeyBindings = MULTI_LINE_EDITABLE_TEXT_BOX_KEYBINDINGS
    select_list_key_bindings: KeyBindings = SELECT_LIST_KEYBINDINGS

    def __init__(
        self,
        config: LabeledInputConfig | Mapping[str, Any] | None = None,
        *,
        parent: Element | None = None,
        **options: Any,
    ) -> None:
        config = _coerce_config(config, options)
        self.input_type = InputType.resolve(config.type)

        x = config.x if config.x is not None else (parent.x if parent else 0)
        y = config.y if config.y is not None else (parent.y if parent else 0)
        if config.width is not None:
            width = config.width
        elif parent is not None:
            width = parent.x + parent.width - x
        else:
            width = 1
        height = config.height if config.height is not None else 1

        super().__init__(parent=parent, x=x, y=y, width=width, height=height)

        # For text input only
        self.hidden_content = config.hidden_content

        self.label = config.label
        self.label_focus_attr = config.label_focus_attr
        self.label_blur_attr = config.label_blur_attr
        blurred = LabelStyle(
            self.label_blur_attr,
            config.label_blur_left_padding,
            config.label_blur_right_padding,
        )
        self.label_styles: dict[InputStatus, LabelStyle] = {
            InputStatus.BLURRED: blurred,
            InputStatus.FOCUSED: LabelStyle(
                self.label_focus_attr,
                config.label_focus_left_padding,
                config.label_focus_right_padding,
            ),
            InputStatus.DISABLED: blurred,
            InputStatus.SUBMITTED: blurred,
        }

        self.button_blur_attr = config.button_blur_attr
        self.button_focus_attr = config.button_focus_attr
        self.button_disabled_attr = config.button_disabled_attr
        self.button_submitted_attr = config.button_submitted_attr

        self.text_attr = config.text_attr
        self.empty_attr = config.empty_attr

        if config.key_bindings is not None:
            self.key_bindings = KeyBindings.coerce(config.key_bindings)

        self.label_text: Text | None = None
        if self.label:
            self.label_text = Text(
                self.label,
                parent=self,
                x=self.x,
                y=self.y,
                height=1,
                attr=blurred.attr,
                left_padding=blurred.left_padding,
                right_padding=blurred.right_padding,
                no_draw=True,
            )

        self.input: InputControl
        self.input_key_bindings: KeyBindings
        self._listens_to_input = False
        try:
            self._init_input(config)
        except BaseException:
            if parent is not None:
                parent.detach(self)
            raise
        self.update_status()

        self.on(KEY, self.on_key)
        self.on(FOCUS, self.on_focus)
        self.on(CLICK, self.on_click)

        logger.debug("Built %s labeled input %r", self.input_type.value, self.label)

        # Subclasses draw from their own constructor
        if self.element_type == LabeledInput.element_type and not config.no_draw:
            self.draw()

    # ------------------------------------------------------------------
    # Child construction
    # ------------------------------------------------------------------

    @property
    def label_width(self) -> int:
        return self.label_text.output_width if self.label_text is not None else 0

    def _init_input(self, config: LabeledInputConfig) -> None:
        if self.input_type is InputType.TEXT:
            self._init_text_input(config)
        elif self.input_type is InputType.SELECT:
            self._init_select_input(config)
        else:
            raise UnknownInputTypeError(self.input_type)

    def _init_text_input(self, config: LabeledInputConfig) -> None:
        if config.input_key_bindings is not None:
            self.input_key_bindings = KeyBindings.coerce(config.input_key_bindings)
        elif config.allow_new_line:
            self.input_key_bindings = self.multi_line_editable_text_box_key_bindings
        else:
            self.input_key_bindings = self.editable_text_box_key_bindings

        # A text box commits through our own key table, not an event
        self.input = EditableTextBox(
            parent=self,
            content=config.content,
            value=config.value,
            x=self.x + self.label_width,
            y=self.y,
            width=self.width - self.label_width,
            height=self.height,
            hidden_content=self.hidden_content,
            text_attr=self.text_attr,
            empty_attr=self.empty_attr,
            key_bindings=self.input_key_bindings,
            no_draw=True,
        )

    def _init_select_input(self, config: LabeledInputConfig) -> None:
        if config.input_key_bindings is not None:
            self.input_key_bindings = KeyBindings.coerce(config.input_key_bindings)
        else:
            self.input_key_bindings = self.select_list_key_bindings

        self.input = SelectList(
            parent=self,
            content=config.content,
            value=config.value,
            x=self.x + self.label_width,
            y=self.y,
            width=self.width - self.label_width,
            items=config.items,
            button_blur_attr=self.button_blur_attr,
            button_focus_attr=self.button_focus_attr,
            button_disabled_attr=self.button_disabled_attr,
            button_submitted_attr=self.button_submitted_attr,
            key_bindings=self.input_key_bindings,
            no_draw=True,
        )

        # The list commits itself; relay it as our own submit
        self.input.on(SUBMIT, self.on_input_submit)
        self._listens_to_input = True

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def status(self) -> InputStatus:
        return InputStatus.FOCUSED if self.has_focus else InputStatus.BLURRED

    def update_status(self) -> None:
        """
        Restyle the label for the current status.

        Only touches the label's attributes; callers draw afterwards.
        """
        if self.label_text is None:
            return
        label_style = resolve_label_style(self.status, self.label_styles)
        self.label_text.attr = label_style.attr
        self.label_text.left_padding = label_style.left_padding
        self.label_text.right_padding = label_style.right_padding

    # ------------------------------------------------------------------
    # Value / content, straight from the child control
    # ------------------------------------------------------------------

    def get_value(self) -> Any:
        return self.input.get_value()

    def set_value(self, value: Any, dont_draw: bool = False) -> None:
        return self.input.set_value(value, dont_draw)

    def get_content(self) -> str:
        return self.input.get_content()

    def set_content(self, content: str, has_markup: bool = False, dont_draw: bool = False) -> None:
        return self.input.set_content(content, has_markup, dont_draw)

    def draw_self_cursor(self) -> tuple[int, int] | None:
        draw_cursor = getattr(self.input, "draw_self_cursor", None)
        if draw_cursor is None:
            return None
        return draw_cursor()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def submit(self) -> None:
        """Emit ``submit(value, None, self)``."""
        value = self.get_value()
        logger.debug("Labeled input %r submitted %r", self.label, value)
        self.emit(SUBMIT, value, None, self)

    def on_key(self, key: Key) -> KeyResult:
        # Give full priority to the child input
        if self.input.emit(KEY, key).interrupted:
            return KeyResult.CONSUMED

        if self.key_bindings.action_for(key) == "submit":
            self.submit()
            return KeyResult.CONSUMED

        return KeyResult.NOT_HANDLED

    def on_input_submit(self, *_: Any) -> None:
        self.submit()

    def on_focus(self, focus: bool, kind: str | None = None) -> None:
        self.has_focus = focus
        self.update_status()
        self.draw()

    def on_click(self, data: ClickData | None = None) -> None:
        document = self.document
        if document is not None:
            document.give_focus_to(self, "select")

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def destroy(self, is_sub_destroy: bool = False) -> None:
        self.off(KEY, self.on_key)
        self.off(FOCUS, self.on_focus)
        self.off(CLICK, self.on_click)
        if self._listens_to_input:
            self.input.off(SUBMIT, self.on_input_submit)
            self._listens_to_input = False

        super().destroy(is_sub_destroy)


def _coerce_config(
    config: LabeledInputConfig | Mapping[str, Any] | None,
    options: Mapping[str, Any],
) -> LabeledInputConfig:
    if config is None:
        config = LabeledInputConfig()
    elif isinstance(config, Mapping):
        config = LabeledInputConfig.from_dict(config)
    elif not isinstance(config, LabeledInputConfig):
        raise TypeError(f"Expected LabeledInputConfig or mapping, got {type(config).__name__}")
    if options:
        config = config.merged(**options)
    return config
