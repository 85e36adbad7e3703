"""Static single-style text element, used for input labels."""

from __future__ import annotations

from termform.tui.ansi import Attr, style
from termform.tui.element import Element


class Text(Element):
    """
    A line of static text with one attribute set and optional padding.

    ``attr``, ``left_padding`` and ``right_padding`` are plain mutable
    attributes: owners restyle the text by assigning them and then
    drawing.  Width follows the padded content.
    """

    element_type = "Text"

    def __init__(
        self,
        content: str = "",
        *,
        parent: Element | None = None,
        x: int | None = None,
        y: int | None = None,
        height: int = 1,
        attr: Attr | None = None,
        left_padding: str = "",
        right_padding: str = "",
        no_draw: bool = False,
    ) -> None:
        self.content = content
        self.attr: Attr = dict(attr or {})
        self.left_padding = left_padding or ""
        self.right_padding = right_padding or ""
        super().__init__(parent=parent, x=x, y=y, width=len(content), height=height)
        if not no_draw:
            self.draw()

    @property
    def output_width(self) -> int:
        return len(self.left_padding) + len(self.content) + len(self.right_padding)

    def render(self) -> list[str]:
        text = f"{self.left_padding}{self.content}{self.right_padding}"
        return [style(text, self.attr)]
