"""
Document: the root of an element tree.

The document owns input focus, delivers ``key`` and ``click`` events to
elements (bubbling them up the tree until an element consumes them), and
composes every element's rows into a single screen frame.
"""

from __future__ import annotations

from termform.logging import get_logger
from termform.tui.ansi import strip_ansi, truncate, visible_len
from termform.tui.element import Element
from termform.tui.events import CLICK, FOCUS, KEY, ClickData, KeyResult
from termform.tui.keys import Key, parse_key
from termform.tui.renderer import TUIRenderer

logger = get_logger("tui.document")


class _Canvas:
    """Row buffer that places styled text segments at column offsets."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._rows: list[list[tuple[int, str]]] = [[] for _ in range(height)]

    def put(self, x: int, y: int, text: str) -> None:
        if 0 <= y < self.height and x < self.width:
            self._rows[y].append((x, text))

    def lines(self) -> list[str]:
        out: list[str] = []
        for segments in self._rows:
            col = 0
            pieces: list[str] = []
            # Overlaps are dropped; the segment starting leftmost wins
            for x, text in sorted(segments, key=lambda s: s[0]):
                if x < col:
                    continue
                if x > col:
                    pieces.append(" " * (x - col))
                    col = x
                length = visible_len(text)
                if col + length > self.width:
                    text = truncate(text, self.width - col)
                    length = visible_len(text)
                pieces.append(text)
                col += length
            out.append("".join(pieces))
        return out


class Document(Element):
    """
    Root element of a widget tree.

    Parameters
    ----------
    width, height:
        Screen size in cells.
    renderer:
        Optional :class:`TUIRenderer`; when set, every :meth:`redraw`
        writes the composed frame to the terminal.
    """

    element_type = "Document"
    is_document = True

    def __init__(
        self,
        *,
        width: int = 80,
        height: int = 24,
        renderer: TUIRenderer | None = None,
    ) -> None:
        super().__init__(x=0, y=0, width=width, height=height)
        self.renderer = renderer
        self.focus_element: Element | None = None
        self.frame: list[str] = []
        self.cursor: tuple[int, int] | None = None
        self.draw_count = 0

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def _focus_target(self, element: Element) -> Element:
        """Redirect to the outermost ancestor that refuses child focus."""
        target = element
        for ancestor in element.ancestors():
            if ancestor.no_child_focus:
                target = ancestor
        return target

    def give_focus_to(self, element: Element, kind: str = "direct") -> Element | None:
        """
        Move input focus to *element*.

        The element losing focus receives ``focus(False, kind)`` and the
        one gaining it ``focus(True, kind)``.  Requests for elements that
        are destroyed or belong to another tree are ignored.

        Returns
        -------
        Element | None
            The element that holds focus afterwards.
        """
        if element.destroyed or element.document is not self:
            logger.debug("Ignoring focus request for detached element %r", element)
            return self.focus_element

        target = self._focus_target(element)
        if target is self.focus_element:
            return target

        previous = self.focus_element
        self.focus_element = target
        logger.debug("Focus %r -> %r (%s)", previous, target, kind)

        if previous is not None and not previous.destroyed:
            previous.has_focus = False
            previous.emit(FOCUS, False, kind)
        target.has_focus = True
        target.emit(FOCUS, True, kind)
        return target

    def release(self, element: Element) -> None:
        """Drop focus if it sits on *element* or inside it."""
        focused = self.focus_element
        if focused is not None and (focused is element or element.is_ancestor_of(focused)):
            focused.has_focus = False
            self.focus_element = None

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    def _bubble(self, start: Element, event: str, *args: object) -> KeyResult:
        node: Element | None = start
        while node is not None:
            if node.emit(event, *args).interrupted:
                return KeyResult.CONSUMED
            node = node.parent
        return KeyResult.NOT_HANDLED

    def dispatch_key(self, key: Key) -> KeyResult:
        """Deliver *key* to the focused element, bubbling up until consumed."""
        return self._bubble(self.focus_element or self, KEY, key)

    def feed(self, data: bytes) -> KeyResult:
        """Parse raw terminal bytes and dispatch the resulting key."""
        return self.dispatch_key(parse_key(data))

    def element_at(self, x: int, y: int) -> Element:
        """Return the top-most element covering ``(x, y)``, or the document."""
        hit: Element = self
        for element in self.descendants():
            if element.visible and element.contains(x, y):
                hit = element
        return hit

    def dispatch_click(self, x: int, y: int) -> KeyResult:
        """Deliver a click at ``(x, y)``, bubbling up from the element hit."""
        return self._bubble(self.element_at(x, y), CLICK, ClickData(x=x, y=y))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _visible_elements(self) -> list[Element]:
        elements = []
        for element in self.descendants():
            if element.destroyed or not element.visible:
                continue
            if all(a.visible for a in element.ancestors()):
                elements.append(element)
        return elements

    def redraw(self) -> None:
        """Compose every visible element into :attr:`frame` and write it out."""
        canvas = _Canvas(self.width, self.height)
        for element in self._visible_elements():
            for i, line in enumerate(element.render()):
                canvas.put(element.x, element.y + i, line)

        self.frame = canvas.lines()
        self.cursor = None
        focused = self.focus_element
        if focused is not None and hasattr(focused, "draw_self_cursor"):
            self.cursor = focused.draw_self_cursor()
        self.draw_count += 1

        if self.renderer is not None:
            self.renderer.render(self.frame, self.width, self.height, cursor=self.cursor)

    @property
    def plain_frame(self) -> list[str]:
        """The last frame with escape sequences removed."""
        return [strip_ansi(line) for line in self.frame]

    def draw(self) -> None:
        if not self.destroyed:
            self.redraw()
