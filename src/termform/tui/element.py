"""
Base element for the widget tree.

All renderable things, including the :class:`~termform.tui.document.Document`
root, inherit from ``Element``.  An element owns its children, knows its
absolute position on screen, and is an :class:`EventEmitter` so that the
document can deliver ``key``, ``focus`` and ``click`` events to it.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from termform.tui.events import EventEmitter

if TYPE_CHECKING:
    from termform.tui.document import Document


class Element(EventEmitter):
    """
    Base class for UI elements.

    Geometry is absolute: ``x``/``y`` are screen columns/rows, defaulting
    to the parent's origin.  Subclasses override :meth:`render` to return
    their pre-styled rows; the document places those rows at ``(x, y)``.

    Parameters
    ----------
    parent:
        Element to attach to.  ``None`` builds a detached element.
    x, y:
        Absolute position.  Defaults to the parent's position, or 0.
    width, height:
        Size in cells.
    """

    element_type = "Element"

    #: Focus requests aimed at a descendant land on this element instead.
    no_child_focus = False

    #: Z-index changes on this element apply to its children too.
    propagate_z = False

    is_document = False

    def __init__(
        self,
        *,
        parent: Element | None = None,
        x: int | None = None,
        y: int | None = None,
        width: int = 1,
        height: int = 1,
    ) -> None:
        super().__init__()
        self.parent: Element | None = None
        self.children: list[Element] = []
        self.x = x if x is not None else (parent.x if parent else 0)
        self.y = y if y is not None else (parent.y if parent else 0)
        self.width = max(0, width)
        self.height = max(0, height)
        self.has_focus = False
        self.destroyed = False
        self._dirty = True
        self._visible = True

        if parent is not None:
            parent.attach(self)

    # ------------------------------------------------------------------
    # Tree
    # ------------------------------------------------------------------

    def attach(self, child: Element) -> None:
        """Append *child* to this element's children."""
        if child.parent is not None:
            child.parent.detach(child)
        child.parent = self
        self.children.append(child)

    def detach(self, child: Element) -> None:
        """Remove *child*; detaching a non-child is a no-op."""
        if child in self.children:
            self.children.remove(child)
            child.parent = None

    @property
    def document(self) -> Document | None:
        """The document at the root of the tree, if attached to one."""
        node: Element | None = self
        while node is not None:
            if node.is_document:
                return node  # type: ignore[return-value]
            node = node.parent
        return None

    def ancestors(self) -> Iterator[Element]:
        """Yield the parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator[Element]:
        """Yield every descendant depth-first, in drawing order."""
        for child in self.children:
            yield child
            yield from child.descendants()

    def is_ancestor_of(self, other: Element) -> bool:
        return any(node is self for node in other.ancestors())

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def output_width(self) -> int:
        """Columns this element occupies when drawn."""
        return self.width

    @property
    def output_height(self) -> int:
        return self.height

    def contains(self, x: int, y: int) -> bool:
        """Whether the screen cell ``(x, y)`` falls inside this element."""
        return (
            self.x <= x < self.x + self.output_width
            and self.y <= y < self.y + self.output_height
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> list[str]:
        """
        Render this element's own rows (not its children's).

        Returns
        -------
        list[str]
            Styled rows, drawn from ``(x, y)`` downward.
        """
        return []

    def draw(self) -> None:
        """Ask the owning document to repaint.  No-op when detached."""
        if self.destroyed:
            return
        self._dirty = False
        document = self.document
        if document is not None:
            document.redraw()

    def invalidate(self) -> None:
        """Mark the element as needing a re-render."""
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        if self._visible != value:
            self._visible = value
            self._dirty = True

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def destroy(self, is_sub_destroy: bool = False) -> None:
        """
        Destroy the element and its subtree.

        ``is_sub_destroy`` is set when a parent is tearing down its
        children; those skip detaching and repainting since the parent
        handles both.  Destroying twice is a no-op.
        """
        if self.destroyed:
            return

        for child in list(self.children):
            child.destroy(True)

        document = None if is_sub_destroy else self.document
        if document is not None and document is not self:
            document.release(self)

        self.destroyed = True
        self.remove_all_listeners()

        if not is_sub_destroy and self.parent is not None:
            self.parent.detach(self)
            if document is not None and document is not self:
                document.redraw()

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} x={self.x} y={self.y} "
            f"w={self.output_width} h={self.output_height}>"
        )
