"""Scrollable, pannable view over a document, and its render pipeline."""

from dataclasses import replace
from typing import Optional, TYPE_CHECKING

from .document import Document
from .geometry import Geometry

if TYPE_CHECKING:
    from .terminal import TerminalInterface


def clip_line(text: str, start: int, width: int) -> str:
    """Return the columns [start, start + width) of a line.

    Columns are code points, so multi-byte characters are never split.
    A line shorter than ``start`` yields an empty string.
    """
    if start >= len(text):
        return ""
    return text[start:start + width]


class DocumentView:
    """A window of ``size`` cells onto a document, scrolled to ``offset``.

    ``offset.y`` is the first line shown and ``offset.x`` the first column.
    After every navigation operation the offset stays within
    ``0 <= offset.y <= max(0, len(document) - size.y)`` and
    ``0 <= offset.x <= max(0, document.max_line_len - size.x)``.

    Navigation methods redraw the whole window when they move, and do
    nothing at all when they cannot.
    """

    def __init__(self, document: Document, size: Geometry, terminal: 'TerminalInterface'):
        self.document = document
        self.size = size
        self.offset = Geometry()
        self.terminal = terminal

    def push_line(self, text: str) -> Optional[int]:
        """Store a new line; return its index if it lands in the visible window.

        The window is the pane rows, not bounded by the document length,
        so a line filling an empty row at the bottom counts as visible.
        """
        index = self.document.push_line(text)
        if index in self.visible_pane_rows():
            return index
        return None

    def resize(self, new_size: Geometry) -> None:
        """Take a new pane size. The caller redraws.

        The offset is left alone, so the first shown line stays put;
        `visible_lines` stops at the end of the document.
        """
        self.size = new_size

    def pan_left(self) -> None:
        """Pan left by one column if we are not at the first column."""
        if self.offset.x > 0:
            self.offset = replace(self.offset, x=self.offset.x - 1)
            self.redraw()

    def pan_right(self) -> None:
        """Pan right by one column if there is at least one more column off-screen."""
        if self.document.max_line_len > self.offset.x + self.size.x:
            self.offset = replace(self.offset, x=self.offset.x + 1)
            self.redraw()

    def scroll_down(self) -> None:
        """Scroll down by one line if there is at least one more line off-screen."""
        if len(self.document) > self.offset.y + self.size.y:
            self.offset = replace(self.offset, y=self.offset.y + 1)
            self.redraw()

    def scroll_up(self) -> None:
        """Scroll up by one line if we are not at the top."""
        if self.offset.y > 0:
            self.offset = replace(self.offset, y=self.offset.y - 1)
            self.redraw()

    def prev_page(self) -> None:
        """Scroll up by up to half the pane height."""
        page_size = min(self.size.y // 2, self.offset.y)
        if self.offset.y > 0:
            self.offset = replace(self.offset, y=self.offset.y - page_size)
            self.redraw()

    def next_page(self) -> None:
        """Scroll down by half the pane height, stopping at the last full screen."""
        page_size = self.size.y // 2
        line_count = len(self.document)

        if line_count >= self.size.y + self.offset.y + page_size:
            self.offset = replace(self.offset, y=self.offset.y + page_size)
            self.redraw()
        elif line_count > self.size.y + self.offset.y:
            # Less than half a page left: show the final screen
            self.offset = replace(self.offset, y=line_count - self.size.y)
            self.redraw()

    def queue_line(self, index: int) -> None:
        """Queue document line ``index`` on its row of the pane.

        The row is cleared past the text, so a short line never leaves
        characters from whatever was drawn there before.
        """
        text = clip_line(self.document[index], self.offset.x, self.size.x)
        self.terminal.queue_row(index - self.offset.y, text)

    def queue_line_if_visible(self, index: int) -> bool:
        """Queue line ``index`` only if it falls in the visible window."""
        if index not in self.visible_lines():
            return False
        self.queue_line(index)
        return True

    def redraw(self) -> None:
        """Draw every visible line and flush the output in one batch."""
        for index in self.visible_lines():
            self.queue_line(index)
        self.terminal.flush()

    def visible_lines(self) -> range:
        """The document lines currently shown."""
        return range(self.offset.y, min(self.offset.y + self.size.y, len(self.document)))

    def visible_pane_rows(self) -> range:
        """The line indices the pane could show, unbounded by the document length."""
        return range(self.offset.y, self.offset.y + self.size.y)
