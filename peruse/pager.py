"""Main pager controller: merges terminal events with the input stream."""

import collections
import logging
import os
import select
import signal
from typing import Optional

from .commands import CommandRegistry
from .constants import PagerConstants
from .document import StaticDocument, StreamingDocument
from .errors import UnsupportedEventError
from .events import EndOfEvents, MouseEvent, ResizeEvent
from .geometry import Geometry
from .keyboard import KeyEvent
from .linesource import LineReader
from .terminal import TerminalInterface
from .view import DocumentView

logger = logging.getLogger(__name__)


def pane_size(terminal_size: Geometry) -> Geometry:
    """Size of the document pane for a terminal of the given size."""
    return terminal_size.shrink(PagerConstants.PANE_MARGIN_X, PagerConstants.PANE_MARGIN_Y)


class Pager:
    """Pager application controller.

    Owns the primary view over the streamed document and, while the help
    screen is shown, an overlay view that takes over drawing and key
    dispatch. Everything runs on one thread: ``run`` waits on the keyboard,
    the resize pipe and the input stream in a single ``select`` and handles
    one event at a time.
    """

    def __init__(self, lines: LineReader, terminal: Optional[TerminalInterface] = None):
        """Initialize the pager components."""
        self.terminal = terminal or TerminalInterface()
        self.lines = lines
        self.size = Geometry.from_terminal(self.terminal.width, self.terminal.height)
        self.document_view = DocumentView(StreamingDocument(), pane_size(self.size), self.terminal)
        self.help_view: Optional[DocumentView] = None
        self.should_exit = False
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self._pending_events: collections.deque = collections.deque()
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    @property
    def help_visible(self) -> bool:
        return self.help_view is not None

    @property
    def active_view(self) -> DocumentView:
        """The view that is drawn and receives navigation keys."""
        if self.help_view is not None:
            return self.help_view
        return self.document_view

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, PagerConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main pager loop until quit, keyboard EOF or a fatal error.

        The terminal is restored on every exit path.
        """
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            self.terminal.setup()
            logger.debug(f"Starting with terminal size {self.size.x}x{self.size.y}")
            self.redraw_screen()

            while not self.should_exit:
                self._wait_for_input()
                self._dispatch_pending()
        finally:
            # Restore original signal handler
            signal.signal(signal.SIGWINCH, original_winch_handler)
            self.close()
            self.terminal.cleanup()

    def close(self):
        """Close the resize pipe. Safe to call more than once."""
        for fd in (self._resize_pipe_r, self._resize_pipe_w):
            if fd is not None:
                os.close(fd)
        self._resize_pipe_r = self._resize_pipe_w = None

    def _wait_for_input(self):
        """Wait until the terminal or the input stream has something for us.

        Does not block while events or lines are already pending, so a busy
        source never holds back the other one.
        """
        readers = [self.terminal.keyboard_fd, self._resize_pipe_r]
        watch_input = self.lines.wants_read
        if watch_input:
            readers.append(self.lines.fileno())
        timeout = 0 if (self._pending_events or self.lines.has_pending) else None

        ready, _, _ = select.select(readers, [], [], timeout)

        if self._resize_pipe_r in ready:
            # Clear the pipe; several signals collapse into one resize
            os.read(self._resize_pipe_r, 1024)
            self._pending_events.append(ResizeEvent(self.terminal.width, self.terminal.height))
        if self.terminal.keyboard_fd in ready:
            self._pending_events.extend(self.terminal.read_events())
        if watch_input and self.lines.fileno() in ready:
            self.lines.fill()

    def _dispatch_pending(self):
        """Handle at most one terminal event and then at most one input line."""
        if self._pending_events:
            self.handle_event(self._pending_events.popleft())
            if self.should_exit:
                return
        if self.lines.has_pending:
            self.handle_line(self.lines.next_line())

    def handle_event(self, event):
        """Handle one terminal event.

        Raises:
            UnsupportedEventError: for mouse events, which are never enabled
        """
        if isinstance(event, EndOfEvents):
            logger.debug("Terminal event stream ended")
            self.should_exit = True
        elif isinstance(event, MouseEvent):
            raise UnsupportedEventError(f"mouse input is not supported (got {event.name})")
        elif isinstance(event, ResizeEvent):
            self.handle_resize(event.size)
        else:
            self._handle_key_event(event)

    def _handle_key_event(self, key_event: KeyEvent):
        """Dispatch a key; keys without a binding are ignored."""
        self.command_registry.execute(self, key_event)

    def handle_line(self, line: str):
        """Store a line from the input stream, drawing it if it is on screen.

        Lines arriving while help is shown are only stored; hiding help
        redraws the whole view.
        """
        index = self.document_view.push_line(line)
        if index is None or self.help_visible:
            return
        if self.document_view.queue_line_if_visible(index):
            self.terminal.flush()

    def handle_resize(self, new_size: Geometry):
        """Resize every view and repaint the screen."""
        logger.debug(f"Resized to {new_size.x}x{new_size.y}")
        self.size = new_size
        pane = pane_size(new_size)
        self.document_view.resize(pane)
        if self.help_view is not None:
            self.help_view.resize(pane)
        self.redraw_screen()

    def show_help(self):
        """Show the help screen over the document."""
        if self.help_view is not None:
            return
        logger.debug("Showing help")
        self.help_view = DocumentView(
            StaticDocument(PagerConstants.HELP_LINES), pane_size(self.size), self.terminal
        )
        self.redraw_screen()

    def hide_help(self):
        """Drop the help screen and return to the document."""
        logger.debug("Hiding help")
        self.help_view = None
        self.redraw_screen()

    def quit(self):
        self.should_exit = True

    def redraw_screen(self):
        """Clear the screen, then draw the status bar and the active view."""
        self.terminal.clear_screen()
        self.draw_status_bar()
        self.active_view.redraw()

    def draw_status_bar(self):
        """Queue the status bar on the bottom row."""
        text = PagerConstants.HELP_STATUS_TEXT if self.help_visible else PagerConstants.STATUS_TEXT
        self.terminal.queue_status_bar(max(0, self.size.y - 1), self.size.x, text)
