"""Terminal interface using Blessed for display and keyboard input."""

import logging
import sys
from typing import Optional

import blessed

from .events import END_OF_EVENTS
from .keyboard import parse_keystroke

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Output is queued and written in one batch by :meth:`flush`, so a full
    redraw reaches the terminal as a single write.
    """

    # Keyboard input is always read from fd 0; when the document arrives on
    # a pipe, the CLI puts the controlling tty there first.
    KEYBOARD_FD = 0

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal(stream=stream)
        self.stream = stream or sys.stdout
        self.keyboard_fd = self.KEYBOARD_FD
        self.is_fullscreen = False
        self._raw_mode = None
        self._pending: list[str] = []

    def setup(self):
        """Enter raw mode and the alternate screen, and hide the cursor."""
        raw_mode = self.term.raw()
        raw_mode.__enter__()
        self._raw_mode = raw_mode
        self.is_fullscreen = True
        self.queue(self.term.enter_fullscreen, self.term.hide_cursor, self.term.home, self.term.clear)
        self.flush()

    def cleanup(self):
        """Leave the alternate screen, show the cursor and leave raw mode.

        Each step is attempted even when an earlier one fails, so the
        terminal ends up as usable as possible after a fatal error.
        """
        self._pending.clear()
        if self.is_fullscreen:
            try:
                print(self.term.exit_fullscreen + self.term.normal_cursor, end='', file=self.stream, flush=True)
            except Exception as e:
                # Justification: raw mode must still be left below; a write
                # failure here is already fatal for the session.
                logger.warning(f"Could not leave the alternate screen: {e}")
            finally:
                self.is_fullscreen = False
        if self._raw_mode is not None:
            try:
                self._raw_mode.__exit__(None, None, None)
            except Exception as e:
                # Justification: teardown should never mask the original error.
                logger.warning(f"Could not leave raw mode: {e}")
            finally:
                self._raw_mode = None

    def queue(self, *parts: str) -> None:
        """Queue output to be written by the next flush()."""
        self._pending.extend(parts)

    def flush(self) -> None:
        """Write all queued output as one batch."""
        if not self._pending:
            return
        data = ''.join(self._pending)
        self._pending.clear()
        print(data, end='', file=self.stream, flush=True)

    def clear_screen(self) -> None:
        """Queue a clear of the entire screen."""
        self.queue(self.term.home, self.term.clear)

    def queue_row(self, y: int, text: str) -> None:
        """Queue ``text`` at the start of row y, clearing the rest of the row."""
        self.queue(self.term.move_yx(y, 0), text, self.term.clear_eol)

    def queue_status_bar(self, y: int, width: int, text: str) -> None:
        """Queue the reverse-video status bar on row y."""
        self.queue(self.term.move_yx(y, 0), self.term.reverse, text[:width], self.term.normal)

    def read_events(self) -> list:
        """Return every terminal event that can be read without blocking.

        Keystrokes are parsed into KeyEvent or MouseEvent. Once the keyboard
        has reached end-of-file, END_OF_EVENTS is the last entry.
        """
        events = []
        while True:
            try:
                key = self.term.inkey(timeout=0)
            except EOFError:
                events.append(END_OF_EVENTS)
                break
            if not key:
                break
            events.append(parse_keystroke(key))
        return events

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, status line included."""
        return self.term.height
