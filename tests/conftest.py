"""Shared fixtures: a marker-emitting stand-in for blessed.Terminal."""

import collections
import contextlib
import io
import os
import re
import select

import pytest

from peruse.linesource import LineReader
from peruse.pager import Pager
from peruse.terminal import TerminalInterface


class StubTerm:
    """Stand-in for blessed.Terminal that renders capabilities as markers."""

    enter_fullscreen = '{ENTER_FULLSCREEN}'
    exit_fullscreen = '{EXIT_FULLSCREEN}'
    hide_cursor = '{HIDE_CURSOR}'
    normal_cursor = '{NORMAL_CURSOR}'
    home = '{HOME}'
    clear = '{CLEAR}'
    clear_eol = '{EOL}'
    reverse = '{REVERSE}'
    normal = '{NORMAL}'

    def __init__(self, width=80, height=24):
        self.width = width
        self.height = height
        self.keys = collections.deque()
        self.keyboard_eof = False
        self.raw_entered = 0
        self.raw_exited = 0

    def move_yx(self, y, x):
        return f'{{MOVE {y},{x}}}'

    @contextlib.contextmanager
    def raw(self):
        self.raw_entered += 1
        try:
            yield
        finally:
            self.raw_exited += 1

    def inkey(self, timeout=None):
        if self.keys:
            return self.keys.popleft()
        if self.keyboard_eof:
            raise EOFError
        return ''


_TOKEN = re.compile(r'(\{[A-Z_]+(?: \d+,\d+)?\})')
_MOVE = re.compile(r'\{MOVE (\d+),(\d+)\}')


def render(output, width=80, height=24):
    """Replay marker output onto a blank screen and return its rows."""
    rows = [''] * height
    y = x = 0
    for token in _TOKEN.split(output):
        if not token:
            continue
        move = _MOVE.fullmatch(token)
        if move:
            y, x = int(move.group(1)), int(move.group(2))
        elif token == '{CLEAR}':
            rows = [''] * height
        elif token == '{EOL}':
            rows[y] = rows[y][:x]
        elif _TOKEN.fullmatch(token):
            continue
        else:
            row = rows[y].ljust(x)
            rows[y] = row[:x] + token + row[x + len(token):]
            x += len(token)
    return rows


@pytest.fixture
def stub_term():
    return StubTerm()


@pytest.fixture
def terminal(stub_term):
    return TerminalInterface(terminal=stub_term, stream=io.StringIO())


@pytest.fixture
def screen(terminal):
    """Return a function giving the rows currently shown on the stub screen."""
    def _screen():
        return render(terminal.stream.getvalue(), terminal.term.width, terminal.term.height)
    return _screen


class InputPipe:
    """Write end of an os.pipe feeding a LineReader."""

    def __init__(self):
        self._read_fd, self._write_fd = os.pipe()
        self.reader = LineReader(self._read_fd)

    def write(self, data: bytes):
        os.write(self._write_fd, data)

    def close(self):
        if self._write_fd is not None:
            os.close(self._write_fd)
            self._write_fd = None

    def dispose(self):
        self.close()
        os.close(self._read_fd)


@pytest.fixture
def input_pipe():
    pipe = InputPipe()
    yield pipe
    pipe.dispose()


@pytest.fixture
def pager(input_pipe, terminal):
    p = Pager(input_pipe.reader, terminal=terminal)
    yield p
    p.close()


@pytest.fixture
def keyboard_pipe(terminal):
    """Point the terminal's keyboard descriptor at a pipe nobody writes to."""
    read_fd, write_fd = os.pipe()
    terminal.keyboard_fd = read_fd
    yield read_fd
    os.close(read_fd)
    os.close(write_fd)


def _idle_user_select(keyboard_fd, always_ready=False):
    """Build a select() replacement where keys arrive when the pager would idle.

    Real readiness is checked for every descriptor but the keyboard. The
    keyboard is reported ready whenever the call would otherwise block
    (or on every call when ``always_ready`` is set).
    """
    real_select = select.select

    def fake_select(readers, writers, errors, timeout=None):
        others = [fd for fd in readers if fd != keyboard_fd]
        ready, _, _ = real_select(others, [], [], 0)
        if always_ready or (not ready and timeout is None):
            ready = list(ready) + [keyboard_fd]
        return ready, [], []

    return fake_select


@pytest.fixture
def idle_user_select():
    return _idle_user_select
