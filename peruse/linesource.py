"""Non-blocking, line-at-a-time reader for the document input stream."""

import codecs
import collections
import logging
import os
from typing import Optional

from .constants import PagerConstants
from .errors import InputStreamError

logger = logging.getLogger(__name__)


class LineReader:
    """Split a UTF-8 byte stream into lines without blocking.

    The pager selects on :meth:`fileno`; when it is readable, :meth:`fill`
    performs exactly one ``os.read`` and queues every complete line found.
    Lines come out of :meth:`next_line` one at a time with the ``\\n`` (and
    a preceding ``\\r``) removed. A final line without a newline is delivered
    once the stream ends.
    """

    def __init__(self, fd: int, chunk_size: int = PagerConstants.READ_CHUNK_SIZE):
        self._fd = fd
        self._chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder(PagerConstants.INPUT_ENCODING)()
        self._partial: list[str] = []  # fragments of the unfinished line
        self._lines: 'collections.deque[str]' = collections.deque()
        self._line_count = 0
        self.eof = False

    @classmethod
    def from_file(cls, file, **kwargs) -> 'LineReader':
        """Wrap an open file object; the reader reads its descriptor directly."""
        return cls(file.fileno(), **kwargs)

    def fileno(self) -> int:
        return self._fd

    @property
    def has_pending(self) -> bool:
        """Whether complete lines are waiting to be taken."""
        return bool(self._lines)

    @property
    def wants_read(self) -> bool:
        """Whether the descriptor should be watched for more input."""
        return not self.eof and not self._lines

    def fill(self) -> int:
        """Read one chunk from the stream and queue the complete lines in it.

        Returns the number of lines queued. Raises InputStreamError if the
        read fails or the bytes are not valid UTF-8.
        """
        try:
            data = os.read(self._fd, self._chunk_size)
        except OSError as e:
            raise InputStreamError(f"Could not read input: {e}") from e

        before = len(self._lines)
        if not data:
            self.eof = True
            self._feed(b"", final=True)
            if self._partial:
                self._push("".join(self._partial))
                self._partial = []
            logger.debug(f"Input ended after {self._line_count} lines")
        else:
            self._feed(data, final=False)
        return len(self._lines) - before

    def next_line(self) -> Optional[str]:
        """Take the oldest queued line, or None if nothing is queued."""
        if not self._lines:
            return None
        return self._lines.popleft()

    def _feed(self, data: bytes, final: bool) -> None:
        try:
            text = self._decoder.decode(data, final=final)
        except UnicodeDecodeError as e:
            raise InputStreamError(
                f"Input is not valid {PagerConstants.INPUT_ENCODING} (line {self._line_count + 1}): {e}"
            ) from e
        if not text:
            return
        pieces = text.split("\n")
        if len(pieces) == 1:
            self._partial.append(text)
            return
        self._partial.append(pieces[0])
        self._push("".join(self._partial))
        for piece in pieces[1:-1]:
            self._push(piece)
        self._partial = [pieces[-1]] if pieces[-1] else []

    def _push(self, line: str) -> None:
        if line.endswith("\r"):
            line = line[:-1]
        self._lines.append(line)
        self._line_count += 1
