"""Line-indexed documents displayed by a DocumentView."""

from abc import ABC, abstractmethod
from typing import Iterable


class Document(ABC):
    """An ordered sequence of text lines.

    Lines are addressed by their 0-based arrival index. Widths are measured
    in code points, which is also how the view slices columns.
    """

    @abstractmethod
    def __len__(self) -> int:
        """Number of lines in the document."""

    @property
    @abstractmethod
    def max_line_len(self) -> int:
        """Length of the longest line seen so far, in code points."""

    @abstractmethod
    def __getitem__(self, index: int) -> str:
        """Text of the line at ``index``."""


class StreamingDocument(Document):
    """A document that grows as lines arrive from the input stream.

    Lines are only ever appended; index ``i`` always refers to the
    ``i``-th line received.
    """

    def __init__(self):
        self._lines: list[str] = []
        self._max_line_len = 0

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def max_line_len(self) -> int:
        return self._max_line_len

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def push_line(self, text: str) -> int:
        """Append a line and return its index."""
        index = len(self._lines)
        self._max_line_len = max(self._max_line_len, len(text))
        self._lines.append(text)
        return index


class StaticDocument(Document):
    """A fixed document, such as the help screen."""

    def __init__(self, lines: Iterable[str]):
        self._lines = tuple(lines)
        self._max_line_len = max((len(line) for line in self._lines), default=0)

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def max_line_len(self) -> int:
        return self._max_line_len

    def __getitem__(self, index: int) -> str:
        return self._lines[index]
