"""Non-key terminal events."""

from dataclasses import dataclass

from .geometry import Geometry


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal was resized to ``columns`` x ``rows``."""
    columns: int
    rows: int

    @property
    def size(self) -> Geometry:
        return Geometry.from_terminal(self.columns, self.rows)


@dataclass(frozen=True)
class MouseEvent:
    """A mouse report. The pager never enables these."""
    name: str
    raw: str = ""


class EndOfEvents:
    """Marker for a terminal event stream that can produce nothing more."""

    def __repr__(self):
        return "EndOfEvents()"


END_OF_EVENTS = EndOfEvents()
