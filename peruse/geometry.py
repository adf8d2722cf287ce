"""Terminal cell geometry."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Geometry:
    """A size or position in terminal cells.

    ``x`` counts columns and ``y`` counts rows. Both are never negative.
    """
    x: int = 0
    y: int = 0

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Geometry must not be negative: ({self.x}, {self.y})")

    @classmethod
    def from_terminal(cls, width: int, height: int) -> Geometry:
        """Build from a raw terminal size query (columns, rows)."""
        return cls(x=max(0, int(width)), y=max(0, int(height)))

    def shrink(self, dx: int, dy: int) -> Geometry:
        """Return this size reduced by (dx, dy), saturating at zero."""
        return Geometry(x=max(0, self.x - dx), y=max(0, self.y - dy))
