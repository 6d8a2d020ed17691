from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import PathContractError


class Operator(str, Enum):
    MOVE_TO = "MoveTo"
    LINE_TO = "LineTo"
    CUBE_TO = "CubeTo"

    def __str__(self) -> str:
        return self.value

    @property
    def arity(self) -> int:
        return 6 if self is Operator.CUBE_TO else 2


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float

    op = Operator.MOVE_TO

    @property
    def args(self) -> tuple[float, ...]:
        return (self.x, self.y)

    def points(self) -> list[tuple[float, float]]:
        return [(self.x, self.y)]


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float

    op = Operator.LINE_TO

    @property
    def args(self) -> tuple[float, ...]:
        return (self.x, self.y)

    def points(self) -> list[tuple[float, float]]:
        return [(self.x, self.y)]


@dataclass(frozen=True)
class CubeTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float

    op = Operator.CUBE_TO

    @property
    def args(self) -> tuple[float, ...]:
        return (self.x1, self.y1, self.x2, self.y2, self.x3, self.y3)

    def points(self) -> list[tuple[float, float]]:
        return [(self.x1, self.y1), (self.x2, self.y2), (self.x3, self.y3)]


Segment = MoveTo | LineTo | CubeTo

_SEGMENT_TYPES: dict[Operator, type] = {
    Operator.MOVE_TO: MoveTo,
    Operator.LINE_TO: LineTo,
    Operator.CUBE_TO: CubeTo,
}


def make_segment(op: Operator, *args: float) -> Segment:
    """Build the segment variant for ``op``, rejecting any other argument count."""
    if not isinstance(op, Operator):
        raise PathContractError(f"unsupported operator {op!r}")
    if len(args) != op.arity:
        raise PathContractError(f"invalid arg count {len(args)} for {op}")
    return _SEGMENT_TYPES[op](*(float(a) for a in args))


@dataclass
class Entry:
    """One recorded shape and the axis-aligned box around every point it was given.

    Curve control points are merged into the box too, so the box can be larger
    than the painted curve but never smaller.
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    path: list[Segment] = field(default_factory=list)
    closed: bool = False

    @classmethod
    def starting_at(cls, x: float, y: float) -> "Entry":
        return cls(min_x=x, max_x=x, min_y=y, max_y=y)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def append(self, segment: Segment) -> None:
        for x, y in segment.points():
            if x < self.min_x:
                self.min_x = x
            elif x > self.max_x:
                self.max_x = x
            if y < self.min_y:
                self.min_y = y
            elif y > self.max_y:
                self.max_y = y
        self.path.append(segment)

    def footprint(self, x: float = 0.0, y: float = 0.0) -> tuple[int, int, int, int]:
        """Return ``(ix, iy, wide, high)`` of the replay buffer placed at offset ``(x, y)``.

        The buffer keeps a one pixel margin on every side of the box.
        """
        # Truncating the offset matches the recorded layout; fractional box origins land up to a pixel toward zero.
        wide = int(2 + self.max_x - self.min_x)
        high = int(2 + self.max_y - self.min_y)
        return (int(x + self.min_x - 1), int(y + self.min_y - 1), wide, high)

    def to_local(self, px: float, py: float) -> tuple[float, float]:
        return (1 + px - self.min_x, 1 + py - self.min_y)
