from __future__ import annotations

import math
from typing import Iterable

from .scriber import Scriber


# Control point offset for approximating a quarter circle of radius 1 with one cubic Bezier.
PARTIAL = 0.552284749831


def point_at(s: Scriber, x: float, y: float, width: float) -> None:
    """Draw a filled circle of diameter ``width`` centered at ``(x, y)`` as four cubic quadrants."""
    d = 0.5 * width
    p = PARTIAL * d
    s.move_to(x + d, y)
    s.cube_to(x + d, y + p, x + p, y + d, x, y + d)
    s.cube_to(x - p, y + d, x - d, y + p, x - d, y)
    s.cube_to(x - d, y - p, x - p, y - d, x, y - d)
    s.cube_to(x + p, y - d, x + d, y - p, x + d, y)
    s.close_path()


def line_to(s: Scriber, capped: bool, ox: float, oy: float, nx: float, ny: float, width: float) -> None:
    """Draw a segment from ``(ox, oy)`` to ``(nx, ny)`` with perpendicular ``width``.

    With ``capped`` both ends get a rounded cap of radius ``width / 2``.
    """
    if ox == nx and oy == ny:
        return
    dx, dy = nx - ox, ny - oy
    scale = 0.5 * width / math.sqrt(dx * dx + dy * dy)
    dx, dy = dx * scale, dy * scale
    s.move_to(ox - dy, oy + dx)
    if capped:
        s.cube_to(
            ox - dy - PARTIAL * dx, oy + dx - PARTIAL * dy,
            ox - dx - PARTIAL * dy, oy - dy + PARTIAL * dx,
            ox - dx, oy - dy,
        )
        s.cube_to(
            ox - dx + PARTIAL * dy, oy - dy - PARTIAL * dx,
            ox + dy - PARTIAL * dx, oy - dx - PARTIAL * dy,
            ox + dy, oy - dx,
        )
    else:
        s.line_to(ox + dy, oy - dx)
    s.line_to(nx + dy, ny - dx)
    if capped:
        s.cube_to(
            nx + dy + PARTIAL * dx, ny - dx + PARTIAL * dy,
            nx + dx + PARTIAL * dy, ny + dy - PARTIAL * dx,
            nx + dx, ny + dy,
        )
        s.cube_to(
            nx + dx - PARTIAL * dy, ny + dy + PARTIAL * dx,
            nx - dy + PARTIAL * dx, ny + dx + PARTIAL * dy,
            nx - dy, ny + dx,
        )
    else:
        s.line_to(nx - dy, ny + dx)
    s.close_path()


def square_at(s: Scriber, x: float, y: float, width: float) -> None:
    if width <= 0:
        return
    d = 0.5 * width
    s.move_to(x - d, y - d)
    s.line_to(x + d, y - d)
    s.line_to(x + d, y + d)
    s.line_to(x - d, y + d)
    s.close_path()


def polyline(s: Scriber, capped: bool, points: Iterable[tuple[float, float]], width: float) -> None:
    """Draw ``line_to`` between each consecutive pair of ``points``, one closed shape per pair."""
    pts = list(points)
    for (ox, oy), (nx, ny) in zip(pts, pts[1:]):
        line_to(s, capped, ox, oy, nx, ny, width)
