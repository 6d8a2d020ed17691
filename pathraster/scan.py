from __future__ import annotations

import math

import numpy as np

from .canvas import RGBA, composite_mask


DEFAULT_FLATNESS = 0.1
MAX_SPLIT_DEPTH = 16

# de Casteljau split of a cubic at t=0.5: rows 0-3 are the left half, rows 4-7 the right half.
_CUBIC_SPLIT = np.array(
    [
        [1.0, 0.0, 0.0, 0.0],
        [0.5, 0.5, 0.0, 0.0],
        [0.25, 0.5, 0.25, 0.0],
        [0.125, 0.375, 0.375, 0.125],
        [0.125, 0.375, 0.375, 0.125],
        [0.0, 0.25, 0.5, 0.25],
        [0.0, 0.0, 0.5, 0.5],
        [0.0, 0.0, 0.0, 1.0],
    ],
    dtype=np.float64,
)


class ScanConverter:
    """Anti-aliased scan converter over a fixed ``width`` x ``height`` pixel grid.

    Path commands deposit signed area coverage into an accumulation buffer as they
    arrive (the font-rs approach); ``coverage`` integrates each row with the
    non-zero winding rule. Pixel ``(0, 0)`` spans ``[0, 1) x [0, 1)`` in command
    coordinates, and anything outside the grid is clipped rather than rejected.
    """

    def __init__(self, width: int, height: int, flatness: float = DEFAULT_FLATNESS) -> None:
        if flatness <= 0:
            raise ValueError("flatness must be > 0")
        self._flatness = flatness
        self.reset(width, height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def reset(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self._width = int(width)
        self._height = int(height)
        # Column `width` collects the remainder of every row so cumsum stops at the grid edge.
        self._acc = np.zeros((self._height, self._width + 1), dtype=np.float64)
        self._pen = (0.0, 0.0)
        self._first = (0.0, 0.0)

    def move_to(self, x: float, y: float) -> None:
        self._pen = (float(x), float(y))
        self._first = self._pen

    def line_to(self, x: float, y: float) -> None:
        target = (float(x), float(y))
        self._accumulate_line(self._pen, target)
        self._pen = target

    def cube_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        curve = np.array([self._pen, (x1, y1), (x2, y2), (x3, y3)], dtype=np.float64)
        for (ax, ay), (bx, by) in _flatten_cubic(curve, self._flatness):
            self._accumulate_line((ax, ay), (bx, by))
        self._pen = (float(x3), float(y3))

    def close_path(self) -> None:
        if self._pen != self._first:
            self._accumulate_line(self._pen, self._first)
        self._pen = self._first

    def coverage(self) -> np.ndarray:
        cov = np.cumsum(self._acc, axis=1)[:, : self._width]
        cov = np.clip(np.fabs(cov), 0.0, 1.0)
        cov[cov < 1e-6] = 0.0
        return cov.astype(np.float32)

    def mask(self) -> np.ndarray:
        return np.rint(self.coverage() * 255.0).astype(np.uint8)

    def draw(self, dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
        """Composite the covered pixels onto ``dst`` with pixel ``(0, 0)`` at ``(x, y)``."""
        composite_mask(dst, self.mask(), int(x), int(y), color)

    def _accumulate_line(self, p0: tuple[float, float], p1: tuple[float, float]) -> None:
        x0, y0 = p0
        x1, y1 = p1
        if y0 == y1:
            return
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            return
        direction = 1.0
        if y0 > y1:
            direction = -1.0
            x0, y0, x1, y1 = x1, y1, x0, y0
        dxdy = (x1 - x0) / (y1 - y0)
        x = x0
        row_start = max(0, math.floor(y0))
        if y0 < row_start:
            x += (row_start - y0) * dxdy
        acc = self._acc
        w = self._width

        def clamp(i: int) -> int:
            return 0 if i < 0 else (w if i > w else i)

        for row in range(row_start, min(self._height, math.ceil(y1))):
            dy = min(row + 1.0, y1) - max(float(row), y0)
            x_next = x + dxdy * dy
            d = dy * direction
            lo, hi = (x, x_next) if x < x_next else (x_next, x)
            lo_floor = math.floor(lo)
            lo_i = int(lo_floor)
            hi_ceil = math.ceil(hi)
            hi_i = int(hi_ceil)
            line = acc[row]
            if hi_i <= lo_i + 1:
                # the edge stays inside one pixel column on this row
                xmf = 0.5 * (x + x_next) - lo_floor
                line[clamp(lo_i)] += d - d * xmf
                line[clamp(lo_i + 1)] += d * xmf
            else:
                s = 1.0 / (hi - lo)
                lo_f = lo - lo_floor
                a0 = 0.5 * s * (1.0 - lo_f) * (1.0 - lo_f)
                hi_f = hi - hi_ceil + 1.0
                am = 0.5 * s * hi_f * hi_f
                line[clamp(lo_i)] += d * a0
                if hi_i == lo_i + 2:
                    line[clamp(lo_i + 1)] += d * (1.0 - a0 - am)
                else:
                    a1 = s * (1.5 - lo_f)
                    line[clamp(lo_i + 1)] += d * (a1 - a0)
                    for xi in range(lo_i + 2, hi_i - 1):
                        line[clamp(xi)] += d * s
                    a2 = a1 + (hi_i - lo_i - 3) * s
                    line[clamp(hi_i - 1)] += d * (1.0 - a2 - am)
                line[clamp(hi_i)] += d * am
            x = x_next


def _flatten_cubic(curve: np.ndarray, flatness: float) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    """Split ``curve`` (4x2 control points) until every piece is within ``flatness`` of its chord.

    Uses the bound f^2 <= (max(ux^2, vx^2) + max(uy^2, vy^2)) / 16 with
    u = 3*b1 - 2*b0 - b3 and v = 3*b2 - b0 - 2*b3.
    """
    if not np.all(np.isfinite(curve)):
        return []
    tolerance = 16.0 * flatness * flatness
    batch = curve.reshape(1, 4, 2)
    chords: list[np.ndarray] = []
    for _ in range(MAX_SPLIT_DEPTH):
        u = 3.0 * batch[:, 1] - 2.0 * batch[:, 0] - batch[:, 3]
        v = 3.0 * batch[:, 2] - batch[:, 0] - 2.0 * batch[:, 3]
        metric = np.maximum(u * u, v * v).sum(axis=1)
        flat = metric <= tolerance
        chords.append(batch[flat][:, [0, 3], :])
        batch = batch[~flat]
        if batch.shape[0] == 0:
            break
        batch = np.einsum("ij,njk->nik", _CUBIC_SPLIT, batch).reshape(-1, 4, 2)
    else:
        chords.append(batch[:, [0, 3], :])
    lines = np.concatenate(chords)
    return [((a[0], a[1]), (b[0], b[1])) for a, b in lines.tolist()]
