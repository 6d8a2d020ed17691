from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

import numpy as np

from .canvas import RGBA, new_canvas, parse_color, save_png
from .recorder import PathRecorder, draw_at
from .scriber import Scriber
from .shapes import point_at, polyline, square_at

LOGGER = logging.getLogger(__name__)


@dataclass
class TraceConfig:
    dest: Path | None = None
    width: int = 200
    height: int = 100
    background: str = "#ffffff"
    foreground: str = "#000000"
    buffered: bool = False

    def validate(self) -> None:
        if self.dest is None or not str(self.dest):
            raise ValueError("dest must name the output png file")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        parse_color(self.background)
        parse_color(self.foreground)


@dataclass(frozen=True)
class TraceLayout:
    """Pixel positions of a two pad trace scaled to a ``width`` x ``height`` board."""

    unit: float
    pad1: tuple[float, float]
    bend1: tuple[float, float]
    bend2: tuple[float, float]
    pad2: tuple[float, float]

    @classmethod
    def for_board(cls, width: int, height: int) -> "TraceLayout":
        unit = height * 0.2
        cx, cy = width * 0.5, height * 0.5

        def conv(a: float, b: float) -> tuple[float, float]:
            return (a * unit + cx, cy - b * unit)

        return cls(unit=unit, pad1=conv(-4, -1), bend1=conv(-1, -1), bend2=conv(1, 1), pad2=conv(4, 1))


def draw_copper(s: Scriber, layout: TraceLayout) -> None:
    square_at(s, layout.pad1[0], layout.pad1[1], layout.unit)
    polyline(s, True, [layout.pad1, layout.bend1, layout.bend2, layout.pad2], layout.unit / 3)
    point_at(s, layout.pad2[0], layout.pad2[1], layout.unit)


def draw_holes(s: Scriber, layout: TraceLayout) -> None:
    point_at(s, layout.pad1[0], layout.pad1[1], layout.unit * 0.6)
    point_at(s, layout.pad2[0], layout.pad2[1], layout.unit * 0.6)


def render_trace(config: TraceConfig) -> np.ndarray:
    """Render the two pad trace scene and return the RGBA canvas."""
    background = parse_color(config.background)
    foreground = parse_color(config.foreground)
    w, h = config.width, config.height
    im = new_canvas(w, h, color=background)
    layout = TraceLayout.for_board(w, h)
    if config.buffered:
        _render_buffered(im, layout, foreground, background)
    else:
        _render_immediate(im, layout, foreground, background)
    return im


def write_trace(config: TraceConfig) -> Path:
    config.validate()
    im = render_trace(config)
    dest = Path(config.dest)
    save_png(im, dest)
    LOGGER.info("wrote %dx%d trace to %s", config.width, config.height, dest)
    return dest


def _render_immediate(im: np.ndarray, layout: TraceLayout, foreground: RGBA, background: RGBA) -> None:
    h, w = im.shape[:2]
    r = PathRecorder.immediate(w, h)
    draw_copper(r, layout)
    draw_at(im, r.converter, 0, 0, foreground)
    r.reset(w, h)
    draw_holes(r, layout)
    draw_at(im, r.converter, 0, 0, background)


def _render_buffered(im: np.ndarray, layout: TraceLayout, foreground: RGBA, background: RGBA) -> None:
    copper = PathRecorder.buffered()
    draw_copper(copper, layout)
    holes = PathRecorder.buffered()
    draw_holes(holes, layout)
    LOGGER.debug("recorded %d copper and %d hole entries", len(copper.entries), len(holes.entries))
    copper.render(im, 0, 0, foreground)
    holes.render(im, 0, 0, background)
