from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
import logging
from typing import Callable

import numpy as np

from .canvas import RGBA
from .errors import PathContractError
from .scan import ScanConverter
from .segments import CubeTo, Entry, LineTo, MoveTo, Operator, Segment, make_segment

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Immediate:
    converter: ScanConverter


@dataclass(frozen=True)
class Buffered:
    entries: list[Entry] = field(default_factory=list)


RecorderMode = Immediate | Buffered


class RecorderKind(str, Enum):
    IMMEDIATE = "immediate"
    BUFFERED = "buffered"


class PathRecorder:
    """Scriber that either forwards commands to a scan converter or records them per shape.

    Immediate recorders draw straight into their converter. Buffered recorders
    collect one ``Entry`` per shape (``move_to`` through ``close_path``) and
    composite every closed entry later with ``render``, each through its own
    converter sized to that entry's box. The mode is fixed for the life of the
    recorder.
    """

    def __init__(self, converter: ScanConverter | None = None) -> None:
        self._mode: RecorderMode = Immediate(converter) if converter is not None else Buffered()

    @classmethod
    def immediate(cls, width: int, height: int) -> "PathRecorder":
        return cls(ScanConverter(width, height))

    @classmethod
    def buffered(cls) -> "PathRecorder":
        return cls()

    @property
    def mode(self) -> RecorderKind:
        if isinstance(self._mode, Immediate):
            return RecorderKind.IMMEDIATE
        return RecorderKind.BUFFERED

    @property
    def is_immediate(self) -> bool:
        return isinstance(self._mode, Immediate)

    @property
    def entries(self) -> tuple[Entry, ...]:
        if isinstance(self._mode, Buffered):
            return tuple(replace(entry, path=list(entry.path)) for entry in self._mode.entries)
        return ()

    @property
    def converter(self) -> ScanConverter:
        if isinstance(self._mode, Immediate):
            return self._mode.converter
        raise PathContractError("buffered recorder has no scan converter")

    def reset(self, width: int, height: int) -> None:
        mode = self._mode
        if isinstance(mode, Immediate):
            mode.converter.reset(width, height)
        else:
            mode.entries.clear()

    def move_to(self, x: float, y: float) -> None:
        mode = self._mode
        if isinstance(mode, Immediate):
            mode.converter.move_to(x, y)
            return
        # A move_to into an entry that is still open extends that entry.
        entry = _open_entry(mode.entries)
        if entry is None:
            entry = Entry.starting_at(float(x), float(y))
            mode.entries.append(entry)
        entry.append(make_segment(Operator.MOVE_TO, x, y))

    def line_to(self, x: float, y: float) -> None:
        mode = self._mode
        if isinstance(mode, Immediate):
            mode.converter.line_to(x, y)
            return
        self._require_open(mode, Operator.LINE_TO).append(make_segment(Operator.LINE_TO, x, y))

    def cube_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        mode = self._mode
        if isinstance(mode, Immediate):
            mode.converter.cube_to(x1, y1, x2, y2, x3, y3)
            return
        segment = make_segment(Operator.CUBE_TO, x1, y1, x2, y2, x3, y3)
        self._require_open(mode, Operator.CUBE_TO).append(segment)

    def close_path(self) -> None:
        mode = self._mode
        if isinstance(mode, Immediate):
            mode.converter.close_path()
            return
        entry = _open_entry(mode.entries)
        if entry is None:
            raise PathContractError("close_path without an open entry")
        entry.closed = True

    def render(self, dst: np.ndarray, x: float, y: float, color: RGBA) -> None:
        """Composite every closed entry onto ``dst`` at offset ``(x, y)`` in recorded order."""
        mode = self._mode
        if not isinstance(mode, Buffered):
            raise PathContractError("immediate recorder has no recorded entries to render")
        for index, entry in enumerate(mode.entries):
            if not entry.closed:
                LOGGER.debug("skipping unclosed entry %d (%d segments)", index, len(entry.path))
                continue
            if not entry.path:
                continue
            _replay_entry(dst, entry, x, y, color)

    @staticmethod
    def _require_open(mode: Buffered, op: Operator) -> Entry:
        entry = _open_entry(mode.entries)
        if entry is None:
            raise PathContractError(f"{op} without an open entry")
        return entry


def draw_at(dst: np.ndarray, converter: ScanConverter, x: float, y: float, color: RGBA) -> None:
    """Composite ``converter`` so that its pixel ``(x, y)`` lands on ``dst`` pixel ``(0, 0)``."""
    converter.draw(dst, -int(x), -int(y), color)


def _open_entry(entries: list[Entry]) -> Entry | None:
    if entries and not entries[-1].closed:
        return entries[-1]
    return None


def _replay_entry(dst: np.ndarray, entry: Entry, x: float, y: float, color: RGBA) -> None:
    ix, iy, wide, high = entry.footprint(x, y)
    LOGGER.debug("replaying %d segments into %dx%d at (%d, %d)", len(entry.path), wide, high, ix, iy)
    local = ScanConverter(wide, high)
    to_local = entry.to_local
    for segment in entry.path:
        _replay_segment(local, segment, to_local)
    local.close_path()
    local.draw(dst, ix, iy, color)


def _replay_segment(
    local: ScanConverter,
    segment: Segment,
    to_local: Callable[[float, float], tuple[float, float]],
) -> None:
    op = getattr(segment, "op", None)
    if not isinstance(op, Operator):
        raise PathContractError(f"unsupported segment {segment!r}")
    args = segment.args
    if len(args) != op.arity:
        raise PathContractError(f"invalid arg count {len(args)} for {op}")
    if isinstance(segment, MoveTo):
        local.move_to(*to_local(segment.x, segment.y))
    elif isinstance(segment, LineTo):
        local.line_to(*to_local(segment.x, segment.y))
    elif isinstance(segment, CubeTo):
        x1, y1 = to_local(segment.x1, segment.y1)
        x2, y2 = to_local(segment.x2, segment.y2)
        x3, y3 = to_local(segment.x3, segment.y3)
        local.cube_to(x1, y1, x2, y2, x3, y3)
    else:
        raise PathContractError(f"unsupported Op={op}")
