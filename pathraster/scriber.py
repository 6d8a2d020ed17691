from __future__ import annotations

from typing import Protocol


class Scriber(Protocol):
    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def cube_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        ...

    def close_path(self) -> None:
        ...
