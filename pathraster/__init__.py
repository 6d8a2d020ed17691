from pathraster.canvas import RGBA, composite_mask, new_canvas, parse_color, save_png
from pathraster.errors import PathContractError
from pathraster.recorder import Buffered, Immediate, PathRecorder, RecorderKind, draw_at
from pathraster.scan import ScanConverter
from pathraster.scriber import Scriber
from pathraster.segments import CubeTo, Entry, LineTo, MoveTo, Operator, Segment, make_segment
from pathraster.shapes import PARTIAL, line_to, point_at, polyline, square_at

__all__ = [
    "Buffered",
    "CubeTo",
    "Entry",
    "Immediate",
    "LineTo",
    "MoveTo",
    "Operator",
    "PARTIAL",
    "PathContractError",
    "PathRecorder",
    "RGBA",
    "RecorderKind",
    "ScanConverter",
    "Scriber",
    "Segment",
    "composite_mask",
    "draw_at",
    "line_to",
    "make_segment",
    "new_canvas",
    "parse_color",
    "point_at",
    "polyline",
    "save_png",
    "square_at",
]
