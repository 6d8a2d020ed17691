from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image


RGBA = tuple[int, int, int, int]

NAMED_COLORS: dict[str, RGBA] = {
    "black": (0, 0, 0, 255),
    "white": (255, 255, 255, 255),
    "transparent": (0, 0, 0, 0),
}


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def composite_mask(dst: np.ndarray, mask: np.ndarray, x: int, y: int, color: RGBA) -> None:
    """Blend ``color`` over ``dst`` through an 8-bit coverage mask placed at ``(x, y)``.

    Pixels with zero coverage are left bit-identical.
    """
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.uint32)
    alpha = (cov * color[3] + 127) // 255
    if not np.any(alpha):
        return
    inv = 255 - alpha

    patch = dst[y0:y1, x0:x1]
    src_rgb = np.asarray(color[:3], dtype=np.uint32).reshape(1, 1, 3)
    dst_rgb = patch[:, :, :3].astype(np.uint32)
    patch[:, :, :3] = ((src_rgb * alpha[:, :, None] + dst_rgb * inv[:, :, None] + 127) // 255).astype(np.uint8)
    dst_alpha = patch[:, :, 3].astype(np.uint32)
    patch[:, :, 3] = (alpha + (dst_alpha * inv + 127) // 255).astype(np.uint8)


def parse_color(value: str) -> RGBA:
    text = value.strip().lower()
    if text in NAMED_COLORS:
        return NAMED_COLORS[text]
    if not text.startswith("#"):
        raise ValueError(f"unsupported color {value!r}")
    hex_value = text[1:]
    try:
        if len(hex_value) == 3:
            r, g, b = (int(c * 2, 16) for c in hex_value)
            return (r, g, b, 255)
        if len(hex_value) == 6:
            return (int(hex_value[0:2], 16), int(hex_value[2:4], 16), int(hex_value[4:6], 16), 255)
        if len(hex_value) == 8:
            return (
                int(hex_value[0:2], 16),
                int(hex_value[2:4], 16),
                int(hex_value[4:6], 16),
                int(hex_value[6:8], 16),
            )
    except ValueError as exc:
        raise ValueError(f"unsupported color {value!r}") from exc
    raise ValueError(f"unsupported color {value!r}")


def save_png(canvas: np.ndarray, path: Path) -> None:
    Image.fromarray(np.ascontiguousarray(canvas, dtype=np.uint8)).save(path)
