"""Per-cell compositing: pick a candidate, stretch it, tint it."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from PIL import Image

from recreate.color_utils import Pixel
from recreate.errors import EmptyCandidateSetError, ResizeError

RESAMPLE = Image.LANCZOS


def select_candidate(index: int, candidates: Sequence[np.ndarray]) -> np.ndarray:
    """Round-robin candidate for the cell with row-major *index*."""
    if not candidates:
        msg = "No candidate images to build the mosaic from"
        raise EmptyCandidateSetError(msg)
    return candidates[index % len(candidates)]


def resize_exact(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize an RGBA array to exactly *width* x *height* (aspect not kept)."""
    if width <= 0 or height <= 0:
        msg = f"Cannot resize to {width}x{height}"
        raise ResizeError(msg)
    h, w = image.shape[:2]
    if (w, h) == (width, height):
        return image.copy()
    try:
        img = Image.fromarray(np.ascontiguousarray(image))
        resized = img.resize((width, height), RESAMPLE)
    except (ValueError, OSError, MemoryError) as exc:
        msg = f"Resizing {w}x{h} image to {width}x{height} failed: {exc}"
        raise ResizeError(msg) from exc
    return np.asarray(resized, dtype=np.uint8).copy()


def blend(image: np.ndarray, color: Pixel, alpha: float) -> np.ndarray:
    """Linear RGB blend of every pixel toward *color*.

    ``out = rint(pixel * (1 - alpha) + color * alpha)`` per RGB channel,
    clamped to [0, 255]. The output is fully opaque.
    """
    rgb = image[..., :3].astype(np.float64)
    target = np.asarray(color[:3], dtype=np.float64)
    mixed = rgb * (1.0 - alpha) + target * alpha

    out = np.empty(image.shape[:2] + (4,), dtype=np.uint8)
    out[..., :3] = np.clip(np.rint(mixed), 0, 255).astype(np.uint8)
    out[..., 3] = 255
    return out


def composite(
    candidate: np.ndarray,
    cell_width: int,
    cell_height: int,
    dominant_color: Pixel,
    alpha: float,
) -> np.ndarray:
    """Resize *candidate* to the cell and tint it toward *dominant_color*.

    Returns:
        (cell_height, cell_width, 4) uint8 array. The candidate is not modified.
    """
    return blend(resize_exact(candidate, cell_width, cell_height), dominant_color, alpha)
