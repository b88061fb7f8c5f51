"""Canvas assembly and final output scaling."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import numpy as np

from recreate.compositor import resize_exact
from recreate.grid import GridCell, GridPlan

logger = logging.getLogger(__name__)


def new_canvas(plan: GridPlan) -> np.ndarray:
    """Empty (height, width, 4) uint8 canvas for *plan*."""
    return np.zeros((plan.height, plan.width, 4), dtype=np.uint8)


def place_cell(canvas: np.ndarray, cell: GridCell, tile: np.ndarray) -> None:
    """Write *tile* into the cell's region of *canvas*.

    Cells never overlap, so concurrent calls for different cells are safe.
    """
    rows, cols = cell.slices
    if tile.shape[:2] != (cell.height, cell.width):
        msg = (
            f"Tile {tile.shape[1]}x{tile.shape[0]} does not fit cell "
            f"({cell.row}, {cell.col}) of {cell.width}x{cell.height}"
        )
        raise ValueError(msg)
    canvas[rows, cols] = tile


def scale_canvas(canvas: np.ndarray, scale: float) -> np.ndarray:
    """Multiply both canvas dimensions by *scale*.

    ``scale == 0`` disables scaling. New sizes are rounded up.
    """
    if scale == 0.0:
        return canvas
    h, w = canvas.shape[:2]
    # Drop float noise first: 100 * 1.1 == 110.00000000000001.
    new_w = max(1, math.ceil(round(w * scale, 9)))
    new_h = max(1, math.ceil(round(h * scale, 9)))
    logger.debug("Scaling mosaic %dx%d -> %dx%d", w, h, new_w, new_h)
    return resize_exact(canvas, new_w, new_h)


def assemble(
    plan: GridPlan,
    cells: Iterable[tuple[GridCell, np.ndarray]],
    scale: float = 0.0,
) -> np.ndarray:
    """Place every ``(cell, tile)`` pair on a fresh canvas, then scale it.

    Pairs may arrive in any order.
    """
    canvas = new_canvas(plan)
    for cell, tile in cells:
        place_cell(canvas, cell, tile)
    return scale_canvas(canvas, scale)
