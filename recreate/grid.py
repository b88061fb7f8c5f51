"""Grid planning: split the reference image into uniformly sized cells.

Rows and columns are snapped to divisors of the reference dimensions so every
cell has the same integer size and the cells tile the image exactly.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from recreate.errors import InvalidGridError


@dataclass(frozen=True)
class GridCell:
    """One rectangular cell, shared by the reference and the output canvas."""

    row: int
    col: int
    x: int
    y: int
    width: int
    height: int
    index: int  # row-major linear index

    @property
    def slices(self) -> tuple[slice, slice]:
        """``(rows, cols)`` slices selecting this cell in an (H, W, C) array."""
        return slice(self.y, self.y + self.height), slice(self.x, self.x + self.width)


@dataclass(frozen=True)
class GridPlan:
    """Normalised reference size and the exact grid laid over it."""

    width: int
    height: int
    rows: int
    cols: int
    cell_width: int
    cell_height: int

    def __len__(self) -> int:
        return self.rows * self.cols

    def cells(self) -> Iterator[GridCell]:
        """Yield every cell in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield GridCell(
                    row=row,
                    col=col,
                    x=col * self.cell_width,
                    y=row * self.cell_height,
                    width=self.cell_width,
                    height=self.cell_height,
                    index=row * self.cols + col,
                )


def _divisors(n: int) -> list[int]:
    small, large = [], []
    for d in range(1, math.isqrt(n) + 1):
        if n % d == 0:
            small.append(d)
            if d != n // d:
                large.append(n // d)
    return small + large[::-1]


def nearest_divisor(n: int, requested: int) -> int:
    """Divisor of *n* closest to *requested*; ties resolve to the smaller one.

    Requests larger than *n* clamp to *n*.
    """
    if n <= 0 or requested <= 0:
        msg = f"nearest_divisor needs positive arguments, got n={n}, requested={requested}"
        raise InvalidGridError(msg)
    if requested >= n:
        return n
    if n % requested == 0:
        return requested
    return min(_divisors(n), key=lambda d: (abs(d - requested), d))


def validate_grid_request(rows: int, cols: int) -> None:
    """Reject zero or negative row / column counts."""
    if rows <= 0 or cols <= 0:
        msg = f"Grid needs at least one row and one column, got rows={rows}, cols={cols}"
        raise InvalidGridError(msg)


def plan_grid(
    ref_width: int,
    ref_height: int,
    rows: int,
    cols: int,
    resize_to_square: bool = True,
) -> GridPlan:
    """Compute the effective grid for a reference image.

    Args:
        ref_width:        Reference width in pixels.
        ref_height:       Reference height in pixels.
        rows:             Requested number of rows.
        cols:             Requested number of columns.
        resize_to_square: Treat the reference as ``ref_width x ref_width``.

    Returns:
        A :class:`GridPlan` where ``width == cols * cell_width`` and
        ``height == rows * cell_height`` hold exactly.
    """
    validate_grid_request(rows, cols)
    if ref_width <= 0 or ref_height <= 0:
        msg = f"Reference image has no area: {ref_width}x{ref_height}"
        raise InvalidGridError(msg)

    width, height = ref_width, ref_height
    if resize_to_square:
        height = width

    eff_cols = nearest_divisor(width, cols)
    eff_rows = nearest_divisor(height, rows)

    return GridPlan(
        width=width,
        height=height,
        rows=eff_rows,
        cols=eff_cols,
        cell_width=width // eff_cols,
        cell_height=height // eff_rows,
    )
