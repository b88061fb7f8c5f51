"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from recreate.errors import InvalidConfigError

DOMINANT_METHODS = ("mean", "kmeans")


@dataclass(frozen=True)
class MosaicConfig:
    """All tuneable parameters for a mosaic run.

    Attributes:
        directory:        Folder holding the candidate images.
        reference:        Image to be recreated.
        rows:             Requested grid rows (adjusted to divide the height).
        cols:             Requested grid columns (adjusted to divide the width).
        alpha:            Blend weight toward the cell's dominant colour, in [0, 1].
        resize_to_square: Square the reference using its width before gridding.
        scale:            Output size multiplier; 0.0 disables scaling.
        verbose:          Debug logging. Has no effect on the output.
        workers:          Size of the worker pool.
        dominant:         "mean" (channel average) or "kmeans" (CIELAB clustering).
        output:           Destination file (None = ``<reference dir>/output.png``).
    """

    # Inputs
    directory: Path = field(default_factory=lambda: Path("images"))
    reference: Path = field(default_factory=lambda: Path("images/reference.png"))

    # Grid
    rows: int = 70
    cols: int = 70
    resize_to_square: bool = True

    # Compositing
    alpha: float = 0.7
    dominant: str = "mean"

    # Output
    scale: float = 0.0
    output: Path | None = None

    # Runtime
    workers: int = 20
    verbose: bool = False

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif", ".gif"}
    )

    def __post_init__(self) -> None:
        if not 0.0 <= self.alpha <= 1.0:
            msg = f"alpha must be within [0, 1], got {self.alpha}"
            raise InvalidConfigError(msg)
        if not math.isfinite(self.scale) or self.scale < 0.0:
            msg = f"scale must be >= 0 (0 disables scaling), got {self.scale}"
            raise InvalidConfigError(msg)
        if self.workers < 1:
            msg = f"workers must be >= 1, got {self.workers}"
            raise InvalidConfigError(msg)
        if self.dominant not in DOMINANT_METHODS:
            available = ", ".join(DOMINANT_METHODS)
            msg = f"Unknown dominant colour method '{self.dominant}'. Available: {available}"
            raise InvalidConfigError(msg)

    @property
    def output_path(self) -> Path:
        """Where the finished mosaic is written."""
        if self.output is not None:
            return Path(self.output)
        return Path(self.reference).parent / "output.png"
