"""
Recreate
========

Rebuild a reference image as a photomosaic. The reference is cut into a
grid; every cell is filled with one of the candidate images, stretched to
the cell and tinted toward the cell's dominant colour.
"""

__version__ = "1.0.0"

from recreate.assembler import assemble, place_cell, scale_canvas
from recreate.color_utils import dominant_color, kmeans_color, mean_color
from recreate.compositor import blend, composite, resize_exact, select_candidate
from recreate.config import MosaicConfig
from recreate.errors import (
    DecodeError,
    EmptyCandidateSetError,
    EmptyRegionError,
    InvalidConfigError,
    InvalidGridError,
    MosaicError,
    ResizeError,
)
from recreate.grid import GridCell, GridPlan, nearest_divisor, plan_grid
from recreate.image_io import load_candidates, load_image, save_image
from recreate.pipeline import build_mosaic, run
from recreate.scheduler import WorkScheduler

__all__ = [
    "DecodeError",
    "EmptyCandidateSetError",
    "EmptyRegionError",
    "GridCell",
    "GridPlan",
    "InvalidConfigError",
    "InvalidGridError",
    "MosaicConfig",
    "MosaicError",
    "ResizeError",
    "WorkScheduler",
    "assemble",
    "blend",
    "build_mosaic",
    "composite",
    "dominant_color",
    "kmeans_color",
    "load_candidates",
    "load_image",
    "mean_color",
    "nearest_divisor",
    "place_cell",
    "plan_grid",
    "resize_exact",
    "run",
    "save_image",
    "scale_canvas",
    "select_candidate",
]
