"""End-to-end mosaic generation."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path

import numpy as np
from PIL import Image

from recreate.assembler import new_canvas, place_cell, scale_canvas
from recreate.color_utils import dominant_color
from recreate.compositor import composite, select_candidate
from recreate.config import MosaicConfig
from recreate.errors import EmptyCandidateSetError, EmptyRegionError
from recreate.grid import GridCell, GridPlan, plan_grid, validate_grid_request
from recreate.image_io import load_candidates, load_image, output_format, save_image
from recreate.scheduler import WorkScheduler

logger = logging.getLogger(__name__)

# Reference squaring uses a bicubic (Catmull-Rom) filter.
SQUARE_RESAMPLE = Image.BICUBIC


def normalize_reference(reference: np.ndarray, plan: GridPlan) -> np.ndarray:
    """Stretch *reference* to the plan's dimensions when they differ."""
    h, w = reference.shape[:2]
    if (w, h) == (plan.width, plan.height):
        return reference
    logger.debug("Resizing reference %dx%d -> %dx%d", w, h, plan.width, plan.height)
    img = Image.fromarray(np.ascontiguousarray(reference))
    return np.asarray(img.resize((plan.width, plan.height), SQUARE_RESAMPLE)).copy()


def build_mosaic(
    reference: np.ndarray,
    candidates: Sequence[np.ndarray],
    config: MosaicConfig,
    scheduler: WorkScheduler | None = None,
) -> np.ndarray:
    """Compose the mosaic for an already decoded reference and candidate set.

    Args:
        reference:  (H, W, 4) uint8 reference image.
        candidates: Decoded candidate images, shared read-only by all workers.
        config:     Grid, blend and scaling parameters.
        scheduler:  Worker pool (defaults to ``config.workers`` threads).

    Returns:
        (H', W', 4) uint8 canvas, already scaled.
    """
    validate_grid_request(config.rows, config.cols)
    if not candidates:
        msg = "No candidate images to build the mosaic from"
        raise EmptyCandidateSetError(msg)

    h, w = reference.shape[:2]
    plan = plan_grid(w, h, config.rows, config.cols, config.resize_to_square)
    if (plan.rows, plan.cols) != (config.rows, config.cols):
        logger.info(
            "Adjusted grid %dx%d -> %dx%d to divide the %dx%d reference",
            config.cols, config.rows, plan.cols, plan.rows, plan.width, plan.height,
        )
    logger.info(
        "Grid: %d cols x %d rows, cells of %dx%d px",
        plan.cols, plan.rows, plan.cell_width, plan.cell_height,
    )

    reference = normalize_reference(reference, plan)
    canvas = new_canvas(plan)

    def _fill(cell: GridCell) -> None:
        region = reference[cell.slices]
        if region.size == 0:
            msg = f"Cell ({cell.row}, {cell.col}) covers no pixels"
            raise EmptyRegionError(msg)
        color = dominant_color(region, config.dominant)
        tile = composite(
            select_candidate(cell.index, candidates),
            cell.width,
            cell.height,
            color,
            config.alpha,
        )
        place_cell(canvas, cell, tile)

    scheduler = scheduler or WorkScheduler(config.workers)
    t0 = time.perf_counter()
    scheduler.map(_fill, plan.cells())
    logger.info("Composited %d cells  (%.1f s)", len(plan), time.perf_counter() - t0)

    return scale_canvas(canvas, config.scale)


def run(config: MosaicConfig, scheduler: WorkScheduler | None = None) -> Path:
    """Load inputs, build the mosaic and write it to ``config.output_path``.

    The grid request and output format are validated before any image is
    decoded, and nothing is written unless every cell was composited.
    """
    validate_grid_request(config.rows, config.cols)
    output_format(config.output_path)
    scheduler = scheduler or WorkScheduler(config.workers)

    reference_path = Path(config.reference)
    reference = load_image(reference_path)
    logger.info(
        "Reference %s: %dx%d", reference_path.name, reference.shape[1], reference.shape[0],
    )
    # Degenerate reference sizes fail here, before candidates are decoded.
    plan_grid(
        reference.shape[1], reference.shape[0],
        config.rows, config.cols, config.resize_to_square,
    )

    candidates = load_candidates(
        config.directory,
        exclude=reference_path.name,
        scheduler=scheduler,
        extensions=config.SUPPORTED_EXTENSIONS,
    )
    if not candidates:
        msg = f"No candidate images found in {config.directory}"
        raise EmptyCandidateSetError(msg)

    mosaic = build_mosaic(reference, candidates, config, scheduler)
    out = save_image(mosaic, config.output_path)
    logger.info("Mosaic %dx%d saved to %s", mosaic.shape[1], mosaic.shape[0], out)
    return out
