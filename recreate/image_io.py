"""Image loading and saving."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from recreate.config import MosaicConfig
from recreate.errors import DecodeError, InvalidConfigError
from recreate.scheduler import WorkScheduler

logger = logging.getLogger(__name__)


def load_image(path: str | Path) -> np.ndarray:
    """Decode an image file.

    Returns:
        (H, W, 4) uint8 RGBA array.
    """
    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGBA"), dtype=np.uint8)
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        msg = f"Couldn't open image in specified path: {path} ({exc})"
        raise DecodeError(msg) from exc


def collect_candidates(
    directory: str | Path,
    exclude: str | None = None,
    extensions: frozenset[str] = MosaicConfig.SUPPORTED_EXTENSIONS,
) -> list[Path]:
    """Sorted image files in *directory*, skipping the file named *exclude*."""
    folder = Path(directory)
    if not folder.is_dir():
        msg = f"Couldn't read directory in specified path: {folder}"
        raise DecodeError(msg)
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions and f.name != exclude
    )


def load_candidates(
    directory: str | Path,
    exclude: str | None = None,
    scheduler: WorkScheduler | None = None,
    extensions: frozenset[str] = MosaicConfig.SUPPORTED_EXTENSIONS,
) -> list[np.ndarray]:
    """Decode every candidate image in *directory* in parallel.

    The list order follows the sorted file names, so a given directory always
    produces the same mosaic.
    """
    paths = collect_candidates(directory, exclude, extensions)
    logger.info("Pulling %d candidate image(s) from %s", len(paths), directory)
    scheduler = scheduler or WorkScheduler()
    return scheduler.map(load_image, paths)


def output_format(path: str | Path) -> str:
    """Pillow format name for *path*'s suffix."""
    suffix = Path(path).suffix.lower()
    fmt = Image.registered_extensions().get(suffix)
    if fmt is None or fmt not in Image.SAVE:
        msg = f"Unsupported output format: {suffix or '(none)'}"
        raise InvalidConfigError(msg)
    return fmt


def save_image(canvas: np.ndarray, path: str | Path) -> Path:
    """Write *canvas* to *path* atomically.

    The image is encoded to a temporary sibling file and renamed into place,
    so a failed write never leaves a partial mosaic at *path*.
    """
    path = Path(path)
    fmt = output_format(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    img = Image.fromarray(np.ascontiguousarray(canvas))
    if fmt == "JPEG":
        img = img.convert("RGB")

    tmp = path.with_name(f".{path.name}.partial")
    try:
        img.save(tmp, format=fmt)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return path
