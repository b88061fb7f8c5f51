"""Dominant-colour extraction for reference regions."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from scipy.cluster.vq import kmeans2
from skimage.color import lab2rgb, rgb2lab

from recreate.errors import EmptyRegionError

Pixel = tuple[int, int, int, int]

KMEANS_CLUSTERS = 8
KMEANS_ITERATIONS = 20


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert flat (N, 3) uint8 RGB → (N, 3) float64 CIELAB."""
    return rgb2lab(rgb.astype(np.float64).reshape(1, -1, 3) / 255.0).reshape(-1, 3)


def lab_to_rgb(lab: np.ndarray) -> np.ndarray:
    """Convert flat (N, 3) CIELAB → (N, 3) uint8 RGB (rounded, clamped)."""
    rgb = lab2rgb(lab.astype(np.float64).reshape(1, -1, 3)).reshape(-1, 3)
    return np.clip(np.rint(rgb * 255.0), 0, 255).astype(np.uint8)


def _as_rgba(region: np.ndarray) -> np.ndarray:
    if region.ndim != 3 or region.shape[0] == 0 or region.shape[1] == 0:
        msg = f"Cannot take the colour of an empty region (shape {region.shape})"
        raise EmptyRegionError(msg)
    if region.shape[2] == 3:
        alpha = np.full(region.shape[:2] + (1,), 255, dtype=region.dtype)
        region = np.concatenate([region, alpha], axis=2)
    return region


def mean_color(region: np.ndarray) -> Pixel:
    """Channel-wise arithmetic mean of an (H, W, 3|4) region.

    Alpha is averaged like any other channel.
    """
    region = _as_rgba(region)
    mean = region.reshape(-1, 4).astype(np.float64).mean(axis=0)
    r, g, b, a = np.clip(np.rint(mean), 0, 255).astype(np.uint8).tolist()
    return r, g, b, a


def kmeans_color(region: np.ndarray, clusters: int = KMEANS_CLUSTERS) -> Pixel:
    """Centre of the most populated CIELAB cluster of an (H, W, 3|4) region.

    Initial centroids are spread over the region's distinct colours ordered by
    lightness, so the result is deterministic. The returned alpha is 255.
    """
    region = _as_rgba(region)
    pixels = region[..., :3].reshape(-1, 3)
    unique = np.unique(pixels, axis=0)
    if len(unique) == 1:
        r, g, b = unique[0].tolist()
        return r, g, b, 255

    lab = rgb_to_lab(pixels)
    unique_lab = rgb_to_lab(unique)
    unique_lab = unique_lab[np.argsort(unique_lab[:, 0], kind="stable")]

    k = min(clusters, len(unique_lab))
    init = unique_lab[np.linspace(0, len(unique_lab) - 1, k).astype(int)]
    centroids, labels = kmeans2(
        lab, init, iter=KMEANS_ITERATIONS, minit="matrix", missing="warn",
    )

    counts = np.bincount(labels, minlength=k)
    r, g, b = lab_to_rgb(centroids[int(np.argmax(counts))])[0].tolist()
    return r, g, b, 255


DOMINANT_COLOR_METHODS: dict[str, Callable[[np.ndarray], Pixel]] = {
    "mean": mean_color,
    "kmeans": kmeans_color,
}


def dominant_color(region: np.ndarray, method: str = "mean") -> Pixel:
    """Representative colour of a reference region.

    Args:
        region: (H, W, 3|4) uint8 slice of the reference image.
        method: ``"mean"`` or ``"kmeans"``.

    Returns:
        ``(r, g, b, a)`` ints in [0, 255].
    """
    fn = DOMINANT_COLOR_METHODS.get(method)
    if fn is None:
        available = ", ".join(sorted(DOMINANT_COLOR_METHODS))
        msg = f"Unknown dominant colour method '{method}'. Available: {available}"
        raise ValueError(msg)
    return fn(region)
