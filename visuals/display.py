"""
visuals/display.py

Scalar-to-display helpers for the renderer side of the pipeline.

APIs:
- normalize_to_uint8(values) / normalize_to_float(values): min-max stretch with a 1e-10 guard
- apply_log_scale(values): log10(1 + v)
- apply_color_map(gray, name='gray'): uint8 gray levels -> (..., 3) uint8 via a matplotlib colormap
- spectrum_display(values, width, height, shift=True, log=True): flat spectrum -> (H, W) float in 0..1
"""

from typing import Optional

import matplotlib
import numpy as np

from fourier_core.config import RANGE_EPSILON


def normalize_to_float(values: np.ndarray) -> np.ndarray:
    """Min-max normalize to 0..1. A spread below RANGE_EPSILON uses a denominator of 1.0."""
    a = np.asarray(values, dtype=np.float64)
    if a.size == 0:
        return a.copy()
    vmin = float(np.min(a))
    spread = float(np.max(a)) - vmin
    if spread < RANGE_EPSILON:
        spread = 1.0
    return (a - vmin) / spread


def normalize_to_uint8(values: np.ndarray) -> np.ndarray:
    scaled = np.clip(normalize_to_float(values) * 255.0, 0.0, 255.0)
    return scaled.astype(np.uint8)


def apply_log_scale(values: np.ndarray) -> np.ndarray:
    """log10(1 + v); order-preserving for non-negative magnitudes."""
    return np.log10(1.0 + np.asarray(values, dtype=np.float64))


def apply_color_map(gray: np.ndarray, name: str = "gray") -> np.ndarray:
    """
    Map uint8 gray levels through a registered matplotlib colormap.
    Output has one trailing RGB axis of uint8.
    """
    try:
        cmap = matplotlib.colormaps[name]
    except KeyError:
        raise ValueError(f"Unknown colormap '{name}'.") from None
    levels = np.asarray(gray, dtype=np.float64) / 255.0
    rgba = cmap(levels)
    return np.rint(rgba[..., :3] * 255.0).astype(np.uint8)


def spectrum_display(
    values: np.ndarray,
    width: int,
    height: int,
    shift: bool = True,
    log: bool = True,
    colormap: Optional[str] = None,
) -> np.ndarray:
    """
    Turn a flat row-major spectrum (e.g. FourierVisualizer.magnitude_spectrum())
    into a display-ready (H, W) array in 0..1, DC centred when shift=True.
    With a colormap name, returns (H, W, 3) uint8 instead.
    """
    a = np.asarray(values, dtype=np.float64)
    if a.size != int(width) * int(height):
        raise ValueError(f"Spectrum has {a.size} values, expected {width}x{height}.")
    grid = a.reshape(int(height), int(width))
    if shift:
        grid = np.fft.fftshift(grid)
    if log:
        grid = apply_log_scale(grid)
    norm = normalize_to_float(grid)
    if colormap is not None:
        return apply_color_map(np.clip(norm * 255.0, 0, 255).astype(np.uint8), colormap)
    return norm
