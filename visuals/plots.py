"""
visuals/plots.py

Rendering utilities for spectra, visualization-line overlays and reconstruction progress.

APIs:
- plot_magnitude_spectrum(freq, out_path=None, is_shifted=False, log=True)
- plot_phase_spectrum(freq, out_path=None, is_shifted=False)
- plot_visualization_lines(lines, canvas_width, canvas_height, background=None, out_path=None)
- plot_reconstruction_progress(original, reconstructions, out_path=None)
- fig_to_array(fig) -> np.ndarray (H,W,3) uint8

Notes:
- This module uses matplotlib and Pillow. It never feeds back into fourier_core state.
- If out_path is None, functions return the matplotlib Figure object or a normalized
  array (caller can save or display).
"""

from typing import Mapping, Optional, Sequence, Union
import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from PIL import Image

from fourier_core.complex_image import ComplexImage
from fourier_core.fft_engine import magnitude_spectrum
from fourier_core.rgb_image import RGBComplexImage
from fourier_core.visualizer import VisualizationLine
from .display import normalize_to_float


# Helper to ensure outdir exists
def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def _save_raw_array_image(out_path: Optional[str], arr: np.ndarray, log_scale: bool = False):
    """
    Save a numeric array as a raw image (PNG). No Matplotlib involved.
    - arr can be 2D (scalar) or 3D (H,W,3). Values are min-max mapped to uint8.
    - log_scale: apply log1p before normalization (useful for magnitude spectrum).
    """
    if out_path is None:
        return None

    _ensure_outdir(out_path)

    a = np.array(arr, copy=True)
    if np.iscomplexobj(a):
        a = np.abs(a)
    if log_scale:
        a = np.log1p(np.abs(a))

    norm = normalize_to_float(a)
    img_arr = (np.clip(norm * 255.0, 0, 255)).astype(np.uint8)
    if img_arr.ndim == 3 and img_arr.shape[2] != 3:
        img_arr = np.squeeze(img_arr)
    Image.fromarray(img_arr).save(out_path)
    return out_path


def fig_to_array(fig: plt.Figure) -> np.ndarray:
    """
    Convert a Matplotlib figure to an HxWx3 uint8 RGB numpy array.
    """
    fig.canvas.draw()
    rgba = np.asarray(fig.canvas.buffer_rgba())
    return rgba[..., :3].copy()


def _save_or_return(fig: plt.Figure, out_path: Optional[str]):
    if out_path is not None:
        _ensure_outdir(out_path)
        fig.savefig(out_path, bbox_inches="tight")
        plt.close(fig)
        return out_path
    else:
        return fig


def _as_display_array(image: Union[ComplexImage, RGBComplexImage, np.ndarray]) -> np.ndarray:
    """
    Shared 0..1 display scale for every panel: real parts clipped to 0..1,
    integer arrays read as 0..255. No per-panel stretch, so flat images keep their level.
    """
    if isinstance(image, RGBComplexImage):
        arr = np.stack([ch.data.real for ch in image.channels], axis=-1)
    elif isinstance(image, ComplexImage):
        arr = image.data.real
    else:
        arr = np.asarray(image)
        if np.issubdtype(arr.dtype, np.integer):
            arr = arr / 255.0
        elif np.iscomplexobj(arr):
            arr = arr.real
    return np.clip(np.asarray(arr, dtype=np.float64), 0.0, 1.0)


def plot_magnitude_spectrum(
    freq: Union[ComplexImage, np.ndarray],
    out_path: Optional[str] = None,
    is_shifted: bool = False,
    log: bool = True,
) -> Union[str, np.ndarray]:
    """
    Save raw magnitude spectrum image (no Matplotlib when out_path given).
    If out_path is None -> return the prepared 2D array in 0..1, DC centred.
    """
    values = freq.data if isinstance(freq, ComplexImage) else np.asarray(freq)
    F_disp = values if is_shifted else np.fft.fftshift(values)

    if out_path is not None:
        return _save_raw_array_image(out_path, np.abs(F_disp), log_scale=bool(log))
    return normalize_to_float(magnitude_spectrum(F_disp, log=log))


def plot_phase_spectrum(
    freq: Union[ComplexImage, np.ndarray],
    out_path: Optional[str] = None,
    is_shifted: bool = False,
) -> Union[str, np.ndarray]:
    """
    Phase is mapped from -pi..pi -> 0..1 before saving.
    If out_path is None -> return the mapped 2D array.
    """
    values = freq.data if isinstance(freq, ComplexImage) else np.asarray(freq)
    F_disp = values if is_shifted else np.fft.fftshift(values)
    phase_norm = (np.angle(F_disp) + np.pi) / (2.0 * np.pi)

    if out_path is not None:
        return _save_raw_array_image(out_path, phase_norm, log_scale=False)
    return phase_norm


def plot_visualization_lines(
    lines: Sequence[VisualizationLine],
    canvas_width: float,
    canvas_height: float,
    background: Optional[np.ndarray] = None,
    out_path: Optional[str] = None,
    cmap: str = "viridis",
):
    """
    Draw visualization lines from the canvas centre, coloured by log magnitude.
    background (optional) is stretched over the full canvas.
    """
    fig, ax = plt.subplots(figsize=(6, 6 * canvas_height / canvas_width))
    if background is not None:
        ax.imshow(
            background,
            cmap="gray",
            extent=(0, canvas_width, canvas_height, 0),
            interpolation="nearest",
        )
    if lines:
        segments = [((ln.x1, ln.y1), (ln.x2, ln.y2)) for ln in lines]
        strength = np.log1p([ln.magnitude for ln in lines])
        collection = LineCollection(segments, cmap=cmap, linewidths=1.0)
        collection.set_array(strength)
        ax.add_collection(collection)
        fig.colorbar(collection, ax=ax, label="log(1 + |F|)")
    ax.set_xlim(0, canvas_width)
    ax.set_ylim(canvas_height, 0)
    ax.set_aspect("equal")
    ax.set_title(f"Active frequencies ({len(lines)})")
    return _save_or_return(fig, out_path)


def plot_reconstruction_progress(
    original: Union[ComplexImage, RGBComplexImage, np.ndarray],
    reconstructions: Mapping[int, Union[ComplexImage, RGBComplexImage, np.ndarray]],
    out_path: Optional[str] = None,
):
    """
    Original (left) followed by one panel per k, in ascending k.
    """
    items = sorted(reconstructions.items())
    fig, axs = plt.subplots(1, len(items) + 1, figsize=(3 * (len(items) + 1), 3.2))
    axs = np.atleast_1d(axs)

    panels = [("Original", original)] + [(f"k = {k}", img) for k, img in items]
    for ax, (title, img) in zip(axs, panels):
        arr = _as_display_array(img)
        if arr.ndim == 2:
            ax.imshow(arr, cmap="gray", vmin=0.0, vmax=1.0, interpolation="nearest")
        else:
            ax.imshow(arr, interpolation="nearest")
        ax.set_title(title)
        ax.axis("off")

    if out_path:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    return fig
