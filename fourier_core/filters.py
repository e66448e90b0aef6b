import numpy as np
from typing import Tuple, Optional

from .complex_image import ComplexImage, Domain, require_domain


# --- Distance grids & helpers ---
def _signed_frequencies(n: int) -> np.ndarray:
    """
    Signed frequency index per position in unshifted layout:
    indices >= n/2 wrap to (index - n). Equivalent to np.fft.fftfreq(n) * n.
    """
    idx = np.arange(n)
    return np.where(idx < (n + 1) // 2, idx, idx - n).astype(np.float64)


def _wrapped_radius_grid(shape: Tuple[int, int]) -> np.ndarray:
    """Radius sqrt(fx^2 + fy^2) on the unshifted (corner-DC) frequency grid."""
    H, W = shape
    fy = _signed_frequencies(H).reshape(H, 1)
    fx = _signed_frequencies(W).reshape(1, W)
    return np.hypot(fx, fy)


def _distance_grid(
        shape: Tuple[int, int],
        center: Optional[Tuple[float, float]] = None,
    ) -> np.ndarray:
    """
    Euclidean distance D[y, x] from a float (cx, cy) center.
    Default center is the geometric center (W / 2, H / 2), where fft_shift puts DC
    for even sizes.
    """
    H, W = shape
    if center is None:
        cx, cy = W / 2.0, H / 2.0
    else:
        cx, cy = float(center[0]), float(center[1])
    y = np.arange(H, dtype=np.float64).reshape(H, 1)
    x = np.arange(W, dtype=np.float64).reshape(1, W)
    return np.hypot(x - cx, y - cy)


# --- Masks ---
def apply_frequency_mask(
        frequency_domain: ComplexImage,
        frequency_cutoff: float,
        low_pass: bool = True,
    ) -> ComplexImage:
    """
    Rectangular-grid radial mask in the wrapped (unshifted) convention.
    A sample is zeroed when (low_pass and radius > cutoff) or
    (not low_pass and radius < cutoff). Returns a new image of the same type.
    """
    require_domain(frequency_domain, Domain.FREQUENCY, "apply_frequency_mask")
    result = frequency_domain.copy()
    if result.size == 0:
        return result
    radius = _wrapped_radius_grid(result.shape)
    cutoff = float(frequency_cutoff)
    if low_pass:
        reject = radius > cutoff
    else:
        reject = radius < cutoff
    result.data[reject] = 0
    return result


def apply_frequency_mask_circular(frequency_domain: ComplexImage, radius_ratio: float) -> ComplexImage:
    """
    Circular low-pass for an fft_shift-ed spectrum: zero every sample farther than
    min(W, H) / 2 * radius_ratio from the geometric center (W / 2, H / 2).
    Passing an unshifted spectrum is a caller error the mask cannot detect.
    """
    require_domain(frequency_domain, Domain.FREQUENCY, "apply_frequency_mask_circular")
    if radius_ratio < 0:
        raise ValueError("radius_ratio must be non-negative for circular mask.")
    result = frequency_domain.copy()
    if result.size == 0:
        return result
    H, W = result.shape
    max_radius = min(W / 2.0, H / 2.0) * float(radius_ratio)
    D = _distance_grid(result.shape)
    result.data[D > max_radius] = 0
    return result
