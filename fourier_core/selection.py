"""
fourier_core/selection.py

Top-K magnitude selection: the primitive behind progressive reconstruction.

- top_frequency_indices(freq, k): (x, y) coordinates of the k largest magnitudes,
  in non-increasing magnitude order; ties go to the lower row-major index.
- keep_top_frequencies(freq, k): all-zero copy populated only at those coordinates.
- keep_top_frequencies_rgb(freq, k): the same per channel.

Reconstruction error after inverse transform is non-increasing in k and reaches
transform round-trip error at k = W * H.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .complex_image import ComplexImage, Domain, require_domain
from .rgb_image import RGBComplexImage

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


def _top_flat_indices(magnitudes: np.ndarray, k: int) -> np.ndarray:
    """Flat indices of the k largest values, sorted by (-value, index)."""
    n = magnitudes.size
    if k >= n:
        candidates = np.arange(n)
    else:
        # partial selection; the k-th largest value splits strict winners from ties
        kth = np.partition(magnitudes, n - k)[n - k]
        above = np.flatnonzero(magnitudes > kth)
        ties = np.flatnonzero(magnitudes == kth)[: k - above.size]
        candidates = np.concatenate([above, ties])
    order = np.lexsort((candidates, -magnitudes[candidates]))
    return candidates[order]


def top_frequency_indices(frequency_domain: ComplexImage, num_frequencies: int) -> List[Coordinate]:
    """
    Return (x, y) of the num_frequencies largest-magnitude samples, largest first.
    Returns all W * H coordinates if the image holds fewer samples than requested.
    """
    require_domain(frequency_domain, Domain.FREQUENCY, "top_frequency_indices")
    k = int(num_frequencies)
    if k < 0:
        raise ValueError("num_frequencies must be non-negative.")
    if k == 0 or frequency_domain.size == 0:
        return []
    magnitudes = np.abs(frequency_domain.data).ravel()
    flat = _top_flat_indices(magnitudes, k)
    width = frequency_domain.width
    logger.debug("selected %d of %d frequencies", flat.size, magnitudes.size)
    return [(int(i % width), int(i // width)) for i in flat]


def keep_frequencies(frequency_domain: ComplexImage, coordinates: Sequence[Coordinate]) -> ComplexImage:
    """New all-zero image of the same type, copying only the listed coordinates."""
    result = type(frequency_domain)(frequency_domain.width, frequency_domain.height)
    if coordinates:
        xs, ys = np.asarray(coordinates, dtype=np.intp).T
        result.data[ys, xs] = frequency_domain.data[ys, xs]
    return result


def keep_top_frequencies(frequency_domain: ComplexImage, num_frequencies: int) -> ComplexImage:
    return keep_frequencies(frequency_domain, top_frequency_indices(frequency_domain, num_frequencies))


def keep_top_frequencies_rgb(frequency_domain: RGBComplexImage, num_frequencies: int) -> RGBComplexImage:
    """Select the top num_frequencies independently in each channel."""
    return RGBComplexImage.from_channels(
        *(keep_top_frequencies(ch, num_frequencies) for ch in frequency_domain.channels)
    )
