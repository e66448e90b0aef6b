"""
fourier_core/complex_image.py

Dense 2D grid of complex samples, the common currency of the transform pipeline.

Storage is a numpy array of shape (H, W) in row-major order; (x, y) addresses
column x of row y. Three classes share the implementation:
  - ComplexImage   : untagged, domain tracked by the caller
  - SpatialImage   : pixel-domain data (inverse transform output)
  - FrequencyImage : frequency-domain data (forward transform output)
"""

from enum import Enum
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .config import COMPLEX_DTYPE, RANGE_EPSILON, SCALAR_DTYPE
from .errors import DimensionMismatchError, DomainError, InvalidCoordinateError


class Domain(Enum):
    SPATIAL = "spatial"
    FREQUENCY = "frequency"


class ComplexImage:
    domain: Optional[Domain] = None

    def __init__(self, width: int = 0, height: int = 0):
        width, height = _check_size(width, height)
        self._data = np.zeros((height, width), dtype=COMPLEX_DTYPE)

    # --- construction helpers ---
    @classmethod
    def from_array(cls, array: np.ndarray) -> "ComplexImage":
        """
        Wrap a copy of a 2D (H, W) array; real input gets zero imaginary parts.
        """
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError(f"{cls.__name__}.from_array expects a 2D array.")
        image = cls.__new__(cls)
        image._data = np.array(arr, dtype=COMPLEX_DTYPE, copy=True)
        return image

    @classmethod
    def from_grayscale(
        cls,
        grayscale: Union[bytes, bytearray, Sequence[int], np.ndarray],
        width: int,
        height: int,
    ) -> "ComplexImage":
        """Build an image where every byte b becomes the sample (b / 255, 0)."""
        image = cls(width, height)
        image.set_from_grayscale(grayscale, width, height)
        return image

    def set_from_grayscale(self, grayscale, width: int, height: int) -> None:
        width, height = _check_size(width, height)
        if isinstance(grayscale, (bytes, bytearray)):
            values = np.frombuffer(bytes(grayscale), dtype=np.uint8)
        else:
            values = np.asarray(grayscale, dtype=np.uint8).ravel()
        if values.size != width * height:
            raise DimensionMismatchError(
                f"Grayscale buffer has {values.size} samples, expected {width}x{height}={width * height}."
            )
        self._data = (values.astype(SCALAR_DTYPE) / 255.0).reshape(height, width).astype(COMPLEX_DTYPE)

    def copy(self) -> "ComplexImage":
        return type(self).from_array(self._data)

    # --- geometry ---
    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), matching numpy's convention."""
        return self._data.shape

    @property
    def size(self) -> int:
        return int(self._data.size)

    @property
    def data(self) -> np.ndarray:
        """Live (H, W) view of the samples. Mutations are visible to this image."""
        return self._data

    def resize(self, width: int, height: int) -> None:
        """
        Reallocate to width x height.
        The flat row-major prefix is kept and the rest zero-filled, so a width change
        reinterprets the old samples rather than reshaping the picture.
        """
        width, height = _check_size(width, height)
        flat = np.zeros(width * height, dtype=COMPLEX_DTYPE)
        keep = min(flat.size, self._data.size)
        flat[:keep] = self._data.ravel()[:keep]
        self._data = flat.reshape(height, width)

    # --- sample access ---
    def at(self, x: int, y: int) -> complex:
        return complex(self._data[y, x])

    def set_at(self, x: int, y: int, value: complex) -> None:
        self._data[y, x] = value

    def checked_at(self, x: int, y: int) -> complex:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidCoordinateError(f"({x}, {y}) outside {self.width}x{self.height} image.")
        return self.at(x, y)

    def __getitem__(self, xy: Tuple[int, int]) -> complex:
        x, y = xy
        return self.at(x, y)

    def __setitem__(self, xy: Tuple[int, int], value: complex) -> None:
        x, y = xy
        self.set_at(x, y, value)

    # --- derived images ---
    def magnitude_image(self) -> np.ndarray:
        """|sample| for every pixel, flat row-major float64."""
        return np.abs(self._data).astype(SCALAR_DTYPE).ravel()

    def phase_image(self) -> np.ndarray:
        """arg(sample) in [-pi, pi] for every pixel, flat row-major float64."""
        return np.angle(self._data).astype(SCALAR_DTYPE).ravel()

    def grayscale_from_real(self) -> np.ndarray:
        """
        Min-max normalize the real parts into 0..255 (flat row-major uint8).
        A spread below RANGE_EPSILON uses a denominator of 1.0.
        """
        real = self._data.real.ravel()
        if real.size == 0:
            return np.zeros(0, dtype=np.uint8)
        vmin = float(real.min())
        spread = float(real.max()) - vmin
        if spread < RANGE_EPSILON:
            spread = 1.0
        scaled = np.clip((real - vmin) / spread * 255.0, 0.0, 255.0)
        return scaled.astype(np.uint8)

    # --- in-place operations ---
    def normalize(self) -> None:
        """
        Peak normalization: scale every sample so the largest magnitude becomes 1.0.
        This is unrelated to the transform convention (forward unnormalized, inverse 1/n).
        """
        if self._data.size == 0:
            return
        peak = float(np.max(np.abs(self._data)))
        if peak < RANGE_EPSILON:
            peak = 1.0
        self._data /= peak

    def fft_shift(self) -> None:
        """
        Move the zero-frequency sample from (0, 0) to (W // 2, H // 2).
        Odd axes split at floor(N / 2); ifft_shift undoes this for every size.
        """
        self._data = np.fft.fftshift(self._data)

    def ifft_shift(self) -> None:
        """Inverse of fft_shift: centre (W // 2, H // 2) back to (0, 0)."""
        self._data = np.fft.ifftshift(self._data)

    # --- comparison ---
    def __eq__(self, other) -> bool:
        if not isinstance(other, ComplexImage):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"


class SpatialImage(ComplexImage):
    domain = Domain.SPATIAL


class FrequencyImage(ComplexImage):
    domain = Domain.FREQUENCY


def require_domain(image: ComplexImage, domain: Domain, operation: str) -> None:
    """
    Reject images tagged with the other domain. Untagged ComplexImage passes.
    """
    if not isinstance(image, ComplexImage):
        raise TypeError(f"{operation} expects a ComplexImage, got {type(image).__name__}.")
    if image.domain is not None and image.domain is not domain:
        raise DomainError(
            f"{operation} expects {domain.value}-domain data, got a {type(image).__name__}."
        )


def _check_size(width: int, height: int) -> Tuple[int, int]:
    width, height = int(width), int(height)
    if width < 0 or height < 0:
        raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}.")
    return width, height
