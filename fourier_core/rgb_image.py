"""
fourier_core/rgb_image.py

Three independent ComplexImage channels (R, G, B) sharing one width/height.

Packed pixel layout: one 32-bit word per pixel, from most to least significant
byte R, G, B, pad. toRGB-style output always writes 0xFF into the pad byte.
"""

from typing import Tuple, Type

import numpy as np

from .complex_image import ComplexImage
from .config import SCALAR_DTYPE
from .errors import DimensionMismatchError

CHANNEL_NAMES = ("R", "G", "B")


# --- packing helpers ---
def pack_rgb(array: np.ndarray) -> np.ndarray:
    """
    Pack an HxWx3 uint8 array into flat row-major uint32 words (R<<24 | G<<16 | B<<8 | 0xFF).
    """
    arr = np.asarray(array)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError("pack_rgb expects an HxWx3 array.")
    a = arr.astype(np.uint32).reshape(-1, 3)
    return (a[:, 0] << 24) | (a[:, 1] << 16) | (a[:, 2] << 8) | np.uint32(0xFF)


def unpack_rgb(words, width: int, height: int) -> np.ndarray:
    """Inverse of pack_rgb: flat uint32 words -> HxWx3 uint8 (pad byte dropped)."""
    w = np.asarray(words, dtype=np.uint32).ravel()
    if w.size != int(width) * int(height):
        raise DimensionMismatchError(
            f"RGB buffer has {w.size} words, expected {width}x{height}={int(width) * int(height)}."
        )
    out = np.stack([(w >> 24) & 0xFF, (w >> 16) & 0xFF, (w >> 8) & 0xFF], axis=-1)
    return out.astype(np.uint8).reshape(int(height), int(width), 3)


class RGBComplexImage:
    def __init__(self, width: int = 0, height: int = 0, channel_type: Type[ComplexImage] = ComplexImage):
        self._channels: Tuple[ComplexImage, ComplexImage, ComplexImage] = tuple(
            channel_type(width, height) for _ in CHANNEL_NAMES
        )

    @classmethod
    def from_channels(cls, red: ComplexImage, green: ComplexImage, blue: ComplexImage) -> "RGBComplexImage":
        """Take copies of three equally sized channels."""
        if not (red.shape == green.shape == blue.shape):
            raise DimensionMismatchError(
                f"RGB channels disagree on dimensions: {red.shape}, {green.shape}, {blue.shape}."
            )
        image = cls.__new__(cls)
        image._channels = (red.copy(), green.copy(), blue.copy())
        return image

    @classmethod
    def from_rgb(cls, packed, width: int, height: int) -> "RGBComplexImage":
        image = cls()
        image.set_from_rgb(packed, width, height)
        return image

    @classmethod
    def from_array(cls, array: np.ndarray) -> "RGBComplexImage":
        """Build from an HxWx3 uint8 array (the layout most decoders hand out)."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError("RGBComplexImage.from_array expects an HxWx3 array.")
        return cls.from_rgb(pack_rgb(arr), arr.shape[1], arr.shape[0])

    def copy(self) -> "RGBComplexImage":
        return RGBComplexImage.from_channels(*self._channels)

    # --- geometry / access ---
    @property
    def width(self) -> int:
        return self._channels[0].width

    @property
    def height(self) -> int:
        return self._channels[0].height

    @property
    def shape(self) -> Tuple[int, int]:
        return self._channels[0].shape

    @property
    def channels(self) -> Tuple[ComplexImage, ComplexImage, ComplexImage]:
        return self._channels

    @property
    def domain(self):
        return self._channels[0].domain

    def channel(self, index: int) -> ComplexImage:
        return self._channels[index]

    # --- conversion ---
    def set_from_rgb(self, packed, width: int, height: int) -> None:
        """
        Unpack R, G, B from each word into [0, 1] real samples (imaginary parts zero).
        Existing channel types are kept.
        """
        rgb = unpack_rgb(packed, width, height).astype(SCALAR_DTYPE) / 255.0
        self._channels = tuple(
            type(ch).from_array(rgb[..., idx]) for idx, ch in enumerate(self._channels)
        )

    def to_rgb(self) -> np.ndarray:
        """
        Clamp each channel's real part to [0, 1], scale by 255, truncate and repack.
        Returns flat row-major uint32 words with the pad byte set to 0xFF.
        """
        stacked = np.stack([np.clip(ch.data.real, 0.0, 1.0) for ch in self._channels], axis=-1)
        return pack_rgb((stacked * 255.0).astype(np.uint8))

    def to_array(self) -> np.ndarray:
        """HxWx3 uint8 view of to_rgb() for display code."""
        return unpack_rgb(self.to_rgb(), self.width, self.height)

    def magnitude_images(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return tuple(ch.magnitude_image() for ch in self._channels)

    def __eq__(self, other) -> bool:
        if not isinstance(other, RGBComplexImage):
            return NotImplemented
        return all(a == b for a, b in zip(self._channels, other._channels))

    __hash__ = None

    def __repr__(self) -> str:
        kind = type(self._channels[0]).__name__
        return f"RGBComplexImage(width={self.width}, height={self.height}, channels={kind})"
