"""
fourier_core/visualizer.py

Progressive reconstruction controller.

A FourierVisualizer holds one frequency-domain image (grayscale or RGB, never
both) and rebuilds a spatial approximation from its k strongest components:

  IDLE ---set_image/set_rgb_image---> LOADED (k = 0, zero reconstruction)
  LOADED/RECONSTRUCTING ---set_frequency_count(k > 0)---> RECONSTRUCTING
  RECONSTRUCTING ---set_frequency_count(0)---> LOADED

Pipeline on every change of k:
  1) top-k magnitude coordinates (per channel in RGB mode)
  2) frequency image with all other coordinates zeroed
  3) inverse transform
  4) store as the current reconstruction
  5) record the coordinates as active frequencies
     (RGB: from the representative channel only; affects overlays, not pixels)

Readers get snapshots and copies; nothing returned aliases internal buffers.
"""

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from .complex_image import ComplexImage, Domain, SpatialImage, require_domain
from .config import AnimationConfig, SweepMode
from .errors import VisualizerStateError
from .events import EventHub, FrequencyChangeEvent, ImageLoadedEvent
from .fft_engine import Direction, inverse_transform, transform_rgb_2d
from .rgb_image import RGBComplexImage
from .selection import Coordinate, keep_frequencies, keep_top_frequencies_rgb, top_frequency_indices

logger = logging.getLogger(__name__)


EASINGS: Dict[str, Callable[[float], float]] = {
    "linear": lambda t: t,
    "smoothstep": lambda t: t * t * (3.0 - 2.0 * t),
    "cosine": lambda t: 0.5 - 0.5 * math.cos(math.pi * t),
}


class VisualizerState(Enum):
    IDLE = "idle"
    LOADED = "loaded"
    RECONSTRUCTING = "reconstructing"


@dataclass(frozen=True)
class AnimationState:
    """Read-only snapshot of the reconstruction/animation state."""

    active_frequencies: Tuple[Coordinate, ...] = ()
    current_frequency_count: int = 0
    max_frequency_count: int = 0
    is_animating: bool = False
    animation_speed: float = 1.0
    time_accumulator: float = 0.0
    is_rgb: bool = False
    sweep_mode: SweepMode = SweepMode.PING_PONG


@dataclass(frozen=True)
class VisualizationLine:
    x1: float  # canvas centre
    y1: float
    x2: float  # projected frequency coordinate
    y2: float
    magnitude: float
    phase: float
    frequency: float  # radial frequency sqrt(u^2 + v^2)


class FourierVisualizer:
    def __init__(self, config: Optional[AnimationConfig] = None):
        self.config = config or AnimationConfig()
        self.events = EventHub()

        self._frequency_domain: Optional[ComplexImage] = None
        self._rgb_frequency_domain: Optional[RGBComplexImage] = None
        self._reconstruction: Optional[ComplexImage] = None
        self._rgb_reconstruction: Optional[RGBComplexImage] = None
        self._is_rgb = False
        self._count = 0
        self._active: List[Coordinate] = []

        self._animating = False
        self._speed = float(self.config.speed)
        self._sweep_mode = self.config.sweep_mode
        self._elapsed = 0.0

    # --- loading ---
    def set_image(self, frequency_domain: ComplexImage) -> None:
        """Hold a copy of a grayscale spectrum and reset to LOADED."""
        require_domain(frequency_domain, Domain.FREQUENCY, "set_image")
        self._frequency_domain = frequency_domain.copy()
        self._rgb_frequency_domain = None
        self._rgb_reconstruction = None
        self._is_rgb = False
        self._reset_reconstruction()
        self._reconstruction = SpatialImage(frequency_domain.width, frequency_domain.height)
        self._announce_loaded(frequency_domain.width, frequency_domain.height)

    def set_rgb_image(self, frequency_domain: RGBComplexImage) -> None:
        """Hold a copy of an RGB spectrum and reset to LOADED."""
        for ch in frequency_domain.channels:
            require_domain(ch, Domain.FREQUENCY, "set_rgb_image")
        self._rgb_frequency_domain = frequency_domain.copy()
        self._frequency_domain = None
        self._reconstruction = None
        self._is_rgb = True
        self._reset_reconstruction()
        self._rgb_reconstruction = RGBComplexImage(
            frequency_domain.width, frequency_domain.height, channel_type=SpatialImage
        )
        self._announce_loaded(frequency_domain.width, frequency_domain.height)

    def _reset_reconstruction(self) -> None:
        self._count = 0
        self._active = []
        self._elapsed = 0.0

    def _announce_loaded(self, width: int, height: int) -> None:
        logger.info("loaded %s spectrum %dx%d", "RGB" if self._is_rgb else "grayscale", width, height)
        self.events.dispatch(ImageLoadedEvent(width=width, height=height, is_rgb=self._is_rgb))

    # --- reconstruction ---
    def set_frequency_count(self, count: int) -> None:
        """
        Rebuild the reconstruction from the `count` strongest frequencies.
        count is clamped to W * H; an unchanged count is a no-op.
        """
        if self.state is VisualizerState.IDLE:
            raise VisualizerStateError("set_frequency_count called before an image was set.")
        count = int(count)
        if count < 0:
            raise ValueError("Frequency count must be non-negative.")
        count = min(count, self.max_frequency_count)
        if count == self._count:
            return
        self._count = count
        started = time.perf_counter()
        if self._is_rgb:
            self._reconstruct_rgb()
        else:
            self._reconstruct_gray()
        logger.debug("reconstructed k=%d in %.3f ms", count, (time.perf_counter() - started) * 1e3)
        self.events.dispatch(FrequencyChangeEvent(count, self.max_frequency_count))

    def _reconstruct_gray(self) -> None:
        freq = self._frequency_domain
        indices = top_frequency_indices(freq, self._count)
        self._reconstruction = inverse_transform(keep_frequencies(freq, indices))
        self._active = indices

    def _reconstruct_rgb(self) -> None:
        freq = self._rgb_frequency_domain
        filtered = keep_top_frequencies_rgb(freq, self._count)
        self._rgb_reconstruction = transform_rgb_2d(
            filtered, Direction.INVERSE, parallel=self.config.parallel_channels
        )
        self._active = top_frequency_indices(
            freq.channel(self.config.representative_channel), self._count
        )

    # --- animation ---
    def start_animation(self) -> None:
        self._animating = True

    def stop_animation(self) -> None:
        self._animating = False

    def set_animation_speed(self, speed: float) -> None:
        speed = float(speed)
        if not math.isfinite(speed) or speed < 0.0:
            raise ValueError("Animation speed must be finite and non-negative.")
        self._speed = speed

    def set_sweep_mode(self, mode: SweepMode) -> None:
        if not isinstance(mode, SweepMode):
            raise ValueError(f"Unknown sweep mode '{mode}'.")
        self._sweep_mode = mode

    def reset_animation(self) -> None:
        """Rewind the sweep clock and drop back to k = 0."""
        self._elapsed = 0.0
        if self.state is not VisualizerState.IDLE:
            self.set_frequency_count(0)

    def update_animation(self, delta_time: float) -> None:
        """
        Advance the sweep clock by delta_time * speed and move k to the sweep target.
        No-op while not animating or before an image is set.
        """
        if not self._animating or self.state is VisualizerState.IDLE:
            return
        self._elapsed += float(delta_time) * self._speed
        target = self._target_count()
        if target != self._count:
            self.set_frequency_count(target)

    def _target_count(self) -> int:
        max_count = self.max_frequency_count
        rate = float(self.config.frequencies_per_second)
        if self._sweep_mode is SweepMode.FORWARD:
            return min(max(int(math.floor(self._elapsed * rate)), 0), max_count)
        if max_count == 0:
            return 0
        # one leg (0 -> max or max -> 0) lasts max_count / rate seconds
        phase = (self._elapsed * rate / max_count) % 2.0
        t = phase if phase <= 1.0 else 2.0 - phase
        eased = EASINGS[self.config.easing](t)
        return min(max(int(round(eased * max_count)), 0), max_count)

    # --- state queries ---
    @property
    def state(self) -> VisualizerState:
        if self._frequency_domain is None and self._rgb_frequency_domain is None:
            return VisualizerState.IDLE
        if self._count == 0:
            return VisualizerState.LOADED
        return VisualizerState.RECONSTRUCTING

    @property
    def is_rgb(self) -> bool:
        return self._is_rgb

    @property
    def frequency_count(self) -> int:
        return self._count

    @property
    def max_frequency_count(self) -> int:
        image = self._held()
        return 0 if image is None else image.width * image.height

    @property
    def animation_state(self) -> AnimationState:
        return AnimationState(
            active_frequencies=tuple(self._active),
            current_frequency_count=self._count,
            max_frequency_count=self.max_frequency_count,
            is_animating=self._animating,
            animation_speed=self._speed,
            time_accumulator=self._elapsed,
            is_rgb=self._is_rgb,
            sweep_mode=self._sweep_mode,
        )

    def _held(self) -> Optional[Union[ComplexImage, RGBComplexImage]]:
        return self._rgb_frequency_domain if self._is_rgb else self._frequency_domain

    def _representative(self) -> Optional[ComplexImage]:
        if self._is_rgb:
            return self._rgb_frequency_domain.channel(self.config.representative_channel)
        return self._frequency_domain

    def frequency_domain(self) -> Union[ComplexImage, RGBComplexImage]:
        image = self._held()
        if image is None:
            raise VisualizerStateError("No image has been set.")
        return image.copy()

    def reconstructed_image(self) -> SpatialImage:
        if self.state is VisualizerState.IDLE:
            raise VisualizerStateError("No image has been set.")
        if self._is_rgb:
            raise VisualizerStateError("Visualizer holds an RGB image; use reconstructed_rgb_image().")
        return self._reconstruction.copy()

    def reconstructed_rgb_image(self) -> RGBComplexImage:
        if self.state is VisualizerState.IDLE:
            raise VisualizerStateError("No image has been set.")
        if not self._is_rgb:
            raise VisualizerStateError("Visualizer holds a grayscale image; use reconstructed_image().")
        return self._rgb_reconstruction.copy()

    # --- spectra & overlays ---
    def magnitude_spectrum(self) -> np.ndarray:
        """Full, unfiltered |F| (flat row-major); RGB mode uses the representative channel."""
        image = self._representative()
        return np.zeros(0) if image is None else image.magnitude_image()

    def phase_spectrum(self) -> np.ndarray:
        image = self._representative()
        return np.zeros(0) if image is None else image.phase_image()

    def rgb_magnitude_spectra(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        if not self._is_rgb:
            raise VisualizerStateError("rgb_magnitude_spectra requires an RGB image.")
        return self._rgb_frequency_domain.magnitude_images()

    def frequency_path(self) -> List[Tuple[float, float]]:
        return [(float(x), float(y)) for x, y in self._active]

    def visualization_lines(self, canvas_width: float, canvas_height: float) -> List[VisualizationLine]:
        """
        Project each active frequency onto a canvas as a line from the canvas centre.
        The signed frequency (u, v) is centred by (W / 2, H / 2), scaled by
        canvas / image size and clamped into the canvas.
        """
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError("Canvas dimensions must be positive.")
        image = self._representative()
        if image is None or image.size == 0:
            return []
        W, H = image.width, image.height
        sx, sy = canvas_width / W, canvas_height / H
        cx, cy = canvas_width / 2.0, canvas_height / 2.0

        lines = []
        for x, y in self._active:
            u = x if x < (W + 1) // 2 else x - W
            v = y if y < (H + 1) // 2 else y - H
            px = min(max((u + W / 2.0) * sx, 0.0), float(canvas_width))
            py = min(max((v + H / 2.0) * sy, 0.0), float(canvas_height))
            sample = image.at(x, y)
            lines.append(
                VisualizationLine(
                    x1=cx,
                    y1=cy,
                    x2=px,
                    y2=py,
                    magnitude=abs(sample),
                    phase=math.atan2(sample.imag, sample.real),
                    frequency=math.hypot(u, v),
                )
            )
        return lines
