"""
fourier_core/config.py

Global numeric precision, thresholds and animation configuration.

- SCALAR_DTYPE / COMPLEX_DTYPE: the single precision choice used by every buffer.
- RANGE_EPSILON: below this spread/peak a normalization denominator of 1.0 is used.
- AnimationConfig: per-visualizer sweep parameters (frozen, validated on creation).
"""

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

SCALAR_DTYPE = np.float64
COMPLEX_DTYPE = np.complex128

RANGE_EPSILON = 1e-10

DEFAULT_FREQUENCIES_PER_SECOND = 10.0
EASING_NAMES = ("linear", "smoothstep", "cosine")


class SweepMode(Enum):
    FORWARD = "forward"      # one ramp from 0 to W*H, then stall
    PING_PONG = "ping_pong"  # 0 -> W*H -> 0 -> ... with eased timing


@dataclass(frozen=True)
class AnimationConfig:
    """
    Parameters for Fourier visualizer animation.

    frequencies_per_second : float
        Base sweep rate in frequencies per second of accumulated (speed-scaled) time.
    speed : float
        Initial speed multiplier applied to every delta time.
    sweep_mode : SweepMode
        FORWARD ramps once and stalls; PING_PONG reverses at both ends indefinitely.
    easing : str
        One of EASING_NAMES; only used by PING_PONG.
    parallel_channels : bool
        Run the three RGB channel transforms on a thread pool.
    representative_channel : int
        Channel (0=R, 1=G, 2=B) used for active-frequency lists and spectra in RGB mode.
    """

    frequencies_per_second: float = DEFAULT_FREQUENCIES_PER_SECOND
    speed: float = 1.0
    sweep_mode: SweepMode = SweepMode.PING_PONG
    easing: str = "smoothstep"
    parallel_channels: bool = True
    representative_channel: int = 0

    def __post_init__(self):
        rate = float(self.frequencies_per_second)
        if not math.isfinite(rate) or rate <= 0.0:
            raise ValueError("frequencies_per_second must be finite and > 0.")
        speed = float(self.speed)
        if not math.isfinite(speed) or speed < 0.0:
            raise ValueError("speed must be finite and non-negative.")
        if not isinstance(self.sweep_mode, SweepMode):
            raise ValueError(f"Unknown sweep_mode '{self.sweep_mode}'.")
        if self.easing not in EASING_NAMES:
            raise ValueError(f"Unknown easing '{self.easing}'. Choose one of {', '.join(EASING_NAMES)}.")
        if self.representative_channel not in (0, 1, 2):
            raise ValueError("representative_channel must be 0, 1 or 2.")
