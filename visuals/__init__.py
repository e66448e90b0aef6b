# visuals/__init__.py
"""
Visual helpers for the Fourier reconstruction engine.
Provides display conversions and plotting/export utilities for renderers and scripts.
"""
from .display import (
    normalize_to_uint8,
    normalize_to_float,
    apply_log_scale,
    apply_color_map,
    spectrum_display,
)
from .plots import (
    plot_magnitude_spectrum,
    plot_phase_spectrum,
    plot_visualization_lines,
    plot_reconstruction_progress,
    fig_to_array,
)
__all__ = [
    "normalize_to_uint8",
    "normalize_to_float",
    "apply_log_scale",
    "apply_color_map",
    "spectrum_display",
    "plot_magnitude_spectrum",
    "plot_phase_spectrum",
    "plot_visualization_lines",
    "plot_reconstruction_progress",
    "fig_to_array",
]
