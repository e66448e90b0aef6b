"""
Core package init for the Fourier reconstruction engine.
Exposes public modules for import in tests and scripts.
"""
__all__ = [
    "config",
    "errors",
    "complex_image",
    "rgb_image",
    "fft_engine",
    "filters",
    "selection",
    "events",
    "visualizer",
]
