"""
fourier_core/errors.py

Exception hierarchy for the transform and reconstruction pipeline.
Each error also derives from the builtin a caller would naturally catch
(ValueError for bad arguments, IndexError for coordinates, ...).
"""


class FourierError(Exception):
    """Base class for all errors raised by fourier_core."""


class DimensionMismatchError(FourierError, ValueError):
    """Buffer length or channel dimensions disagree with the declared width/height."""


class InvalidCoordinateError(FourierError, IndexError):
    """(x, y) outside [0, W) x [0, H) on a checked accessor."""


class DomainError(FourierError, TypeError):
    """A spatial-domain image was passed where frequency data is required, or vice versa."""


class VisualizerStateError(FourierError, RuntimeError):
    """Operation not valid in the visualizer's current state or colour mode."""
