# test/conftest.py
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from fourier_core.complex_image import SpatialImage


@pytest.fixture
def checkerboard_8():
    """8x8 alternating 0/1 checkerboard, 1 where x + y is odd."""
    y, x = np.mgrid[0:8, 0:8]
    return SpatialImage.from_array(((x + y) % 2).astype(np.float64))


@pytest.fixture
def random_image():
    rng = np.random.default_rng(1234)
    return SpatialImage.from_array(rng.random((16, 32)))
