# test/test_pipeline_large_image.py
import numpy as np
from fourier_core.complex_image import SpatialImage
from fourier_core.fft_engine import forward_transform, inverse_transform
from fourier_core.selection import keep_top_frequencies


def test_large_pipeline():
    img = SpatialImage.from_array(np.random.rand(256, 256))
    F = forward_transform(img)
    assert np.allclose(F.data, np.fft.fft2(img.data), atol=1e-6)
    back = inverse_transform(keep_top_frequencies(F, 2000))
    assert back.shape == img.shape
    assert np.mean(np.abs(back.data - img.data) ** 2) < np.mean(img.data.real ** 2)


def test_non_power_of_two_pipeline():
    arr = np.random.rand(48, 40)
    F = forward_transform(SpatialImage.from_array(arr))
    assert F.shape == (48, 40)
    assert np.max(np.abs(inverse_transform(F).data - arr)) < 1e-6


def test_direct_dft_memory_is_blocked():
    import tracemalloc
    row = np.random.rand(1, 3000)
    img = SpatialImage.from_array(row)
    tracemalloc.start()
    try:
        F = forward_transform(img)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()
    # a dense 3000x3000 complex kernel alone would be ~144 MB
    assert peak < 20e6
    assert np.allclose(F.data, np.fft.fft2(row), atol=1e-6)


def test_direct_dft_spans_several_blocks():
    # 131 is prime and larger than two kernel blocks
    arr = np.random.rand(3, 131)
    F = forward_transform(SpatialImage.from_array(arr))
    assert np.allclose(F.data, np.fft.fft2(arr), atol=1e-8)
    assert np.allclose(inverse_transform(F).data, arr, atol=1e-10)
