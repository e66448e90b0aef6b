import numpy as np
import pytest
from fourier_core.complex_image import FrequencyImage, SpatialImage
from fourier_core.errors import DomainError
from fourier_core.fft_engine import forward_transform, inverse_transform
from fourier_core.filters import apply_frequency_mask
from fourier_core.rgb_image import RGBComplexImage
from fourier_core.selection import (
    top_frequency_indices, keep_top_frequencies, keep_top_frequencies_rgb, keep_frequencies,
)


def test_top_indices_ordered_and_sized(random_image):
    F = forward_transform(random_image)
    for k in (1, 5, 37, 512):
        idx = top_frequency_indices(F, k)
        assert len(idx) == min(k, F.size)
        mags = [abs(F.at(x, y)) for x, y in idx]
        assert all(a >= b for a, b in zip(mags, mags[1:]))
        assert len(set(idx)) == len(idx)


def test_top_indices_are_the_largest(random_image):
    F = forward_transform(random_image)
    idx = top_frequency_indices(F, 10)
    chosen = sorted(abs(F.at(x, y)) for x, y in idx)
    assert chosen == pytest.approx(sorted(np.abs(F.data).ravel())[-10:])


def test_top_indices_more_than_available():
    F = FrequencyImage.from_array(np.arange(6, dtype=float).reshape(2, 3))
    idx = top_frequency_indices(F, 100)
    assert len(idx) == 6
    assert idx[0] == (2, 1)
    assert idx[-1] == (0, 0)


def test_top_indices_zero_and_negative():
    F = FrequencyImage.from_array(np.ones((2, 2)))
    assert top_frequency_indices(F, 0) == []
    assert top_frequency_indices(FrequencyImage(0, 0), 3) == []
    with pytest.raises(ValueError):
        top_frequency_indices(F, -1)


def test_tie_break_row_major():
    F = FrequencyImage.from_array(np.ones((2, 2)))
    assert top_frequency_indices(F, 2) == [(0, 0), (1, 0)]
    assert top_frequency_indices(F, 3) == [(0, 0), (1, 0), (0, 1)]


def test_top_indices_reject_spatial():
    with pytest.raises(DomainError):
        top_frequency_indices(SpatialImage(2, 2), 1)


def test_keep_top_frequencies_zeroes_the_rest(random_image):
    F = forward_transform(random_image)
    kept = keep_top_frequencies(F, 7)
    assert type(kept) is FrequencyImage
    assert np.count_nonzero(kept.data) == 7
    for x, y in top_frequency_indices(F, 7):
        assert kept.at(x, y) == F.at(x, y)


def test_keep_frequencies_empty_list():
    F = FrequencyImage.from_array(np.ones((3, 3)))
    assert np.count_nonzero(keep_frequencies(F, []).data) == 0


def test_keep_all_frequencies_is_exact(random_image):
    F = forward_transform(random_image)
    back = inverse_transform(keep_top_frequencies(F, F.size))
    assert np.max(np.abs(back.data - random_image.data)) < 1e-9


def test_constant_image_dc_only_reproduces_exactly():
    img = SpatialImage.from_array(np.full((4, 4), 0.6))
    F = forward_transform(img)
    masked = apply_frequency_mask(F, 0.0, low_pass=True)
    assert np.count_nonzero(masked.data) == 1
    back = inverse_transform(masked)
    assert np.allclose(back.data, img.data, atol=1e-12)
    back_top = inverse_transform(keep_top_frequencies(F, 1))
    assert np.allclose(back_top.data, img.data, atol=1e-12)


def test_keep_top_frequencies_rgb_per_channel():
    red = FrequencyImage.from_array(np.array([[5.0, 1.0], [0.0, 0.0]]))
    green = FrequencyImage.from_array(np.array([[0.0, 0.0], [1.0, 5.0]]))
    blue = FrequencyImage.from_array(np.array([[0.0, 9.0], [0.0, 1.0]]))
    rgb = RGBComplexImage.from_channels(red, green, blue)
    kept = keep_top_frequencies_rgb(rgb, 1)
    assert np.flatnonzero(kept.channel(0).data).tolist() == [0]
    assert np.flatnonzero(kept.channel(1).data).tolist() == [3]
    assert np.flatnonzero(kept.channel(2).data).tolist() == [1]
