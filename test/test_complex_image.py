import numpy as np
import pytest
from fourier_core.complex_image import ComplexImage, SpatialImage, FrequencyImage, Domain
from fourier_core.errors import DimensionMismatchError, InvalidCoordinateError


def test_construct_zero_filled():
    img = ComplexImage(4, 3)
    assert (img.width, img.height) == (4, 3)
    assert img.shape == (3, 4)
    assert img.size == 12
    assert np.all(img.data == 0)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        ComplexImage(-1, 4)


def test_from_grayscale_maps_bytes_to_unit_range():
    img = ComplexImage.from_grayscale(bytes([0, 51, 255, 102]), 2, 2)
    assert img.at(0, 0) == 0j
    assert img.at(1, 0) == pytest.approx(0.2 + 0j)
    assert img.at(0, 1) == pytest.approx(1.0 + 0j)
    assert np.all(img.data.imag == 0)


def test_from_grayscale_length_mismatch():
    with pytest.raises(DimensionMismatchError):
        ComplexImage.from_grayscale(bytes(5), 2, 2)
    # also catchable as a plain ValueError
    with pytest.raises(ValueError):
        ComplexImage.from_grayscale([1, 2, 3], 2, 2)


def test_resize_keeps_flat_prefix():
    img = ComplexImage.from_array(np.array([[1, 2], [3, 4]], dtype=float))
    img.resize(4, 1)
    assert np.allclose(img.data, [[1, 2, 3, 4]])
    img.resize(3, 3)
    assert img.size == 9
    assert np.allclose(img.data.ravel(), [1, 2, 3, 4, 0, 0, 0, 0, 0])


def test_at_set_at_and_item_access():
    img = ComplexImage(3, 2)
    img.set_at(2, 1, 1 + 2j)
    assert img.at(2, 1) == 1 + 2j
    img[0, 1] = 5
    assert img[0, 1] == 5 + 0j
    # (x, y) is column x of row y
    assert img.data[1, 2] == 1 + 2j


def test_checked_at_bounds():
    img = ComplexImage(3, 2)
    assert img.checked_at(2, 1) == 0j
    with pytest.raises(InvalidCoordinateError):
        img.checked_at(3, 0)
    with pytest.raises(IndexError):
        img.checked_at(0, -1)


def test_magnitude_and_phase_images_row_major():
    img = ComplexImage(3, 2)
    img.set_at(2, 1, 3 + 4j)
    img.set_at(1, 0, 1j)
    mag = img.magnitude_image()
    phase = img.phase_image()
    assert mag.shape == (6,)
    assert mag[5] == pytest.approx(5.0)
    assert phase[1] == pytest.approx(np.pi / 2)
    assert mag.dtype == np.float64


def test_grayscale_from_real():
    img = ComplexImage.from_array(np.array([[0.0, 0.5, 1.0]]))
    assert list(img.grayscale_from_real()) == [0, 127, 255]


def test_grayscale_from_real_constant_and_empty():
    flat = ComplexImage.from_array(np.full((2, 2), 0.7))
    assert np.all(flat.grayscale_from_real() == 0)
    assert ComplexImage(0, 0).grayscale_from_real().size == 0


def test_normalize_peak():
    img = ComplexImage.from_array(np.array([[3 + 4j, 1.0], [0.0, -2.0]]))
    img.normalize()
    assert np.max(np.abs(img.data)) == pytest.approx(1.0)
    assert img.at(1, 0) == pytest.approx(0.2)


def test_normalize_zero_image_stays_finite():
    img = ComplexImage(4, 4)
    img.normalize()
    assert np.all(np.isfinite(img.data))
    assert np.all(img.data == 0)


def test_fft_shift_moves_corner_to_center_even():
    img = ComplexImage(8, 4)
    img.set_at(0, 0, 1.0)
    img.fft_shift()
    assert img.at(4, 2) == 1.0
    img.ifft_shift()
    assert img.at(0, 0) == 1.0


def test_fft_shift_involution_even(random_image):
    img = random_image.copy()
    img.fft_shift()
    img.fft_shift()
    assert img == random_image


def test_fft_shift_odd_uses_floor_split():
    img = ComplexImage(5, 3)
    img.set_at(0, 0, 1.0)
    img.fft_shift()
    assert img.at(2, 1) == 1.0
    img.ifft_shift()
    assert img.at(0, 0) == 1.0
    assert np.count_nonzero(img.data) == 1


def test_copy_is_independent_and_keeps_type():
    img = FrequencyImage(2, 2)
    dup = img.copy()
    dup.set_at(0, 0, 9)
    assert img.at(0, 0) == 0
    assert type(dup) is FrequencyImage
    assert dup.domain is Domain.FREQUENCY
    assert SpatialImage(1, 1).domain is Domain.SPATIAL
    assert ComplexImage(1, 1).domain is None


def test_equality():
    a = ComplexImage.from_array(np.eye(3))
    b = ComplexImage.from_array(np.eye(3))
    assert a == b
    b.set_at(0, 0, 0)
    assert a != b
    assert ComplexImage(2, 3) != ComplexImage(3, 2)
