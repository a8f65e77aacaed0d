import numpy as np
import pytest
from PIL import Image

from asciigrid.errors import ConfigurationError
from asciigrid.sampling import Cell, brightness_grid, grid_shape, sample
from tests.conftest import split_image


def test_solid_colour_brightness_is_channel_mean():
    img = Image.new("RGB", (30, 20), (30, 60, 90))
    grid = brightness_grid(img, 10, 10)
    assert grid.shape == (2, 3)
    np.testing.assert_allclose(grid, 60.0)


def test_black_and_white_extremes():
    assert brightness_grid(Image.new("RGB", (10, 10), (0, 0, 0)), 5, 5).max() == 0.0
    assert brightness_grid(Image.new("RGB", (10, 10), (255, 255, 255)), 5, 5).min() == 255.0


def test_cells_average_their_own_pixels():
    img = split_image(20, 10, split_x=10)
    grid = brightness_grid(img, 10, 10)
    np.testing.assert_array_equal(grid, [[0.0, 255.0]])


def test_half_filled_cell_averages():
    img = split_image(10, 10, split_x=5)
    grid = brightness_grid(img, 10, 10)
    assert grid[0, 0] == pytest.approx(127.5)


def test_remainder_strips_are_excluded():
    # Bright remainder column and row must not leak into the only whole cell
    img = Image.new("RGB", (15, 13), (255, 255, 255))
    img.paste((0, 0, 0), (0, 0, 10, 10))
    grid = brightness_grid(img, 10, 10)
    assert grid.shape == (1, 1)
    assert grid[0, 0] == 0.0


def test_alpha_is_ignored():
    img = Image.new("RGBA", (10, 10), (255, 255, 255, 0))
    assert brightness_grid(img, 10, 10)[0, 0] == 255.0


def test_greyscale_images_are_accepted():
    img = Image.new("L", (10, 10), 200)
    assert brightness_grid(img, 5, 5)[0, 0] == pytest.approx(200.0)


def test_image_smaller_than_cell_gives_empty_grid():
    img = Image.new("RGB", (5, 50), (10, 10, 10))
    grid = brightness_grid(img, 10, 10)
    assert grid.shape == (5, 0)
    assert list(sample(img, 10, 10)) == []


def test_grid_shape():
    assert grid_shape((57, 43), 10, 10) == (4, 5)
    assert grid_shape((9, 9), 10, 10) == (0, 0)


def test_sample_is_row_major():
    img = Image.new("RGB", (30, 20), (0, 0, 0))
    cells = list(sample(img, 10, 10))
    assert [(c.x, c.y) for c in cells] == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1)]
    assert all(isinstance(c, Cell) for c in cells)


def test_sample_is_lazy_and_reinvokable():
    img = split_image(20, 10, split_x=10)
    first = sample(img, 10, 10)
    assert next(first) == Cell(0, 0, 0.0)
    assert list(sample(img, 10, 10)) == [Cell(0, 0, 0.0), Cell(1, 0, 255.0)]


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-1, 10)])
def test_non_positive_cell_size_rejected(size):
    img = Image.new("RGB", (10, 10))
    with pytest.raises(ConfigurationError):
        brightness_grid(img, *size)
    with pytest.raises(ConfigurationError):
        next(sample(img, *size))


def _sixteen_bit_png(tmp_path, value):
    path = tmp_path / "grey16.png"
    Image.new("I;16", (10, 10), value).save(path)
    return path


def test_sixteen_bit_png_is_shifted_not_clipped(tmp_path):
    path = _sixteen_bit_png(tmp_path, 0x8080)
    with Image.open(path) as img:
        assert brightness_grid(img, 10, 10)[0, 0] == 128.0


def test_sixteen_bit_full_range(tmp_path):
    with Image.open(_sixteen_bit_png(tmp_path, 0xFFFF)) as img:
        assert brightness_grid(img, 5, 5).min() == 255.0
    with Image.open(_sixteen_bit_png(tmp_path, 0x00FF)) as img:
        assert brightness_grid(img, 5, 5).max() == 0.0


def test_thirty_two_bit_greyscale_is_treated_as_sixteen_bit():
    img = Image.new("I", (10, 10), 0x4000)
    assert brightness_grid(img, 10, 10)[0, 0] == 64.0
