from typing import Iterator, NamedTuple

import numpy as np
from PIL import Image

from asciigrid.errors import ConfigurationError


class Cell(NamedTuple):
    x: int
    y: int
    brightness: float


def check_cell_size(cell_width: int, cell_height: int) -> None:
    if cell_width <= 0 or cell_height <= 0:
        raise ConfigurationError("cell width and height are required dimensions")


def grid_shape(size: tuple[int, int], cell_width: int, cell_height: int) -> tuple[int, int]:
    """Return (rows, cols) of whole cells that fit in an image of `size`."""
    width, height = size
    return height // cell_height, width // cell_width


def rgb_channels(image: Image.Image) -> np.ndarray:
    """8-bit channels as an int64 array of shape (height, width, 3).

    16-bit and 32-bit greyscale modes are taken as 16-bit samples and reduced
    with `>> 8`; Pillow's own conversion to RGB would clip them instead.
    """
    if image.mode == "I" or image.mode.startswith("I;16"):
        grey = np.clip(np.asarray(image, dtype=np.int64), 0, 0xFFFF) >> 8
        return np.repeat(grey[:, :, np.newaxis], 3, axis=2)
    return np.asarray(image.convert("RGB"), dtype=np.int64)


def brightness_grid(image: Image.Image, cell_width: int, cell_height: int) -> np.ndarray:
    """Mean brightness of every whole cell. Returns array of shape (rows, cols).

    Brightness of a pixel is (R + G + B) / 3 on 8-bit channels; alpha is
    ignored. The right and bottom strips that don't fill a whole cell are
    left out.
    """
    check_cell_size(cell_width, cell_height)
    rows, cols = grid_shape(image.size, cell_width, cell_height)
    if rows == 0 or cols == 0:
        return np.zeros((rows, cols))

    arr = rgb_channels(image)

    # Trim to exact grid and reshape into (rows, cell_h, cols, cell_w, 3)
    trimmed = arr[: rows * cell_height, : cols * cell_width]
    cells = trimmed.reshape(rows, cell_height, cols, cell_width, 3)

    # Integer sums keep the result exact; divide once at the end
    totals = cells.sum(axis=(1, 3, 4))
    return totals / (3 * cell_width * cell_height)


def sample(image: Image.Image, cell_width: int, cell_height: int) -> Iterator[Cell]:
    """Yield one Cell per grid position, row by row, left to right."""
    check_cell_size(cell_width, cell_height)
    grid = brightness_grid(image, cell_width, cell_height)
    rows, cols = grid.shape
    for y in range(rows):
        for x in range(cols):
            yield Cell(x, y, float(grid[y, x]))
