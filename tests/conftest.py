import io

import pytest
from PIL import Image


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def split_image(width: int, height: int, split_x: int, left=(0, 0, 0), right=(255, 255, 255)) -> Image.Image:
    """Image whose columns left of `split_x` are `left` and the rest `right`."""
    img = Image.new("RGB", (width, height), right)
    img.paste(left, (0, 0, split_x, height))
    return img


class TrackingStream(io.BytesIO):
    """BytesIO that records whether anyone read from it."""

    def __init__(self, data: bytes = b""):
        super().__init__(data)
        self.was_read = False

    def read(self, *args):
        self.was_read = True
        return super().read(*args)

    def readinto(self, *args):
        self.was_read = True
        return super().readinto(*args)


@pytest.fixture
def black_png():
    return png_bytes(Image.new("RGB", (20, 20), (0, 0, 0)))


@pytest.fixture
def white_png():
    return png_bytes(Image.new("RGB", (20, 20), (255, 255, 255)))
