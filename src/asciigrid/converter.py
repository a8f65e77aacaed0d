import base64
import io
from dataclasses import dataclass
from typing import BinaryIO, Sequence

from loguru import logger
from PIL import Image, UnidentifiedImageError

from asciigrid.canvas import render
from asciigrid.colours import COLOURS, RGBA
from asciigrid.errors import DecodeError
from asciigrid.glyphs import GlyphSet
from asciigrid.palette import char_for_brightness, check_palette
from asciigrid.sampling import check_cell_size, sample
from asciigrid.sources import Source, as_stream


@dataclass(frozen=True)
class Conversion:
    ascii: str
    image: Image.Image | None = None


def decode(stream: BinaryIO) -> Image.Image:
    """Decode an image fully into memory."""
    try:
        image = Image.open(stream)
        image.load()
    except UnidentifiedImageError as e:
        raise DecodeError(str(e)) from e
    except (OSError, SyntaxError, EOFError, Image.DecompressionBombError) as e:
        # Pillow reports truncated or corrupt data in several ways
        raise DecodeError(str(e)) from e
    return image


def grid_rows(image: Image.Image, palette: Sequence[str], cell_width: int, cell_height: int) -> list[str]:
    """Map every whole cell of `image` to a palette character, one string per row."""
    rows: list[list[str]] = []
    for cell in sample(image, cell_width, cell_height):
        if cell.x == 0:
            rows.append([])
        rows[-1].append(char_for_brightness(palette, cell.brightness))
    return ["".join(row) for row in rows]


def format_rows(rows: Sequence[str]) -> str:
    """Join rows with a newline after each.

    A grid with no rows or no columns gives "" rather than a run of blank
    lines, so "one line per row of cells" only holds for non-empty grids.
    """
    return "".join(row + "\n" for row in rows)


def convert(
    source: Source,
    palette: Sequence[str],
    cell_width: int,
    cell_height: int,
    want_image: bool = False,
    background: RGBA = COLOURS["black"],
    ink: RGBA = COLOURS["gray"],
    glyphs: GlyphSet | None = None,
) -> Conversion:
    """Convert an image to ASCII art, optionally rendering the art as an image too.

    Palette and cell size are checked before the source is read. An open
    stream passed as `source` is closed before returning, whether or not
    conversion succeeds.
    """
    stream = source if hasattr(source, "read") else None
    try:
        check_palette(palette)
        check_cell_size(cell_width, cell_height)
        if stream is None:
            stream = as_stream(source)
        with decode(stream) as image:
            logger.debug(
                "Decoded {} image {}x{}, cells {}x{}", image.format, image.width, image.height, cell_width, cell_height
            )
            rows = grid_rows(image, palette, cell_width, cell_height)
            rendered = None
            if want_image:
                rendered = render(rows, image.size, cell_width, cell_height, background, ink, glyphs)
    finally:
        if stream is not None:
            stream.close()
    return Conversion(ascii=format_rows(rows), image=rendered)


def image_to_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def png_data_uri(image: Image.Image) -> str:
    return "data:image/png;base64," + base64.b64encode(image_to_png(image)).decode("ascii")
