from typing import Sequence

from PIL import Image, ImageDraw

from asciigrid.colours import RGBA
from asciigrid.glyphs import GlyphSet


def new_canvas(size: tuple[int, int], background: RGBA) -> Image.Image:
    return Image.new("RGBA", size, background)


def draw_glyph(
    draw: ImageDraw.ImageDraw, glyphs: GlyphSet, char: str, x: int, y: int, cell_width: int, cell_height: int
) -> None:
    """Mark the coverage of `char` with its top-left at the pixel offset of cell (x, y).

    Glyphs larger than the cell spill into neighbouring cells; anything past
    the canvas edge is clipped.
    """
    mask = glyphs.mask(char)
    if mask is not None:
        draw.bitmap((x * cell_width, y * cell_height), mask, fill=255)


def render(
    rows: Sequence[str],
    size: tuple[int, int],
    cell_width: int,
    cell_height: int,
    background: RGBA,
    ink: RGBA,
    glyphs: GlyphSet | None = None,
) -> Image.Image:
    """Draw a character grid onto a fresh RGBA canvas of `size`.

    The canvas always spans `size` (the whole source image), even when the
    grid only covers part of it. Cells are drawn row by row, left to right,
    so overlapping glyphs resolve the same way every time.

    Ink is composited over the background, so a translucent or fully
    transparent ink leaves the background showing through.
    """
    # Fresh per call: nothing is shared between conversions
    glyphs = glyphs or GlyphSet()
    coverage = Image.new("L", size, 0)
    draw = ImageDraw.Draw(coverage)
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            draw_glyph(draw, glyphs, char, x, y, cell_width, cell_height)

    ink_layer = Image.new("RGBA", size, ink)
    ink_layer.putalpha(coverage.point(lambda v: v * ink[3] // 255))
    return Image.alpha_composite(new_canvas(size, background), ink_layer)
