from pathlib import Path

from loguru import logger
from PIL import Image, ImageDraw, ImageFont

Font = ImageFont.ImageFont | ImageFont.FreeTypeFont


class GlyphSet:
    """Monospace glyph masks drawn from a Pillow font, cached per character.

    Defaults to Pillow's built-in bitmap font, so no font files are needed.
    """

    def __init__(self, font: Font | None = None):
        self.font = font if font is not None else ImageFont.load_default_imagefont()
        bbox = self.font.getbbox("M")
        self.glyph_width = int(bbox[2])
        self.glyph_height = int(bbox[3])
        self._masks: dict[str, Image.Image | None] = {}

    @classmethod
    def load(cls, path: str | Path, size: int = 13) -> "GlyphSet":
        """Load a .pil bitmap font, or any TrueType/OpenType font at `size` pixels."""
        path = Path(path)
        if path.suffix == ".pil":
            return cls(ImageFont.load(str(path)))
        return cls(ImageFont.truetype(str(path), size))

    @property
    def glyph_size(self) -> tuple[int, int]:
        return self.glyph_width, self.glyph_height

    def mask(self, char: str) -> Image.Image | None:
        """Coverage mask for `char` with its top-left at the origin, or None if blank."""
        if char not in self._masks:
            self._masks[char] = self._render(char)
        return self._masks[char]

    def _render(self, char: str) -> Image.Image | None:
        try:
            bbox = self.font.getbbox(char)
        except UnicodeEncodeError:
            # Bitmap fonts only cover latin-1
            logger.debug("No glyph for {!r}, leaving it blank", char)
            return None
        width, height = int(bbox[2]), int(bbox[3])
        if width <= 0 or height <= 0:
            return None
        img = Image.new("L", (width, height), 0)
        draw = ImageDraw.Draw(img)
        draw.text((0, 0), char, fill=255, font=self.font)
        if img.getbbox() is None:
            return None
        return img
