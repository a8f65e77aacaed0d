from typing import Sequence

from asciigrid.errors import ConfigurationError


def split_palette(characters: str) -> list[str]:
    """Split a palette string into single characters, keeping order and duplicates."""
    return list(characters)


def check_palette(palette: Sequence[str]) -> None:
    if len(palette) == 0:
        raise ConfigurationError("no characters provided")


def char_index(length: int, brightness: float) -> int:
    """Quantize brightness in [0, 255] to a bucket in [0, length)."""
    index = int(brightness * length) >> 8
    if index >= length:
        index = length - 1
    return index


def char_for_brightness(palette: Sequence[str], brightness: float) -> str:
    """Pick the palette character for a cell of the given brightness.

    Brighter cells select characters nearer the start of the palette:
    brightness 0 gives the last character, 255 gives the first.
    """
    index = char_index(len(palette), brightness)
    return palette[len(palette) - index - 1]
