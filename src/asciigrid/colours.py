from types import MappingProxyType
from typing import Mapping

RGBA = tuple[int, int, int, int]

TRANSPARENT: RGBA = (0, 0, 0, 0)

COLOURS: Mapping[str, RGBA] = MappingProxyType(
    {
        "black": (0, 0, 0, 255),
        "gray": (140, 140, 140, 255),
        "red": (255, 0, 0, 255),
        "green": (0, 128, 0, 255),
        "blue": (0, 0, 255, 255),
    }
)


def resolve_colour(name: str | None, table: Mapping[str, RGBA] = COLOURS) -> RGBA:
    """Look up a colour by name; unknown or missing names give TRANSPARENT."""
    if name is None:
        return TRANSPARENT
    return table.get(name.strip().lower(), TRANSPARENT)
