from asciigrid.converter import Conversion, convert
from asciigrid.errors import AsciiGridError, ConfigurationError, DecodeError, SourceUnavailableError

__all__ = [
    "AsciiGridError",
    "ConfigurationError",
    "Conversion",
    "DecodeError",
    "SourceUnavailableError",
    "convert",
]
