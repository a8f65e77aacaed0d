class AsciiGridError(Exception):
    """Base class for every failure reported by asciigrid."""


class ConfigurationError(AsciiGridError, ValueError):
    """Bad caller input: empty palette, missing cell size, unparseable fields."""


class SourceUnavailableError(AsciiGridError):
    """The source image could not be opened or fetched."""


class DecodeError(AsciiGridError):
    """The source bytes are not a decodable image."""


def error_message(exc: BaseException) -> str:
    """Text for reporting `exc` to a user, never empty."""
    message = str(exc).strip()
    return message or type(exc).__name__
