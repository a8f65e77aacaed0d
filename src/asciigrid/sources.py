import io
from pathlib import Path
from typing import BinaryIO

import requests
from loguru import logger

from asciigrid.errors import ConfigurationError, SourceUnavailableError

Source = BinaryIO | bytes | str | Path

DEFAULT_TIMEOUT = 10.0


def open_path(path: str | Path) -> BinaryIO:
    try:
        return Path(path).open("rb")
    except OSError as e:
        raise SourceUnavailableError(f"Cannot open {path}: {e.strerror or e}") from e


def fetch_url(url: str, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT) -> BinaryIO:
    """Download an image into memory. Blocking, single attempt."""
    logger.debug("Fetching {}", url)
    getter = session or requests
    try:
        response = getter.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceUnavailableError(f"Cannot fetch {url}: {e}") from e
    return io.BytesIO(response.content)


def open_source(
    path: str | Path | None = None,
    url: str | None = None,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> BinaryIO:
    """Open a local path if given, otherwise fetch `url`."""
    if path:
        return open_path(path)
    if url:
        return fetch_url(url, session=session, timeout=timeout)
    raise ConfigurationError("an image path or url is required")


def as_stream(source: Source) -> BinaryIO:
    if isinstance(source, bytes):
        return io.BytesIO(source)
    if isinstance(source, (str, Path)):
        return open_path(source)
    return source
