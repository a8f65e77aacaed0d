import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from asciigrid.colours import COLOURS, RGBA
from asciigrid.errors import ConfigurationError
from asciigrid.sources import DEFAULT_TIMEOUT

DEFAULT_BIND = "127.0.0.1:8080"


def parse_bind(bind: str) -> tuple[str, int]:
    """Split "host:port" (or ":port") into its parts."""
    host, sep, port = bind.rpartition(":")
    if not sep or not port.isdigit():
        raise ConfigurationError(f"Invalid bind address: {bind!r}")
    return host or "0.0.0.0", int(port)


class ServerConfig(BaseModel):
    """Settings for the HTTP server."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default="127.0.0.1", description="Interface to listen on.")
    port: int = Field(default=8080, ge=1, le=65535, description="TCP port to listen on.")
    fetch_timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0.0, description="Seconds to wait when fetching an image by URL."
    )
    # Must stay deep-copyable, Litestar copies app state
    colours: Mapping[str, RGBA] = Field(
        default_factory=lambda: dict(COLOURS), description="Colour names accepted for bg and pen."
    )

    @classmethod
    def from_env(cls, bind: str = DEFAULT_BIND, **overrides) -> "ServerConfig":
        """Build from a bind address; a PORT environment variable wins over it."""
        port_env = os.environ.get("PORT")
        if port_env:
            bind = f":{port_env}"
        host, port = parse_bind(bind)
        return cls(host=host, port=port, **overrides)
