"""Server configuration, from defaults and DYNCRUD_* environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7777

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


@dataclass
class ServerConfig:
    """
    Configuration for the dyncrud application.

    Groups all initialization options into a single object for cleaner APIs.
    """

    # Network
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # Logging
    log_dir: Path = field(default_factory=lambda: Path(".dyncrud/logs"))
    log_level: str = "INFO"

    # Reject malformed schemas at upload instead of at the first write
    strict_schemas: bool = False

    # API metadata
    title: str = "Dynamic CRUD API"
    version: str = "1.0.0"
    description: str = (
        "A service that creates dynamic CRUD APIs from user-uploaded JSON schemas."
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """
        Build a config from DYNCRUD_* environment variables.

        Recognised: DYNCRUD_HOST, DYNCRUD_PORT, DYNCRUD_LOG_DIR,
        DYNCRUD_LOG_LEVEL, DYNCRUD_STRICT_SCHEMAS.

        Raises:
            ValueError: If a variable holds an unusable value
        """
        env = os.environ if environ is None else environ
        config = cls()

        if host := env.get("DYNCRUD_HOST"):
            config.host = host
        if (port := env.get("DYNCRUD_PORT")) is not None:
            try:
                config.port = int(port)
            except ValueError:
                raise ValueError(f"DYNCRUD_PORT must be an integer (got {port!r})") from None
            if not 0 < config.port < 65536:
                raise ValueError(f"DYNCRUD_PORT out of range: {config.port}")
        if log_dir := env.get("DYNCRUD_LOG_DIR"):
            config.log_dir = Path(log_dir)
        if log_level := env.get("DYNCRUD_LOG_LEVEL"):
            config.log_level = log_level.upper()
        if (strict := env.get("DYNCRUD_STRICT_SCHEMAS")) is not None:
            config.strict_schemas = _parse_bool("DYNCRUD_STRICT_SCHEMAS", strict)

        return config
