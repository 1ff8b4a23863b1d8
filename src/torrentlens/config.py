"""
Runtime settings: defaults, overridden by TORRENTLENS_* environment
variables, overridden by command line flags.
"""
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional

from .exceptions import ConfigurationError

ENV_PREFIX = "TORRENTLENS_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 3000
    storage_dir: Path = Path("/tmp")
    max_upload_size: int = 10 * 1024 * 1024
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ConfigurationError("port out of range", {"port": self.port})
        if self.max_upload_size <= 0:
            raise ConfigurationError("max_upload_size must be positive", {"max_upload_size": self.max_upload_size})
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError("unknown log level", {"log_level": self.log_level})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        values = {}
        for field in fields(cls):
            raw = environ.get(ENV_PREFIX + field.name.upper())
            if raw is not None:
                values[field.name] = _convert(field.name, raw)
        return cls(**values)

    def override(self, **values) -> "Settings":
        """Returns a copy with every non-None value applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})


def _convert(name: str, raw: str):
    if name in ("port", "max_upload_size"):
        try:
            return int(raw)
        except ValueError as exc:
            raise ConfigurationError(f"{ENV_PREFIX}{name.upper()} must be an integer", {"value": raw}) from exc
    if name in ("storage_dir", "log_file"):
        return Path(raw)
    return raw
