"""Configuration loading from environment variables and jsondb.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "jsondb.toml"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class StorageConfig:
    """Where databases are created and how their files are written."""

    directory: Path | None = None  # None means the current directory
    pretty: bool = True


@dataclass
class JsonDbConfig:
    """Top-level jsondb configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "WARNING"


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Not a boolean: {value!r}")


def load_config(config_path: Path | None = None) -> JsonDbConfig:
    """Load configuration from environment variables and optional jsondb.toml.

    Priority: environment variables > jsondb.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.jsondb/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".jsondb" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    storage_data = file_data.get("storage", {})

    directory = os.getenv("JSONDB_DIRECTORY", storage_data.get("directory"))
    config = JsonDbConfig(
        storage=StorageConfig(
            directory=Path(directory).expanduser() if directory else None,
            pretty=_parse_bool(os.getenv("JSONDB_PRETTY", storage_data.get("pretty", True))),
        ),
        log_level=os.getenv("JSONDB_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
    return config
