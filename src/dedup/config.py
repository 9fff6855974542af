"""Load the optional dedup YAML configuration."""

import os
from pathlib import Path

import yaml

from dedup.errors import ConfigError
from dedup.intake.hasher import CHUNK_SIZE

CONFIG_PATH = Path(
    os.environ.get(
        "DEDUP_CONFIG",
        str(Path("~/.config/dedup/config.yaml").expanduser()),
    )
)

DEFAULTS = {
    "chunk_size": CHUNK_SIZE,
    "sort_output": True,
    "exclude": [],
    "verbose": False,
}


def _validate(data: dict, path: Path) -> dict:
    bad_keys = [key for key in data if not isinstance(key, str)]
    if bad_keys:
        raise ConfigError(
            f"config keys in {path} must be strings, got {', '.join(map(repr, bad_keys))}",
            str(path),
        )

    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise ConfigError(f"unknown config keys in {path}: {', '.join(unknown)}", str(path))

    chunk_size = data.get("chunk_size", DEFAULTS["chunk_size"])
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ConfigError(f"chunk_size must be a positive integer, got {chunk_size!r}", str(path))

    for key in ("sort_output", "verbose"):
        if key in data and not isinstance(data[key], bool):
            raise ConfigError(f"{key} must be true or false, got {data[key]!r}", str(path))

    exclude = data.get("exclude", [])
    if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
        raise ConfigError("exclude must be a list of glob patterns", str(path))

    return data


def load_config(path: Path | None = None, explicit: bool = False) -> dict:
    """Load the config file and merge it over the defaults.

    A missing file is fine unless it was asked for explicitly (--config).
    """
    path = Path(path) if path else CONFIG_PATH
    config = {**DEFAULTS, "exclude": list(DEFAULTS["exclude"])}

    if not path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {path}", str(path))
        return config

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e.strerror or e}", str(path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}", str(path)) from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must be a mapping", str(path))

    config.update(_validate(data, path))
    return config
