"""Locating and parsing reactive_model.toml.

The file is found by walking up from a start directory, the way git finds
``.git/``. ``REACTIVE_MODEL_CONFIG`` names a file explicitly and turns
discovery off; pointing it at a missing file is a configuration error.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from reactive_model.errors import ConfigurationError

CONFIG_FILENAME = "reactive_model.toml"
CONFIG_ENV_VAR = "REACTIVE_MODEL_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    current = start.resolve()
    yield current
    yield from current.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            msg = f"{CONFIG_ENV_VAR} points to {path}, which is not a file"
            raise ConfigurationError(msg)
        return path

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML, raising ConfigurationError on bad syntax."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc
