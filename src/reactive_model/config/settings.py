"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs   — explicit overrides passed by the application
  2. Env vars      — ``REACTIVE_MODEL_*`` prefix, ``__`` for nesting
  3. TOML file     — ``reactive_model.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Models read the process-wide settings once, at construction. Use
:func:`configure` to install settings built by the application and
:func:`reset_settings` to drop the cached instance (tests).
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from reactive_model.config.discovery import find_config, read_toml
from reactive_model.config.models import EditingConfig, LoggingConfig, ValidationConfig
from reactive_model.errors import ConfigurationError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``reactive_model.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ReactiveModelSettings(BaseSettings):
    """Unified settings for reactive_model.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REACTIVE_MODEL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    editing: EditingConfig = Field(default_factory=EditingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> ReactiveModelSettings:
        """Construct settings, discovering ``reactive_model.toml`` when needed.

        An explicit *config_path* wins over walk-up discovery from *start*
        and must name an existing file.
        *overrides* are applied as highest-priority init kwargs.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file {toml_path} does not exist"
                raise ConfigurationError(msg)
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None


_settings: ReactiveModelSettings | None = None


def get_settings() -> ReactiveModelSettings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = ReactiveModelSettings.load()
    return _settings


def configure(settings: ReactiveModelSettings) -> None:
    """Install *settings* as the process-wide settings."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Forget the cached settings so the next access reloads them."""
    global _settings
    _settings = None
