"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, reactive_model.toml only
contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    # Raise ConfigurationError for unknown property names instead of
    # logging a warning and answering "no errors".
    strict_property_names: bool = False
    error_separator: str = ". "


class EditingConfig(BaseModel):
    """[editing] section."""

    model_config = {"frozen": True}

    dispose_snapshots: bool = True


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False

