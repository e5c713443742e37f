"""Exception taxonomy for reactive_model.

Validation failures are data, not exceptions: they are reported through
``get_errors()`` and the errors-changed stream and never raised.

The exceptions below are programmer errors. They are never caught inside
the package and propagate to the caller unchanged.
"""

from __future__ import annotations


class ReactiveModelError(Exception):
    """Base class for all reactive_model exceptions."""


class ConfigurationError(ReactiveModelError):
    """A model type is wired incorrectly.

    Raised for rules bound to a property the type does not have, for a
    broken ``create_default``/``load`` contract, and for unknown property
    names when strict property checking is enabled.
    """


class ObjectDisposedError(ReactiveModelError):
    """An object was used after ``dispose()``."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Cannot access a disposed object: {type_name}")
        self.type_name = type_name


__all__ = [
    "ConfigurationError",
    "ObjectDisposedError",
    "ReactiveModelError",
]
