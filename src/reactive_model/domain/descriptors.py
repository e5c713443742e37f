"""ErrorDescriptor — one validation failure.

Rules may return plain strings or ErrorDescriptor instances. Either way
the value must compare by value: the validation engine diffs successive
error tuples with ``==`` to decide whether to announce a change.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

type ErrorValue = Any


class ErrorDescriptor(BaseModel):
    """Structured validation failure.

    ``str()`` yields the message so descriptors join like plain strings.
    """

    model_config = {"frozen": True}

    message: str
    code: str | None = None

    def __str__(self) -> str:
        return self.message


def normalize_errors(result: Any) -> tuple[ErrorValue, ...]:
    """Coerce a rule's return value into a tuple of descriptors.

    ``None`` means no errors; a lone string or ErrorDescriptor is one error;
    any other iterable is taken element by element.
    """
    if result is None:
        return ()
    if isinstance(result, (str, ErrorDescriptor)):
        return (result,)
    return tuple(result)


def join_errors(errors: tuple[ErrorValue, ...], separator: str) -> str:
    """Join descriptors into a single message."""
    return separator.join(str(e) for e in errors)
