"""Observable properties declared in a class body.

Usage::

    class Person(EditableModel):
        name = observable("")
        tags = observable(default_factory=list)

Writes go through the owner's ``_notifier`` (a ChangeNotifier), which
suppresses no-op writes and announces real ones. Writes made before the
owner has a notifier (e.g. before ``super().__init__()``) are stored
silently.

Unhashable defaults (lists, dicts, sets) are rejected the way
``dataclasses.field`` rejects them; use ``default_factory`` instead.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, overload

_MISSING: Any = object()


class observable:  # noqa: N801
    """Data descriptor backed by the instance ``__dict__``."""

    def __init__(
        self,
        default: Any = _MISSING,
        *,
        default_factory: Callable[[], Any] | None = None,
    ) -> None:
        if default is not _MISSING and default_factory is not None:
            raise TypeError("observable() takes a default or a default_factory, not both")
        if default is not _MISSING and type(default).__hash__ is None:
            msg = (
                f"mutable default {type(default).__name__} for observable() is not allowed: "
                "use default_factory"
            )
            raise ValueError(msg)
        self._default = None if default is _MISSING else default
        self._default_factory = default_factory
        self._name = ""

    @property
    def name(self) -> str:
        return self._name

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    @overload
    def __get__(self, instance: None, owner: type) -> observable: ...

    @overload
    def __get__(self, instance: object, owner: type) -> Any: ...

    def __get__(self, instance: object | None, owner: type) -> Any:
        if instance is None:
            return self
        values = instance.__dict__
        if self._name not in values:
            values[self._name] = self._make_default()
        return values[self._name]

    def __set__(self, instance: object, value: Any) -> None:
        values = instance.__dict__
        notifier = values.get("_notifier")
        if notifier is None:
            values[self._name] = value
            return
        current = self.__get__(instance, type(instance))
        notifier.assign(self._name, current, value, lambda v: values.__setitem__(self._name, v))

    def _make_default(self) -> Any:
        if self._default_factory is not None:
            return self._default_factory()
        return self._default


def observable_properties(cls: type) -> tuple[str, ...]:
    """Names of the observable properties of *cls*, base classes first."""
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            if isinstance(attr, observable):
                names[attr_name] = None
    return tuple(names)
