"""ChangeNotifier — property change notification by composition.

A model holds a ChangeNotifier instead of inheriting one. The notifier
owns two streams (``when_property_changing`` and ``when_property_changed``)
and calls optional hooks around every change:

1. ``on_changing(name)`` hook, then the changing stream
2. the new value is stored
3. the changed stream, then the ``on_changed(name)`` hook

Public subscribers therefore observe a change before the owner reacts to
it in the after-change hook. A ``None`` property name means "the whole
object changed".
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from reactive_model.observable.disposable import Disposable
from reactive_model.observable.subject import Subject

logger = logging.getLogger(__name__)

type ChangeHook = Callable[[str | None], None]


class ChangeNotifier(Disposable):
    """Observable "property changed" emission with equality suppression.

    Parameters:
        on_changing: Called before a value is stored.
        on_changed: Called after subscribers saw the change.
        on_dispose: Called once when the notifier is disposed.
    """

    def __init__(
        self,
        *,
        on_changing: ChangeHook | None = None,
        on_changed: ChangeHook | None = None,
        on_dispose: Callable[[], None] | None = None,
    ) -> None:
        self._on_changing = on_changing
        self._on_changed = on_changed
        self._on_dispose = on_dispose
        self._changing: Subject[str | None] = Subject("property_changing")
        self._changed: Subject[str | None] = Subject("property_changed")

    @property
    def when_property_changing(self) -> Subject[str | None]:
        self._throw_if_disposed()
        return self._changing

    @property
    def when_property_changed(self) -> Subject[str | None]:
        self._throw_if_disposed()
        return self._changed

    def assign(
        self,
        name: str,
        current: Any,
        value: Any,
        store: Callable[[Any], None],
    ) -> bool:
        """Store *value* via *store* and announce it, unless it equals *current*.

        Returns True if the value changed.
        """
        self._throw_if_disposed()
        if current is value or current == value:
            return False

        if self._on_changing is not None:
            self._on_changing(name)
        self._changing.publish(name)

        store(value)

        self._changed.publish(name)
        if self._on_changed is not None:
            self._on_changed(name)
        return True

    def notify_changed(self, name: str | None = None) -> None:
        """Announce a change made outside :meth:`assign`.

        An empty or missing *name* announces a whole-object change.
        """
        self._throw_if_disposed()
        name = name or None
        self._changed.publish(name)
        if self._on_changed is not None:
            self._on_changed(name)

    def publish_changed(self, name: str) -> None:
        """Announce *name* on the changed stream without running hooks.

        Used for derived properties that the owner recomputes itself.
        """
        self._throw_if_disposed()
        self._changed.publish(name)

    def _dispose_managed(self) -> None:
        self._changing.dispose()
        self._changed.dispose()
        if self._on_dispose is not None:
            self._on_dispose()
        logger.debug("Disposed change notifier")
