"""Subject — synchronous broadcast channel with explicit unsubscription.

Each subscriber sees only values published after it subscribed.
Delivery iterates over a snapshot of the subscriber list, so a callback
may unsubscribe itself (or others) without disturbing the current
delivery. Exceptions raised by a callback propagate to the publisher.
"""

from __future__ import annotations

from collections.abc import Callable

from reactive_model.observable.disposable import Disposable


class Subscription(Disposable):
    """Handle returned by :meth:`Subject.subscribe`."""

    def __init__(self, subject: Subject, callback: Callable[..., None]) -> None:
        self._subject = subject
        self._callback = callback

    @property
    def callback(self) -> Callable[..., None]:
        return self._callback

    def unsubscribe(self) -> None:
        self.dispose()

    def _dispose_managed(self) -> None:
        self._subject._remove(self)


class Subject[T](Disposable):
    """Broadcast subject.

    Parameters:
        name: Label used in diagnostics and ``repr``.
    """

    def __init__(self, name: str = "subject") -> None:
        self._name = name
        self._subscriptions: list[Subscription] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register *callback*; dispose the returned handle to stop receiving."""
        self._throw_if_disposed()
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, value: T) -> None:
        """Deliver *value* to every current subscriber, in subscription order."""
        self._throw_if_disposed()
        for subscription in list(self._subscriptions):
            if subscription.is_disposed:
                continue
            subscription.callback(value)

    def __repr__(self) -> str:
        return f"Subject({self._name!r}, subscribers={len(self._subscriptions)})"

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass  # already released by dispose()

    def _dispose_managed(self) -> None:
        for subscription in list(self._subscriptions):
            subscription._disposed = True
        self._subscriptions.clear()
