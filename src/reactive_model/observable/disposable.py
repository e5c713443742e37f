"""Disposable — idempotent, fail-fast resource lifecycle."""

from __future__ import annotations

from types import TracebackType
from typing import Self

from reactive_model.errors import ObjectDisposedError


class Disposable:
    """Base for objects that own subscriptions or other releasable state.

    ``dispose()`` runs :meth:`_dispose_managed` once; later calls are
    no-ops. Subclasses call :meth:`_throw_if_disposed` at the top of every
    public operation so misuse after disposal surfaces immediately.
    """

    _disposed: bool = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._dispose_managed()

    def _dispose_managed(self) -> None:
        """Release owned resources. Called at most once."""

    def _throw_if_disposed(self) -> None:
        if self._disposed:
            raise ObjectDisposedError(type(self).__name__)

    def __enter__(self) -> Self:
        self._throw_if_disposed()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()
