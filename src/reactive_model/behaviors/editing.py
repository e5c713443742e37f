"""EditSession — begin/cancel/end editing over a cloneable object.

``begin_edit`` snapshots the owner into ``original`` with a deep clone,
``cancel_edit`` loads the owner back from that snapshot, and
``end_edit`` accepts the live state by dropping the snapshot.

The snapshot is taken once per session: calling ``begin_edit`` again while
editing keeps the first snapshot. The owner's identity never changes;
``cancel_edit`` overwrites its fields through ``load``, so the rollback is
observed as ordinary property writes.

Failures inside ``create_default`` or ``load`` are configuration errors
and propagate to the caller untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol, Self, runtime_checkable

import structlog

from reactive_model.config.models import EditingConfig
from reactive_model.config.settings import get_settings
from reactive_model.domain.lifecycle import EditState, is_valid_transition
from reactive_model.errors import ConfigurationError
from reactive_model.observable.disposable import Disposable
from reactive_model.observable.subject import Subject

log = structlog.get_logger(__name__)


@runtime_checkable
class Cloneable(Protocol):
    """Capability required by EditSession.

    ``create_default`` produces a fresh instance of the same type and
    ``load`` overwrites the receiver's state, field by field, from another
    instance of that type. Mutable fields must be deep-copied.
    """

    @classmethod
    def create_default(cls) -> Self: ...

    def load(self, other: Self) -> None: ...


def clone_of[T: Cloneable](obj: T) -> T:
    """Return an independent copy of *obj* via ``create_default`` + ``load``."""
    copy = type(obj).create_default()
    if copy is obj:
        msg = f"{type(obj).__name__}.create_default() returned the original instance"
        raise ConfigurationError(msg)
    if type(copy) is not type(obj):
        msg = (
            f"{type(obj).__name__}.create_default() returned "
            f"{type(copy).__name__}, expected {type(obj).__name__}"
        )
        raise ConfigurationError(msg)
    copy.load(obj)
    return copy


class EditSession(Disposable):
    """Transactional editing state for one owner.

    Parameters:
        owner: The object being edited.
        config: ``[editing]`` settings; defaults to the process settings.
    """

    def __init__(self, owner: Cloneable, *, config: EditingConfig | None = None) -> None:
        self._owner = owner
        self._config = config if config is not None else get_settings().editing
        self._original: Any = None
        self._begin: Subject[None] = Subject("begin_editing")
        self._cancel: Subject[None] = Subject("cancel_editing")
        self._end: Subject[None] = Subject("end_editing")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def original(self) -> Any:
        """The snapshot taken by ``begin_edit``, or None when idle."""
        self._throw_if_disposed()
        return self._original

    @property
    def state(self) -> EditState:
        self._throw_if_disposed()
        return EditState.IDLE if self._original is None else EditState.EDITING

    @property
    def is_editing(self) -> bool:
        self._throw_if_disposed()
        return self._original is not None

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    @property
    def when_begin_editing(self) -> Subject[None]:
        self._throw_if_disposed()
        return self._begin

    @property
    def when_cancel_editing(self) -> Subject[None]:
        self._throw_if_disposed()
        return self._cancel

    @property
    def when_end_editing(self) -> Subject[None]:
        self._throw_if_disposed()
        return self._end

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def begin_edit(self) -> None:
        """Snapshot the owner. No-op while already editing."""
        self._throw_if_disposed()
        if not is_valid_transition(self.state, EditState.EDITING):
            return

        self._original = clone_of(self._owner)
        log.debug("edit.begin", model=type(self._owner).__name__)
        self._begin.publish(None)

    def cancel_edit(self) -> None:
        """Restore the owner from the snapshot. No-op when idle."""
        self._throw_if_disposed()
        if not is_valid_transition(self.state, EditState.IDLE):
            return

        original = self._original
        self._owner.load(original)
        self._original = None
        self._discard(original)
        log.debug("edit.cancel", model=type(self._owner).__name__)
        self._cancel.publish(None)

    def end_edit(self) -> None:
        """Accept the live state. Safe to call when idle."""
        self._throw_if_disposed()
        original = self._original
        self._original = None
        self._discard(original)
        log.debug("edit.end", model=type(self._owner).__name__)
        self._end.publish(None)

    @contextmanager
    def editing(self) -> Iterator[Any]:
        """Edit inside a ``with`` block: commit on success, roll back on error.

        When a session is already open the block joins it and leaves the
        commit or rollback to whoever opened it.
        """
        owns_session = not self.is_editing
        self.begin_edit()
        try:
            yield self._owner
        except BaseException:
            if owns_session:
                self.cancel_edit()
            raise
        if owns_session:
            self.end_edit()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _discard(self, snapshot: Any) -> None:
        if self._config.dispose_snapshots and isinstance(snapshot, Disposable):
            snapshot.dispose()

    def _dispose_managed(self) -> None:
        original = self._original
        self._original = None
        self._discard(original)
        self._begin.dispose()
        self._cancel.dispose()
        self._end.dispose()
