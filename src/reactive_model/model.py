"""EditableModel — validated, transactional, observable model base.

An EditableModel composes three collaborators instead of inheriting them:

- a :class:`ChangeNotifier` that announces property writes,
- a :class:`ValidationEngine` hooked in after every change,
- an :class:`EditSession` that snapshots and restores the model.

Subclasses declare state with :func:`observable` and rules with
:func:`validates` (or ``Model.rules.register(...)`` after the class body)::

    class Player(EditableModel):
        name = observable("")
        score = observable(0)

        @validates("score")
        def _score_not_negative(self):
            return None if self.score >= 0 else "Score cannot be negative"

    player = Player()
    player.begin_edit()
    player.score = -1
    player.get_errors("score")   # ('Score cannot be negative',)
    player.cancel_edit()         # score is 0 again

Each subclass gets its own :class:`RuleSet`, starting from a copy of its
parent's rules. The default ``load`` copies every observable property
(deep-copied) through the normal setters; override it for state that is
not held in observables.
"""

from __future__ import annotations

import copy
from contextlib import AbstractContextManager
from typing import Any, ClassVar, Self

from reactive_model.behaviors.editing import EditSession, clone_of
from reactive_model.behaviors.validation import ValidationEngine
from reactive_model.config.settings import get_settings
from reactive_model.domain.descriptors import ErrorValue
from reactive_model.domain.lifecycle import EditState
from reactive_model.domain.rules import RuleSet, collect_validators
from reactive_model.errors import ConfigurationError
from reactive_model.observable.disposable import Disposable
from reactive_model.observable.notifier import ChangeNotifier
from reactive_model.observable.properties import observable_properties
from reactive_model.observable.subject import Subject


class EditableModel(Disposable):
    """Base class for editable, self-validating model objects."""

    rules: ClassVar[RuleSet] = RuleSet()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        rules = RuleSet(cls)
        for base in cls.__mro__[1:]:
            inherited = vars(base).get("rules")
            if isinstance(inherited, RuleSet):
                rules.extend(inherited)
                break
        collect_validators(cls, rules)
        cls.rules = rules

    def __init__(self) -> None:
        settings = get_settings()
        self._notifier = ChangeNotifier(on_changed=self._on_property_changed)
        self._validation = ValidationEngine(
            self,
            type(self).rules,
            announce=self._notifier.publish_changed,
            config=settings.validation,
        )
        self._editing = EditSession(self, config=settings.editing)

    # ------------------------------------------------------------------
    # Cloneable
    # ------------------------------------------------------------------

    @classmethod
    def create_default(cls) -> Self:
        return cls()

    def load(self, other: Self) -> None:
        """Overwrite this model's observable state from *other*."""
        self._throw_if_disposed()
        if type(other) is not type(self):
            msg = f"Cannot load {type(self).__name__} from {type(other).__name__}"
            raise ConfigurationError(msg)
        for name in observable_properties(type(self)):
            setattr(self, name, copy.deepcopy(getattr(other, name)))

    def clone(self) -> Self:
        """Independent deep copy of this model."""
        self._throw_if_disposed()
        return clone_of(self)

    def property_values(self) -> dict[str, Any]:
        """Current values of all observable properties."""
        return {name: getattr(self, name) for name in observable_properties(type(self))}

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    @property
    def when_property_changing(self) -> Subject[str | None]:
        self._throw_if_disposed()
        return self._notifier.when_property_changing

    @property
    def when_property_changed(self) -> Subject[str | None]:
        self._throw_if_disposed()
        return self._notifier.when_property_changed

    def notify_changed(self, property_name: str | None = None) -> None:
        """Announce a change; no name means the whole object changed."""
        self._throw_if_disposed()
        self._notifier.notify_changed(property_name)

    def _on_property_changed(self, property_name: str | None) -> None:
        self._validation.on_property_changed(property_name)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @property
    def when_errors_changed(self) -> Subject[str | None]:
        self._throw_if_disposed()
        return self._validation.when_errors_changed

    @property
    def has_errors(self) -> bool:
        self._throw_if_disposed()
        return self._validation.has_errors

    @property
    def error(self) -> str:
        """All errors of the object joined into one message."""
        return self.error_message(None)

    def get_errors(self, property_name: str | None = None) -> tuple[ErrorValue, ...]:
        self._throw_if_disposed()
        return self._validation.get_errors(property_name)

    def error_message(self, property_name: str | None = None) -> str:
        self._throw_if_disposed()
        return self._validation.error_message(property_name)

    def revalidate(self, property_name: str | None = None) -> None:
        self._throw_if_disposed()
        self._validation.revalidate(property_name)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    @property
    def when_begin_editing(self) -> Subject[None]:
        self._throw_if_disposed()
        return self._editing.when_begin_editing

    @property
    def when_cancel_editing(self) -> Subject[None]:
        self._throw_if_disposed()
        return self._editing.when_cancel_editing

    @property
    def when_end_editing(self) -> Subject[None]:
        self._throw_if_disposed()
        return self._editing.when_end_editing

    @property
    def original(self) -> Self | None:
        """Snapshot taken by ``begin_edit``, or None when not editing.

        Read-only: ``cancel_edit`` restores from this object, so writes to
        it change what a rollback restores.
        """
        self._throw_if_disposed()
        return self._editing.original

    @property
    def edit_state(self) -> EditState:
        self._throw_if_disposed()
        return self._editing.state

    @property
    def is_editing(self) -> bool:
        self._throw_if_disposed()
        return self._editing.is_editing

    def begin_edit(self) -> None:
        self._throw_if_disposed()
        self._editing.begin_edit()

    def cancel_edit(self) -> None:
        self._throw_if_disposed()
        self._editing.cancel_edit()

    def end_edit(self) -> None:
        self._throw_if_disposed()
        self._editing.end_edit()

    def editing(self) -> AbstractContextManager[Self]:
        """``with model.editing():`` commits on success, cancels on error."""
        self._throw_if_disposed()
        return self._editing.editing()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _dispose_managed(self) -> None:
        self._editing.dispose()
        self._validation.dispose()
        self._notifier.dispose()

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.property_values().items())
        return f"{type(self).__name__}({fields})"
