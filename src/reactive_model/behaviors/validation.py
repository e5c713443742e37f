"""ValidationEngine — incremental, diffed rule evaluation for one object.

The engine keeps an error map from property name to the tuple of
descriptors its rules produced last time. A key is present only while
the property is in error; an empty result removes the key.

Rules run lazily: the map does not exist until the first query or the
first property change. Building it evaluates every rule once. If a rule
raises, nothing is kept and the next access builds the map again.

Every revalidation diffs the new tuple against the stored one and
publishes on ``when_errors_changed`` only when they differ, so repeated
revalidation without a state change is silent. After the map changes the
``has_errors`` aggregate is recomputed and announced through the owner's
notifier when its boolean value flips.

Whole-object revalidation visits properties in RuleSet registration
order, and ``get_errors()`` concatenates in that same order.

INVARIANT: single writer. The map and the notifications are not guarded
by a lock; an object must be mutated from one logical thread at a time.
Relaxing that would need a mutex around both the map update and the
emission that follows it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from reactive_model.config.models import ValidationConfig
from reactive_model.config.settings import get_settings
from reactive_model.domain.descriptors import ErrorValue, join_errors
from reactive_model.domain.rules import RuleSet
from reactive_model.errors import ConfigurationError
from reactive_model.observable.disposable import Disposable
from reactive_model.observable.subject import Subject

logger = logging.getLogger(__name__)

HAS_ERRORS_PROPERTY = "has_errors"


class ValidationEngine(Disposable):
    """Applies a RuleSet to *owner* and tracks its errors.

    Parameters:
        owner: The object the rules read.
        rules: Rules for the owner's type.
        announce: Called with ``"has_errors"`` when the aggregate flips.
        config: ``[validation]`` settings; defaults to the process settings.
    """

    def __init__(
        self,
        owner: Any,
        rules: RuleSet,
        *,
        announce: Callable[[str], None] | None = None,
        config: ValidationConfig | None = None,
    ) -> None:
        self._owner = owner
        self._rules = rules
        self._announce = announce
        self._config = config if config is not None else get_settings().validation
        self._errors: dict[str, tuple[ErrorValue, ...]] | None = None
        self._has_errors = False
        self._errors_changed: Subject[str | None] = Subject("errors_changed")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @property
    def is_initialized(self) -> bool:
        """Whether the error map has been built (rules have run)."""
        return self._errors is not None

    @property
    def when_errors_changed(self) -> Subject[str | None]:
        """Publishes the name of each property whose errors changed."""
        self._throw_if_disposed()
        return self._errors_changed

    @property
    def has_errors(self) -> bool:
        self._throw_if_disposed()
        errors = self._ensure_initialized()
        return len(errors) > 0

    def get_errors(self, property_name: str | None = None) -> tuple[ErrorValue, ...]:
        """Errors for *property_name*, or for the whole object when absent."""
        self._throw_if_disposed()
        errors = self._ensure_initialized()

        if not property_name:
            combined: list[ErrorValue] = []
            for name in self._rules.property_names():
                combined.extend(errors.get(name, ()))
            return tuple(combined)

        self._check_known(property_name)
        return errors.get(property_name, ())

    def error_message(self, property_name: str | None = None) -> str:
        """All errors for *property_name* (or the object) joined into one string."""
        return join_errors(self.get_errors(property_name), self._config.error_separator)

    def snapshot(self) -> dict[str, tuple[ErrorValue, ...]]:
        """Copy of the current error map (builds it if needed)."""
        self._throw_if_disposed()
        return dict(self._ensure_initialized())

    def revalidate(self, property_name: str | None = None) -> None:
        """Re-apply rules for *property_name*, or for every ruled property when absent."""
        self._throw_if_disposed()
        if self._errors is None:
            # Building the map already evaluated every rule.
            self._ensure_initialized()
            return

        if property_name:
            self._apply(property_name)
        else:
            for name in self._rules.property_names():
                self._apply(name)
        self._refresh_has_errors()

    def on_property_changed(self, property_name: str | None) -> None:
        """After-change hook: revalidate what the change may have affected."""
        if property_name == HAS_ERRORS_PROPERTY:
            return
        self.revalidate(property_name)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ensure_initialized(self) -> dict[str, tuple[ErrorValue, ...]]:
        if self._errors is None:
            logger.debug(
                "Initializing errors for %s (%d rules)",
                type(self._owner).__name__,
                len(self._rules),
            )
            # A raising rule leaves the engine uninitialized.
            built: dict[str, tuple[ErrorValue, ...]] = {}
            for name in self._rules.property_names():
                errors = self._rules.apply(self._owner, name)
                if errors:
                    built[name] = errors
            self._errors = built
            for name in built:
                self._errors_changed.publish(name)
            self._refresh_has_errors()
        return self._errors

    def _apply(self, property_name: str) -> None:
        """Evaluate one property's rules and publish if its errors changed."""
        assert self._errors is not None
        errors = self._rules.apply(self._owner, property_name)
        previous = self._errors.get(property_name, ())
        if errors == previous:
            return

        if errors:
            self._errors[property_name] = errors
        else:
            del self._errors[property_name]

        logger.debug(
            "Errors changed for %s.%s: %d -> %d",
            type(self._owner).__name__,
            property_name,
            len(previous),
            len(errors),
        )
        self._errors_changed.publish(property_name)

    def _refresh_has_errors(self) -> None:
        assert self._errors is not None
        has_errors = len(self._errors) > 0
        if has_errors == self._has_errors:
            return
        self._has_errors = has_errors
        if self._announce is not None:
            self._announce(HAS_ERRORS_PROPERTY)

    def _check_known(self, property_name: str) -> None:
        if property_name in self._rules or hasattr(type(self._owner), property_name):
            return
        msg = f"{type(self._owner).__name__} has no property {property_name!r}"
        if self._config.strict_property_names:
            raise ConfigurationError(msg)
        logger.warning("%s; reporting no errors", msg)

    def _dispose_managed(self) -> None:
        self._errors_changed.dispose()
        self._errors = None
