"""Rules and RuleSet — per-property validation rules.

A rule is bound to one property name and maps the owning object's
current state to zero or more error descriptors. Rules may read any
attribute of the instance, which is how cross-field rules are written.

Rules for a property run together, in registration order, and their
results are concatenated. There is no short-circuit on the first
failure.

Usage::

    class Account(EditableModel):
        balance = observable(0)

        @validates("balance")
        def _balance_not_negative(self):
            if self.balance < 0:
                return "Balance cannot be negative"
            return None

    Account.rules.register_predicate("balance", lambda a: a.balance < 10_000, "Too large")
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from reactive_model.domain.descriptors import ErrorValue, normalize_errors
from reactive_model.errors import ConfigurationError

type Evaluator = Callable[[Any], Any]

VALIDATES_ATTR = "__validates__"


@dataclass(frozen=True)
class Rule:
    """A validation rule bound to a single property."""

    property_name: str
    evaluate: Evaluator

    def apply(self, instance: Any) -> tuple[ErrorValue, ...]:
        """Run the rule against *instance*."""
        return normalize_errors(self.evaluate(instance))

    @classmethod
    def from_predicate(
        cls,
        property_name: str,
        predicate: Callable[[Any], bool],
        message: ErrorValue,
    ) -> Rule:
        """Build a rule that reports *message* whenever *predicate* is false."""

        def evaluate(instance: Any) -> tuple[ErrorValue, ...]:
            return () if predicate(instance) else (message,)

        return cls(property_name, evaluate)


class RuleSet:
    """Ordered registry of rules.

    Parameters:
        owner: The model type the rules belong to. When set, rules bound
            to a name the type does not define raise ConfigurationError.
    """

    def __init__(self, owner: type | None = None) -> None:
        self._owner = owner
        self._rules: list[Rule] = []

    @property
    def owner(self) -> type | None:
        return self._owner

    def register(self, property_name: str, evaluate: Evaluator) -> Rule:
        """Append a rule for *property_name*. Multiple rules per name are allowed."""
        self._check_property(property_name)
        rule = Rule(property_name, evaluate)
        self._rules.append(rule)
        return rule

    def register_predicate(
        self,
        property_name: str,
        predicate: Callable[[Any], bool],
        message: ErrorValue,
    ) -> Rule:
        """Append a rule reporting *message* when *predicate* returns false."""
        self._check_property(property_name)
        rule = Rule.from_predicate(property_name, predicate, message)
        self._rules.append(rule)
        return rule

    def rule(self, property_name: str) -> Callable[[Evaluator], Evaluator]:
        """Decorator form of :meth:`register`."""

        def decorator(evaluate: Evaluator) -> Evaluator:
            self.register(property_name, evaluate)
            return evaluate

        return decorator

    def apply(self, instance: Any, property_name: str) -> tuple[ErrorValue, ...]:
        """Run every rule for *property_name* against *instance*, in order.

        A name with no rules yields an empty tuple.
        """
        errors: list[ErrorValue] = []
        for rule in self._rules:
            if rule.property_name == property_name:
                errors.extend(rule.apply(instance))
        return tuple(errors)

    def property_names(self) -> tuple[str, ...]:
        """Distinct property names with at least one rule, in first-registration order."""
        return tuple(dict.fromkeys(rule.property_name for rule in self._rules))

    def extend(self, other: RuleSet) -> None:
        """Append all of *other*'s rules, re-checked against this owner."""
        for rule in other:
            self._check_property(rule.property_name)
            self._rules.append(rule)

    def copy(self, owner: type | None = None) -> RuleSet:
        """Return a new RuleSet with the same rules, optionally rebound to *owner*."""
        clone = RuleSet(owner if owner is not None else self._owner)
        clone.extend(self)
        return clone

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, property_name: object) -> bool:
        return any(rule.property_name == property_name for rule in self._rules)

    def __repr__(self) -> str:
        owner = self._owner.__name__ if self._owner is not None else None
        return f"RuleSet(owner={owner}, rules={len(self._rules)})"

    def _check_property(self, property_name: str) -> None:
        if not property_name:
            raise ConfigurationError("Rules must be bound to a non-empty property name")
        if self._owner is not None and not hasattr(self._owner, property_name):
            msg = f"{self._owner.__name__} has no property {property_name!r} to validate"
            raise ConfigurationError(msg)


def validates(*property_names: str) -> Callable[[Evaluator], Evaluator]:
    """Mark a model method as a rule for one or more properties.

    Marked methods are collected into the class RuleSet when the class is
    created. The method receives the instance and returns its errors.
    """
    if not property_names:
        raise ConfigurationError("validates() needs at least one property name")

    def decorator(func: Evaluator) -> Evaluator:
        existing: tuple[str, ...] = getattr(func, VALIDATES_ATTR, ())
        setattr(func, VALIDATES_ATTR, existing + property_names)
        return func

    return decorator


def collect_validators(cls: type, rules: RuleSet) -> None:
    """Register every ``@validates`` method defined directly on *cls*."""
    for attr in vars(cls).values():
        func = getattr(attr, "__func__", attr)
        for property_name in getattr(func, VALIDATES_ATTR, ()):
            rules.register(property_name, func)
