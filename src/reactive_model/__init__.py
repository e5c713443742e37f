"""reactive_model — validated, transactional, observable model objects."""

from reactive_model.behaviors.editing import Cloneable, EditSession, clone_of
from reactive_model.behaviors.validation import HAS_ERRORS_PROPERTY, ValidationEngine
from reactive_model.domain.descriptors import ErrorDescriptor
from reactive_model.domain.lifecycle import EditState
from reactive_model.domain.rules import Rule, RuleSet, validates
from reactive_model.errors import ConfigurationError, ObjectDisposedError, ReactiveModelError
from reactive_model.model import EditableModel
from reactive_model.observable import (
    ChangeNotifier,
    Disposable,
    Subject,
    Subscription,
    observable,
    observable_properties,
)

__version__ = "0.1.0"

__all__ = [
    "HAS_ERRORS_PROPERTY",
    "ChangeNotifier",
    "Cloneable",
    "ConfigurationError",
    "Disposable",
    "EditSession",
    "EditState",
    "EditableModel",
    "ErrorDescriptor",
    "ObjectDisposedError",
    "ReactiveModelError",
    "Rule",
    "RuleSet",
    "Subject",
    "Subscription",
    "ValidationEngine",
    "clone_of",
    "observable",
    "observable_properties",
    "validates",
]
