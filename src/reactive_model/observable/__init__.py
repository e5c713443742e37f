"""Observable primitives — disposal, broadcast subjects, change notification.

These are the collaborators the validation and editing behaviors are
built on. All delivery is synchronous, in the caller's thread, at the
moment of the change. Nothing here is thread-safe: an object is expected
to be mutated from one logical thread at a time.
"""

from reactive_model.observable.disposable import Disposable
from reactive_model.observable.notifier import ChangeNotifier
from reactive_model.observable.properties import observable, observable_properties
from reactive_model.observable.subject import Subject, Subscription

__all__ = [
    "ChangeNotifier",
    "Disposable",
    "Subject",
    "Subscription",
    "observable",
    "observable_properties",
]
