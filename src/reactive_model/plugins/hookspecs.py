"""Pluggy hook specifications for editable-model lifecycle events.

Hooks are dispatched synchronously by :class:`HookBridge` as the model
publishes on its streams.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from reactive_model.model import EditableModel

PROJECT_NAME = "reactive_model"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class ReactiveModelHookSpec:
    """Hook specifications for the reactive_model plugin system."""

    @hookspec
    def model_errors_changed(self, model: EditableModel, property_name: str | None) -> None:
        """Called after a property's validation errors changed."""

    @hookspec
    def model_begin_edit(self, model: EditableModel) -> None:
        """Called after an edit session began."""

    @hookspec
    def model_cancel_edit(self, model: EditableModel) -> None:
        """Called after an edit session was rolled back."""

    @hookspec
    def model_end_edit(self, model: EditableModel) -> None:
        """Called after an edit session was committed."""
