"""HookBridge — forwards a model's streams to plugin hooks.

INVARIANT: Plugin failures are warnings, never errors. A failing hook is
logged and the model carries on; the model's own subscribers are not
affected.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from reactive_model.observable.disposable import Disposable

if TYPE_CHECKING:
    from reactive_model.model import EditableModel
    from reactive_model.observable.subject import Subscription
    from reactive_model.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class HookBridge(Disposable):
    """Subscribe to *model*'s streams and dispatch matching hooks.

    Parameters:
        model: The model to observe.
        plugin_manager: Manager whose hooks receive the events.
    """

    def __init__(self, model: EditableModel, plugin_manager: PluginManager) -> None:
        self._model = model
        self._pm = plugin_manager
        self._subscriptions: list[Subscription] = [
            model.when_errors_changed.subscribe(self._on_errors_changed),
            model.when_begin_editing.subscribe(
                lambda _: self._dispatch("model_begin_edit", model=model)
            ),
            model.when_cancel_editing.subscribe(
                lambda _: self._dispatch("model_cancel_edit", model=model)
            ),
            model.when_end_editing.subscribe(
                lambda _: self._dispatch("model_end_edit", model=model)
            ),
        ]

    @property
    def model(self) -> EditableModel:
        return self._model

    def _on_errors_changed(self, property_name: str | None) -> None:
        self._dispatch("model_errors_changed", model=self._model, property_name=property_name)

    def _dispatch(self, hook_name: str, **payload: Any) -> None:
        hook_fn = getattr(self._pm.hook, hook_name)
        try:
            hook_fn(**payload)
        except Exception:
            logger.warning("Plugin hook %s failed", hook_name, exc_info=True)

    def _dispose_managed(self) -> None:
        for subscription in self._subscriptions:
            subscription.dispose()
        self._subscriptions.clear()
