"""Tests for ChangeNotifier — hooks, streams, and equality suppression."""

from __future__ import annotations

from typing import Any

import pytest

from reactive_model.errors import ObjectDisposedError
from reactive_model.observable.notifier import ChangeNotifier


class _Box:
    def __init__(self) -> None:
        self.values: dict[str, Any] = {"size": 1}


def _store(box: _Box, name: str):
    return lambda v: box.values.__setitem__(name, v)


class TestAssign:
    def test_equal_value_suppressed(self) -> None:
        box = _Box()
        notifier = ChangeNotifier()
        changed: list[str | None] = []
        notifier.when_property_changed.subscribe(changed.append)
        assert notifier.assign("size", 1, 1, _store(box, "size")) is False
        assert changed == []

    def test_structurally_equal_value_suppressed(self) -> None:
        notifier = ChangeNotifier()
        stored: list[Any] = []
        assert notifier.assign("tags", ["a"], ["a"], stored.append) is False
        assert stored == []

    def test_change_stores_and_announces(self) -> None:
        box = _Box()
        notifier = ChangeNotifier()
        changing: list[str | None] = []
        changed: list[str | None] = []
        notifier.when_property_changing.subscribe(changing.append)
        notifier.when_property_changed.subscribe(changed.append)
        assert notifier.assign("size", 1, 2, _store(box, "size")) is True
        assert box.values["size"] == 2
        assert changing == ["size"]
        assert changed == ["size"]

    def test_hook_and_stream_order(self) -> None:
        box = _Box()
        order: list[str] = []
        notifier = ChangeNotifier(
            on_changing=lambda n: order.append(f"hook-changing:{n}"),
            on_changed=lambda n: order.append(f"hook-changed:{n}"),
        )
        notifier.when_property_changing.subscribe(lambda n: order.append(f"changing:{n}"))
        notifier.when_property_changed.subscribe(
            lambda n: order.append(f"changed:{n}:{box.values['size']}")
        )

        def store(value: Any) -> None:
            order.append("store")
            box.values["size"] = value

        notifier.assign("size", 1, 5, store)
        assert order == [
            "hook-changing:size",
            "changing:size",
            "store",
            "changed:size:5",
            "hook-changed:size",
        ]


class TestNotifyChanged:
    def test_named_change_runs_hook(self) -> None:
        seen: list[str | None] = []
        notifier = ChangeNotifier(on_changed=seen.append)
        notifier.notify_changed("size")
        assert seen == ["size"]

    @pytest.mark.parametrize("name", [None, ""])
    def test_bulk_change_is_none(self, name: str | None) -> None:
        seen: list[str | None] = []
        notifier = ChangeNotifier(on_changed=seen.append)
        published: list[str | None] = []
        notifier.when_property_changed.subscribe(published.append)
        notifier.notify_changed(name)
        assert seen == [None]
        assert published == [None]

    def test_publish_changed_skips_hooks(self) -> None:
        seen: list[str | None] = []
        notifier = ChangeNotifier(on_changed=seen.append)
        published: list[str | None] = []
        notifier.when_property_changed.subscribe(published.append)
        notifier.publish_changed("has_errors")
        assert published == ["has_errors"]
        assert seen == []


class TestDispose:
    def test_dispose_hook_runs_once(self) -> None:
        calls: list[str] = []
        notifier = ChangeNotifier(on_dispose=lambda: calls.append("disposed"))
        notifier.dispose()
        notifier.dispose()
        assert calls == ["disposed"]

    def test_use_after_dispose_raises(self) -> None:
        notifier = ChangeNotifier()
        stream = notifier.when_property_changed
        notifier.dispose()
        with pytest.raises(ObjectDisposedError):
            notifier.when_property_changed  # noqa: B018
        with pytest.raises(ObjectDisposedError):
            stream.subscribe(lambda _: None)
        with pytest.raises(ObjectDisposedError):
            notifier.assign("size", 1, 2, lambda _: None)
        with pytest.raises(ObjectDisposedError):
            notifier.notify_changed()
