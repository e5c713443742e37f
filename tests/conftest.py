"""Shared pytest fixtures and sample models for reactive_model tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest

from reactive_model import EditableModel, Subject, observable, validates
from reactive_model.config.settings import ReactiveModelSettings, configure, reset_settings


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Install default settings so no reactive_model.toml or env var leaks in."""
    for var in (
        "REACTIVE_MODEL_CONFIG",
        "REACTIVE_MODEL_VALIDATION__STRICT_PROPERTY_NAMES",
        "REACTIVE_MODEL_VALIDATION__ERROR_SEPARATOR",
        "REACTIVE_MODEL_EDITING__DISPOSE_SNAPSHOTS",
    ):
        monkeypatch.delenv(var, raising=False)
    configure(ReactiveModelSettings())
    yield
    reset_settings()


# ---------------------------------------------------------------------------
# Sample models
# ---------------------------------------------------------------------------


class Scorecard(EditableModel):
    """Two plain fields, one validated field, one mutable field."""

    a = observable(1)
    b = observable("x")
    score = observable(0)
    tags = observable(default_factory=list)

    @validates("score")
    def _score_not_negative(self) -> str | None:
        if self.score < 0:
            return "Score cannot be negative"
        return None


class Booking(EditableModel):
    """Cross-field rules: the ``check_out`` rule also reads ``check_in``."""

    guest = observable("")
    check_in = observable(0)
    check_out = observable(0)

    @validates("guest")
    def _guest_required(self) -> list[str]:
        return [] if self.guest else ["Guest is required"]

    @validates("guest")
    def _guest_length(self) -> list[str]:
        return [] if len(self.guest) >= 3 else ["Guest name is too short"]

    @validates("check_out")
    def _check_out_after_check_in(self) -> str | None:
        if self.check_out < self.check_in:
            return "Check-out must not be before check-in"
        return None


@pytest.fixture
def scorecard() -> Generator[Scorecard]:
    model = Scorecard()
    try:
        yield model
    finally:
        model.dispose()


@pytest.fixture
def booking() -> Generator[Booking]:
    model = Booking()
    try:
        yield model
    finally:
        model.dispose()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def record(stream: Subject[Any]) -> list[Any]:
    """Subscribe to *stream* and return the list that collects its values."""
    received: list[Any] = []
    stream.subscribe(received.append)
    return received


@pytest.fixture
def recorder() -> Callable[[Subject[Any]], list[Any]]:
    """Provide :func:`record` to tests."""
    return record
