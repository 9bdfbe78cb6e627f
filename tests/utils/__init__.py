"""Shared test doubles for unit tests."""

from __future__ import annotations

from .fakes import (
    FakeProvider,
    FakeWebSocket,
    user_row,
    build_settings,
    build_runtime_deps,
)

__all__ = [
    "FakeProvider",
    "FakeWebSocket",
    "build_runtime_deps",
    "build_settings",
    "user_row",
]
