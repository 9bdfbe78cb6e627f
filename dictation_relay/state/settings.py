"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    api_key: str
    base_url: str
    model: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class IdentitySettings:
    backend: str
    supabase_url: str
    supabase_key: str
    users_table: str
    users_file: Path


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_audio_bytes: int
    min_audio_bytes: int
    ws_message_window_seconds: float
    ws_max_messages_per_window: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    endpoint_path: str
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    provider: ProviderSettings
    identity: IdentitySettings
    limits: LimitsSettings
    websocket: WebSocketSettings


__all__ = [
    "AppSettings",
    "IdentitySettings",
    "LimitsSettings",
    "ProviderSettings",
    "WebSocketSettings",
]
