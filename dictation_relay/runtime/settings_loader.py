"""Environment parsing for runtime settings."""

from __future__ import annotations

import os
from pathlib import Path

from dictation_relay.state.settings import (
    AppSettings,
    LimitsSettings,
    IdentitySettings,
    ProviderSettings,
    WebSocketSettings,
)
from dictation_relay.config.secrets import (
    ENV_DEEPGRAM_API_KEY,
    ENV_SUPABASE_ANON_KEY,
    ENV_SUPABASE_SERVICE_ROLE_KEY,
)
from dictation_relay.config.provider import (
    ENV_DEEPGRAM_MODEL,
    ENV_DEEPGRAM_BASE_URL,
    DEFAULT_DEEPGRAM_MODEL,
    ENV_DEEPGRAM_TIMEOUT_S,
    DEFAULT_DEEPGRAM_BASE_URL,
    DEFAULT_DEEPGRAM_TIMEOUT_S,
)
from dictation_relay.config.identity import (
    ENV_USERS_FILE,
    ENV_SUPABASE_URL,
    DEFAULT_USERS_FILE,
    ENV_IDENTITY_BACKEND,
    IDENTITY_BACKEND_FILE,
    ENV_SUPABASE_USERS_TABLE,
    IDENTITY_BACKEND_SUPABASE,
    DEFAULT_SUPABASE_USERS_TABLE,
)
from dictation_relay.config.limits import (
    ENV_MAX_AUDIO_BYTES,
    ENV_MIN_AUDIO_BYTES,
    DEFAULT_MAX_AUDIO_BYTES,
    DEFAULT_MIN_AUDIO_BYTES,
    ENV_WS_MESSAGE_WINDOW_SECONDS,
    ENV_WS_MAX_MESSAGES_PER_WINDOW,
    DEFAULT_WS_MESSAGE_WINDOW_SECONDS,
    DEFAULT_WS_MAX_MESSAGES_PER_WINDOW,
)
from dictation_relay.config.websocket import (
    ENV_WS_ENDPOINT_PATH,
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_ENDPOINT_PATH,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)

_IDENTITY_BACKENDS = {IDENTITY_BACKEND_SUPABASE, IDENTITY_BACKEND_FILE}


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _load_provider_settings() -> ProviderSettings:
    timeout_s = _float_env(ENV_DEEPGRAM_TIMEOUT_S, DEFAULT_DEEPGRAM_TIMEOUT_S)
    if timeout_s <= 0:
        # The provider call must always be bounded.
        timeout_s = DEFAULT_DEEPGRAM_TIMEOUT_S
    return ProviderSettings(
        api_key=_str_env(ENV_DEEPGRAM_API_KEY, ""),
        base_url=_str_env(ENV_DEEPGRAM_BASE_URL, DEFAULT_DEEPGRAM_BASE_URL),
        model=_str_env(ENV_DEEPGRAM_MODEL, DEFAULT_DEEPGRAM_MODEL),
        timeout_s=timeout_s,
    )


def _load_identity_settings() -> IdentitySettings:
    supabase_url = _str_env(ENV_SUPABASE_URL, "")
    default_backend = IDENTITY_BACKEND_SUPABASE if supabase_url else IDENTITY_BACKEND_FILE
    backend = _str_env(ENV_IDENTITY_BACKEND, default_backend).lower()
    if backend not in _IDENTITY_BACKENDS:
        raise ValueError(f"{ENV_IDENTITY_BACKEND} must be one of {sorted(_IDENTITY_BACKENDS)}, got {backend!r}")

    supabase_key = _str_env(ENV_SUPABASE_SERVICE_ROLE_KEY, "") or _str_env(ENV_SUPABASE_ANON_KEY, "")
    if backend == IDENTITY_BACKEND_SUPABASE and not (supabase_url and supabase_key):
        raise ValueError(
            f"{ENV_SUPABASE_URL} and {ENV_SUPABASE_SERVICE_ROLE_KEY} (or {ENV_SUPABASE_ANON_KEY}) are required"
            " for the supabase identity backend"
        )

    users_file_raw = os.getenv(ENV_USERS_FILE)
    users_file = (
        Path(users_file_raw).expanduser() if users_file_raw and users_file_raw.strip() else DEFAULT_USERS_FILE
    )
    return IdentitySettings(
        backend=backend,
        supabase_url=supabase_url,
        supabase_key=supabase_key,
        users_table=_str_env(ENV_SUPABASE_USERS_TABLE, DEFAULT_SUPABASE_USERS_TABLE),
        users_file=users_file,
    )


def _load_limits_settings() -> LimitsSettings:
    return LimitsSettings(
        max_audio_bytes=max(0, _int_env(ENV_MAX_AUDIO_BYTES, DEFAULT_MAX_AUDIO_BYTES)),
        min_audio_bytes=max(0, _int_env(ENV_MIN_AUDIO_BYTES, DEFAULT_MIN_AUDIO_BYTES)),
        ws_message_window_seconds=_float_env(ENV_WS_MESSAGE_WINDOW_SECONDS, DEFAULT_WS_MESSAGE_WINDOW_SECONDS),
        ws_max_messages_per_window=_int_env(ENV_WS_MAX_MESSAGES_PER_WINDOW, DEFAULT_WS_MAX_MESSAGES_PER_WINDOW),
    )


def load_websocket_settings() -> WebSocketSettings:
    endpoint_path = _str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH)
    if not endpoint_path.startswith("/"):
        endpoint_path = f"/{endpoint_path}"
    return WebSocketSettings(
        endpoint_path=endpoint_path,
        idle_timeout_s=_float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S),
        watchdog_tick_s=_float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S),
        max_connection_duration_s=_float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        provider=_load_provider_settings(),
        identity=_load_identity_settings(),
        limits=_load_limits_settings(),
        websocket=load_websocket_settings(),
    )


__all__ = ["load_settings", "load_websocket_settings"]
