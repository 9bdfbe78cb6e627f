"""Per-connection idle and max-duration enforcement."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any

from dictation_relay.state.settings import WebSocketSettings
from dictation_relay.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)

logger = logging.getLogger(__name__)


class WebSocketLifecycle:
    """Closes a connection that stays silent too long or outlives its max duration.

    A timeout of 0 disables the corresponding check.
    """

    def __init__(self, websocket: Any, settings: WebSocketSettings, *, session_id: str | None = None) -> None:
        self._ws = websocket
        self._session_id = session_id
        self._idle_timeout_s = max(0.0, float(settings.idle_timeout_s))
        self._watchdog_tick_s = max(0.01, float(settings.watchdog_tick_s))
        self._max_duration_s = max(0.0, float(settings.max_connection_duration_s))
        self._connection_start = time.monotonic()
        self._last_activity = self._connection_start
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @property
    def watchdog_tick_s(self) -> float:
        return self._watchdog_tick_s

    def touch(self) -> None:
        self._last_activity = time.monotonic()

    def should_close(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await self._task
        self._task = None

    def _expired_reason(self, now: float) -> tuple[int, str] | None:
        if self._max_duration_s and now - self._connection_start >= self._max_duration_s:
            return WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON
        if self._idle_timeout_s and now - self._last_activity >= self._idle_timeout_s:
            return WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON
        return None

    async def _watchdog_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._watchdog_tick_s)
                expired = self._expired_reason(time.monotonic())
                if expired is None:
                    continue
                code, reason = expired
                logger.info("WebSocket %s; closing session_id=%s", reason, self._session_id)
                self._stop_event.set()
                with contextlib.suppress(Exception):
                    await self._ws.close(code=code, reason=reason)
                break
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("lifecycle watchdog exiting due to unexpected error", exc_info=True)


__all__ = ["WebSocketLifecycle"]
