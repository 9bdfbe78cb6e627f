"""Outbound send helpers and error replies for the dictation WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from dictation_relay.config.websocket import (
    MSG_ERROR,
    SOURCE_SERVER,
    MSG_TRANSCRIPTION_ERROR,
)

logger = logging.getLogger(__name__)


def build_error(message: str, *, code: str | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"type": MSG_ERROR, "message": message}
    if code:
        payload["code"] = code
    return payload


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    # Writes to a closed connection are dropped, never raised.
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, data: dict[str, Any]) -> bool:
    return await safe_send_text(ws, orjson.dumps(data).decode("utf-8"))


async def send_error(ws: WebSocket, message: str, *, code: str | None = None) -> bool:
    return await safe_send_json(ws, build_error(message, code=code))


async def send_transcription_error(ws: WebSocket, message: str, *, source: str = SOURCE_SERVER) -> bool:
    return await safe_send_json(ws, {"type": MSG_TRANSCRIPTION_ERROR, "message": message, "source": source})


__all__ = [
    "build_error",
    "safe_send_json",
    "safe_send_text",
    "send_error",
    "send_transcription_error",
]
