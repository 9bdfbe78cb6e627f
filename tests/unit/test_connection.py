from __future__ import annotations

import json
import base64

import pytest

from dictation_relay.handlers.websocket.manager import handle_websocket_connection

from tests.utils import FakeProvider, FakeWebSocket, build_settings, build_runtime_deps


def _frame(msg_type: str, **fields: object) -> str:
    return json.dumps({"type": msg_type, **fields})


AUTH = _frame("auth", email="a@b.com", activationCode="X1")


@pytest.mark.asyncio
async def test_connection_lifecycle_and_cleanup() -> None:
    provider = FakeProvider()
    deps = build_runtime_deps(provider=provider)
    audio = base64.b64encode(b"x" * 300).decode("ascii")
    ws = FakeWebSocket([AUTH, _frame("audioComplete", audio=audio), _frame("ping")])

    await handle_websocket_connection(ws, deps)

    connection = ws.sent[0]
    assert connection["type"] == "connection"
    assert connection["status"] == "connected"
    assert [m["type"] for m in ws.sent[1:]] == ["auth", "transcriptionResult", "pong"]
    assert len(provider.calls) == 1
    assert len(deps.sessions) == 0
    assert connection["connectionId"] not in deps.sessions


@pytest.mark.asyncio
async def test_malformed_and_unknown_frames_are_ignored() -> None:
    deps = build_runtime_deps()
    ws = FakeWebSocket(["{not json", _frame("shutdown"), "[1, 2]", _frame("ping")])

    await handle_websocket_connection(ws, deps)

    assert [m["type"] for m in ws.sent] == ["connection", "pong"]


@pytest.mark.asyncio
async def test_rate_limit_rejects_excess_messages_but_not_pings() -> None:
    deps = build_runtime_deps(settings=build_settings(max_messages=2))
    frames = [AUTH, _frame("updateLanguage", language="de"), _frame("updateLanguage", language="it")]
    ws = FakeWebSocket(frames + [_frame("ping")])

    await handle_websocket_connection(ws, deps)

    types = [m["type"] for m in ws.sent]
    assert types == ["connection", "auth", "languageUpdated", "error", "pong"]
    assert ws.sent[3]["code"] == "rate_limited"


@pytest.mark.asyncio
async def test_handler_failure_reports_internal_error_and_keeps_serving() -> None:
    class _ExplodingProvider(FakeProvider):
        async def transcribe(self, audio, *, language_tag, mime_type):
            raise RuntimeError("boom")

    deps = build_runtime_deps(provider=_ExplodingProvider())
    audio = base64.b64encode(b"x" * 300).decode("ascii")
    ws = FakeWebSocket([AUTH, _frame("audioComplete", audio=audio), _frame("ping")])

    await handle_websocket_connection(ws, deps)

    assert ws.of_type("error") == [
        {"type": "error", "message": "Server processing error", "code": "internal_error"}
    ]
    assert ws.last == {"type": "pong"}
    assert len(deps.sessions) == 0


@pytest.mark.asyncio
async def test_sends_to_a_closed_socket_are_dropped() -> None:
    deps = build_runtime_deps()
    ws = FakeWebSocket([AUTH, _frame("ping")], disconnected=True)

    await handle_websocket_connection(ws, deps)

    assert ws.sent == []
    assert len(deps.sessions) == 0
