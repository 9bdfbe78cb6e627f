from __future__ import annotations

import json
import base64
import socket
import asyncio

import pytest
import uvicorn
import websockets

from dictation_relay.server import create_app
from dictation_relay.runtime.serve import ws_max_frame_bytes, build_uvicorn_config

from tests.utils import FakeProvider, build_settings, build_runtime_deps

UVICORN_DEFAULT_WS_MAX_SIZE = 16 * 1024 * 1024


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_frame_limit_covers_base64_of_the_audio_cap() -> None:
    cap = 50 * 1024 * 1024
    limit = ws_max_frame_bytes(cap)
    assert limit >= 4 * -(-cap // 3)
    assert limit > UVICORN_DEFAULT_WS_MAX_SIZE


def test_frame_limit_never_drops_below_uvicorn_default() -> None:
    assert ws_max_frame_bytes(1024) == UVICORN_DEFAULT_WS_MAX_SIZE
    assert ws_max_frame_bytes(0) == UVICORN_DEFAULT_WS_MAX_SIZE


def test_config_uses_the_derived_frame_limit() -> None:
    settings = build_settings(max_audio_bytes=30 * 1024 * 1024)
    config = build_uvicorn_config("dictation_relay.server:app", settings=settings, host="127.0.0.1", port=9000)
    assert config.ws_max_size == ws_max_frame_bytes(30 * 1024 * 1024)
    assert config.host == "127.0.0.1"
    assert config.port == 9000


@pytest.mark.asyncio
async def test_audio_complete_above_default_frame_size_is_transcribed() -> None:
    provider = FakeProvider()
    settings = build_settings()

    async def deps_factory():
        return build_runtime_deps(provider=provider, settings=settings)

    port = _free_port()
    config = build_uvicorn_config(create_app(deps_factory, ws_path="/"), settings=settings, host="127.0.0.1", port=port)
    server = uvicorn.Server(config)
    serve_task = asyncio.create_task(server.serve())
    try:
        while not server.started:
            assert not serve_task.done()
            await asyncio.sleep(0.02)

        audio = b"\x01" * (13 * 1024 * 1024)
        frame = json.dumps({"type": "audioComplete", "audio": base64.b64encode(audio).decode("ascii")})
        assert len(frame) > UVICORN_DEFAULT_WS_MAX_SIZE

        async with websockets.connect(f"ws://127.0.0.1:{port}/", max_size=None) as ws:
            assert json.loads(await ws.recv())["type"] == "connection"
            await ws.send(json.dumps({"type": "auth", "email": "a@b.com", "activationCode": "X1"}))
            assert json.loads(await ws.recv())["status"] == "success"

            await ws.send(frame)
            reply = json.loads(await asyncio.wait_for(ws.recv(), timeout=30.0))

        assert reply["type"] == "transcriptionResult"
        assert reply["transcript"] == "hello world"
        assert len(provider.calls) == 1
        assert len(provider.calls[0][0]) == len(audio)
    finally:
        server.should_exit = True
        await asyncio.wait_for(serve_task, timeout=10.0)
