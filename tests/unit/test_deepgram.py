from __future__ import annotations

import httpx
import pytest

from dictation_relay.errors import TranscriptionError
from dictation_relay.transcription.deepgram import DeepgramClient


def _response(transcript: str, confidence: float | None = 0.93) -> dict:
    return {"results": {"channels": [{"alternatives": [{"transcript": transcript, "confidence": confidence}]}]}}


def _client(handler, *, api_key: str = "dg-key") -> tuple[DeepgramClient, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = DeepgramClient(http, api_key=api_key, base_url="https://dg.test/", model="general", timeout_s=5.0)
    return client, http


@pytest.mark.asyncio
async def test_transcribe_posts_audio_with_language_and_encoding() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_response("  bonjour docteur "))

    client, http = _client(handler)
    async with http:
        result = await client.transcribe(b"\x01\x02\x03", language_tag="fr", mime_type="audio/webm;codecs=opus")

    assert result.transcript == "bonjour docteur"
    assert result.confidence == pytest.approx(0.93)
    assert result.language == "fr"

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/listen"
    assert request.url.params["language"] == "fr"
    assert request.url.params["encoding"] == "opus"
    assert request.url.params["punctuate"] == "true"
    assert request.headers["authorization"] == "Token dg-key"
    assert request.headers["content-type"] == "audio/webm"
    assert request.content == b"\x01\x02\x03"


@pytest.mark.asyncio
async def test_zero_confidence_is_reported_as_none() -> None:
    client, http = _client(lambda request: httpx.Response(200, json=_response("ok", confidence=0)))
    async with http:
        result = await client.transcribe(b"abc", language_tag="en", mime_type=None)
    assert result.confidence is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "kind"),
    [
        (httpx.Response(401, json={"err_msg": "bad key"}), "upstream"),
        (httpx.Response(200, json={"results": {"channels": []}}), "malformed"),
        (httpx.Response(200, content=b"<html>"), "malformed"),
    ],
)
async def test_transcribe_maps_failures(response: httpx.Response, kind: str) -> None:
    client, http = _client(lambda request: response)
    async with http:
        with pytest.raises(TranscriptionError) as exc:
            await client.transcribe(b"abc", language_tag="en", mime_type=None)
    assert exc.value.kind == kind


@pytest.mark.asyncio
async def test_transcribe_maps_timeouts_and_network_errors() -> None:
    errors = [httpx.ReadTimeout("slow"), httpx.ConnectError("refused")]

    def handler(request: httpx.Request) -> httpx.Response:
        raise errors.pop(0)

    client, http = _client(handler)
    async with http:
        with pytest.raises(TranscriptionError) as timeout_exc:
            await client.transcribe(b"abc", language_tag="en", mime_type=None)
        with pytest.raises(TranscriptionError) as network_exc:
            await client.transcribe(b"abc", language_tag="en", mime_type=None)
    assert timeout_exc.value.kind == "timeout"
    assert network_exc.value.kind == "network"


@pytest.mark.asyncio
async def test_check_reports_reachable_provider() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v1/projects"
        return httpx.Response(200, json={"projects": [{"project_id": "p1"}]})

    client, http = _client(handler)
    async with http:
        status = await client.check()
    assert status.configured is True
    assert status.reachable is True


@pytest.mark.asyncio
async def test_check_without_key_makes_no_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client, http = _client(handler, api_key="")
    async with http:
        status = await client.check()
    assert client.configured is False
    assert status.configured is False
    assert status.reachable is False


@pytest.mark.asyncio
async def test_check_reports_rejected_key() -> None:
    client, http = _client(lambda request: httpx.Response(403))
    async with http:
        status = await client.check()
    assert status.reachable is False
    assert status.detail == "status 403"


@pytest.mark.asyncio
async def test_malformed_base_url_is_a_network_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = DeepgramClient(http, api_key="dg-key", base_url="https://dg.test:notaport", model="general", timeout_s=5.0)
    async with http:
        with pytest.raises(TranscriptionError) as exc:
            await client.transcribe(b"abc", language_tag="en", mime_type=None)
        status = await client.check()
    assert exc.value.kind == "network"
    assert status.configured is True
    assert status.reachable is False
