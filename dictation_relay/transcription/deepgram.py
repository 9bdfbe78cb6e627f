"""Deepgram pre-recorded transcription client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from dictation_relay.errors import TranscriptionError
from dictation_relay.state.transcript import ProviderStatus, TranscriptResult
from dictation_relay.config.provider import (
    DEEPGRAM_LISTEN_PATH,
    DEEPGRAM_PROJECTS_PATH,
    DEEPGRAM_CHECK_TIMEOUT_S,
)

from .formats import listen_params

logger = logging.getLogger(__name__)


def _first_alternative(data: Any) -> dict[str, Any]:
    try:
        alternative = data["results"]["channels"][0]["alternatives"][0]
    except (KeyError, IndexError, TypeError) as exc:
        raise TranscriptionError(kind="malformed", message="unexpected response shape from Deepgram") from exc
    if not isinstance(alternative, dict):
        raise TranscriptionError(kind="malformed", message="unexpected response shape from Deepgram")
    return alternative


class DeepgramClient:
    """Sends one complete audio payload to Deepgram's /v1/listen and parses the reply."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_key: str,
        base_url: str,
        model: str,
        timeout_s: float,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout_s = float(timeout_s)

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def transcribe(self, audio: bytes, *, language_tag: str, mime_type: str | None) -> TranscriptResult:
        content_type, params = listen_params(model=self._model, language_tag=language_tag, mime_type=mime_type)
        headers = {"Authorization": f"Token {self._api_key}", "Content-Type": content_type}
        logger.info(
            "deepgram: sending %s bytes content_type=%s language=%s",
            len(audio),
            content_type,
            language_tag,
        )
        try:
            response = await self._client.post(
                f"{self._base_url}{DEEPGRAM_LISTEN_PATH}",
                params=params,
                headers=headers,
                content=audio,
                timeout=self._timeout_s,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            raise TranscriptionError(kind="timeout", message="Deepgram request timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise TranscriptionError(
                kind="upstream",
                message=f"Deepgram returned status {exc.response.status_code}",
            ) from exc
        except httpx.HTTPError as exc:
            raise TranscriptionError(kind="network", message=f"Deepgram request failed: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise TranscriptionError(kind="network", message=f"invalid Deepgram URL: {exc}") from exc
        except ValueError as exc:
            raise TranscriptionError(kind="malformed", message="Deepgram returned invalid JSON") from exc

        alternative = _first_alternative(data)
        transcript = alternative.get("transcript") or ""
        confidence = alternative.get("confidence")
        return TranscriptResult(
            transcript=transcript.strip() if isinstance(transcript, str) else "",
            confidence=float(confidence) if isinstance(confidence, (int, float)) and confidence else None,
            language=language_tag,
        )

    async def check(self) -> ProviderStatus:
        if not self.configured:
            return ProviderStatus(configured=False, reachable=False, detail="DEEPGRAM_API_KEY is not set")
        try:
            response = await self._client.get(
                f"{self._base_url}{DEEPGRAM_PROJECTS_PATH}",
                headers={"Authorization": f"Token {self._api_key}"},
                timeout=DEEPGRAM_CHECK_TIMEOUT_S,
            )
            response.raise_for_status()
            projects = response.json().get("projects") or []
        except httpx.HTTPStatusError as exc:
            return ProviderStatus(configured=True, reachable=False, detail=f"status {exc.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, AttributeError) as exc:
            return ProviderStatus(configured=True, reachable=False, detail=str(exc) or type(exc).__name__)
        return ProviderStatus(configured=True, reachable=True, detail=f"{len(projects)} projects")


__all__ = ["DeepgramClient"]
