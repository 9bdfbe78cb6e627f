"""Mapping from client audio formats and languages to Deepgram request parameters."""

from __future__ import annotations

from dictation_relay.config.provider import DEFAULT_CONTENT_TYPE
from dictation_relay.config.languages import DEFAULT_LANGUAGE, PROVIDER_LANGUAGE_TAGS


def provider_language(language: str | None) -> str:
    return PROVIDER_LANGUAGE_TAGS.get(language or "", DEFAULT_LANGUAGE)


def content_type_and_params(mime_type: str | None) -> tuple[str, dict[str, str]]:
    """Return the request Content-Type and the encoding query params for a mime type.

    MediaRecorder reports e.g. "audio/webm;codecs=opus", so matching is by substring.
    """
    mime = (mime_type or "").lower()
    if "webm" in mime:
        return "audio/webm", {"encoding": "opus"}
    if "wav" in mime:
        return "audio/wav", {"encoding": "linear16", "sample_rate": "16000", "channels": "1"}
    if "mp3" in mime:
        return "audio/mp3", {}
    if "ogg" in mime:
        return "audio/ogg", {}
    return DEFAULT_CONTENT_TYPE, {}


def listen_params(*, model: str, language_tag: str, mime_type: str | None) -> tuple[str, dict[str, str]]:
    content_type, encoding = content_type_and_params(mime_type)
    params = {
        "model": model,
        "punctuate": "true",
        "smart_format": "true",
        "language": language_tag,
    }
    params.update(encoding)
    if language_tag == "en":
        params["detect_language"] = "true"
    return content_type, params


__all__ = ["content_type_and_params", "listen_params", "provider_language"]
