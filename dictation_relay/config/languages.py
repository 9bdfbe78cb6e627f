"""Supported dictation languages."""

from __future__ import annotations

SUPPORTED_LANGUAGES: frozenset[str] = frozenset({"fr", "en", "de", "es", "it", "pt"})

DEFAULT_LANGUAGE = "en"

# Session language -> Deepgram `language` query value.
PROVIDER_LANGUAGE_TAGS: dict[str, str] = {
    "fr": "fr",
    "en": "en",
    "de": "de",
    "es": "es",
    "it": "it",
    "pt": "pt",
}

__all__ = ["DEFAULT_LANGUAGE", "PROVIDER_LANGUAGE_TAGS", "SUPPORTED_LANGUAGES"]
