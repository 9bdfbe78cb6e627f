"""Configuration module exports (env names and defaults only)."""

from .languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from .limits import DEFAULT_MAX_AUDIO_BYTES, DEFAULT_MIN_AUDIO_BYTES

__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_MAX_AUDIO_BYTES",
    "DEFAULT_MIN_AUDIO_BYTES",
    "SUPPORTED_LANGUAGES",
]
