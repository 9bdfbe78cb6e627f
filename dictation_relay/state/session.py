"""Per-connection dictation session state.

Handlers never touch the fields directly; the mutation methods below are the
only place the auth and buffer-cap invariants are enforced.
"""

from __future__ import annotations

import secrets

from dictation_relay.errors import AudioLimitExceededError
from dictation_relay.config.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from dictation_relay.config.websocket import DEFAULT_CLIENT_KIND

from .identity import Identity


class Session:
    __slots__ = (
        "session_id",
        "_max_audio_bytes",
        "_authenticated",
        "_identity",
        "_language",
        "_client_kind",
        "_audio_format",
        "_chunks",
        "_buffered_bytes",
    )

    def __init__(self, *, max_audio_bytes: int, session_id: str | None = None) -> None:
        self.session_id = session_id or secrets.token_hex(16)
        self._max_audio_bytes = max(0, int(max_audio_bytes))
        self._authenticated = False
        self._identity: Identity | None = None
        self._language = DEFAULT_LANGUAGE
        self._client_kind = DEFAULT_CLIENT_KIND
        self._audio_format: str | None = None
        self._chunks: list[bytes] = []
        self._buffered_bytes = 0

    @property
    def authenticated(self) -> bool:
        return self._authenticated

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def language(self) -> str:
        return self._language

    @property
    def client_kind(self) -> str:
        return self._client_kind

    @property
    def audio_format(self) -> str | None:
        return self._audio_format

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    @property
    def buffered_bytes(self) -> int:
        return self._buffered_bytes

    def set_authenticated(self, identity: Identity) -> None:
        """Bind the session to `identity`. Binding a different identity later is refused."""
        if self._identity is not None and self._identity.email != identity.email:
            raise ValueError("session is already bound to another identity")
        if self._identity is None:
            self._identity = identity
        self._authenticated = True

    def set_language(self, language: str) -> bool:
        if language not in SUPPORTED_LANGUAGES:
            return False
        self._language = language
        return True

    def set_client_kind(self, client_kind: str) -> None:
        self._client_kind = client_kind

    def set_audio_format(self, audio_format: str | None) -> None:
        self._audio_format = audio_format

    def append_audio(self, chunk: bytes) -> int:
        """Append a decoded chunk and return the new buffered total.

        Raises AudioLimitExceededError (after clearing the buffer) when the
        chunk would take the buffer past the cap.
        """
        attempted = self._buffered_bytes + len(chunk)
        if self._max_audio_bytes and attempted > self._max_audio_bytes:
            self.clear_audio()
            raise AudioLimitExceededError(attempted_bytes=attempted, max_bytes=self._max_audio_bytes)
        self._chunks.append(bytes(chunk))
        self._buffered_bytes = attempted
        return attempted

    def clear_audio(self) -> None:
        self._chunks = []
        self._buffered_bytes = 0

    def take_audio(self) -> bytes:
        """Return the buffered audio as one immutable snapshot and start a fresh buffer."""
        snapshot = b"".join(self._chunks)
        self.clear_audio()
        return snapshot


__all__ = ["Session"]
