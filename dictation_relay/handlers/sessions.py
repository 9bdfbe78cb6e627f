"""Registry of live dictation sessions, keyed by session id."""

from __future__ import annotations

from dictation_relay.state.session import Session


class SessionRegistry:
    def __init__(self, *, max_audio_bytes: int) -> None:
        self._max_audio_bytes = max(0, int(max_audio_bytes))
        self._sessions: dict[str, Session] = {}

    def register(self) -> Session:
        """Create and index a fresh, unauthenticated session."""
        session = Session(max_audio_bytes=self._max_audio_bytes)
        while session.session_id in self._sessions:
            session = Session(max_audio_bytes=self._max_audio_bytes)
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str | None) -> None:
        if session_id is None:
            return
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions


__all__ = ["SessionRegistry"]
