from __future__ import annotations

import pytest

from dictation_relay.state.session import Session
from dictation_relay.state.identity import Identity
from dictation_relay.errors import AudioLimitExceededError


def _identity(email: str = "a@b.com") -> Identity:
    return Identity(
        email=email,
        first_name="Ada",
        last_name="Lovelace",
        language="fr",
        days_remaining=3,
        active=True,
    )


def test_new_session_defaults() -> None:
    session = Session(max_audio_bytes=10)
    assert len(session.session_id) == 32
    assert session.authenticated is False
    assert session.identity is None
    assert session.language == "en"
    assert session.client_kind == "unknown"
    assert session.buffered_bytes == 0


def test_set_authenticated_is_idempotent_for_same_identity() -> None:
    session = Session(max_audio_bytes=10)
    session.set_authenticated(_identity())
    session.set_authenticated(_identity())
    assert session.authenticated is True
    assert session.identity == _identity()


def test_set_authenticated_refuses_other_identity() -> None:
    session = Session(max_audio_bytes=10)
    session.set_authenticated(_identity())
    with pytest.raises(ValueError):
        session.set_authenticated(_identity("other@b.com"))
    assert session.identity is not None
    assert session.identity.email == "a@b.com"


def test_set_language_rejects_unsupported_codes() -> None:
    session = Session(max_audio_bytes=10)
    assert session.set_language("de") is True
    assert session.set_language("nl") is False
    assert session.language == "de"


def test_append_audio_tracks_total() -> None:
    session = Session(max_audio_bytes=10)
    assert session.append_audio(b"abc") == 3
    assert session.append_audio(b"de") == 5
    assert session.chunk_count == 2


def test_append_exactly_at_cap_is_allowed() -> None:
    session = Session(max_audio_bytes=4)
    assert session.append_audio(b"abcd") == 4


def test_append_over_cap_clears_buffer() -> None:
    session = Session(max_audio_bytes=5)
    session.append_audio(b"abc")
    with pytest.raises(AudioLimitExceededError) as exc:
        session.append_audio(b"def")
    assert exc.value.attempted_bytes == 6
    assert exc.value.max_bytes == 5
    assert session.buffered_bytes == 0
    assert session.chunk_count == 0

    # No carry-over after the reset.
    assert session.append_audio(b"xy") == 2
    assert session.take_audio() == b"xy"


def test_take_audio_snapshot_does_not_alias_live_buffer() -> None:
    session = Session(max_audio_bytes=100)
    session.append_audio(b"one")
    session.append_audio(b"two")
    snapshot = session.take_audio()
    session.append_audio(b"three")
    assert snapshot == b"onetwo"
    assert session.take_audio() == b"three"
    assert session.take_audio() == b""


def test_appended_chunk_is_copied() -> None:
    session = Session(max_audio_bytes=100)
    chunk = bytearray(b"abc")
    session.append_audio(chunk)
    chunk[0] = ord("z")
    assert session.take_audio() == b"abc"
