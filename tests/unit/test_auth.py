from __future__ import annotations

import pytest

from dictation_relay.errors import IdentityLookupError
from dictation_relay.state.messages import AuthMessage
from dictation_relay.handlers.websocket.auth import (
    mask_code,
    choose_language,
    resolve_identity,
    authenticate_session,
)

from tests.utils import FakeWebSocket, user_row, build_runtime_deps


class _BrokenLookup:
    async def find_by_email_and_code(self, email: str, code: str):
        raise IdentityLookupError("store unreachable")


def test_mask_code_hides_most_of_the_code() -> None:
    assert mask_code("ABCDEF") == "AB***"
    assert mask_code("") == "missing"


@pytest.mark.parametrize(
    ("declared", "stored", "expected"),
    [
        ("en", "fr", "en"),
        (None, "fr", "fr"),
        ("nl", "de", "de"),
        (None, None, "en"),
        (None, "xx", "en"),
    ],
)
def test_choose_language_prefers_declared_then_stored(declared, stored, expected) -> None:
    assert choose_language(declared, stored) == expected


@pytest.mark.asyncio
async def test_resolve_identity_swallows_lookup_failures() -> None:
    assert await resolve_identity(_BrokenLookup(), "a@b.com", "X1") is None


@pytest.mark.asyncio
async def test_resolve_identity_requires_both_credentials() -> None:
    deps = build_runtime_deps()
    assert await resolve_identity(deps.identities, "", "X1") is None
    assert await resolve_identity(deps.identities, "a@b.com", "") is None


@pytest.mark.asyncio
async def test_successful_auth_reply() -> None:
    deps = build_runtime_deps()
    session = deps.sessions.register()
    ws = FakeWebSocket()

    ok = await authenticate_session(ws, session, AuthMessage(email="A@B.com", activation_code="x1"), deps.identities)

    assert ok is True
    assert session.authenticated is True
    assert ws.sent == [
        {
            "type": "auth",
            "status": "success",
            "user": session.identity.summary(),
            "language": "fr",
            "clientType": "desktop",
        }
    ]


@pytest.mark.asyncio
async def test_declared_client_type_is_kept() -> None:
    deps = build_runtime_deps()
    session = deps.sessions.register()
    ws = FakeWebSocket()
    await authenticate_session(
        ws, session, AuthMessage(email="a@b.com", activation_code="X1", client_type="web"), deps.identities
    )
    assert session.client_kind == "web"
    assert ws.last["clientType"] == "web"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "rows",
    [
        [],
        [user_row(code="OTHER")],
        [user_row(verified=False)],
        [user_row(days_left=-2)],
    ],
)
async def test_failures_are_uniform(rows: list[dict]) -> None:
    deps = build_runtime_deps(rows=rows)
    session = deps.sessions.register()
    ws = FakeWebSocket()

    ok = await authenticate_session(ws, session, AuthMessage(email="a@b.com", activation_code="X1"), deps.identities)

    assert ok is False
    assert session.authenticated is False
    assert ws.sent == [{"type": "auth", "status": "error", "message": "Authentication failed"}]


@pytest.mark.asyncio
async def test_reauth_as_another_account_is_refused() -> None:
    deps = build_runtime_deps(rows=[user_row(), user_row(email="c@d.com", code="Y2")])
    session = deps.sessions.register()
    ws = FakeWebSocket()

    await authenticate_session(ws, session, AuthMessage(email="a@b.com", activation_code="X1"), deps.identities)
    ok = await authenticate_session(ws, session, AuthMessage(email="c@d.com", activation_code="Y2"), deps.identities)

    assert ok is False
    assert session.authenticated is True
    assert session.identity.email == "a@b.com"
    assert ws.last == {"type": "auth", "status": "error", "message": "Authentication failed"}


@pytest.mark.asyncio
async def test_failed_reauth_keeps_session_authenticated() -> None:
    deps = build_runtime_deps()
    session = deps.sessions.register()
    ws = FakeWebSocket()

    await authenticate_session(ws, session, AuthMessage(email="a@b.com", activation_code="X1"), deps.identities)
    await authenticate_session(ws, session, AuthMessage(email="a@b.com", activation_code="BAD"), deps.identities)

    assert session.authenticated is True
    assert ws.last["status"] == "error"
