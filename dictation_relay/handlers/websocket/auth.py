"""Session authentication against the identity store."""

from __future__ import annotations

import logging

from fastapi import WebSocket

from dictation_relay.state.session import Session
from dictation_relay.state.identity import Identity
from dictation_relay.errors import IdentityLookupError
from dictation_relay.state.messages import AuthMessage
from dictation_relay.identity.lookup import IdentityLookup
from dictation_relay.identity.records import normalize_email
from dictation_relay.config.languages import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from dictation_relay.config.websocket import (
    MSG_AUTH,
    DEFAULT_CLIENT_KIND,
    AUTH_FAILED_MESSAGE,
    AUTHENTICATED_CLIENT_KIND,
)

from .errors import safe_send_json

logger = logging.getLogger(__name__)


def mask_code(code: str) -> str:
    return f"{code[:2]}***" if code else "missing"


def choose_language(declared: str | None, stored: str | None) -> str:
    # The client's declared language wins over the stored preference.
    if declared in SUPPORTED_LANGUAGES:
        return declared
    if stored in SUPPORTED_LANGUAGES:
        return stored
    return DEFAULT_LANGUAGE


async def resolve_identity(identities: IdentityLookup, email: str, code: str) -> Identity | None:
    """Return an active identity for the credentials, or None with the reason logged."""
    if not email or not code:
        logger.warning("auth: missing email or activation code")
        return None
    try:
        identity = await identities.find_by_email_and_code(email, code)
    except IdentityLookupError:
        logger.exception("auth: identity lookup failed for %s", email)
        return None
    if identity is None:
        logger.warning("auth: no account matches %s with code %s", email, mask_code(code))
        return None
    if not identity.active:
        logger.warning("auth: account %s is not active or has expired", email)
        return None
    return identity


async def send_auth_failure(ws: WebSocket) -> bool:
    return await safe_send_json(ws, {"type": MSG_AUTH, "status": "error", "message": AUTH_FAILED_MESSAGE})


async def authenticate_session(
    ws: WebSocket,
    session: Session,
    message: AuthMessage,
    identities: IdentityLookup,
) -> bool:
    email = normalize_email(message.email)
    logger.info(
        "auth: attempt session_id=%s email=%s code=%s",
        session.session_id,
        email,
        mask_code(message.activation_code),
    )

    identity = await resolve_identity(identities, email, message.activation_code)
    if identity is None:
        await send_auth_failure(ws)
        return False

    try:
        session.set_authenticated(identity)
    except ValueError:
        logger.warning("auth: session %s is already bound to another account", session.session_id)
        await send_auth_failure(ws)
        return False

    session.set_language(choose_language(message.language, identity.language))
    if message.client_type:
        session.set_client_kind(message.client_type)
    elif session.client_kind == DEFAULT_CLIENT_KIND:
        session.set_client_kind(AUTHENTICATED_CLIENT_KIND)

    logger.info(
        "auth: success session_id=%s email=%s days_remaining=%s language=%s",
        session.session_id,
        identity.email,
        identity.days_remaining,
        session.language,
    )
    await safe_send_json(
        ws,
        {
            "type": MSG_AUTH,
            "status": "success",
            "user": identity.summary(),
            "language": session.language,
            "clientType": session.client_kind,
        },
    )
    return True


__all__ = ["authenticate_session", "choose_language", "mask_code", "resolve_identity"]
