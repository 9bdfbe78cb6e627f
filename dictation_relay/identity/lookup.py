"""Identity lookup interface consumed by the auth handshake."""

from __future__ import annotations

from typing import Protocol

from dictation_relay.state.identity import Identity


class IdentityLookup(Protocol):
    async def find_by_email_and_code(self, email: str, code: str) -> Identity | None:
        """Return the identity whose email and activation code both match, else None.

        Inactive identities are returned with `active=False`; callers decide.
        Raises IdentityLookupError when the store cannot be reached.
        """
        ...


__all__ = ["IdentityLookup"]
