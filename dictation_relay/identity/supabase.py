"""Identity lookup against the Supabase `users` table over its REST API."""

from __future__ import annotations

import logging

import httpx

from dictation_relay.errors import IdentityLookupError
from dictation_relay.state.identity import Identity
from dictation_relay.config.identity import SUPABASE_TIMEOUT_S

from .records import code_matches, normalize_email, identity_from_row

logger = logging.getLogger(__name__)


class SupabaseIdentityLookup:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        url: str,
        api_key: str,
        table: str = "users",
        timeout_s: float = SUPABASE_TIMEOUT_S,
    ) -> None:
        self._client = client
        self._endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._timeout_s = float(timeout_s)

    async def find_by_email_and_code(self, email: str, code: str) -> Identity | None:
        email = normalize_email(email)
        if not email:
            return None
        params = {"select": "*", "email": f"eq.{email}", "limit": "1"}
        try:
            response = await self._client.get(
                self._endpoint,
                params=params,
                headers=self._headers,
                timeout=self._timeout_s,
            )
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPStatusError as exc:
            raise IdentityLookupError(f"users query failed with status {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise IdentityLookupError(f"users query failed: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise IdentityLookupError(f"invalid Supabase URL: {exc}") from exc
        except ValueError as exc:
            raise IdentityLookupError("users query returned invalid JSON") from exc

        if not isinstance(rows, list) or not rows or not isinstance(rows[0], dict):
            return None
        row = rows[0]
        if not code_matches(row, code):
            return None
        return identity_from_row(row)


__all__ = ["SupabaseIdentityLookup"]
