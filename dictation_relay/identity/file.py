"""Identity lookup backed by a JSON file of user rows (development and tests)."""

from __future__ import annotations

import logging
from typing import Any
from pathlib import Path

import orjson

from dictation_relay.state.identity import Identity

from .records import code_matches, normalize_email, identity_from_row

logger = logging.getLogger(__name__)


class FileIdentityLookup:
    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self._rows: dict[str, dict[str, Any]] = {}
        for row in rows or []:
            email = normalize_email(str(row.get("email") or ""))
            if email:
                self._rows[email] = row

    @classmethod
    def from_path(cls, path: Path) -> FileIdentityLookup:
        if not path.is_file():
            logger.warning("identity: users file %s not found; no account can authenticate", path)
            return cls()
        data = orjson.loads(path.read_bytes())
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON array of user rows")
        lookup = cls([row for row in data if isinstance(row, dict)])
        logger.info("identity: loaded %s user rows from %s", len(lookup), path)
        return lookup

    def __len__(self) -> int:
        return len(self._rows)

    async def find_by_email_and_code(self, email: str, code: str) -> Identity | None:
        row = self._rows.get(normalize_email(email))
        if row is None or not code_matches(row, code):
            return None
        return identity_from_row(row)


__all__ = ["FileIdentityLookup"]
