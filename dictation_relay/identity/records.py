"""Helpers for user rows as stored in the `users` table.

Rows use the table's snake_case columns:
email, first_name, last_name, activation_code, is_verified, language,
subscription_type, trial_end_date, subscription_end.
"""

from __future__ import annotations

import hmac
import math
from typing import Any
from datetime import datetime, timezone

from dictation_relay.state.identity import Identity

_SECONDS_PER_DAY = 24 * 60 * 60


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def subscription_end(row: dict[str, Any]) -> datetime | None:
    # Free trials expire on trial_end_date, paid plans on subscription_end.
    if row.get("subscription_type") == "free":
        return parse_timestamp(row.get("trial_end_date"))
    return parse_timestamp(row.get("subscription_end"))


def days_remaining(end: datetime | None, *, now: datetime | None = None) -> int:
    if end is None:
        return 0
    now = now or datetime.now(timezone.utc)
    days = math.ceil((end - now).total_seconds() / _SECONDS_PER_DAY)
    return days if days > 0 else 0


def is_expired(row: dict[str, Any], *, now: datetime | None = None) -> bool:
    end = subscription_end(row)
    if end is None:
        return True
    return (now or datetime.now(timezone.utc)) > end


def code_matches(row: dict[str, Any], code: str) -> bool:
    stored = row.get("activation_code")
    if not isinstance(stored, str) or not stored or not code:
        return False
    return hmac.compare_digest(stored.strip().upper().encode("utf-8"), code.strip().upper().encode("utf-8"))


def identity_from_row(row: dict[str, Any], *, now: datetime | None = None) -> Identity:
    language = row.get("language")
    return Identity(
        email=normalize_email(str(row.get("email") or "")),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
        language=language if isinstance(language, str) and language else None,
        days_remaining=days_remaining(subscription_end(row), now=now),
        active=bool(row.get("is_verified")) and not is_expired(row, now=now),
    )


__all__ = [
    "code_matches",
    "days_remaining",
    "identity_from_row",
    "is_expired",
    "normalize_email",
    "parse_timestamp",
    "subscription_end",
]
