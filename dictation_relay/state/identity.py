"""Read-only view of a registered user."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Identity:
    email: str
    first_name: str
    last_name: str
    language: str | None
    days_remaining: int
    active: bool

    def summary(self) -> dict[str, object]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "daysRemaining": self.days_remaining,
        }


__all__ = ["Identity"]
