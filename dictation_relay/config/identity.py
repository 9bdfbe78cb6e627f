"""Identity store configuration."""

from __future__ import annotations

from pathlib import Path

ENV_IDENTITY_BACKEND = "IDENTITY_BACKEND"
ENV_SUPABASE_URL = "SUPABASE_URL"
ENV_SUPABASE_USERS_TABLE = "SUPABASE_USERS_TABLE"
ENV_USERS_FILE = "USERS_FILE"

IDENTITY_BACKEND_SUPABASE = "supabase"
IDENTITY_BACKEND_FILE = "file"

DEFAULT_SUPABASE_USERS_TABLE = "users"
DEFAULT_USERS_FILE = Path("users.json")
SUPABASE_TIMEOUT_S = 10.0

__all__ = [
    "ENV_IDENTITY_BACKEND",
    "ENV_SUPABASE_URL",
    "ENV_SUPABASE_USERS_TABLE",
    "ENV_USERS_FILE",
    "IDENTITY_BACKEND_SUPABASE",
    "IDENTITY_BACKEND_FILE",
    "DEFAULT_SUPABASE_USERS_TABLE",
    "DEFAULT_USERS_FILE",
    "SUPABASE_TIMEOUT_S",
]
