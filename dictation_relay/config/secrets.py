"""Secrets configuration (env variable names only)."""

from __future__ import annotations

ENV_DEEPGRAM_API_KEY = "DEEPGRAM_API_KEY"

# Service role key bypasses row level security; anon key is the fallback.
ENV_SUPABASE_SERVICE_ROLE_KEY = "SUPABASE_SERVICE_ROLE_KEY"
ENV_SUPABASE_ANON_KEY = "SUPABASE_ANON_KEY"

__all__ = ["ENV_DEEPGRAM_API_KEY", "ENV_SUPABASE_ANON_KEY", "ENV_SUPABASE_SERVICE_ROLE_KEY"]
