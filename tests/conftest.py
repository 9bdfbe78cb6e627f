from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Keep `import dictation_relay...` working when running `pytest` from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests build settings explicitly; never pick up a developer's real credentials.
    for name in (
        "DEEPGRAM_API_KEY",
        "IDENTITY_BACKEND",
        "SUPABASE_URL",
        "SUPABASE_SERVICE_ROLE_KEY",
        "SUPABASE_ANON_KEY",
        "USERS_FILE",
        "WS_ENDPOINT_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
