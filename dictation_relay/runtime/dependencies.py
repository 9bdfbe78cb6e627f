"""Runtime dependency construction (identity store, transcription broker, session registry)."""

from __future__ import annotations

import logging

import httpx

from dictation_relay.state import RuntimeDeps
from dictation_relay.state.settings import AppSettings
from dictation_relay.identity.lookup import IdentityLookup
from dictation_relay.identity.file import FileIdentityLookup
from dictation_relay.handlers.sessions import SessionRegistry
from dictation_relay.config.identity import IDENTITY_BACKEND_SUPABASE
from dictation_relay.transcription.broker import TranscriptionBroker
from dictation_relay.transcription.deepgram import DeepgramClient
from dictation_relay.identity.supabase import SupabaseIdentityLookup

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def build_identity_lookup(settings: AppSettings, http_client: httpx.AsyncClient) -> IdentityLookup:
    if settings.identity.backend == IDENTITY_BACKEND_SUPABASE:
        logger.info("identity: using supabase table %s", settings.identity.users_table)
        return SupabaseIdentityLookup(
            http_client,
            url=settings.identity.supabase_url,
            api_key=settings.identity.supabase_key,
            table=settings.identity.users_table,
        )
    return FileIdentityLookup.from_path(settings.identity.users_file)


def build_broker(settings: AppSettings, http_client: httpx.AsyncClient) -> TranscriptionBroker:
    provider = DeepgramClient(
        http_client,
        api_key=settings.provider.api_key,
        base_url=settings.provider.base_url,
        model=settings.provider.model,
        timeout_s=settings.provider.timeout_s,
    )
    if not provider.configured:
        logger.warning("transcription: DEEPGRAM_API_KEY is not set; audio requests will be rejected")
    return TranscriptionBroker(
        provider,
        max_audio_bytes=settings.limits.max_audio_bytes,
        min_audio_bytes=settings.limits.min_audio_bytes,
        timeout_s=settings.provider.timeout_s,
    )


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()
    http_client = httpx.AsyncClient()
    try:
        identities = build_identity_lookup(settings, http_client)
        broker = build_broker(settings, http_client)
    except Exception:
        await http_client.aclose()
        raise

    return RuntimeDeps(
        sessions=SessionRegistry(max_audio_bytes=settings.limits.max_audio_bytes),
        identities=identities,
        broker=broker,
        settings=settings,
        _http_client=http_client,
    )


__all__ = ["RuntimeDeps", "build_broker", "build_identity_lookup", "build_runtime_deps"]
