"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from dictation_relay.state.settings import AppSettings
    from dictation_relay.identity.lookup import IdentityLookup
    from dictation_relay.handlers.sessions import SessionRegistry
    from dictation_relay.transcription.broker import TranscriptionBroker


@dataclass(slots=True)
class RuntimeDeps:
    sessions: SessionRegistry
    identities: IdentityLookup
    broker: TranscriptionBroker
    settings: AppSettings
    _http_client: Any = None

    async def shutdown(self) -> None:
        if self._http_client is None:
            return
        try:
            await self._http_client.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
