from .session import Session
from .identity import Identity
from .runtime import RuntimeDeps
from .settings import AppSettings
from .transcript import ProviderStatus, TranscriptResult

__all__ = ["AppSettings", "Identity", "ProviderStatus", "RuntimeDeps", "Session", "TranscriptResult"]
