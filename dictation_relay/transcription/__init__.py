from .broker import TranscriptionBroker
from .deepgram import DeepgramClient
from .provider import TranscriptionProvider

__all__ = ["DeepgramClient", "TranscriptionBroker", "TranscriptionProvider"]
