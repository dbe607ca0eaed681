"""External service integrations."""

from .legacy import LegacyResponse, LegacySyncClient, LegacyTransportError

__all__ = ["LegacyResponse", "LegacySyncClient", "LegacyTransportError"]
