"""Client for the legacy recruitment system."""

import json
from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog

logger = structlog.get_logger()

# Path of the candidate resource on the legacy API
LEGACY_CANDIDATES_PATH = "/candidates"


@dataclass
class LegacyCandidate:
    """Candidate fields forwarded to the legacy system."""

    first_name: str
    last_name: str
    email: str

    def to_payload(self) -> dict[str, str]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }


@dataclass
class LegacyResponse:
    """Completed legacy API call, successful or not."""

    ok: bool
    status: int
    body: Any = None  # Parsed JSON, raw text, or None when empty


class LegacyTransportError(Exception):
    """Raised when the legacy API request could not be completed."""

    pass


def parse_response_body(text: str) -> Any:
    """Parse a response body as JSON, falling back to raw text, or None if empty."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class LegacySyncClient:
    """Notifies the legacy system about newly created candidates."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def notify(
        self,
        endpoint: str,
        api_key: str,
        candidate: LegacyCandidate,
    ) -> LegacyResponse:
        """Send a single candidate notification.

        Args:
            endpoint: Absolute URL of the legacy candidates resource
            api_key: Credential sent in the x-api-key header
            candidate: Fields to forward

        Returns:
            LegacyResponse describing the completed call

        Raises:
            LegacyTransportError: If the request could not be completed
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    endpoint,
                    json=candidate.to_payload(),
                    headers={
                        "Content-Type": "application/json",
                        "x-api-key": api_key,
                    },
                )
            except httpx.TransportError as e:
                logger.error(
                    "Legacy API request failed",
                    endpoint=endpoint,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise LegacyTransportError(f"Legacy API request failed: {e}") from e

        body = parse_response_body(response.text)

        logger.info(
            "Legacy API responded",
            endpoint=endpoint,
            status_code=response.status_code,
        )

        return LegacyResponse(
            ok=response.is_success,
            status=response.status_code,
            body=body,
        )
