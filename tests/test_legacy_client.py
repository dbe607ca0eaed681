"""Tests for the legacy system client."""

import json

import httpx
import pytest

from recruitment_api.integrations.legacy import (
    LegacyCandidate,
    LegacySyncClient,
    LegacyTransportError,
    parse_response_body,
)

ENDPOINT = "http://legacy.test/candidates"
ANN = LegacyCandidate(first_name="Ann", last_name="Lee", email="ann@example.com")


def _client(handler) -> LegacySyncClient:
    return LegacySyncClient(timeout=1.0, transport=httpx.MockTransport(handler))


class TestParseResponseBody:
    def test_json_object(self) -> None:
        assert parse_response_body('{"message": "ok"}') == {"message": "ok"}

    def test_plain_text(self) -> None:
        assert parse_response_body("Bad Gateway") == "Bad Gateway"

    def test_empty(self) -> None:
        assert parse_response_body("") is None


class TestNotify:
    @pytest.mark.asyncio
    async def test_sends_payload_and_key(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": "legacy-1"})

        response = await _client(handler).notify(ENDPOINT, "legacy-key", ANN)

        assert response.ok is True
        assert response.status == 201
        assert response.body == {"id": "legacy-1"}
        request = seen[0]
        assert request.method == "POST"
        assert request.headers["x-api-key"] == "legacy-key"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "firstName": "Ann",
            "lastName": "Lee",
            "email": "ann@example.com",
        }

    @pytest.mark.asyncio
    async def test_failed_response_is_returned_not_raised(self) -> None:
        client = _client(lambda request: httpx.Response(422, json={"message": "duplicate upstream"}))

        response = await client.notify(ENDPOINT, "legacy-key", ANN)

        assert response.ok is False
        assert response.status == 422
        assert response.body == {"message": "duplicate upstream"}

    @pytest.mark.asyncio
    async def test_text_body_is_kept_raw(self) -> None:
        client = _client(lambda request: httpx.Response(500, text="Internal Server Error"))

        response = await client.notify(ENDPOINT, "legacy-key", ANN)

        assert response.body == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self) -> None:
        client = _client(lambda request: httpx.Response(204))

        response = await client.notify(ENDPOINT, "legacy-key", ANN)

        assert response.ok is True
        assert response.body is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [httpx.ConnectError("refused"), httpx.ReadTimeout("slow"), httpx.RemoteProtocolError("eof")],
    )
    async def test_transport_errors_are_raised(self, error) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise error

        with pytest.raises(LegacyTransportError):
            await _client(handler).notify(ENDPOINT, "legacy-key", ANN)
