"""Tests for the Upshot topic registry client."""

import asyncio

import httpx
import pytest

from allora_k.errors import ApiError, NetworkError, ParseError
from allora_k.services.upshot_client import UpshotAPIClient


def test_get_allora_topics_parses_topics(registry_transport) -> None:
    """Test topics are parsed and numeric ids become strings."""
    client = UpshotAPIClient("secret", transport=registry_transport.transport)

    topics = asyncio.run(client.get_allora_topics())

    assert [t.topic_id for t in topics] == ["13", "7"]
    assert topics[0].topic_name == "ETH 5min Prediction"
    assert topics[0].is_active is True
    assert topics[1].description == ""


def test_request_url_and_api_key_header(registry_transport) -> None:
    """Test the registry endpoint and the x-api-key header."""
    client = UpshotAPIClient(
        "secret",
        base_url="https://registry.example/v2/",
        chain_id="allora-mainnet-1",
        transport=registry_transport.transport,
    )

    asyncio.run(client.get_allora_topics())

    assert len(registry_transport.requests) == 1
    request = registry_transport.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://registry.example/v2/allora/allora-mainnet-1/topics"
    assert request.headers["x-api-key"] == "secret"


def test_non_success_status_raises_api_error() -> None:
    """Test a 401 from the registry becomes an ApiError."""
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "bad key"}))
    client = UpshotAPIClient("wrong", transport=transport)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(client.get_allora_topics())

    assert exc_info.value.status_code == 401


def test_malformed_body_raises_parse_error() -> None:
    """Test bodies that are not JSON or miss data.topics."""
    for response in (
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"data": {}}),
    ):
        transport = httpx.MockTransport(lambda request, response=response: response)
        client = UpshotAPIClient("secret", transport=transport)

        with pytest.raises(ParseError):
            asyncio.run(client.get_allora_topics())


def test_transport_failure_raises_network_error() -> None:
    """Test connection errors become NetworkError."""
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = UpshotAPIClient("secret", transport=httpx.MockTransport(refuse))

    with pytest.raises(NetworkError):
        asyncio.run(client.get_allora_topics())
