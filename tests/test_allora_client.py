"""Tests for the Allora inference client."""

import asyncio

import httpx
import pytest

from allora_k.errors import ApiError, ConfigurationError, NetworkError, ParseError
from allora_k.services.allora_client import AlloraAPIClient
from allora_k.utils.config_loader import AlloraConfig, ChainConfig

ETH_5MIN_VALUE = "3393.364326646801085508"


def test_get_inference_returns_normalized_value(inference_transport) -> None:
    """Test the normalized inference is returned verbatim."""
    client = AlloraAPIClient("testnet", "key", transport=inference_transport.transport)

    result = asyncio.run(client.get_inference("13"))

    assert result.topic_id == "13"
    assert result.normalized_value == ETH_5MIN_VALUE


def test_chain_slug_selects_inference_url(inference_transport) -> None:
    """Test the chain slug picks the configured base URL and the key is sent."""
    config = AlloraConfig(
        chains={"mainnet": ChainConfig(chain_id="allora-mainnet-1", inference_base_url="https://inf.example/main/")}
    )
    client = AlloraAPIClient("MAINNET", "key", allora_config=config, transport=inference_transport.transport)

    asyncio.run(client.get_inference("42"))

    request = inference_transport.requests[0]
    assert str(request.url) == "https://inf.example/main/42"
    assert request.headers["x-api-key"] == "key"


def test_missing_slug_uses_default_chain(inference_transport) -> None:
    """Test that no slug falls back to the testnet chain."""
    client = AlloraAPIClient(None, None, transport=inference_transport.transport)

    asyncio.run(client.get_inference("1"))

    request = inference_transport.requests[0]
    assert "allora-testnet-1" in str(request.url)
    assert "x-api-key" not in request.headers


def test_unknown_chain_slug() -> None:
    """Test unknown chain slugs are configuration errors."""
    with pytest.raises(ConfigurationError):
        AlloraAPIClient("devnet", "key")


def test_numeric_value_is_stringified() -> None:
    """Test numeric inference values are kept as text."""
    body = {"data": {"inference_data": {"network_inference_normalized": 0.5}}}
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    client = AlloraAPIClient("testnet", "key", transport=transport)

    assert asyncio.run(client.get_inference("2")).normalized_value == "0.5"


def test_missing_value_raises_parse_error() -> None:
    """Test a body without the normalized inference."""
    body = {"data": {"inference_data": {"network_inference": "1"}}}
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    client = AlloraAPIClient("testnet", "key", transport=transport)

    with pytest.raises(ParseError):
        asyncio.run(client.get_inference("13"))


def test_server_error_raises_api_error() -> None:
    """Test a 500 response."""
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    client = AlloraAPIClient("testnet", "key", transport=transport)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(client.get_inference("13"))

    assert exc_info.value.status_code == 500
    assert "500" in str(exc_info.value)


def test_timeout_raises_network_error() -> None:
    """Test transport timeouts."""
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = AlloraAPIClient("testnet", "key", transport=httpx.MockTransport(slow))

    with pytest.raises(NetworkError):
        asyncio.run(client.get_inference("13"))
