"""Tests for the topics provider."""

import asyncio

import pytest

from allora_k.errors import ConfigurationError
from allora_k.models import Topic
from allora_k.plugins.topics_provider import TopicsProvider
from allora_k.runtime import Memory

EXPECTED_TEXT = (
    "Allora Network Topics: \n"
    "Topic Name: ETH 5min Prediction\n"
    "Topic Description: ETH price in 5 minutes\n"
    "Topic ID: 13\n"
    "Topic is Active: true\n"
    "Topic Updated At: 2024-12-01T10:00:00Z\n"
    "\n"
    "Topic Name: BTC 24h Prediction\n"
    "Topic Description: \n"
    "Topic ID: 7\n"
    "Topic is Active: false\n"
    "Topic Updated At: 2024-11-30T08:30:00Z\n"
    "\n"
)


@pytest.fixture
def provider(upshot_factory) -> TopicsProvider:
    return TopicsProvider(client_factory=upshot_factory)


def test_get_formats_topics(provider: TopicsProvider, runtime) -> None:
    """Test the text block layout for every topic."""
    text = asyncio.run(provider.get(runtime, Memory()))

    assert text == EXPECTED_TEXT


def test_output_is_deterministic(provider: TopicsProvider, runtime) -> None:
    """Test identical topic lists give byte-identical text."""
    first = asyncio.run(provider.get(runtime, Memory()))
    second = asyncio.run(provider.get(runtime, Memory()))

    assert first == second


def test_missing_api_key_fails_before_request(registry_transport, upshot_factory, runtime) -> None:
    """Test no HTTP request is made when UPSHOT_API_KEY is unset."""
    runtime.settings.pop("UPSHOT_API_KEY")
    provider = TopicsProvider(client_factory=upshot_factory)

    with pytest.raises(ConfigurationError, match="UPSHOT_API_KEY is not set"):
        asyncio.run(provider.get(runtime, Memory()))

    assert registry_transport.requests == []


def test_api_key_is_passed_to_client(registry_transport, upshot_factory, runtime) -> None:
    """Test the configured key reaches the registry request."""
    runtime.settings["UPSHOT_API_KEY"] = "from-settings"
    provider = TopicsProvider(client_factory=upshot_factory)

    asyncio.run(provider.fetch_topics(runtime))

    assert registry_transport.requests[0].headers["x-api-key"] == "from-settings"


def test_format_topics_empty_list() -> None:
    """Test the header is kept when the registry has no topics."""
    assert TopicsProvider.format_topics([]) == "Allora Network Topics: \n"


def test_format_topics_single_topic() -> None:
    topic = Topic(topic_id="1", topic_name="ARB 1h", description="d", is_active=True, updated_at="t")

    text = TopicsProvider.format_topics([topic])

    assert text.endswith("Topic Updated At: t\n\n")
    assert "Topic ID: 1\n" in text
