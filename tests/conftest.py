"""Shared fixtures: registry payloads, a fake runtime and mock HTTP transports."""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from allora_k.runtime import Memory, State
from allora_k.services.allora_client import AlloraAPIClient
from allora_k.services.upshot_client import UpshotAPIClient

ETH_5MIN_VALUE = "3393.364326646801085508"


@pytest.fixture
def topics_payload() -> Dict[str, Any]:
    """Registry response with one active and one inactive topic."""
    return {
        "data": {
            "topics": [
                {
                    "topic_id": 13,
                    "topic_name": "ETH 5min Prediction",
                    "description": "ETH price in 5 minutes",
                    "is_active": True,
                    "updated_at": "2024-12-01T10:00:00Z",
                },
                {
                    "topic_id": "7",
                    "topic_name": "BTC 24h Prediction",
                    "description": None,
                    "is_active": False,
                    "updated_at": "2024-11-30T08:30:00Z",
                },
            ]
        }
    }


@pytest.fixture
def inference_payload() -> Dict[str, Any]:
    return {
        "request_id": "abc",
        "status": True,
        "data": {
            "signature": "0x00",
            "inference_data": {
                "network_inference": "3393364326646801085508000000000000000",
                "network_inference_normalized": ETH_5MIN_VALUE,
            },
        },
    }


class RecordingTransport:
    """Builds an ``httpx.MockTransport`` and remembers every request."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._responder = responder
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)


@pytest.fixture
def registry_transport(topics_payload: Dict[str, Any]) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json=topics_payload))


@pytest.fixture
def inference_transport(inference_payload: Dict[str, Any]) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json=inference_payload))


@pytest.fixture
def upshot_factory(registry_transport: RecordingTransport) -> Callable[[str], UpshotAPIClient]:
    return lambda api_key: UpshotAPIClient(api_key, transport=registry_transport.transport)


@pytest.fixture
def inference_factory(
    inference_transport: RecordingTransport,
) -> Callable[[Optional[str], Optional[str]], AlloraAPIClient]:
    return lambda chain_slug, api_key: AlloraAPIClient(
        chain_slug, api_key, transport=inference_transport.transport
    )


class FakeRuntime:
    """In-memory stand-in for the agent runtime."""

    def __init__(
        self,
        settings: Optional[Dict[str, str]] = None,
        selection: Any = None,
    ) -> None:
        self.settings = settings if settings is not None else {
            "UPSHOT_API_KEY": "upshot-key",
            "ALLORA_API_KEY": "allora-key",
            "ALLORA_CHAIN_SLUG": "testnet",
        }
        self.selection = selection if selection is not None else {"topicId": None, "topicName": None}
        self.contexts: List[str] = []
        self.composed = 0
        self.updated = 0

    async def compose_state(self, message: Memory) -> State:
        self.composed += 1
        return {"recentMessages": f"{message.user}: {message.text}"}

    async def update_recent_message_state(self, state: State) -> State:
        self.updated += 1
        return dict(state)

    def get_setting(self, key: str) -> Optional[str]:
        return self.settings.get(key)

    async def generate_object(self, context: str) -> Dict[str, Any]:
        self.contexts.append(context)
        if isinstance(self.selection, Exception):
            raise self.selection
        return dict(self.selection)


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def eth_message() -> Memory:
    return Memory(user="alice", content={"text": "What is the predicted ETH price in 5 minutes?"})
