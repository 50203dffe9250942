"""Client for the Upshot topic registry API."""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from ..errors import ApiError, NetworkError, ParseError
from ..models import Topic, TopicsResponse
from ..utils.colored_logger import get_plugin_logger

logger = logging.getLogger(__name__)
plugin_logger = get_plugin_logger(__name__, 'upshot')

DEFAULT_UPSHOT_API_URL = "https://api.upshot.xyz/v2"
DEFAULT_CHAIN_ID = "allora-testnet-1"


class UpshotAPIClient:
    """Lists Allora Network topics known to the Upshot registry."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_UPSHOT_API_URL,
        chain_id: str = DEFAULT_CHAIN_ID,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the registry client.

        Args:
            api_key: Upshot API key sent as ``x-api-key``
            base_url: Upshot API root
            chain_id: Allora chain whose topics are listed
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.base_url = f"{base_url.rstrip('/')}/allora/{chain_id}"
        self.timeout = timeout
        self._transport = transport

    async def get_allora_topics(self) -> List[Topic]:
        """Fetch all topics from the registry.

        Returns:
            Topics in the order the API returned them

        Raises:
            NetworkError: If the request could not be sent
            ApiError: On a non-2xx response
            ParseError: If the body is not the expected JSON envelope
        """
        url = f"{self.base_url}/topics"
        headers = {"x-api-key": self.api_key, "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Upshot API request error: {e}")
            raise NetworkError(f"Failed to reach Upshot API: {e}") from e

        if not response.is_success:
            logger.error(f"Upshot API HTTP {response.status_code}: {response.text[:200]}")
            raise ApiError(
                f"Upshot API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = TopicsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ParseError(f"Unexpected topics response from Upshot API: {e}") from e

        topics = payload.data.topics
        plugin_logger.info(f"📚 Upshot registry returned {len(topics)} topics")
        return topics
