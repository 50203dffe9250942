"""Client for the Allora inference API."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..errors import ApiError, NetworkError, ParseError
from ..models import InferenceResponse, InferenceResult
from ..utils.colored_logger import get_plugin_logger
from ..utils.config_loader import AlloraConfig

logger = logging.getLogger(__name__)
plugin_logger = get_plugin_logger(__name__, 'allora')


class AlloraAPIClient:
    """Fetches the latest network inference for a topic."""

    def __init__(
        self,
        chain_slug: Optional[str] = None,
        api_key: Optional[str] = None,
        allora_config: Optional[AlloraConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the inference client.

        Args:
            chain_slug: ``testnet`` or ``mainnet``; None selects the configured default
            api_key: Optional API key sent as ``x-api-key``
            allora_config: Endpoint configuration, defaults when None
            transport: Optional httpx transport (used by tests)

        Raises:
            ConfigurationError: If the chain slug is unknown.
        """
        self.allora_config = allora_config or AlloraConfig()
        self.chain = self.allora_config.get_chain(chain_slug)
        self.api_key = api_key
        self.timeout = self.allora_config.request_timeout
        self._transport = transport

    def _build_headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def get_inference(self, topic_id: str) -> InferenceResult:
        """Fetch the normalized inference for ``topic_id``.

        Raises:
            NetworkError: If the request could not be sent
            ApiError: On a non-2xx response
            ParseError: If the normalized inference is missing from the body
        """
        url = f"{self.chain.inference_base_url.rstrip('/')}/{topic_id}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, headers=self._build_headers())
        except httpx.HTTPError as e:
            logger.error(f"Allora API request error: {e}")
            raise NetworkError(f"Failed to reach Allora API: {e}") from e

        if not response.is_success:
            logger.error(f"Allora API HTTP {response.status_code}: {response.text[:200]}")
            raise ApiError(
                f"Allora API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = InferenceResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ParseError(f"No normalized inference in Allora API response for topic {topic_id}") from e

        value = payload.data.inference_data.network_inference_normalized
        plugin_logger.info(f"📈 Topic {topic_id} on {self.chain.chain_id}: {value}")
        return InferenceResult(topic_id=topic_id, normalized_value=value)
