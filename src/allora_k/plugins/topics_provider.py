"""Topics provider: renders the Allora topic list for prompt injection."""

import logging
from typing import Callable, List, Optional

from ..errors import ConfigurationError
from ..models import Topic
from ..runtime import AgentRuntime, Memory, State
from ..services.upshot_client import UpshotAPIClient
from ..utils.config_loader import AlloraConfig
from .base import BaseProvider

logger = logging.getLogger(__name__)

UPSHOT_API_KEY_SETTING = "UPSHOT_API_KEY"

UpshotClientFactory = Callable[[str], UpshotAPIClient]


class TopicsProvider(BaseProvider):
    """Lists Allora Network topics as a plain text block."""

    name = "alloraTopics"

    def __init__(
        self,
        allora_config: Optional[AlloraConfig] = None,
        client_factory: Optional[UpshotClientFactory] = None,
    ) -> None:
        """
        Args:
            allora_config: Registry endpoint configuration, defaults when None
            client_factory: Builds a registry client from an API key
        """
        self.allora_config = allora_config or AlloraConfig()
        self.client_factory = client_factory or self._default_client

    def _default_client(self, api_key: str) -> UpshotAPIClient:
        return UpshotAPIClient(
            api_key,
            base_url=self.allora_config.upshot_api_url,
            chain_id=self.allora_config.topics_chain_id,
            timeout=self.allora_config.request_timeout,
        )

    async def fetch_topics(self, runtime: AgentRuntime) -> List[Topic]:
        """Fetch topics from the registry.

        Raises:
            ConfigurationError: If ``UPSHOT_API_KEY`` is not set. Nothing is
                requested in that case.
        """
        api_key = runtime.get_setting(UPSHOT_API_KEY_SETTING)
        if not api_key:
            raise ConfigurationError(f"{UPSHOT_API_KEY_SETTING} is not set")

        client = self.client_factory(api_key)
        return await client.get_allora_topics()

    @staticmethod
    def format_topics(topics: List[Topic]) -> str:
        lines = ["Allora Network Topics: "]
        for topic in topics:
            lines.append(f"Topic Name: {topic.topic_name}")
            lines.append(f"Topic Description: {topic.description}")
            lines.append(f"Topic ID: {topic.topic_id}")
            lines.append(f"Topic is Active: {str(topic.is_active).lower()}")
            lines.append(f"Topic Updated At: {topic.updated_at}")
            lines.append("")
        return "\n".join(lines) + "\n"

    async def get(self, runtime: AgentRuntime, message: Memory, state: Optional[State] = None) -> str:
        topics = await self.fetch_topics(runtime)
        logger.debug(f"Formatting {len(topics)} topics for the prompt")
        return self.format_topics(topics)
