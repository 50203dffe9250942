"""GET_INFERENCE action: answers prediction questions with Allora Network inferences."""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..models import ModelSelection, Topic
from ..runtime import AgentRuntime, HandlerCallback, Memory, State, compose_context, emit
from ..services.allora_client import AlloraAPIClient
from ..utils.colored_logger import get_plugin_logger
from ..utils.config_loader import AlloraConfig
from .base import BaseAction
from .topics_provider import TopicsProvider

logger = logging.getLogger(__name__)
plugin_logger = get_plugin_logger(__name__, 'action')

ALLORA_CHAIN_SLUG_SETTING = "ALLORA_CHAIN_SLUG"
ALLORA_API_KEY_SETTING = "ALLORA_API_KEY"

NO_MATCHING_TOPIC_TEXT = "There is no active Allora Network topic that matches your request."

GET_INFERENCE_TEMPLATE = """Respond with a JSON markdown block containing only the extracted values. Use null for any values that cannot be determined.
Example response:
```json
{
    "topicId": "1",
    "topicName": "Topic Name",
}
```

Recent messages:
{{recentMessages}}

Allora Network Topics:
{{alloraTopics}}

Given the recent messages and the Allora Network Topics above, extract the following information about the requested:
- Topic ID of the topic that best matches the user's request. The topic should be active, otherwise return null.
- Topic Name of the topic that best matches the user's request. The topic should be active, otherwise return null.

If the topic is not active or the prediction timeframe is not matching the user's request, return null for both topicId and topicName.

Respond with a JSON markdown block containing only the extracted values. Use null for any values that cannot be determined. The result should be a valid JSON object with the following schema:
```json
{
    "topicId": string | null,
    "topicName": string | null,
}
```"""

InferenceClientFactory = Callable[[Optional[str], Optional[str]], AlloraAPIClient]


class GetInferenceAction(BaseAction):
    """Maps the user's request to an Allora topic and replies with its inference."""

    name = "GET_INFERENCE"
    similes = [
        "GET_ALLORA_INFERENCE",
        "GET_TOPIC_INFERENCE",
        "ALLORA_INFERENCE",
        "TOPIC_INFERENCE",
    ]
    description = "Get inference from Allora Network"
    examples = [
        [
            {"user": "{{user1}}", "content": {"text": "What is the predicted ETH price in 5 minutes?"}},
            {"user": "{{user2}}", "content": {"text": "I'll get the inference now...", "action": "GET_INFERENCE"}},
            {
                "user": "{{user2}}",
                "content": {
                    "text": "Inference provided by Allora Network on topic ETH 5min Prediction "
                    "(Topic ID: 13): 3393.364326646801085508"
                },
            },
        ],
        [
            {"user": "{{user1}}", "content": {"text": "What is the predicted price of gold in 24 hours?"}},
            {"user": "{{user2}}", "content": {"text": "I'll get the inference now...", "action": "GET_INFERENCE"}},
            {"user": "{{user2}}", "content": {"text": NO_MATCHING_TOPIC_TEXT}},
        ],
    ]

    def __init__(
        self,
        topics_provider: Optional[TopicsProvider] = None,
        allora_config: Optional[AlloraConfig] = None,
        inference_client_factory: Optional[InferenceClientFactory] = None,
    ) -> None:
        """
        Args:
            topics_provider: Source of the topic list, built from ``allora_config`` when None
            allora_config: Endpoint configuration, defaults when None
            inference_client_factory: Builds an inference client from (chain slug, API key)
        """
        self.allora_config = allora_config or AlloraConfig()
        self.topics_provider = topics_provider or TopicsProvider(self.allora_config)
        self.inference_client_factory = inference_client_factory or self._default_client

    def _default_client(self, chain_slug: Optional[str], api_key: Optional[str]) -> AlloraAPIClient:
        return AlloraAPIClient(chain_slug, api_key, allora_config=self.allora_config)

    @staticmethod
    def _find_active_topic(topics: List[Topic], topic_id: str) -> Optional[Topic]:
        for topic in topics:
            if topic.topic_id == topic_id and topic.is_active:
                return topic
        return None

    async def handler(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> bool:
        if state is None:
            state = await runtime.compose_state(message)
        else:
            state = await runtime.update_recent_message_state(state)

        # Configuration errors from the provider are fatal for this invocation
        topics = await self.topics_provider.fetch_topics(runtime)
        state["alloraTopics"] = self.topics_provider.format_topics(topics)

        context = compose_context(state, GET_INFERENCE_TEMPLATE)
        response = await runtime.generate_object(context)
        selection = ModelSelection.model_validate(response)

        if not selection.topic_id:
            await emit(callback, NO_MATCHING_TOPIC_TEXT)
            return False

        topic = self._find_active_topic(topics, selection.topic_id)
        if topic is None:
            logger.warning(f"Model selected topic ID {selection.topic_id}, which is not an active listed topic")
            await emit(callback, NO_MATCHING_TOPIC_TEXT)
            return False

        plugin_logger.info(f"Retrieving inference for topic ID: {topic.topic_id}")

        try:
            client = self.inference_client_factory(
                runtime.get_setting(ALLORA_CHAIN_SLUG_SETTING),
                runtime.get_setting(ALLORA_API_KEY_SETTING),
            )
            inference = await client.get_inference(topic.topic_id)

            await emit(
                callback,
                f"Inference provided by Allora Network on topic {topic.topic_name} "
                f"(Topic ID: {topic.topic_id}): {inference.normalized_value}",
            )
            return True
        except Exception as e:
            display_message = f"There was an error fetching the inference from Allora Network: {e}"
            logger.error(display_message)
            await emit(callback, display_message)
            return False
