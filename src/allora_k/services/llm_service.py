"""LLM service for managing connections to different AI providers."""

import json
import logging
import re
from typing import Any, Dict, Optional

from semantic_kernel import Kernel
from semantic_kernel.connectors.ai.open_ai import (
    AzureChatCompletion,
    OpenAIChatCompletion,
)
from semantic_kernel.contents import ChatHistory

from ..utils.colored_logger import get_plugin_logger
from ..utils.config_loader import ConfigLoader, ModelConfig

logger = logging.getLogger(__name__)
plugin_logger = get_plugin_logger(__name__, 'llm')

_JSON_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def parse_json_block(text: str) -> Dict[str, Any]:
    """Extract a JSON object from a model response.

    Accepts a fenced ```json block or a bare object, and tolerates the
    trailing commas the prompt examples contain.

    Raises:
        ValueError: If no JSON object can be parsed.
    """
    match = _JSON_BLOCK.search(text)
    candidate = match.group(1) if match else text
    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end < start:
        raise ValueError(f"No JSON object in LLM response: {text[:200]}")

    candidate = _TRAILING_COMMA.sub(r"\1", candidate[start:end + 1])
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON response from LLM: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError("LLM response JSON is not an object")
    return parsed


class LLMService:
    """Service for managing LLM connections and Semantic Kernel."""

    def __init__(self, config_loader: ConfigLoader) -> None:
        """Initialize the LLM service.

        Args:
            config_loader: Configuration loader instance.
        """
        self.config_loader = config_loader
        self.config = config_loader.config
        self.kernel: Optional[Kernel] = None
        self.model_name: Optional[str] = None

    def create_kernel(self, model_name: Optional[str] = None) -> Kernel:
        """Create a Semantic Kernel instance with specified model.

        Args:
            model_name: Name of the model to use. If None, uses default from config.

        Returns:
            Configured Kernel instance.

        Raises:
            ValueError: If model configuration is invalid.
        """
        if model_name is None:
            model_name = self.config.default_model

        model_config = self.config_loader.get_model_config(model_name)
        kernel = Kernel()

        self._add_ai_service(kernel, model_name, model_config)

        self.kernel = kernel
        self.model_name = model_name
        logger.info(f"Created kernel with model: {model_name}")
        return kernel

    def _add_ai_service(
        self, kernel: Kernel, service_id: str, model_config: ModelConfig
    ) -> None:
        """Add AI service to the kernel based on provider.

        Raises:
            ValueError: If provider is not supported.
        """
        api_key = self.config_loader.get_api_key(model_config)

        if model_config.provider == "openai":
            kernel.add_service(
                OpenAIChatCompletion(
                    service_id=service_id,
                    ai_model_id=model_config.model_id,
                    api_key=api_key,
                )
            )
            logger.info(f"Added OpenAI service: {service_id}")

        elif model_config.provider == "azure_openai":
            endpoint = self.config_loader.get_endpoint(model_config)
            if not endpoint:
                raise ValueError(f"Endpoint required for Azure OpenAI model: {service_id}")

            kernel.add_service(
                AzureChatCompletion(
                    service_id=service_id,
                    deployment_name=model_config.deployment_name,
                    api_key=api_key,
                    endpoint=endpoint,
                    api_version=model_config.api_version,
                )
            )
            logger.info(f"Added Azure OpenAI service: {service_id}")

        elif model_config.provider == "anthropic":
            raise ValueError(
                "Anthropic provider not yet implemented. Use OpenAI or Azure OpenAI for now."
            )

        else:
            raise ValueError(f"Unsupported provider: {model_config.provider}")

    def get_kernel(self) -> Kernel:
        """Get the current kernel instance, creating the default one if needed."""
        if self.kernel is None:
            self.create_kernel()
        return self.kernel

    def _build_settings(self, kernel: Kernel):
        """Execution settings for the current model with its configured sampling values."""
        settings = kernel.get_prompt_execution_settings_from_service_id(self.model_name)
        model_config = self.config_loader.get_model_config(self.model_name)

        if hasattr(settings, "temperature"):
            settings.temperature = model_config.temperature
        if hasattr(settings, "max_tokens"):
            settings.max_tokens = model_config.max_tokens
        return settings

    async def generate_text(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message and return the reply text."""
        kernel = self.get_kernel()
        chat_service = kernel.get_service(self.model_name)
        settings = self._build_settings(kernel)

        history = ChatHistory()
        history.add_user_message(prompt)

        try:
            response = await chat_service.get_chat_message_content(
                chat_history=history, settings=settings
            )
        except Exception as e:
            logger.error(f"LLM API error: {e}", exc_info=True)
            raise

        content = str(response) if response is not None else ""
        preview = content[:150] + "..." if len(content) > 150 else content
        plugin_logger.info(f"🤖 LLM Response ({self.model_name}): {len(content)} chars")
        plugin_logger.debug(f"   {preview}")
        return content

    async def generate_object(self, context: str) -> Dict[str, Any]:
        """Run ``context`` through the model and parse the JSON object it answers with.

        Raises:
            ValueError: If the reply contains no valid JSON object.
        """
        content = await self.generate_text(context)
        return parse_json_block(content)
