"""Main Allora agent application.

This module wires configuration, the LLM service and the Allora plugin into
a single facade used by the HTTP server and the examples.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from semantic_kernel import Kernel

from .models import ActionOutcome
from .plugins import AlloraKernelPlugin, GetInferenceAction, TopicsProvider
from .runtime import KernelAgentRuntime, Memory
from .services.llm_service import LLMService
from .utils.colored_logger import setup_colored_logging
from .utils.config_loader import ConfigLoader

# Load environment variables
load_dotenv()

DEFAULT_SESSION = "default"


class AlloraAgentApp:
    """Main application class for answering prediction questions."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize the application.

        Args:
            config_path: Path to configuration file. If None, uses default.
        """
        self.config_loader = ConfigLoader(config_path)
        self.config = self.config_loader.config

        self._setup_logging()

        self.llm_service = LLMService(self.config_loader)
        self.topics_provider = TopicsProvider(self.config.allora)
        self.action = GetInferenceAction(self.topics_provider, self.config.allora)

        self.runtimes: Dict[str, KernelAgentRuntime] = {}
        self.kernel: Optional[Kernel] = None

        self.logger.info("AlloraAgentApp initialized")

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        logging_config = self.config.logging
        setup_colored_logging(
            level=getattr(logging, logging_config.level.upper(), logging.INFO),
            fmt=logging_config.format,
            colored=logging_config.colored,
        )
        self.logger = logging.getLogger(__name__)

    def initialize(self, model_name: Optional[str] = None) -> None:
        """Initialize the kernel with a specific model and register the plugin.

        ``handle_message`` runs the action directly. The ``Allora`` kernel
        functions are registered for callers that drive ``self.kernel`` with
        automatic function calling, and they act on the default session.

        Args:
            model_name: Name of the model to use. If None, uses default from config.
        """
        self.kernel = self.llm_service.create_kernel(model_name)
        self.kernel.add_plugin(self.kernel_plugin(), plugin_name="Allora")

        self.logger.info(f"Kernel initialized with model: {model_name or self.config.default_model}")

    def get_runtime(self, session_id: str = DEFAULT_SESSION) -> KernelAgentRuntime:
        """Get the runtime holding ``session_id``'s conversation, creating it if needed."""
        if session_id not in self.runtimes:
            self.runtimes[session_id] = KernelAgentRuntime(self.config_loader, self.llm_service)
        return self.runtimes[session_id]

    def kernel_plugin(self, session_id: str = DEFAULT_SESSION) -> AlloraKernelPlugin:
        return AlloraKernelPlugin(self.get_runtime(session_id), self.action, self.topics_provider)

    async def handle_message(self, text: str, session_id: str = DEFAULT_SESSION, user: str = "user") -> ActionOutcome:
        """Run the inference action for one user message.

        Args:
            text: The user's message.
            session_id: Conversation the message belongs to.
            user: Sender name shown to the model in recent messages.

        Returns:
            Whether the action handled the request and the replies it emitted.
        """
        if self.kernel is None:
            self.initialize()

        runtime = self.get_runtime(session_id)
        message = Memory(user=user, content={"text": text})
        outcome = await self.kernel_plugin(session_id).run(message)

        for reply in outcome.replies:
            runtime.remember(Memory(user=runtime.agent_name, content={"text": reply}))
        return outcome

    async def describe_topics(self, session_id: str = DEFAULT_SESSION) -> str:
        """Return the formatted topic list."""
        return await self.topics_provider.get(self.get_runtime(session_id), Memory())

    def reset_session(self, session_id: str) -> None:
        self.runtimes.pop(session_id, None)

    def list_available_models(self) -> list[str]:
        """List all available models from configuration."""
        return list(self.config.models.keys())
