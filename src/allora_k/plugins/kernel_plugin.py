"""Semantic Kernel plugin exposing the Allora action as kernel functions."""

from typing import List

from semantic_kernel.functions import kernel_function

from ..models import ActionOutcome
from ..runtime import AgentRuntime, Memory
from .get_inference_action import GetInferenceAction
from .topics_provider import TopicsProvider


class AlloraKernelPlugin:
    """Lets a kernel call the GET_INFERENCE action as a tool."""

    def __init__(
        self,
        runtime: AgentRuntime,
        action: GetInferenceAction,
        topics_provider: TopicsProvider,
    ) -> None:
        """
        Args:
            runtime: Runtime the action runs against
            action: The inference action
            topics_provider: Provider used to list topics
        """
        self.runtime = runtime
        self.action = action
        self.topics_provider = topics_provider

    async def run(self, message: Memory) -> ActionOutcome:
        """Run the action for ``message``, collecting every reply it emits."""
        replies: List[str] = []

        def collect(content: dict) -> None:
            replies.append(content.get("text", ""))

        if not await self.action.validate(self.runtime, message):
            return ActionOutcome(handled=False, replies=replies)

        handled = await self.action.handler(self.runtime, message, None, {}, collect)
        return ActionOutcome(handled=handled, replies=replies)

    @kernel_function(
        name="get_inference",
        description="Gets the Allora Network price prediction that best matches a request",
    )
    async def get_inference(self, request: str) -> str:
        """Answer a prediction request with the matching topic's inference.

        Args:
            request: The user's question, e.g. "ETH price in 5 minutes".

        Returns:
            The reply text.
        """
        outcome = await self.run(Memory(user="user", content={"text": request}))
        return "\n".join(outcome.replies)

    @kernel_function(
        name="list_topics",
        description="Lists the Allora Network prediction topics",
    )
    async def list_topics(self) -> str:
        return await self.topics_provider.get(self.runtime, Memory())
