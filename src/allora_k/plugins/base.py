"""Base classes for the providers and actions an agent plugin contributes."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..runtime import AgentRuntime, HandlerCallback, Memory, State


class BaseProvider(ABC):
    """Supplies text the agent can inject into prompts."""

    name: str

    @abstractmethod
    async def get(self, runtime: AgentRuntime, message: Memory, state: Optional[State] = None) -> str:
        """Return the provider's text block for the current message."""


class BaseAction(ABC):
    """Unit of work the agent runtime invokes in response to a user message."""

    name: str
    similes: List[str] = []
    description: str = ""
    examples: List[List[Dict[str, Any]]] = []

    async def validate(self, runtime: AgentRuntime, message: Memory) -> bool:
        """Whether the action may run for this message (default True)."""
        return True

    @abstractmethod
    async def handler(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State],
        options: Optional[Dict[str, Any]],
        callback: Optional[HandlerCallback],
    ) -> bool:
        """Run the action, reporting to ``callback``; True when handled."""
