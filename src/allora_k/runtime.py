"""Agent runtime interfaces and the Semantic Kernel backed runtime.

Actions and providers only talk to the runtime through the
:class:`AgentRuntime` protocol, so tests can substitute a fake.
"""

import inspect
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union

from pydantic import BaseModel, Field

from .services.llm_service import LLMService
from .utils.config_loader import ConfigLoader

logger = logging.getLogger(__name__)

State = Dict[str, Any]
HandlerCallback = Callable[[Dict[str, Any]], Union[Awaitable[Any], Any]]

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


class Memory(BaseModel):
    """A single conversation message."""

    user: str = Field(default="user", description="Sender name")
    content: Dict[str, Any] = Field(default_factory=dict, description="Message content, text under 'text'")

    @property
    def text(self) -> str:
        return str(self.content.get("text", ""))


class AgentRuntime(Protocol):
    """Capabilities the host agent provides to actions and providers."""

    async def compose_state(self, message: Memory) -> State: ...

    async def update_recent_message_state(self, state: State) -> State: ...

    def get_setting(self, key: str) -> Optional[str]: ...

    async def generate_object(self, context: str) -> Dict[str, Any]: ...


def compose_context(state: State, template: str) -> str:
    """Fill ``{{key}}`` placeholders in ``template`` from ``state``.

    Placeholders without a state value render as an empty string.
    """
    def replace(match: "re.Match[str]") -> str:
        value = state.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(replace, template)


async def emit(callback: Optional[HandlerCallback], text: str) -> None:
    """Send a ``{"text": ...}`` reply through a sync or async callback."""
    if callback is None:
        return
    result = callback({"text": text})
    if inspect.isawaitable(result):
        await result


def format_messages(messages: List[Memory]) -> str:
    return "\n".join(f"{m.user}: {m.text}" for m in messages)


class KernelAgentRuntime:
    """Runtime backed by the config file, a message window and the LLM service."""

    def __init__(self, config_loader: ConfigLoader, llm_service: LLMService, agent_name: str = "Allora") -> None:
        self.config_loader = config_loader
        self.llm_service = llm_service
        self.agent_name = agent_name
        self.messages: List[Memory] = []

    @property
    def history_window(self) -> int:
        return self.config_loader.config.chat.history_window

    def _recent_messages(self) -> List[Memory]:
        window = self.history_window
        return self.messages if window <= 0 else self.messages[-window:]

    def remember(self, message: Memory) -> None:
        self.messages.append(message)
        # Nothing older than the window is ever read back
        window = self.history_window
        if window > 0 and len(self.messages) > window:
            del self.messages[:-window]

    async def compose_state(self, message: Memory) -> State:
        if not self.messages or self.messages[-1] is not message:
            self.remember(message)
        return {
            "agentName": self.agent_name,
            "senderName": message.user,
            "recentMessages": format_messages(self._recent_messages()),
        }

    async def update_recent_message_state(self, state: State) -> State:
        updated = dict(state)
        updated["recentMessages"] = format_messages(self._recent_messages())
        return updated

    def get_setting(self, key: str) -> Optional[str]:
        return self.config_loader.get_setting(key)

    async def generate_object(self, context: str) -> Dict[str, Any]:
        return await self.llm_service.generate_object(context)
