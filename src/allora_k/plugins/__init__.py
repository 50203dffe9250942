"""Plugin bundle registering the Allora action and topics provider with the agent."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .base import BaseAction, BaseProvider
from .get_inference_action import GetInferenceAction
from .kernel_plugin import AlloraKernelPlugin
from .topics_provider import TopicsProvider


class Plugin(BaseModel):
    """Bundle of actions, evaluators and providers registered with the agent."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str
    actions: List[BaseAction] = Field(default_factory=list)
    evaluators: List[object] = Field(default_factory=list)
    providers: List[BaseProvider] = Field(default_factory=list)


allora_plugin = Plugin(
    name="allora",
    description="Agent allora with basic actions and evaluators",
    actions=[GetInferenceAction()],
    evaluators=[],
    providers=[TopicsProvider()],
)

__all__ = [
    "AlloraKernelPlugin",
    "BaseAction",
    "BaseProvider",
    "GetInferenceAction",
    "Plugin",
    "TopicsProvider",
    "allora_plugin",
]
