"""Allora Network inference plugin.

Answers natural-language price prediction questions by matching them to an
Allora Network topic with a language model and fetching that topic's
inference.
"""

from .allora_app import AlloraAgentApp
from .errors import AlloraPluginError, ApiError, ConfigurationError, NetworkError, ParseError
from .plugins import GetInferenceAction, TopicsProvider, allora_plugin
from .services.allora_client import AlloraAPIClient
from .services.llm_service import LLMService
from .services.upshot_client import UpshotAPIClient
from .utils.config_loader import Config, ConfigLoader, ModelConfig

__version__ = "0.1.0"

__all__ = [
    "AlloraAgentApp",
    "AlloraAPIClient",
    "UpshotAPIClient",
    "GetInferenceAction",
    "TopicsProvider",
    "allora_plugin",
    "LLMService",
    "ConfigLoader",
    "Config",
    "ModelConfig",
    "AlloraPluginError",
    "ApiError",
    "ConfigurationError",
    "NetworkError",
    "ParseError",
]
