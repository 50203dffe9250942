"""Configuration loader for the Allora plugin."""

import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field

from ..errors import ConfigurationError


class ModelConfig(BaseModel):
    """Configuration for a single LLM model."""

    provider: str
    model_id: str
    api_key_env: str
    endpoint: Optional[str] = None
    endpoint_env: Optional[str] = None
    deployment_name: Optional[str] = None
    api_version: Optional[str] = None
    max_tokens: int = 4096
    temperature: float = 0.7


class ChainConfig(BaseModel):
    """Allora chain reachable through a chain slug."""

    chain_id: str
    inference_base_url: str


def _default_chains() -> Dict[str, ChainConfig]:
    return {
        "testnet": ChainConfig(
            chain_id="allora-testnet-1",
            inference_base_url="https://api.upshot.xyz/v2/allora/consumer/allora-testnet-1",
        ),
        "mainnet": ChainConfig(
            chain_id="allora-mainnet-1",
            inference_base_url="https://api.upshot.xyz/v2/allora/consumer/allora-mainnet-1",
        ),
    }


class AlloraConfig(BaseModel):
    """Endpoints of the topic registry and the inference API."""

    upshot_api_url: str = "https://api.upshot.xyz/v2"
    topics_chain_id: str = "allora-testnet-1"
    default_chain_slug: str = "testnet"
    chains: Dict[str, ChainConfig] = Field(default_factory=_default_chains)
    request_timeout: float = 10.0

    def get_chain(self, chain_slug: Optional[str]) -> ChainConfig:
        """Resolve a chain slug, falling back to the default slug.

        Raises:
            ConfigurationError: If the slug is not configured.
        """
        slug = (chain_slug or self.default_chain_slug).lower()
        if slug not in self.chains:
            raise ConfigurationError(
                f"Unknown Allora chain slug '{slug}'. Expected one of: {', '.join(sorted(self.chains))}"
            )
        return self.chains[slug]


class ChatConfig(BaseModel):
    """Conversation settings."""

    history_window: int = 5


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    colored: bool = True


class Config(BaseModel):
    """Main configuration class."""

    default_model: str
    models: Dict[str, ModelConfig]
    allora: AlloraConfig = Field(default_factory=AlloraConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    settings: Dict[str, str] = Field(default_factory=dict)


class ConfigLoader:
    """Loads and manages configuration from YAML files."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize the config loader.

        Args:
            config_path: Path to the configuration file. If None, uses default location.
        """
        if config_path is None:
            # Default to config/config.yml in project root
            project_root = Path(__file__).parent.parent.parent.parent
            config_path = project_root / "config" / "config.yml"

        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    def load(self) -> Config:
        """Load configuration from YAML file.

        Returns:
            Parsed configuration object.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If config file is invalid.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}

            self._config = Config(**config_data)
            return self._config

        except Exception as e:
            raise ValueError(f"Failed to load config: {e}") from e

    @property
    def config(self) -> Config:
        """Get the loaded configuration, loading it on first access."""
        if self._config is None:
            self.load()
        return self._config

    def get_model_config(self, model_name: str) -> ModelConfig:
        """Get configuration for a specific model.

        Raises:
            ValueError: If model not found.
        """
        if model_name not in self.config.models:
            raise ValueError(f"Model '{model_name}' not found in configuration")

        return self.config.models[model_name]

    def get_api_key(self, model_config: ModelConfig) -> str:
        """Get API key for a model from environment variables.

        Raises:
            ValueError: If API key not found in environment.
        """
        api_key = os.getenv(model_config.api_key_env)
        if not api_key:
            raise ValueError(
                f"API key not found in environment variable: {model_config.api_key_env}"
            )
        return api_key

    def get_endpoint(self, model_config: ModelConfig) -> Optional[str]:
        """Get endpoint for a model, from config or environment."""
        if model_config.endpoint:
            return model_config.endpoint

        if model_config.endpoint_env:
            return os.getenv(model_config.endpoint_env)

        return None

    def get_setting(self, key: str) -> Optional[str]:
        """Look up a plugin setting.

        Environment variables win over the ``settings`` section of the
        config file. Empty values count as unset.

        Args:
            key: Setting name, e.g. ``UPSHOT_API_KEY``.

        Returns:
            The setting value or None.
        """
        value = os.getenv(key)
        if value:
            return value
        return self.config.settings.get(key) or None
