import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import PROVIDER_OPENAI
from ..errors import ConfigError
from .prompts import DEFAULT_ACTIONS

logger = logging.getLogger(__name__)

# Keys accepted by `rephraser config set`
SETTABLE_KEYS = (
    "llm.provider",
    "llm.model",
    "llm.api_key_env",
    "llm.parameters.temperature",
    "llm.parameters.max_tokens",
    "output.method",
)


def get_default_config_path() -> Path:
    env_path = os.environ.get("REPHRASER_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser().resolve()

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config_home) / "rephraser" / "config.yaml"


class Settings(BaseSettings):
    """Process settings read from REPHRASER_* environment variables or the .env file."""

    CONFIG_PATH: str = Field(default_factory=lambda: str(get_default_config_path()), description="Path to the YAML config file")
    HTTP_TIMEOUT: float = Field(default=60.0, description="Timeout in seconds for LLM HTTP requests")
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1")
    ANTHROPIC_BASE_URL: str = Field(default="https://api.anthropic.com/v1")
    VERBOSE: bool = Field(default=False, description="Verbose mode")
    DEBUG: bool = Field(default=False, description="Debug logging")

    model_config = SettingsConfigDict(
        env_prefix="REPHRASER_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Build Settings, reading the .env file that sits next to the config file."""
    path = Path(config_path).expanduser() if config_path else get_default_config_path()
    return Settings(_env_file=path.parent / ".env")


class OutputMethod(str, Enum):
    CLIPBOARD = "clipboard"
    NOTIFICATION = "notification"
    DIALOG = "dialog"


class ParametersConfig(BaseModel):
    temperature: float = 0.7
    max_tokens: int = Field(default=500, gt=0)


class LLMConfig(BaseModel):
    provider: Literal["openai", "anthropic", "mock"] = PROVIDER_OPENAI
    model: str = "gpt-4o-mini"
    api_key_env: str = "OPENAI_API_KEY"  # Name of the env var holding the key
    parameters: ParametersConfig = Field(default_factory=ParametersConfig)


class OutputConfig(BaseModel):
    method: OutputMethod = OutputMethod.NOTIFICATION


class ActionConfig(BaseModel):
    name: str
    display_name: str
    prompt_template: str


def default_actions() -> list[ActionConfig]:
    return [
        ActionConfig(name=name, display_name=display_name, prompt_template=template)
        for name, display_name, template in DEFAULT_ACTIONS
    ]


class Config(BaseModel):
    """Contents of the YAML config file."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    actions: list[ActionConfig] = Field(default_factory=default_actions)


def dump_config(config: Config) -> str:
    return yaml.dump(
        config.model_dump(mode="json"),
        sort_keys=False,
        indent=2,
        default_flow_style=False,
        allow_unicode=True,
    )


class ConfigManager:
    """Loads, saves and edits the config file."""

    def __init__(self, config_path: str | Path | None = None):
        self.config_path = Path(config_path).expanduser() if config_path else get_default_config_path()

    def exists(self) -> bool:
        return self.config_path.is_file()

    def load(self) -> Config:
        """Load the config file, or the defaults if it does not exist."""
        if not self.exists():
            logger.debug(f"Config file {self.config_path} not found, using defaults")
            return Config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {self.config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid format in {self.config_path}: expected a mapping at the top level")

        try:
            config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}") from e

        logger.debug(f"Loaded config from {self.config_path} with {len(config.actions)} actions")
        return config

    def save(self, config: Config) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(dump_config(config))
        except OSError as e:
            raise ConfigError(f"Failed to write {self.config_path}: {e}") from e
        logger.debug(f"Saved config to {self.config_path}")

    def init(self) -> None:
        """Write the default config. Fails if the file already exists."""
        if self.exists():
            raise ConfigError(f"Config file already exists at {self.config_path}")
        self.save(Config())

    def set_value(self, key: str, value: str) -> Config:
        """Set a dotted key (e.g. ``llm.model``), validate and save.

        Returns:
            The updated config.
        """
        if key not in SETTABLE_KEYS:
            raise ConfigError(f"Invalid configuration key '{key}'. Valid keys are: {', '.join(SETTABLE_KEYS)}")

        data: dict[str, Any] = self.load().model_dump(mode="json")
        *parents, leaf = key.split(".")
        node = data
        for part in parents:
            node = node[part]
        node[leaf] = value

        try:
            config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid value '{value}' for '{key}': {e}") from e

        self.save(config)
        return config


def resolve_api_key(llm_config: LLMConfig, environ: Mapping[str, str] | None = None) -> str:
    """Read the API key from the environment variable named in the config."""
    environ = os.environ if environ is None else environ
    api_key = environ.get(llm_config.api_key_env, "").strip()
    if not api_key:
        raise ConfigError(f"Environment variable '{llm_config.api_key_env}' not found")
    return api_key
