"""Pydantic models for promptvault configuration."""

from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PositiveInt


class ProviderType(str, Enum):
    """Supported LLM providers."""

    OLLAMA = "ollama"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MOCK = "mock"


class OllamaConfig(BaseModel):
    """Ollama provider configuration."""

    enabled: bool = True
    default_model: str = "llama3"
    base_url: str = "http://localhost:11434"
    timeout: float = 120.0


class OpenAIConfig(BaseModel):
    """OpenAI provider configuration."""

    enabled: bool = False
    default_model: str = "gpt-4o-mini"
    models: list[str] = Field(default_factory=lambda: ["gpt-4o-mini", "gpt-4o"])
    api_key: str | None = None  # Use OPENAI_API_KEY env var
    timeout: float = 60.0


class AnthropicConfig(BaseModel):
    """Anthropic provider configuration."""

    enabled: bool = False
    default_model: str = "claude-sonnet-4-20250514"
    models: list[str] = Field(
        default_factory=lambda: ["claude-sonnet-4-20250514", "claude-3-5-haiku-latest"]
    )
    api_key: str | None = None  # Use ANTHROPIC_API_KEY env var
    timeout: float = 60.0


class ProvidersConfig(BaseModel):
    """Configuration for all LLM providers."""

    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)


class CacheConfig(BaseModel):
    """Response cache configuration."""

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = True
    ttl_minutes: PositiveInt = Field(
        default=60,
        validation_alias=AliasChoices("ttl_minutes", "ttlMinutes"),
    )
    directory: Path | None = None  # Default: ~/.cache/promptvault/responses


class GenerationConfig(BaseModel):
    """Default generation parameters applied when a request omits them."""

    model_config = ConfigDict(populate_by_name=True)

    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: PositiveInt = Field(
        default=2000,
        validation_alias=AliasChoices("max_tokens", "maxTokens"),
    )


class TemplatesConfig(BaseModel):
    """Prompt template storage configuration."""

    state_file: Path | None = None  # Default: ~/.local/share/promptvault/state.json
    builtin_file: Path | None = None  # Default: packaged prompts.json


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class PromptVaultConfig(BaseModel):
    """Root configuration for promptvault."""

    default_provider: ProviderType = ProviderType.OLLAMA
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
