"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "promptvault"
DEFAULT_CACHE_DIR: Final[Path] = Path.home() / ".cache" / "promptvault"
DEFAULT_DATA_DIR: Final[Path] = Path.home() / ".local" / "share" / "promptvault"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_RESPONSE_DIR: Final[Path] = DEFAULT_CACHE_DIR / "responses"
DEFAULT_STATE_FILE: Final[Path] = DEFAULT_DATA_DIR / "state.json"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "PROMPTVAULT_CONFIG"
ENV_CACHE_DIR: Final[str] = "PROMPTVAULT_CACHE_DIR"
ENV_LOG_LEVEL: Final[str] = "PROMPTVAULT_LOG_LEVEL"
ENV_DEFAULT_PROVIDER: Final[str] = "PROMPTVAULT_PROVIDER"
ENV_DEFAULT_MODEL: Final[str] = "PROMPTVAULT_MODEL"
ENV_NO_CACHE: Final[str] = "PROMPTVAULT_NO_CACHE"

# Provider environment variables
ENV_OPENAI_API_KEY: Final[str] = "OPENAI_API_KEY"
ENV_ANTHROPIC_API_KEY: Final[str] = "ANTHROPIC_API_KEY"
ENV_OLLAMA_HOST: Final[str] = "OLLAMA_HOST"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# promptvault configuration

default_provider = "ollama"

[providers.ollama]
enabled = true
default_model = "llama3"
base_url = "http://localhost:11434"
timeout = 120.0

[providers.openai]
enabled = false
default_model = "gpt-4o-mini"
# api_key = ""  # Use OPENAI_API_KEY env var

[providers.anthropic]
enabled = false
default_model = "claude-sonnet-4-20250514"
# api_key = ""  # Use ANTHROPIC_API_KEY env var

[cache]
enabled = true
ttl_minutes = 60
# directory = "~/.cache/promptvault/responses"

[generation]
temperature = 0.7
max_tokens = 2000

[templates]
# state_file = "~/.local/share/promptvault/state.json"
# builtin_file = ""  # Defaults to the packaged prompts.json

[logging]
level = "INFO"
json_format = false
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE
