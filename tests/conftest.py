"""Pytest fixtures for promptvault tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from promptvault.cache import MemoryBlobStorage, ResponseCache
from promptvault.config.schema import PromptVaultConfig
from promptvault.providers.mock import MockProvider
from promptvault.templates import MemoryKeyValueStore, TemplateStore
from promptvault.utils.clock import MS_PER_MINUTE
from promptvault.utils.logging import ROOT_LOGGER_NAME

START_MS = 1_700_000_000_000


class FakeClock:
    """Manually advanced clock returning epoch milliseconds."""

    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms

    def advance_minutes(self, minutes: float) -> None:
        self.now += int(minutes * MS_PER_MINUTE)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at a fixed instant until advanced."""
    return FakeClock()


@pytest.fixture
def blob_storage() -> MemoryBlobStorage:
    return MemoryBlobStorage()


@pytest.fixture
def cache(blob_storage: MemoryBlobStorage, clock: FakeClock) -> ResponseCache:
    """In-memory cache with a 60 minute TTL."""
    return ResponseCache(blob_storage, ttl_minutes=60, clock=clock)


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider(model="mock-model")


@pytest.fixture
def kv_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def template_store(kv_store: MemoryKeyValueStore, clock: FakeClock) -> TemplateStore:
    """Template store with the packaged built-ins, not yet initialized."""
    return TemplateStore(kv_store, clock=clock)


@pytest.fixture
def default_config() -> PromptVaultConfig:
    """Get default configuration."""
    return PromptVaultConfig()


@pytest.fixture(autouse=True)
def isolate_environment(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep tests away from the user's config and environment."""
    for var in (
        "PROMPTVAULT_CONFIG",
        "PROMPTVAULT_CACHE_DIR",
        "PROMPTVAULT_LOG_LEVEL",
        "PROMPTVAULT_PROVIDER",
        "PROMPTVAULT_MODEL",
        "PROMPTVAULT_NO_CACHE",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "OLLAMA_HOST",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("PROMPTVAULT_CONFIG", str(temp_dir / "default-config.toml"))
    yield
    # The CLI installs handlers bound to the runner's captured streams
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file using the mock provider and temp storage."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""
default_provider = "mock"

[cache]
enabled = true
ttl_minutes = 30
directory = "{(temp_dir / 'responses').as_posix()}"

[generation]
temperature = 0.5
max_tokens = 512

[templates]
state_file = "{(temp_dir / 'state.json').as_posix()}"

[logging]
level = "WARNING"
""")
    return config_path
