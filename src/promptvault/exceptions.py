"""Exception hierarchy for promptvault."""


class PromptVaultError(Exception):
    """Base exception for all promptvault errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Provider Errors
class ProviderError(PromptVaultError):
    """LLM provider-related errors."""

    exit_code = 2
    user_message = "LLM provider error"


class ProviderNotAvailableError(ProviderError):
    """Provider is not reachable or not configured."""

    exit_code = 2
    user_message = "LLM provider is not available"


class ProviderRateLimitError(ProviderError):
    """Rate limit exceeded."""

    exit_code = 3
    user_message = "Rate limit exceeded. Try again later."


class ProviderAuthError(ProviderError):
    """Authentication failed."""

    exit_code = 4
    user_message = "Authentication failed. Check your API key."


class ProviderTimeoutError(ProviderError):
    """Request timed out."""

    exit_code = 5
    user_message = "Request timed out. Try again."


# Cache Errors
class CacheError(PromptVaultError):
    """Cache-related errors."""

    exit_code = 10
    user_message = "Cache error"


class CacheCorruptedError(CacheError):
    """A stored cache entry could not be parsed.

    The response cache treats these entries exactly like expired ones and
    deletes them; callers of the cache never see this error.
    """

    exit_code = 12
    user_message = "Cache entry is corrupted"


# Template Errors
class TemplateError(PromptVaultError):
    """Prompt template errors."""

    exit_code = 30
    user_message = "Template error"


class TemplateNotFoundError(TemplateError, LookupError):
    """No template exists with the requested id."""

    exit_code = 31
    user_message = "Template not found"


class BuiltInTemplateError(TemplateError):
    """Attempted to delete a built-in template."""

    exit_code = 32
    user_message = "Built-in templates cannot be deleted"


class TemplateImportError(TemplateError):
    """Import payload is not a valid JSON array of templates."""

    exit_code = 33
    user_message = "Failed to import templates"


class TemplateStorageError(TemplateError):
    """Template persistence failed."""

    exit_code = 34
    user_message = "Failed to save templates"


# Config Errors
class ConfigError(PromptVaultError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"
