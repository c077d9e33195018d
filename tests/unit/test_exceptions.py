"""Tests for exception hierarchy."""

import pytest

from promptvault.exceptions import (
    BuiltInTemplateError,
    CacheCorruptedError,
    CacheError,
    ConfigError,
    ConfigValidationError,
    PromptVaultError,
    ProviderAuthError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    TemplateError,
    TemplateImportError,
    TemplateNotFoundError,
    TemplateStorageError,
)


class TestPromptVaultError:
    """Tests for base PromptVaultError."""

    def test_default_message(self) -> None:
        """Test default error message."""
        error = PromptVaultError()
        assert str(error) == "An error occurred"
        assert error.user_message == "An error occurred"
        assert error.exit_code == 1

    def test_custom_message(self) -> None:
        """Test custom error message."""
        error = PromptVaultError("Custom error")
        assert str(error) == "Custom error"

    def test_custom_user_message(self) -> None:
        """Test custom user message."""
        error = PromptVaultError("Internal", user_message="User-friendly message")
        assert error.user_message == "User-friendly message"
        assert PromptVaultError.user_message == "An error occurred"


class TestProviderErrors:
    """Tests for provider-related errors."""

    def test_provider_error(self) -> None:
        error = ProviderError("Connection failed")
        assert str(error) == "Connection failed"
        assert error.exit_code == 2

    @pytest.mark.parametrize(
        ("error_type", "exit_code"),
        [
            (ProviderNotAvailableError, 2),
            (ProviderRateLimitError, 3),
            (ProviderAuthError, 4),
            (ProviderTimeoutError, 5),
        ],
    )
    def test_specific_provider_errors(
        self, error_type: type[ProviderError], exit_code: int
    ) -> None:
        """Test exit codes and ancestry."""
        error = error_type()
        assert isinstance(error, ProviderError)
        assert error.exit_code == exit_code


class TestCacheErrors:
    """Tests for cache-related errors."""

    def test_cache_corrupted(self) -> None:
        error = CacheCorruptedError("bad entry")
        assert isinstance(error, CacheError)
        assert error.exit_code == 12


class TestTemplateErrors:
    """Tests for template-related errors."""

    @pytest.mark.parametrize(
        ("error_type", "exit_code"),
        [
            (TemplateError, 30),
            (TemplateNotFoundError, 31),
            (BuiltInTemplateError, 32),
            (TemplateImportError, 33),
            (TemplateStorageError, 34),
        ],
    )
    def test_exit_codes(self, error_type: type[TemplateError], exit_code: int) -> None:
        error = error_type()
        assert isinstance(error, TemplateError)
        assert error.exit_code == exit_code

    def test_not_found_is_lookup_error(self) -> None:
        """Test that callers can catch missing templates as LookupError."""
        with pytest.raises(LookupError):
            raise TemplateNotFoundError("Template with ID x not found")


class TestConfigErrors:
    """Tests for config-related errors."""

    def test_config_validation_error(self) -> None:
        error = ConfigValidationError("bad value")
        assert isinstance(error, ConfigError)
        assert error.exit_code == 22


class TestExceptionHierarchy:
    """Tests for the exception hierarchy."""

    def test_can_catch_base_exception(self) -> None:
        """Test that every error is a PromptVaultError."""
        for error in (
            ProviderTimeoutError(),
            CacheCorruptedError(),
            TemplateImportError(),
            ConfigValidationError(),
        ):
            with pytest.raises(PromptVaultError):
                raise error
