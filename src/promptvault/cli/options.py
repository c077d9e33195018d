"""Shared CLI options for promptvault commands."""

from typing import Annotated

import typer

from promptvault.config.schema import ProviderType

# Type aliases for common CLI options
NoCacheOption = Annotated[
    bool,
    typer.Option(
        "--no-cache",
        help="Bypass the response cache for this request.",
    ),
]

ProviderOption = Annotated[
    str | None,
    typer.Option(
        "--provider",
        "-p",
        help="LLM provider to use (ollama, openai, anthropic, mock).",
    ),
]

ModelOption = Annotated[
    str | None,
    typer.Option(
        "--model",
        "-m",
        help="Model to use. Defaults to provider's default model.",
    ),
]

TemperatureOption = Annotated[
    float | None,
    typer.Option(
        "--temperature",
        "-t",
        min=0.0,
        max=2.0,
        help="Sampling temperature. Defaults to the configured value.",
    ),
]

MaxTokensOption = Annotated[
    int | None,
    typer.Option(
        "--max-tokens",
        min=1,
        help="Maximum tokens to generate. Defaults to the configured value.",
    ),
]

VarOption = Annotated[
    list[str] | None,
    typer.Option(
        "--var",
        help="Template variable as key=value. Repeat for several.",
    ),
]


def get_provider_type(provider: str | None, default: ProviderType) -> ProviderType:
    """Convert CLI provider string to ProviderType.

    Args:
        provider: Provider name string or None.
        default: Provider used when none is given.

    Returns:
        ProviderType enum value.

    Raises:
        typer.BadParameter: If provider name is invalid.
    """
    if provider is None:
        return default
    try:
        return ProviderType(provider.lower())
    except ValueError as e:
        valid = [p.value for p in ProviderType]
        raise typer.BadParameter(
            f"Invalid provider '{provider}'. Valid options: {', '.join(valid)}"
        ) from e


def parse_variables(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ``key=value`` options into a dict.

    Raises:
        typer.BadParameter: If an item has no ``=`` or an empty key.
    """
    variables: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        variables[key] = value
    return variables
