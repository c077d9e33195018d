"""CLI layer for promptvault.

Built on Typer with Rich output.

Usage:
    promptvault --help
    promptvault ask "Explain recursion"
    promptvault ask --template explain-code "$(cat main.py)"
    promptvault templates list
"""

from promptvault.cli.app import app, main
from promptvault.cli.context import AppContext, create_context
from promptvault.cli.options import (
    MaxTokensOption,
    ModelOption,
    NoCacheOption,
    ProviderOption,
    TemperatureOption,
    VarOption,
)

__all__ = [
    # App
    "app",
    "main",
    # Context
    "AppContext",
    "create_context",
    # Options
    "MaxTokensOption",
    "ModelOption",
    "NoCacheOption",
    "ProviderOption",
    "TemperatureOption",
    "VarOption",
]
