"""Placeholder substitution for prompt templates."""

import re
from collections.abc import Mapping
from typing import Any

# Any ``{{...}}`` left after substitution; never spans braces.
UNRESOLVED_PLACEHOLDER = re.compile(r"\{\{[^{}]*?\}\}")
VARIABLE_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def render_template(text: str, variables: Mapping[str, Any] | None = None) -> str:
    """Substitute variables into a template and drop unresolved placeholders.

    Every occurrence of ``{{key}}`` (or ``{{ key }}``) is replaced for each
    supplied key; values are converted with ``str``. Whatever ``{{...}}``
    remains afterwards is removed, so ``"A {{missing}} B"`` renders as
    ``"A  B"``.

    Args:
        text: Template text.
        variables: Mapping of variable name to value.

    Returns:
        The rendered prompt.
    """
    rendered = text
    for key, value in (variables or {}).items():
        pattern = re.compile(r"\{\{\s*" + re.escape(str(key)) + r"\s*\}\}")
        replacement = str(value)
        rendered = pattern.sub(lambda _: replacement, rendered)
    return UNRESOLVED_PLACEHOLDER.sub("", rendered)


def extract_variables(text: str) -> list[str]:
    """List placeholder names in order of first appearance."""
    seen: dict[str, None] = {}
    for match in VARIABLE_PLACEHOLDER.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)
