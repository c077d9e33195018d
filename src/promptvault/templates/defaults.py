"""Built-in templates used when the packaged resource file is unavailable."""

from pathlib import Path
from typing import Final

from promptvault.templates.models import PromptTemplate

BUILTIN_TEMPLATES_FILE: Final[Path] = Path(__file__).parent / "resources" / "prompts.json"


def default_templates() -> list[PromptTemplate]:
    """Return fresh copies of the hardcoded built-in templates."""
    return [
        PromptTemplate(
            id="explain-code",
            name="Explain Code",
            description="Explain what the selected code does",
            template="Explain the following code:\n\n{{selectedCode}}",
            category="Code Understanding",
            tags=["explanation", "code", "documentation"],
            variables=["selectedCode"],
        ),
        PromptTemplate(
            id="optimize-code",
            name="Optimize Code",
            description="Suggest optimizations for the selected code",
            template=(
                "Optimize the following code for performance and readability:"
                "\n\n{{selectedCode}}"
            ),
            category="Code Improvement",
            tags=["optimization", "performance", "refactoring"],
            variables=["selectedCode"],
        ),
        PromptTemplate(
            id="generate-test",
            name="Generate Tests",
            description="Generate unit tests for the selected code",
            template="Generate unit tests for the following code:\n\n{{selectedCode}}",
            category="Testing",
            tags=["testing", "unit test", "quality"],
            variables=["selectedCode"],
        ),
    ]
