"""Prompt template model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt
from pydantic.alias_generators import to_camel


class PromptTemplate(BaseModel):
    """A named prompt with ``{{variable}}`` placeholders.

    Serialized with camelCase keys (``isUserDefined``, ``lastUsed``) so
    exported files round-trip with the editor extension; snake_case keys
    are accepted on input too.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    id: str
    name: str
    template: str
    description: str = ""
    category: str = "General"
    tags: list[str] = Field(default_factory=list)
    variables: list[str] = Field(default_factory=list)  # declarative only
    usage: NonNegativeInt = 0
    last_used: int | None = None  # epoch milliseconds
    is_user_defined: bool = False

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted/exported JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


# Keys callers may never change through an update, in either spelling.
PROTECTED_FIELDS = frozenset({"id", "is_user_defined", "isUserDefined"})
