"""Prompt template store.

Holds built-in and user-defined templates in memory, renders them, tracks
usage, and persists user-defined templates as one JSON array under a single
key of a :class:`KeyValueStore`. Built-in templates are never persisted.
"""

import json
import uuid
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
from pydantic import ValidationError

from promptvault.exceptions import (
    BuiltInTemplateError,
    TemplateImportError,
    TemplateNotFoundError,
)
from promptvault.templates.defaults import BUILTIN_TEMPLATES_FILE, default_templates
from promptvault.templates.events import TemplateEvent, TemplateEvents
from promptvault.templates.models import PROTECTED_FIELDS, PromptTemplate
from promptvault.templates.rendering import extract_variables, render_template
from promptvault.templates.storage import KeyValueStore
from promptvault.utils.clock import Clock, now_ms
from promptvault.utils.logging import get_logger

logger = get_logger(__name__)

STORAGE_KEY = "promptTemplates"


class TemplateStore:
    """Registry of prompt templates with usage tracking.

    Call :meth:`initialize` once before use. Mutating methods persist the
    full set of user-defined templates after updating the in-memory map.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        builtin_path: Path | None = BUILTIN_TEMPLATES_FILE,
        events: TemplateEvents | None = None,
        clock: Clock = now_ms,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Persistence for user-defined templates.
            builtin_path: JSON file of built-in templates. When None, or
                when the file is missing or invalid, the hardcoded defaults
                are used instead.
            events: Observer registry; a private one is created if None.
            clock: Source of the current time in epoch milliseconds.
        """
        self._storage = storage
        self._builtin_path = builtin_path
        self._clock = clock
        self.events = events or TemplateEvents()
        self._templates: dict[str, PromptTemplate] = {}
        self._builtins_loaded = False

    async def initialize(self) -> None:
        """Load user-defined templates, then built-ins.

        User templates go first so that a built-in never replaces a user
        template with the same id.
        """
        records = await self._storage.get(STORAGE_KEY, [])
        for record in records or []:
            try:
                template = PromptTemplate.model_validate(record)
            except ValidationError as e:
                logger.warning("Skipping invalid stored template", extra={"error": str(e)})
                continue
            self._templates[template.id] = template

        if not self._builtins_loaded:
            for template in await self._load_builtin_templates():
                if template.id not in self._templates:
                    self._templates[template.id] = template
            self._builtins_loaded = True

        logger.debug("Templates loaded", extra={"count": len(self._templates)})
        self.events.emit(TemplateEvent.LOADED, self.get_all_templates())

    async def _load_builtin_templates(self) -> list[PromptTemplate]:
        if self._builtin_path is None or not await aiofiles.os.path.isfile(
            self._builtin_path
        ):
            return default_templates()

        try:
            async with aiofiles.open(self._builtin_path, encoding="utf-8") as f:
                records = json.loads(await f.read())
            if not isinstance(records, list):
                raise ValueError("built-in template file must contain a JSON array")
            templates = [PromptTemplate.model_validate(r) for r in records]
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and ValidationError are both ValueErrors
            logger.warning(
                "Failed to load built-in templates, using defaults",
                extra={"path": str(self._builtin_path), "error": str(e)},
            )
            return default_templates()

        for template in templates:
            template.is_user_defined = False
        return templates

    async def _save(self) -> None:
        records = [
            template.to_record()
            for template in self._templates.values()
            if template.is_user_defined
        ]
        await self._storage.update(STORAGE_KEY, records)

    def _require(self, template_id: str) -> PromptTemplate:
        template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template with ID {template_id} not found")
        return template

    def _new_id(self, prefix: str) -> str:
        return f"{prefix}-{self._clock()}-{uuid.uuid4().hex[:7]}"

    # Read access

    def add_template(self, template: PromptTemplate) -> None:
        """Insert or replace a template in memory, without persisting."""
        self._templates[template.id] = template

    def get_template(self, template_id: str) -> PromptTemplate | None:
        return self._templates.get(template_id)

    def get_all_templates(self) -> list[PromptTemplate]:
        return list(self._templates.values())

    def get_templates_by_category(self, category: str) -> list[PromptTemplate]:
        return [t for t in self._templates.values() if t.category == category]

    def get_templates_by_tags(self, tags: Iterable[str]) -> list[PromptTemplate]:
        """Templates carrying at least one of ``tags``."""
        wanted = set(tags)
        return [t for t in self._templates.values() if wanted.intersection(t.tags)]

    # Mutation

    async def create_template(self, **fields: Any) -> PromptTemplate:
        """Create and persist a user-defined template.

        Any ``id``, ``usage`` or ``is_user_defined`` in ``fields`` is
        ignored. ``variables`` defaults to the placeholders found in
        ``template``.

        Raises:
            pydantic.ValidationError: If required fields are missing.
        """
        data = {
            k: v
            for k, v in fields.items()
            if k not in PROTECTED_FIELDS and k not in ("usage", "last_used", "lastUsed")
        }
        if "variables" not in data and isinstance(data.get("template"), str):
            data["variables"] = extract_variables(data["template"])

        template = PromptTemplate.model_validate(
            {**data, "id": self._new_id("template"), "usage": 0, "is_user_defined": True}
        )
        self._templates[template.id] = template
        await self._save()

        logger.info("Template created", extra={"template_id": template.id})
        self.events.emit(TemplateEvent.CREATED, template)
        return template

    async def update_template(self, template_id: str, **updates: Any) -> PromptTemplate:
        """Merge ``updates`` into an existing template.

        ``id`` and ``is_user_defined`` cannot be changed and are dropped from
        the update. Built-in templates are updated in memory only.

        Raises:
            TemplateNotFoundError: If no template has this id.
            pydantic.ValidationError: If the merged template is invalid.
        """
        template = self._require(template_id)
        valid_updates = {k: v for k, v in updates.items() if k not in PROTECTED_FIELDS}

        merged = {**template.model_dump(), **valid_updates}
        updated = PromptTemplate.model_validate(
            {**merged, "id": template.id, "is_user_defined": template.is_user_defined}
        )
        self._templates[template_id] = updated

        if template.is_user_defined:
            await self._save()

        self.events.emit(TemplateEvent.UPDATED, updated)
        return updated

    async def delete_template(self, template_id: str) -> bool:
        """Delete a user-defined template.

        Returns:
            True if deleted, False if no template has this id.

        Raises:
            BuiltInTemplateError: If the template is built-in.
        """
        template = self._templates.get(template_id)
        if template is None:
            return False
        if not template.is_user_defined:
            raise BuiltInTemplateError(
                f"Cannot delete built-in template {template_id}"
            )

        del self._templates[template_id]
        await self._save()

        logger.info("Template deleted", extra={"template_id": template_id})
        self.events.emit(TemplateEvent.DELETED, template_id)
        return True

    async def use_template(
        self,
        template_id: str,
        variables: Mapping[str, Any] | None = None,
    ) -> str:
        """Render a template and record the use.

        Every call increments ``usage`` and sets ``last_used``, so rendering
        the same template twice counts twice.

        Raises:
            TemplateNotFoundError: If no template has this id.
        """
        template = self._require(template_id)

        template.usage += 1
        template.last_used = self._clock()
        if template.is_user_defined:
            await self._save()

        rendered = render_template(template.template, variables)
        self.events.emit(TemplateEvent.USED, template_id)
        return rendered

    async def reset_usage_stats(self) -> None:
        """Zero usage counters and last-used times on every template."""
        for template in self._templates.values():
            template.usage = 0
            template.last_used = None
        await self._save()
        self.events.emit(TemplateEvent.STATS_RESET)

    # Import / export

    def export_templates(self, user_only: bool = False) -> str:
        """Serialize templates to a pretty-printed JSON array."""
        templates = self.get_all_templates()
        if user_only:
            templates = [t for t in templates if t.is_user_defined]
        return json.dumps([t.to_record() for t in templates], indent=2)

    async def import_templates(self, json_data: str) -> list[PromptTemplate]:
        """Import templates from a JSON array.

        Each imported template gets a freshly generated id (any id in the
        payload is discarded), becomes user-defined, and starts with zero
        usage. Nothing is inserted unless every entry is valid.

        Raises:
            TemplateImportError: If the payload is not a valid array of
                templates.
        """
        try:
            records = json.loads(json_data)
        except json.JSONDecodeError as e:
            raise TemplateImportError(f"Failed to import templates: {e}") from e
        if not isinstance(records, list):
            raise TemplateImportError(
                "Failed to import templates: expected a JSON array"
            )

        imported: list[PromptTemplate] = []
        try:
            for record in records:
                if not isinstance(record, dict):
                    raise TemplateImportError(
                        "Failed to import templates: every entry must be an object"
                    )
                data = {
                    k: v
                    for k, v in record.items()
                    if k not in PROTECTED_FIELDS and k not in ("usage", "lastUsed", "last_used")
                }
                imported.append(
                    PromptTemplate.model_validate(
                        {
                            **data,
                            "id": self._new_id("imported"),
                            "is_user_defined": True,
                            "usage": 0,
                            "last_used": None,
                        }
                    )
                )
        except ValidationError as e:
            raise TemplateImportError(f"Failed to import templates: {e}") from e

        for template in imported:
            self._templates[template.id] = template
        await self._save()

        logger.info("Templates imported", extra={"count": len(imported)})
        self.events.emit(TemplateEvent.IMPORTED, imported)
        return imported

    def dispose(self) -> None:
        """Drop every event listener."""
        self.events.clear()

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates
