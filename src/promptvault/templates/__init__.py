"""Prompt template storage, rendering and lifecycle events."""

from promptvault.templates.events import TemplateEvent, TemplateEvents
from promptvault.templates.models import PromptTemplate
from promptvault.templates.rendering import extract_variables, render_template
from promptvault.templates.storage import (
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
)
from promptvault.templates.store import STORAGE_KEY, TemplateStore

__all__ = [
    "STORAGE_KEY",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PromptTemplate",
    "TemplateEvent",
    "TemplateEvents",
    "TemplateStore",
    "extract_variables",
    "render_template",
]
