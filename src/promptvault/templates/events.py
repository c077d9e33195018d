"""Observer registry for template lifecycle notifications."""

from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any

Listener = Callable[[Any], None]


class TemplateEvent(str, Enum):
    """Notifications emitted by the template store.

    Payloads:
        LOADED: list of every template after initialization.
        CREATED / UPDATED: the template.
        DELETED / USED: the template id.
        IMPORTED: list of imported templates.
        STATS_RESET: None.
    """

    LOADED = "loaded"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    USED = "used"
    IMPORTED = "imported"
    STATS_RESET = "stats_reset"


class TemplateEvents:
    """Synchronous callback registry keyed by :class:`TemplateEvent`.

    Usage:
        events = TemplateEvents()
        unsubscribe = events.subscribe(TemplateEvent.CREATED, print)
        ...
        unsubscribe()
    """

    def __init__(self) -> None:
        self._listeners: defaultdict[TemplateEvent, list[Listener]] = defaultdict(list)

    def subscribe(self, event: TemplateEvent, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``event``.

        Returns:
            A callable that removes this registration.
        """
        self._listeners[event].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[event]:
                self._listeners[event].remove(listener)

        return unsubscribe

    def emit(self, event: TemplateEvent, payload: Any = None) -> None:
        """Call every listener for ``event`` in registration order.

        Listener exceptions propagate to the caller.
        """
        for listener in list(self._listeners[event]):
            listener(payload)

    def listener_count(self, event: TemplateEvent) -> int:
        return len(self._listeners[event])

    def clear(self) -> None:
        """Remove every listener."""
        self._listeners.clear()
