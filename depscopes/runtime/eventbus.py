"""Event bus for build-model declarations.

The host build model publishes an event every time a project, component,
binary or configuration becomes known. Live collections and plugins
subscribe to these events to install standing rules that react to
declarations made at any point of the configuration pass.
"""

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum, auto
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger("depscopes.eventbus")


class EventType(Enum):
    """Declarations published by the build model."""

    PROJECT_DECLARED = auto()
    COMPONENT_DECLARED = auto()
    BINARY_DECLARED = auto()

    CONFIGURATION_REGISTERED = auto()
    CONFIGURATION_REALIZED = auto()


@dataclass
class Event:
    """Structured event payload.

    Attributes:
        event_type: Type of event.
        source: Identifier of the publishing collection or container.
        data: Event payload. Declarations carry the declared object under
            ``"item"`` and its owning collection under ``"owner"``.
    """

    event_type: EventType
    source: str
    data: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"Event({self.event_type.name}, source={self.source})"


EventHandler = Callable[[Event], None]


class EventBus:
    """Event bus for build-model declarations.

    Handlers run outside the lock, in subscription order. A failing
    handler aborts the publication: the error is logged with the handler
    name and propagated to the publisher, since a half-wired build model
    must never be accepted.
    """

    def __init__(self) -> None:
        # Subscribers stored as (subscription_id, handler, name) tuples
        self._subscribers: Dict[EventType, List[Tuple[str, EventHandler, str]]] = defaultdict(list)
        self._lock = RLock()
        logger.debug("Event bus initialized")

    def subscribe(
        self, event_type: EventType, handler: EventHandler, name: Optional[str] = None
    ) -> str:
        """Subscribe to events of a specific type.

        Args:
            event_type: Type of event to subscribe to.
            handler: Callback function invoked when event is published.
            name: Optional handler name for logging.

        Returns:
            str: Subscription ID, shown in debug logs.
        """
        subscription_id = str(uuid.uuid4())
        handler_name = name or getattr(handler, "__name__", "anonymous")

        with self._lock:
            self._subscribers[event_type].append((subscription_id, handler, handler_name))
            logger.debug(
                "Handler %s subscribed to %s (id=%s)",
                handler_name,
                event_type.name,
                subscription_id[:8],
            )

        return subscription_id

    def publish(self, event: Event) -> None:
        """Publish event to all registered subscribers.

        Args:
            event: Event to publish.

        Raises:
            Exception: Whatever the first failing handler raised.
        """
        # Copy handlers while holding lock, then execute outside lock
        with self._lock:
            handlers_snapshot = list(self._subscribers.get(event.event_type, []))

        if not handlers_snapshot:
            logger.debug("No handlers for event %s", event.event_type.name)
            return

        logger.debug(
            "Publishing event %s from %s to %d handlers",
            event.event_type.name,
            event.source,
            len(handlers_snapshot),
        )

        for _, handler, handler_name in handlers_snapshot:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    "Handler %s failed for event %s: %s",
                    handler_name,
                    event.event_type.name,
                    e,
                )
                raise

    def subscriber_count(self, event_type: Optional[EventType] = None) -> int:
        """Get the number of subscribers.

        Args:
            event_type: Event type to count. If None, counts all subscribers.

        Returns:
            int: Number of subscribers.
        """
        with self._lock:
            if event_type is None:
                return sum(len(handlers) for handlers in self._subscribers.values())
            return len(self._subscribers.get(event_type, []))
