"""Live collections of named build-model objects.

A ``DomainObjectSet`` publishes a declaration event for each member it
gains. ``configure_each`` registers a standing rule: the action runs for
every current member and for every member added later during the
configuration pass.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from depscopes.errors import ConfigurationError
from depscopes.runtime.eventbus import Event, EventBus, EventType

logger = logging.getLogger("depscopes.model.collections")

T = TypeVar("T")

KindFilter = Union[object, Tuple[object, ...], None]


def _matches(item: object, kind: KindFilter) -> bool:
    if kind is None:
        return True
    kinds = kind if isinstance(kind, tuple) else (kind,)
    return getattr(item, "kind", None) in kinds


class DomainObjectSet(Generic[T]):
    """Insertion-ordered set of named objects with standing rules.

    Members must expose a ``name`` attribute and, to be filtered by kind,
    a ``kind`` attribute.
    """

    def __init__(self, name: str, eventbus: EventBus, event_type: EventType) -> None:
        self.name = name
        self._eventbus = eventbus
        self._event_type = event_type
        self._items: Dict[str, T] = {}

    def add(self, item: T) -> T:
        """Add a member and notify every standing rule.

        Raises:
            ConfigurationError: If a member with the same name exists.
        """
        key = getattr(item, "name")
        if key in self._items:
            raise ConfigurationError(
                f"Cannot add '{key}' to {self.name}: an object with that name already exists."
            )
        self._items[key] = item
        logger.debug("Declared %s in %s", key, self.name)
        self._eventbus.publish(
            Event(self._event_type, source=self.name, data={"owner": self, "item": item})
        )
        return item

    def configure_each(
        self,
        action: Callable[[T], None],
        kind: KindFilter = None,
        name: Optional[str] = None,
    ) -> str:
        """Run ``action`` for every present and future member.

        Args:
            action: Callback receiving the member.
            kind: Optional kind (or tuple of kinds) members must have.
            name: Optional rule name for logging.

        Returns:
            str: Subscription ID of the rule on the event bus.
        """
        rule_name = name or getattr(action, "__name__", "rule")

        def _on_declared(event: Event) -> None:
            if event.data.get("owner") is not self:
                return
            item = event.data["item"]
            if _matches(item, kind):
                action(item)

        # Subscribe before replaying so members added by the replay are seen.
        subscription_id = self._eventbus.subscribe(
            self._event_type, _on_declared, name=f"{self.name}:{rule_name}"
        )
        for item in list(self._items.values()):
            if _matches(item, kind):
                action(item)
        return subscription_id

    def get(self, name: str) -> Optional[T]:
        return self._items.get(name)

    def names(self) -> List[str]:
        return list(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"DomainObjectSet({self.name!r}, size={len(self._items)})"
