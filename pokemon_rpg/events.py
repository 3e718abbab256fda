import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from pokemon_rpg.models.models import EventType

LOGGER = logging.getLogger(__name__)

EventCallback = Callable[[dict[str, Any]], None]


class EventManager:
    def __init__(self) -> None:
        self._subscribers: defaultdict[EventType, list[EventCallback]] = defaultdict(list)

    def publish(self, event_type: EventType, **data: Any) -> None:
        callbacks = list(self._subscribers[event_type])
        LOGGER.debug("Publishing %s to %d subscriber(s)", event_type.name, len(callbacks))
        for callback in callbacks:
            callback(data)

    def subscribe(self, event_type: EventType, callback: EventCallback) -> None:
        if callback not in self._subscribers[event_type]:
            self._subscribers[event_type].append(callback)

    def subscriber_count(self, event_type: EventType) -> int:
        return len(self._subscribers[event_type])

    def unsubscribe(self, event_type: EventType, callback: EventCallback) -> None:
        if callback in self._subscribers[event_type]:
            self._subscribers[event_type].remove(callback)
