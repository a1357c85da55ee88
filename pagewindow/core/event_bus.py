# pagewindow/core/event_bus.py

import logging
from collections import Counter, defaultdict
from typing import Any, Dict, List, Set

from ..events import EventType
from ..interfaces.event_bus import EventBus as EventBusInterface, Subscriber

logger = logging.getLogger(__name__)

class EventBus(EventBusInterface):
    """
    In-process event bus for dataset lifecycle events.

    Subscribers only observe; a failing subscriber is logged and skipped so
    it can never interrupt a window recompute or a settlement. The bus also
    counts what it published, which the demo reports at the end of a run.
    """

    def __init__(self, debug_logging: bool = False):
        """
        Args:
            debug_logging: Log every published event at debug level
        """
        self._subscribers: Dict[EventType, List[Subscriber]] = defaultdict(list)
        self.debug_logging = debug_logging
        self.published: Counter = Counter()

    def subscribe(self, event_type: EventType, callback: Subscriber) -> None:
        subscribers = self._subscribers[event_type]
        if callback in subscribers:
            return
        subscribers.append(callback)
        logger.debug(f"{event_type.name}: {len(subscribers)} subscriber(s)")

    def unsubscribe(self, event_type: EventType, callback: Subscriber) -> bool:
        subscribers = self._subscribers.get(event_type)
        if not subscribers or callback not in subscribers:
            return False
        subscribers.remove(callback)
        if not subscribers:
            del self._subscribers[event_type]
        return True

    def publish(self, event_type: EventType, **payload: Any) -> None:
        self.published[event_type] += 1
        if self.debug_logging:
            logger.debug(f"{event_type.name} {payload}")

        # a subscriber may unsubscribe itself during delivery
        for callback in tuple(self._subscribers.get(event_type, ())):
            try:
                callback(event_type=event_type, **payload)
            except Exception as e:
                logger.error(f"Subscriber {callback!r} failed on {event_type.name}: {e}")

    def get_event_types(self) -> Set[EventType]:
        return {event_type for event_type, subscribers in self._subscribers.items() if subscribers}

    def has_subscribers(self, event_type: EventType) -> bool:
        return bool(self._subscribers.get(event_type))

    def clear_all_subscriptions(self) -> None:
        self._subscribers.clear()
        logger.debug("All dataset event subscriptions cleared")
