# pagewindow/interfaces/event_bus.py

from typing import Any, Callable, Set

from ..events import EventType

# Subscribers are called as callback(event_type=..., **payload)
Subscriber = Callable[..., Any]

class EventBus:
    """
    Interface for broadcasting dataset lifecycle events.

    A bus is passive: the dataset publishes page requests, settlements,
    unloads, resizes and state snapshots to it, and subscribers only observe.
    Publishing must never raise because of a subscriber.
    """

    def subscribe(self, event_type: EventType, callback: Subscriber) -> None:
        """Register ``callback`` for ``event_type``. Subscribing twice is a no-op."""
        raise NotImplementedError("Subclasses must implement this method")

    def unsubscribe(self, event_type: EventType, callback: Subscriber) -> bool:
        """
        Remove a subscription.

        Returns:
            False if ``callback`` was not subscribed to ``event_type``
        """
        raise NotImplementedError("Subclasses must implement this method")

    def publish(self, event_type: EventType, **payload: Any) -> None:
        """
        Deliver an event to every subscriber of ``event_type``.

        Args:
            event_type: The dataset event
            **payload: Keyword data, e.g. ``offset`` for page events or
                ``state`` for STATE_CHANGED
        """
        raise NotImplementedError("Subclasses must implement this method")

    def get_event_types(self) -> Set[EventType]:
        raise NotImplementedError("Subclasses must implement this method")

    def has_subscribers(self, event_type: EventType) -> bool:
        raise NotImplementedError("Subclasses must implement this method")

    def clear_all_subscriptions(self) -> None:
        raise NotImplementedError("Subclasses must implement this method")
