# pagewindow/core/notifier.py

import asyncio
import logging
from typing import Callable

from ..events import EventType
from ..interfaces.event_bus import EventBus
from ..interfaces.state import DatasetState

logger = logging.getLogger(__name__)


class ObserverNotifier:
    """
    Publishes dataset snapshots to the observer and the event bus.

    Without coalescing every notify() results in exactly one observer call.
    With coalescing, notify() schedules a single publication for the next
    turn of the event loop and further calls in the same turn are folded
    into it; the observer then sees the latest state only.
    """

    def __init__(
        self,
        observe: Callable[[DatasetState], None],
        snapshot: Callable[[], DatasetState],
        event_bus: EventBus,
        loop: asyncio.AbstractEventLoop,
        coalesce: bool = False,
    ):
        self._observe = observe
        self._snapshot = snapshot
        self._event_bus = event_bus
        self._loop = loop
        self._coalesce = coalesce
        self._scheduled = False
        self.notifications = 0

    def notify(self) -> None:
        if not self._coalesce:
            self._publish()
            return
        if self._scheduled:
            return
        self._scheduled = True
        self._loop.call_soon(self._flush)

    def _flush(self) -> None:
        self._scheduled = False
        self._publish()

    def _publish(self) -> None:
        state = self._snapshot()
        self.notifications += 1
        # observer errors propagate to whoever triggered the change
        self._observe(state)
        self._event_bus.publish(EventType.STATE_CHANGED, state=state)
