# File: pagewindow/ui/live_view.py

"""
Rich-based live view of a dataset.
"""

import logging
from typing import Any, Optional
from rich.console import Console
from rich.live import Live

from ..events import EventType
from ..interfaces.event_bus import EventBus
from ..interfaces.state import DatasetState
from ..interfaces.view import DatasetView
from .components import create_dataset_panel, create_summary_table

logger = logging.getLogger(__name__)

class RichDatasetView(DatasetView):
    """
    Re-renders the pages around the read offset on every STATE_CHANGED event.
    """

    def __init__(
        self,
        event_bus: EventBus,
        console: Optional[Console] = None,
        radius: int = 5,
        refresh_per_second: int = 10,
    ):
        self.event_bus = event_bus
        self.console = console or Console()
        self.radius = radius
        self.refresh_per_second = refresh_per_second
        self.state: Optional[DatasetState] = None
        self.updates = 0
        self.live: Optional[Live] = None

    def initialize(self) -> None:
        """Subscribe to the bus and start the live display."""
        self.event_bus.subscribe(EventType.STATE_CHANGED, self._handle_state_changed)
        self.live = Live(
            console=self.console,
            refresh_per_second=self.refresh_per_second,
            vertical_overflow="crop",
        )
        self.live.start()
        if self.state is not None:
            self._render()

    def _handle_state_changed(self, state: DatasetState, **_: Any) -> None:
        self.update(state)

    def update(self, state: DatasetState) -> None:
        self.state = state
        self.updates += 1
        self._render()

    def _render(self) -> None:
        if not self.live or not self.live.is_started or self.state is None:
            return
        self.live.update(create_dataset_panel(self.state, self.radius))

    def finalize(self) -> None:
        """Stop the live display and print a summary."""
        self.event_bus.unsubscribe(EventType.STATE_CHANGED, self._handle_state_changed)
        if not self.live:
            return
        self.live.stop()

        if self.state is not None:
            self.console.print()
            self.console.print(create_summary_table(self.state))
