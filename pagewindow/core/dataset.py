# pagewindow/core/dataset.py

import asyncio
import logging
import math
import threading
from typing import Any, Callable, List, Optional

from ..config import DatasetOptions
from ..errors import ConfigurationError, InvalidOffsetError
from ..events import EventType
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..interfaces.fetcher import FetchStats
from ..interfaces.page import Page, PageStatus
from ..interfaces.state import DatasetState
from .coordinator import FetchCoordinator, Rejected, Resolved, Settlement
from .event_bus import EventBus
from .notifier import ObserverNotifier
from .stats import PageCount, resize_pages
from .window import is_unbounded, plan_window

logger = logging.getLogger(__name__)


def _noop(state: DatasetState) -> None:
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_non_negative(option: str, value: Any) -> int:
    if not _is_int(value) or value < 0:
        raise ConfigurationError(option, f"{option} must be a non-negative integer, got {value!r}")
    return value


class Dataset:
    """
    A windowed view over a paged data source.

    Pages near the read offset are fetched on demand; pages that fall outside
    the unload horizon go back to placeholders. The total page count is
    learned from fetch stats and may grow or shrink at any time.

    All mutations run on the event loop's thread under one lock, and each
    one is followed by a single observer notification. Calls made from other
    threads are handed to the loop with call_soon_threadsafe; the lock keeps
    `state` consistent for readers on those threads.
    """

    def __init__(
        self,
        page_size: Optional[int] = None,
        fetch: Optional[Callable[[int, FetchStats], Any]] = None,
        observe: Optional[Callable[[DatasetState], None]] = None,
        load_horizon: int = 1,
        unload_horizon: Optional[float] = math.inf,
        initial_read_offset: int = 0,
        *,
        event_bus: Optional[EventBusInterface] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        coalesce_notifications: bool = False,
        cancel_stale_fetches: bool = False,
    ):
        """
        Create the dataset and request the pages around the initial offset.

        Args:
            page_size: Records per page
            fetch: ``fetch(offset, stats)`` returning an awaitable page payload
            observe: Called with a DatasetState after every change
            load_horizon: Pages behind the read offset to fetch eagerly
            unload_horizon: Radius outside of which pages are evicted;
                None or math.inf for never
            initial_read_offset: Starting read offset
            event_bus: Bus for lifecycle events; a private one by default
            loop: Event loop for fetches; defaults to the running loop
            coalesce_notifications: Fold notifications of one loop turn together
            cancel_stale_fetches: Cancel fetches whose page was evicted or dropped

        Raises:
            ConfigurationError: If an option is missing or invalid
        """
        if page_size is None:
            raise ConfigurationError("page_size", "Dataset cannot be instantiated without page_size")
        if not _is_int(page_size) or page_size <= 0:
            raise ConfigurationError("page_size", f"page_size must be a positive integer, got {page_size!r}")
        if fetch is None:
            raise ConfigurationError("fetch", "Dataset cannot be instantiated without fetch()")
        if not callable(fetch):
            raise ConfigurationError("fetch", "fetch must be callable")
        if observe is None:
            observe = _noop
        elif not callable(observe):
            raise ConfigurationError("observe", "observe must be callable")
        _require_non_negative("load_horizon", load_horizon)
        if is_unbounded(unload_horizon):
            unload_horizon = math.inf
        else:
            _require_non_negative("unload_horizon", unload_horizon)
        _require_non_negative("initial_read_offset", initial_read_offset)
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise ConfigurationError(
                    "loop", "Dataset needs a running event loop or an explicit loop"
                ) from e

        self._page_size = page_size
        self._fetch = fetch
        self._observe = observe
        self._load_horizon = load_horizon
        self._unload_horizon = unload_horizon
        self._read_offset = initial_read_offset
        self._pages: List[Page] = []
        self._page_count = PageCount(page_size)
        self._state: Optional[DatasetState] = None
        self._lock = threading.RLock()
        self._loop = loop

        self._event_bus = event_bus if event_bus is not None else EventBus()
        self._coordinator = FetchCoordinator(
            fetch, self._handle_settlement, loop, cancel_stale=cancel_stale_fetches
        )
        self._notifier = ObserverNotifier(
            observe, lambda: self.state, self._event_bus, loop, coalesce=coalesce_notifications
        )

        logger.debug(
            f"Dataset created: page_size={page_size}, load_horizon={load_horizon}, "
            f"unload_horizon={unload_horizon}, initial_read_offset={initial_read_offset}"
        )
        self._call_on_loop(self._refresh)

    @classmethod
    def from_options(
        cls,
        options: DatasetOptions,
        fetch: Callable[[int, FetchStats], Any],
        observe: Optional[Callable[[DatasetState], None]] = None,
        **kwargs: Any,
    ) -> "Dataset":
        """Create a dataset from loaded options; kwargs go to the constructor."""
        return cls(
            page_size=options.page_size,
            fetch=fetch,
            observe=observe,
            load_horizon=options.load_horizon,
            unload_horizon=options.unload_horizon,
            initial_read_offset=options.initial_read_offset,
            coalesce_notifications=options.coalesce_notifications,
            cancel_stale_fetches=options.cancel_stale_fetches,
            **kwargs,
        )

    # ------------- accessors -------------
    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def fetch(self) -> Callable[[int, FetchStats], Any]:
        return self._fetch

    @property
    def observe(self) -> Callable[[DatasetState], None]:
        return self._observe

    @property
    def load_horizon(self) -> int:
        return self._load_horizon

    @property
    def unload_horizon(self) -> float:
        return self._unload_horizon

    @property
    def read_offset(self) -> int:
        return self._read_offset

    @property
    def total_pages(self) -> Optional[int]:
        return self._page_count.total_pages

    @property
    def total_size(self) -> int:
        return self._page_count.total_size

    @property
    def event_bus(self) -> EventBusInterface:
        return self._event_bus

    @property
    def in_flight(self) -> int:
        return self._coordinator.in_flight

    @property
    def notifications(self) -> int:
        return self._notifier.notifications

    @property
    def state(self) -> DatasetState:
        """Immutable snapshot of the current state."""
        with self._lock:
            if self._state is None:
                self._state = DatasetState(
                    pages=tuple(page.snapshot() for page in self._pages),
                    total_pages=self._page_count.total_pages,
                    total_size=self._page_count.total_size,
                    read_offset=self._read_offset,
                    page_size=self._page_size,
                )
            return self._state

    # ------------- operations -------------
    def set_read_offset(self, offset: int) -> None:
        """
        Move the read offset, fetch and evict accordingly, then notify once.

        On the event loop's thread this happens before returning. From any
        other thread the move is handed to the loop and applied there.

        Raises:
            InvalidOffsetError: If offset is not a non-negative integer
        """
        if not _is_int(offset) or offset < 0:
            raise InvalidOffsetError(f"Read offset must be a non-negative integer, got {offset!r}")
        self._call_on_loop(self._move_read_offset, offset)

    # ------------- internals -------------
    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            # no loop runs in this thread; safe only while ours is idle too
            return not self._loop.is_running()

    def _call_on_loop(self, callback: Callable[..., None], *args: Any) -> None:
        if self._on_loop_thread():
            callback(*args)
            return
        logger.debug(f"Handing {callback.__name__}{args} to the event loop thread")
        self._loop.call_soon_threadsafe(callback, *args)

    def _refresh(self) -> None:
        with self._lock:
            self._recompute()
            self._publish_state()

    def _move_read_offset(self, offset: int) -> None:
        with self._lock:
            self._read_offset = offset
            self._recompute()
            self._event_bus.publish(EventType.READ_OFFSET_CHANGED, read_offset=offset)
            self._publish_state()

    def _publish_state(self) -> None:
        """Notify with a snapshot taken after the change is complete. Caller holds the lock."""
        self._state = None
        self._notifier.notify()

    def _page_at(self, offset: int) -> Optional[Page]:
        if 0 <= offset < len(self._pages):
            return self._pages[offset]
        return None

    def _recompute(self) -> None:
        """Apply the window policy for the current read offset. Caller holds the lock."""
        self._state = None
        plan = plan_window(
            self._read_offset,
            self._load_horizon,
            self._unload_horizon,
            self._page_count.total_pages,
            len(self._pages),
        )
        if plan.page_count > len(self._pages):
            resize_pages(self._pages, plan.page_count, self._page_size)

        for offset in plan.evict:
            page = self._pages[offset]
            if not page.is_requested:
                continue
            page.unload(self._coordinator.invalidate(offset))
            logger.debug(f"Unloaded page {offset}")
            self._event_bus.publish(EventType.PAGE_UNLOADED, offset=offset)

        for offset in plan.load:
            page = self._pages[offset]
            if page.status is not PageStatus.UNREQUESTED:
                continue
            token = self._coordinator.next_token()
            page.mark_pending(token)
            self._event_bus.publish(EventType.PAGE_REQUESTED, offset=offset, token=token)
            self._coordinator.issue(offset, token)
        self._state = None

    def _handle_settlement(self, settlement: Settlement) -> None:
        with self._lock:
            changed = False
            if settlement.contract_error is not None:
                self._event_bus.publish(
                    EventType.FETCH_CONTRACT_ERROR,
                    offset=settlement.offset,
                    error=settlement.contract_error,
                )
            page = self._page_at(settlement.offset)
            if settlement.is_current(page):
                self._apply_outcome(page, settlement)
                changed = True
            else:
                logger.debug(
                    f"Discarding stale result for page {settlement.offset} (token {settlement.token})"
                )
                self._event_bus.publish(
                    EventType.STALE_RESULT_DISCARDED,
                    offset=settlement.offset,
                    token=settlement.token,
                )
            if settlement.total_pages is not None:
                changed = self._apply_total_pages(settlement.total_pages) or changed
            if changed:
                self._publish_state()

    def _apply_outcome(self, page: Page, settlement: Settlement) -> None:
        outcome = settlement.outcome
        self._state = None
        if isinstance(outcome, Resolved):
            page.mark_resolved(outcome.records)
            logger.debug(f"Page {page.offset} resolved with {len(outcome.records)} records")
            self._event_bus.publish(
                EventType.PAGE_RESOLVED, offset=page.offset, record_count=len(outcome.records)
            )
        elif isinstance(outcome, Rejected):
            page.mark_rejected(outcome.reason)
            logger.debug(f"Page {page.offset} rejected: {outcome.reason!r}")
            self._event_bus.publish(EventType.PAGE_REJECTED, offset=page.offset, error=outcome.reason)

    def _apply_total_pages(self, total_pages: int) -> bool:
        """Resize to a reported page count and re-run the window. Caller holds the lock."""
        changed = self._page_count.report(total_pages)
        if not changed and len(self._pages) == total_pages:
            return False
        dropped = resize_pages(self._pages, total_pages, self._page_size)
        for page in dropped:
            self._coordinator.invalidate(page.offset)
        self._state = None
        logger.info(f"Total pages set to {total_pages} ({self._page_count.total_size} records)")
        self._event_bus.publish(
            EventType.TOTAL_PAGES_CHANGED,
            total_pages=total_pages,
            total_size=self._page_count.total_size,
        )
        self._recompute()
        return True
