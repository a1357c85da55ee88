# pagewindow/core/coordinator.py

"""
Fetch coordination: issuing fetch calls and turning their settlement into
messages for the dataset.

Every request carries a token drawn from one counter. The dataset stores the
token on the page at issuance and honours a settlement only while the page
still holds that token; anything else is a stale result.
"""

import asyncio
import functools
import inspect
import itertools
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from ..errors import FetchContractError, FetchRejection
from ..interfaces.fetcher import FetchStats
from ..interfaces.page import Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolved:
    records: Sequence


@dataclass(frozen=True)
class Rejected:
    reason: Any = None


Outcome = Union[Resolved, Rejected]


@dataclass(frozen=True)
class Settlement:
    """A settled fetch, delivered back to the dataset."""
    offset: int
    token: int
    outcome: Outcome
    total_pages: Optional[int] = None
    contract_error: Optional[FetchContractError] = None

    def is_current(self, page: Optional[Page]) -> bool:
        return page is not None and page.generation == self.token


def _is_record_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def normalize_payload(value: Any) -> Resolved:
    """
    Accept either a bare sequence of records or a wrapper exposing ``records``.

    Raises:
        FetchContractError: For any other shape
    """
    if _is_record_sequence(value):
        return Resolved(value)
    if isinstance(value, Mapping):
        if "records" not in value:
            raise FetchContractError(f"Fetch payload mapping has no 'records' key: {sorted(value)!r}")
        records = value["records"]
    elif hasattr(value, "records"):
        records = value.records
    else:
        raise FetchContractError(
            f"Fetch payload must be a sequence of records or expose 'records', got {type(value).__name__}"
        )
    if not _is_record_sequence(records):
        raise FetchContractError(f"Fetch payload 'records' must be a sequence, got {type(records).__name__}")
    return Resolved(records)


def normalize_total_pages(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise FetchContractError(f"stats.total_pages must be a non-negative integer, got {value!r}")
    return value


def outcome_of(future: asyncio.Future) -> Outcome:
    if future.cancelled():
        return Rejected()
    error = future.exception()
    if error is not None:
        if isinstance(error, FetchRejection):
            return Rejected(error.reason)
        return Rejected(error)
    return normalize_payload(future.result())


class FetchCoordinator:
    """
    Issues fetch calls and reports each settlement exactly once.

    The coordinator never touches pages. It hands tokens out, keeps track of
    the futures in flight and delivers a Settlement to the dataset from the
    future's done-callback, i.e. on a later turn of the event loop.
    """

    def __init__(
        self,
        fetch: Callable[[int, FetchStats], Any],
        deliver: Callable[[Settlement], None],
        loop: asyncio.AbstractEventLoop,
        cancel_stale: bool = False,
    ):
        """
        Initialize the coordinator.

        Args:
            fetch: The fetch capability, ``fetch(offset, stats) -> awaitable``
            deliver: Receives every Settlement
            loop: Event loop the fetches are scheduled on
            cancel_stale: Cancel in-flight futures whose slot was invalidated
        """
        self._fetch = fetch
        self._deliver = deliver
        self._loop = loop
        self._cancel_stale = cancel_stale
        self._tokens = itertools.count(1)
        self._in_flight: Dict[int, Tuple[int, asyncio.Future]] = {}

    @property
    def in_flight(self) -> int:
        """Number of current (non-invalidated) requests still outstanding."""
        return len(self._in_flight)

    def next_token(self) -> int:
        return next(self._tokens)

    def issue(self, offset: int, token: int) -> None:
        """Call fetch for the page at ``offset`` on behalf of request ``token``."""
        stats = FetchStats()
        future = self._as_future(offset, stats)
        self._in_flight[offset] = (token, future)
        future.add_done_callback(functools.partial(self._on_done, offset, token, stats))
        logger.debug(f"Issued fetch for page {offset} (token {token})")

    def invalidate(self, offset: int) -> int:
        """
        Forget the request in flight for ``offset``, if any.

        Returns:
            A fresh token for the slot, superseding every earlier one
        """
        entry = self._in_flight.pop(offset, None)
        if entry is not None and self._cancel_stale:
            token, future = entry
            if not future.done():
                logger.debug(f"Cancelling stale fetch for page {offset} (token {token})")
                future.cancel()
        return self.next_token()

    def _as_future(self, offset: int, stats: FetchStats) -> asyncio.Future:
        try:
            outcome = self._fetch(offset, stats)
        except Exception as e:
            # a fetch that fails before returning an awaitable rejects its page
            logger.debug(f"Fetch for page {offset} raised synchronously: {e!r}")
            future = self._loop.create_future()
            future.set_exception(e)
            return future
        if inspect.isawaitable(outcome):
            return asyncio.ensure_future(outcome, loop=self._loop)
        future = self._loop.create_future()
        future.set_result(outcome)
        return future

    def _on_done(self, offset: int, token: int, stats: FetchStats, future: asyncio.Future) -> None:
        entry = self._in_flight.get(offset)
        if entry is not None and entry[0] == token:
            del self._in_flight[offset]

        contract_error: Optional[FetchContractError] = None
        try:
            outcome = outcome_of(future)
        except FetchContractError as e:
            # a malformed payload rejects the page with the contract error
            outcome = Rejected(e)
            contract_error = e
        try:
            total_pages = normalize_total_pages(stats.total_pages)
        except FetchContractError as e:
            total_pages = None
            contract_error = contract_error or e

        self._deliver(Settlement(
            offset=offset,
            token=token,
            outcome=outcome,
            total_pages=total_pages,
            contract_error=contract_error,
        ))

        if contract_error is not None:
            logger.error(f"Fetch for page {offset} broke the fetch contract: {contract_error}")
            raise contract_error
