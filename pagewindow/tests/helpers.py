import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional

from ..errors import FetchRejection
from ..interfaces.fetcher import FetchStats


def make_records(start: int, count: int) -> List[dict]:
    return [{"id": i, "name": f"Record {i}"} for i in range(start, start + count)]


async def settle(rounds: int = 10) -> None:
    """Let pending done-callbacks and tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@dataclass
class FetchRequest:
    offset: int
    stats: FetchStats
    future: asyncio.Future

    def resolve(self, value: Any, total_pages: Optional[int] = None) -> None:
        if total_pages is not None:
            self.stats.total_pages = total_pages
        self.future.set_result(value)

    def reject(self, reason: Any = None, total_pages: Optional[int] = None) -> None:
        if total_pages is not None:
            self.stats.total_pages = total_pages
        self.future.set_exception(FetchRejection(reason))


class ManualFetcher:
    """Fetch capability whose results are settled by the test."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop
        self.requests: List[FetchRequest] = []

    def __call__(self, offset: int, stats: FetchStats) -> asyncio.Future:
        loop = self.loop or asyncio.get_running_loop()
        request = FetchRequest(offset, stats, loop.create_future())
        self.requests.append(request)
        return request.future

    @property
    def offsets(self) -> List[int]:
        return [request.offset for request in self.requests]

    def latest(self, offset: int) -> FetchRequest:
        return [request for request in self.requests if request.offset == offset][-1]
