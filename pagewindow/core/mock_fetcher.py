# pagewindow/core/mock_fetcher.py

import asyncio
import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from ..errors import FetchRejection
from ..interfaces.fetcher import FetcherInterface, FetchStats

logger = logging.getLogger(__name__)

class MockFetcher(FetcherInterface):
    """In-memory fetcher serving generated records, for demos and tests."""

    def __init__(
        self,
        total_records: int,
        page_size: int,
        delay: float = 0.0,
        report_total: bool = True,
        failing_offsets: Iterable[int] = (),
    ):
        """
        Args:
            total_records: Size of the simulated data source
            page_size: Records per page; must match the dataset's page_size
            delay: Seconds each fetch waits before settling
            report_total: Whether to set stats.total_pages
            failing_offsets: Page offsets that always reject
        """
        self.total_records = total_records
        self.page_size = page_size
        self.delay = delay
        self.report_total = report_total
        self.failing_offsets = set(failing_offsets)
        self.requests: List[int] = []
        logger.info(f"MockFetcher initialized with {total_records} records")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_records / self.page_size)

    def make_record(self, index: int) -> Dict[str, Any]:
        return {"id": index, "name": f"Record {index}"}

    async def __call__(self, offset: int, stats: FetchStats) -> Dict[str, Any]:
        self.requests.append(offset)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.report_total:
            stats.total_pages = self.total_pages

        if offset in self.failing_offsets:
            raise FetchRejection(f"Simulated failure for page {offset}")
        if offset >= self.total_pages:
            raise FetchRejection(f"Page {offset} is past the last page")

        start = offset * self.page_size
        end = min(start + self.page_size, self.total_records)
        return {"records": [self.make_record(i) for i in range(start, end)]}
