# pagewindow/core/stats.py

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..interfaces.page import Page

logger = logging.getLogger(__name__)


@dataclass
class PageCount:
    """The total page count reported through fetch stats."""
    page_size: int
    total_pages: Optional[int] = None

    @property
    def total_size(self) -> int:
        if self.total_pages is None:
            return 0
        return self.total_pages * self.page_size

    def report(self, total_pages: int) -> bool:
        """Record a reported count. Returns True if it differs from the last one."""
        changed = total_pages != self.total_pages
        self.total_pages = total_pages
        return changed


def resize_pages(pages: List[Page], length: int, page_size: int) -> List[Page]:
    """
    Resize the page collection in place to exactly ``length`` entries.

    New slots are unrequested placeholders. Returns the pages dropped from
    the end, whose in-flight requests the caller must invalidate.
    """
    dropped = pages[length:]
    del pages[length:]
    pages.extend(Page(offset=offset, page_size=page_size) for offset in range(len(pages), length))
    if dropped:
        logger.debug(f"Dropped pages {dropped[0].offset}..{dropped[-1].offset}")
    return dropped
