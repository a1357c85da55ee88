"""Immutable dataset snapshots published to observers."""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .page import PageState, PageStatus


@dataclass(frozen=True)
class DatasetState:
    pages: Tuple[PageState, ...]
    total_pages: Optional[int]
    total_size: int
    read_offset: int
    page_size: int

    @property
    def length(self) -> int:
        """Number of record slots currently addressable."""
        return len(self.pages) * self.page_size

    @property
    def records(self) -> Tuple[Any, ...]:
        """All records across pages, in order, placeholders included."""
        return tuple(record for page in self.pages for record in page.records)

    def get(self, index: int) -> Any:
        """
        Look up a record by its absolute index.

        Raises:
            IndexError: If the index does not fall on a known page
        """
        if index < 0:
            raise IndexError(f"Record index {index} is negative")
        page_offset, position = divmod(index, self.page_size)
        if page_offset >= len(self.pages):
            raise IndexError(
                f"Record index {index} out of range. Dataset has {len(self.pages)} pages."
            )
        records = self.pages[page_offset].records
        if position >= len(records):
            # resolved pages may carry fewer records than page_size
            raise IndexError(f"Record index {index} is past the end of page {page_offset}")
        return records[position]

    @property
    def is_loading(self) -> bool:
        return any(page.is_pending for page in self.pages)

    def _with_status(self, status: PageStatus) -> Tuple[PageState, ...]:
        return tuple(page for page in self.pages if page.status is status)

    @property
    def unrequested(self) -> Tuple[PageState, ...]:
        return self._with_status(PageStatus.UNREQUESTED)

    @property
    def pending(self) -> Tuple[PageState, ...]:
        return self._with_status(PageStatus.PENDING)

    @property
    def resolved(self) -> Tuple[PageState, ...]:
        return self._with_status(PageStatus.RESOLVED)

    @property
    def rejected(self) -> Tuple[PageState, ...]:
        return self._with_status(PageStatus.REJECTED)
