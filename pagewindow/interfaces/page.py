from enum import Enum
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence


class PageStatus(Enum):
    UNREQUESTED = "unrequested"
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"


def placeholder_records(page_size: int) -> List[Any]:
    """Record slots of a page that has not been resolved."""
    return [None] * page_size


@dataclass(frozen=True)
class PageState:
    """Immutable view of a page handed to observers."""
    offset: int
    status: PageStatus
    records: Sequence[Any]
    error: Any = None

    @property
    def is_requested(self) -> bool:
        return self.status is not PageStatus.UNREQUESTED

    @property
    def is_pending(self) -> bool:
        return self.status is PageStatus.PENDING

    @property
    def is_resolved(self) -> bool:
        return self.status is PageStatus.RESOLVED

    @property
    def is_rejected(self) -> bool:
        return self.status is PageStatus.REJECTED

    @property
    def is_settled(self) -> bool:
        return self.status in (PageStatus.RESOLVED, PageStatus.REJECTED)


@dataclass
class Page:
    """A fixed-size slot of the dataset and the state of its latest fetch"""
    offset: int
    page_size: int
    status: PageStatus = PageStatus.UNREQUESTED
    records: List[Any] = field(default_factory=list)
    error: Optional[Any] = None
    generation: int = 0  # token of the latest fetch addressed to this slot

    def __post_init__(self):
        if not self.records:
            self.records = placeholder_records(self.page_size)

    @property
    def is_requested(self) -> bool:
        return self.status is not PageStatus.UNREQUESTED

    @property
    def is_pending(self) -> bool:
        return self.status is PageStatus.PENDING

    def mark_pending(self, token: int) -> None:
        """Attach a newly issued fetch to this page"""
        self.status = PageStatus.PENDING
        self.generation = token
        self.error = None

    def mark_resolved(self, records: Sequence[Any]) -> None:
        self.status = PageStatus.RESOLVED
        self.records = list(records)
        self.error = None

    def mark_rejected(self, error: Optional[Any] = None) -> None:
        self.status = PageStatus.REJECTED
        self.error = error

    def unload(self, token: int) -> None:
        """
        Return the page to its placeholder state.

        The new token makes any fetch still in flight for this slot stale.
        """
        self.status = PageStatus.UNREQUESTED
        self.records = placeholder_records(self.page_size)
        self.error = None
        self.generation = token

    def snapshot(self) -> PageState:
        return PageState(
            offset=self.offset,
            status=self.status,
            records=tuple(self.records),
            error=self.error,
        )
