# pagewindow/interfaces/fetcher.py

from dataclasses import dataclass
from typing import Any, Awaitable, Optional

@dataclass
class FetchStats:
    """
    Side channel handed to every fetch call.

    A fresh instance is allocated per call. Fetch implementations may set
    ``total_pages`` at any point before their result settles; the dataset
    reads it once, at settlement time.
    """
    total_pages: Optional[int] = None

class FetcherInterface:
    """Interface for the capability that retrieves one page of records."""

    def __call__(self, offset: int, stats: FetchStats) -> Awaitable[Any]:
        """
        Fetch the page at the given offset.

        Args:
            offset: Page offset (page index, not record index)
            stats: Per-call statistics record the fetcher may fill in

        Returns:
            An awaitable resolving to a sequence of records, or to a wrapper
            exposing a ``records`` attribute or key

        Raises:
            FetchRejection: To reject the page with an optional reason.
                Any other exception rejects the page with the exception
                itself as the error.
        """
        raise NotImplementedError("Subclasses must implement this method")
