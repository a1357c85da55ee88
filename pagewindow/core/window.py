"""
Window policy: which page offsets must be loaded and which must be evicted.

Pure functions only; nothing here touches pages.
"""

import math
from dataclasses import dataclass
from itertools import chain
from typing import List, Optional


@dataclass(frozen=True)
class WindowPlan:
    load: range          # offsets that must be pending or settled
    evict: List[int]     # existing offsets outside [read - unload, read + unload]
    page_count: int      # collection length after growth (never smaller than before)


def is_unbounded(horizon) -> bool:
    return horizon is None or horizon == math.inf


def load_range(read_offset: int, load_horizon: int, total_pages: Optional[int]) -> range:
    upper = total_pages - 1 if total_pages is not None else read_offset
    return range(max(0, read_offset - load_horizon), min(upper, read_offset) + 1)


def plan_window(
    read_offset: int,
    load_horizon: int,
    unload_horizon,
    total_pages: Optional[int],
    page_count: int,
) -> WindowPlan:
    """
    Compute the load and evict sets for a read position.

    Args:
        read_offset: Current read position (page offset)
        load_horizon: Pages behind the read offset that must be fetched
        unload_horizon: Radius outside of which pages are evicted; None or
            math.inf for unbounded
        total_pages: Reported page count, None while unknown
        page_count: Current length of the page collection

    Returns:
        WindowPlan. Offsets in the load range are never part of the evict set.
    """
    load = load_range(read_offset, load_horizon, total_pages)
    grown = max(page_count, load[-1] + 1) if load else page_count
    evict: List[int] = []
    if not is_unbounded(unload_horizon):
        below = range(0, min(page_count, max(0, read_offset - unload_horizon)))
        above = range(max(0, read_offset + unload_horizon + 1), page_count)
        evict = [offset for offset in chain(below, above) if offset not in load]
    return WindowPlan(load=load, evict=evict, page_count=grown)
