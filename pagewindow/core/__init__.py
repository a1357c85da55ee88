# pagewindow/core/__init__.py
from .event_bus import EventBus
from .window import WindowPlan, plan_window
from .coordinator import FetchCoordinator, Settlement, Resolved, Rejected
from .stats import PageCount, resize_pages
from .notifier import ObserverNotifier
from .dataset import Dataset
from .mock_fetcher import MockFetcher

__all__ = [
    "EventBus",
    "WindowPlan",
    "plan_window",
    "FetchCoordinator",
    "Settlement",
    "Resolved",
    "Rejected",
    "PageCount",
    "resize_pages",
    "ObserverNotifier",
    "Dataset",
    "MockFetcher",
]

"""
Core components for the pagewindow package.
"""
