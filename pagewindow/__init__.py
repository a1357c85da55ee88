"""Windowed, demand-driven record cache over an asynchronous page source."""

from .core import Dataset, EventBus, MockFetcher
from .config import DatasetOptions, load_options
from .errors import (
    PagewindowError,
    ConfigurationError,
    FetchRejection,
    FetchContractError,
    InvalidOffsetError,
)
from .events import EventType
from .interfaces.fetcher import FetchStats
from .interfaces.page import PageState, PageStatus
from .interfaces.state import DatasetState

__all__ = [
    'Dataset',
    'EventBus',
    'MockFetcher',
    'DatasetOptions',
    'load_options',
    'PagewindowError',
    'ConfigurationError',
    'FetchRejection',
    'FetchContractError',
    'InvalidOffsetError',
    'EventType',
    'FetchStats',
    'PageState',
    'PageStatus',
    'DatasetState',
]
