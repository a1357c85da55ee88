# File: pagewindow/events.py

from enum import Enum

class EventType(Enum):
    # Dataset events
    STATE_CHANGED = "state_changed"
    READ_OFFSET_CHANGED = "read_offset_changed"
    TOTAL_PAGES_CHANGED = "total_pages_changed"

    # Page events
    PAGE_REQUESTED = "page_requested"
    PAGE_RESOLVED = "page_resolved"
    PAGE_REJECTED = "page_rejected"
    PAGE_UNLOADED = "page_unloaded"
    STALE_RESULT_DISCARDED = "stale_result_discarded"

    # Error events
    FETCH_CONTRACT_ERROR = "fetch_contract_error"
