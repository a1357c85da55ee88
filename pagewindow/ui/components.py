# File: pagewindow/ui/components.py

"""
Rich renderables for dataset snapshots.
"""

import logging
from typing import Any, List, Tuple
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..interfaces.page import PageState, PageStatus
from ..interfaces.state import DatasetState

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    PageStatus.UNREQUESTED: "dim",
    PageStatus.PENDING: "yellow",
    PageStatus.RESOLVED: "green",
    PageStatus.REJECTED: "bold red",
}

STATUS_GLYPHS = {
    PageStatus.UNREQUESTED: ".",
    PageStatus.PENDING: "~",
    PageStatus.RESOLVED: "#",
    PageStatus.REJECTED: "!",
}

def describe_record(record: Any) -> str:
    """Short label for a record: its 'name' when it has one."""
    if record is None:
        return ""
    if isinstance(record, dict) and "name" in record:
        return str(record["name"])
    return str(record)

def create_page_strip(state: DatasetState) -> Text:
    """
    One glyph per page, the read offset underlined.

    Args:
        state: Snapshot to render

    Returns:
        Rich Text object
    """
    strip = Text()
    for page in state.pages:
        style = STATUS_STYLES[page.status]
        if page.offset == state.read_offset:
            style += " underline"
        strip.append(STATUS_GLYPHS[page.status], style=style)
    return strip

def _window_bounds(state: DatasetState, radius: int) -> Tuple[int, int]:
    first = max(0, state.read_offset - radius)
    last = min(len(state.pages), state.read_offset + radius + 1)
    return first, last

def create_pages_table(state: DatasetState, radius: int = 5) -> Table:
    """
    Create a table of the pages around the read offset.

    Args:
        state: Snapshot to render
        radius: Pages shown on each side of the read offset

    Returns:
        Rich Table object
    """
    table = Table(expand=True)
    table.add_column("Page", justify="right", width=6)
    table.add_column("Status", width=12)
    table.add_column("First record", ratio=1)
    table.add_column("Error", ratio=1)

    first, last = _window_bounds(state, radius)
    visible: List[PageState] = list(state.pages[first:last])
    for page in visible:
        marker = ">" if page.offset == state.read_offset else " "
        first_record = describe_record(page.records[0]) if page.records else ""
        error = "" if page.error is None else str(page.error)
        table.add_row(
            f"{marker}{page.offset}",
            Text(page.status.value, style=STATUS_STYLES[page.status]),
            Text(first_record, no_wrap=True, overflow="ellipsis"),
            Text(error, style="red", no_wrap=True, overflow="ellipsis"),
        )
    return table

def create_summary_table(state: DatasetState) -> Table:
    """
    Create a summary table of page counts.

    Args:
        state: Snapshot to summarize

    Returns:
        Rich Table object
    """
    logger.debug(f"Creating summary table: pages={len(state.pages)}, total_pages={state.total_pages}")

    table = Table(show_header=False, title="[bold]Dataset[/bold]", box=None)
    table.add_column("Statistic", style="dim", min_width=16)
    table.add_column("Value", justify="right")

    table.add_row("Read offset", str(state.read_offset))
    table.add_row("Total pages", "unknown" if state.total_pages is None else str(state.total_pages))
    table.add_row("Total size", str(state.total_size))
    table.add_row("Pages", str(len(state.pages)))
    table.add_row("Resolved", str(len(state.resolved)))
    table.add_row("Pending", str(len(state.pending)))

    rejected = len(state.rejected)
    table.add_row("Rejected", Text(str(rejected), style="bold red" if rejected else ""))
    return table

def create_dataset_panel(state: DatasetState, radius: int = 5) -> Panel:
    content = Group(create_page_strip(state), create_pages_table(state, radius))
    title = "[bold]Loading...[/bold]" if state.is_loading else "[bold]Idle[/bold]"
    return Panel(content, border_style="blue", title=title)
