#!/usr/bin/env python3
# pagewindow/demo.py

import asyncio
import logging
import argparse
from pathlib import Path
from typing import List, Optional

import dotenv

from pagewindow.config import DatasetOptions, load_options
from pagewindow.core.dataset import Dataset
from pagewindow.core.event_bus import EventBus
from pagewindow.core.mock_fetcher import MockFetcher
from pagewindow.ui.live_view import RichDatasetView

logger = logging.getLogger("pagewindow.demo")

def setup_logging_config(log_level_str: str, log_file_path: Path) -> None:
    """Log to a file only; the terminal belongs to the Rich display."""
    numeric_log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(
        level=numeric_log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(log_file_path, mode='w')]
    )

def scroll_path(total_pages: int, stride: int) -> List[int]:
    """Read offsets visited by the demo: to the end and back to the start."""
    if total_pages <= 0:
        return [0]
    forward = list(range(0, total_pages, stride))
    if forward[-1] != total_pages - 1:
        forward.append(total_pages - 1)
    return forward + forward[-2::-1]

async def run_demo(
    options: DatasetOptions,
    records: int,
    delay: float,
    step_delay: float,
    stride: int,
    failing_offsets: Optional[List[int]] = None,
) -> None:
    fetcher = MockFetcher(
        total_records=records,
        page_size=options.page_size,
        delay=delay,
        failing_offsets=failing_offsets or (),
    )
    event_bus = EventBus(debug_logging=logger.isEnabledFor(logging.DEBUG))
    view = RichDatasetView(event_bus)
    view.initialize()

    try:
        dataset = Dataset.from_options(options, fetch=fetcher, event_bus=event_bus)
        view.update(dataset.state)
        for offset in scroll_path(fetcher.total_pages, stride):
            await asyncio.sleep(step_delay)
            logger.info(f"Moving read offset to {offset}")
            dataset.set_read_offset(offset)
        # let the last requests settle before the summary
        while dataset.state.is_loading:
            await asyncio.sleep(delay or 0.05)
    finally:
        view.finalize()

    logger.info(f"Demo finished after {len(fetcher.requests)} fetch calls")
    for event_type, count in sorted(event_bus.published.items(), key=lambda item: item[0].name):
        logger.info(f"  {event_type.name}: {count}")

def main() -> None:
    parser = argparse.ArgumentParser(description="Scroll a read head across a simulated paged data source")
    parser.add_argument("--config", type=Path, help="JSON file with dataset options.")
    parser.add_argument("--records", type=int, default=500, help="Records in the simulated source (default: 500)")
    parser.add_argument("--page_size", type=int, help="Override records per page.")
    parser.add_argument("--load_horizon", type=int, help="Override the load horizon.")
    parser.add_argument("--unload_horizon", type=int, help="Override the unload horizon.")
    parser.add_argument("--delay", type=float, default=0.4, help="Seconds each fetch takes (default: 0.4)")
    parser.add_argument("--step_delay", type=float, default=0.25, help="Seconds between read offset moves (default: 0.25)")
    parser.add_argument("--stride", type=int, default=1, help="Pages the read head moves per step (default: 1)")
    parser.add_argument("--fail", type=int, nargs="*", default=[], help="Page offsets whose fetch always fails.")
    parser.add_argument("--log_file", type=Path, default=Path("logs") / "pagewindow-demo.log", help="Log file path.")
    parser.add_argument("--log_level", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], default='INFO', help="Logging level. Default: INFO")
    args = parser.parse_args()

    setup_logging_config(args.log_level, args.log_file)

    # PAGEWINDOW_* overrides may live in a .env file
    dotenv.load_dotenv()
    options = load_options(args.config)
    if args.page_size is not None:
        options.page_size = args.page_size
    if args.load_horizon is not None:
        options.load_horizon = args.load_horizon
    if args.unload_horizon is not None:
        options.unload_horizon = args.unload_horizon
    logger.info(f"Starting demo with {options}")

    asyncio.run(run_demo(options, args.records, args.delay, args.step_delay, max(1, args.stride), args.fail))

if __name__ == "__main__":
    main()
