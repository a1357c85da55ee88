import unittest
from unittest.mock import patch

from .. import demo
from ..config import DatasetOptions


class TestScrollPath(unittest.TestCase):
    def test_forward_and_back(self):
        self.assertEqual(demo.scroll_path(5, 2), [0, 2, 4, 2, 0])

    def test_always_reaches_the_last_page(self):
        self.assertEqual(demo.scroll_path(5, 3), [0, 3, 4, 3, 0])

    def test_tiny_sources(self):
        self.assertEqual(demo.scroll_path(1, 1), [0])
        self.assertEqual(demo.scroll_path(0, 1), [0])


class TestRunDemo(unittest.IsolatedAsyncioTestCase):
    async def test_runs_until_idle(self):
        options = DatasetOptions(page_size=10, load_horizon=1, unload_horizon=1)
        with patch.object(demo, "RichDatasetView") as view_class:
            await demo.run_demo(options, records=40, delay=0, step_delay=0, stride=1, failing_offsets=[2])
        view = view_class.return_value
        view.initialize.assert_called_once()
        view.update.assert_called_once()
        view.finalize.assert_called_once()


if __name__ == "__main__":
    unittest.main()
