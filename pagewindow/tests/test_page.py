import unittest

from ..interfaces.page import Page, PageState, PageStatus
from ..interfaces.state import DatasetState
from .helpers import make_records


class TestPage(unittest.TestCase):
    def test_new_page_holds_placeholders(self):
        page = Page(offset=3, page_size=4)
        self.assertEqual(page.status, PageStatus.UNREQUESTED)
        self.assertEqual(page.records, [None, None, None, None])
        self.assertFalse(page.is_requested)

    def test_lifecycle(self):
        page = Page(offset=0, page_size=2)
        page.mark_pending(7)
        self.assertTrue(page.is_pending)
        self.assertEqual(page.generation, 7)

        page.mark_resolved(make_records(0, 2))
        self.assertEqual(page.status, PageStatus.RESOLVED)
        self.assertEqual(page.records[1]["id"], 1)

        page.unload(9)
        self.assertFalse(page.is_requested)
        self.assertEqual(page.records, [None, None])
        self.assertEqual(page.generation, 9)

    def test_rejection_keeps_placeholders(self):
        page = Page(offset=0, page_size=2)
        page.mark_pending(1)
        page.mark_rejected("404")
        self.assertEqual(page.error, "404")
        self.assertEqual(page.records, [None, None])

        page.mark_pending(2)
        self.assertIsNone(page.error)

    def test_snapshot_is_detached(self):
        page = Page(offset=1, page_size=2)
        snapshot = page.snapshot()
        page.mark_resolved(make_records(2, 2))
        self.assertEqual(snapshot.records, (None, None))
        self.assertEqual(snapshot.status, PageStatus.UNREQUESTED)
        self.assertEqual(snapshot.offset, 1)


class TestDatasetState(unittest.TestCase):
    def setUp(self):
        self.state = DatasetState(
            pages=(
                PageState(0, PageStatus.RESOLVED, tuple(make_records(0, 3))),
                PageState(1, PageStatus.PENDING, (None, None, None)),
                PageState(2, PageStatus.RESOLVED, tuple(make_records(6, 1))),
                PageState(3, PageStatus.REJECTED, (None, None, None), error="500"),
            ),
            total_pages=None,
            total_size=0,
            read_offset=1,
            page_size=3,
        )

    def test_length_counts_record_slots(self):
        self.assertEqual(self.state.length, 12)

    def test_records_are_flattened_in_order(self):
        records = self.state.records
        self.assertEqual(records[0]["name"], "Record 0")
        self.assertIsNone(records[3])
        self.assertEqual(records[6]["name"], "Record 6")
        self.assertEqual(len(records), 10)

    def test_get_by_absolute_index(self):
        self.assertEqual(self.state.get(2)["id"], 2)
        self.assertIsNone(self.state.get(4))
        self.assertEqual(self.state.get(6)["id"], 6)

    def test_get_out_of_range(self):
        for index in (-1, 7, 12, 40):
            with self.assertRaises(IndexError):
                self.state.get(index)

    def test_status_partitions(self):
        self.assertTrue(self.state.is_loading)
        self.assertEqual([p.offset for p in self.state.resolved], [0, 2])
        self.assertEqual([p.offset for p in self.state.pending], [1])
        self.assertEqual([p.offset for p in self.state.rejected], [3])
        self.assertEqual(self.state.unrequested, ())

    def test_settled_pages(self):
        self.assertTrue(self.state.pages[0].is_settled)
        self.assertTrue(self.state.pages[3].is_settled)
        self.assertFalse(self.state.pages[1].is_settled)


if __name__ == "__main__":
    unittest.main()
