import unittest
from unittest.mock import Mock

from ..core.event_bus import EventBus
from ..events import EventType


class TestEventBus(unittest.TestCase):
    def setUp(self):
        self.bus = EventBus()

    def test_publish_passes_event_type_and_data(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_REQUESTED, callback)
        self.bus.publish(EventType.PAGE_REQUESTED, offset=3, token=9)
        callback.assert_called_once_with(event_type=EventType.PAGE_REQUESTED, offset=3, token=9)

    def test_only_matching_subscribers_are_called(self):
        callback = Mock()
        self.bus.subscribe(EventType.PAGE_RESOLVED, callback)
        self.bus.publish(EventType.PAGE_REJECTED, offset=0, error=None)
        callback.assert_not_called()

    def test_duplicate_subscriptions_are_ignored(self):
        callback = Mock()
        self.bus.subscribe(EventType.STATE_CHANGED, callback)
        self.bus.subscribe(EventType.STATE_CHANGED, callback)
        self.bus.publish(EventType.STATE_CHANGED, state=None)
        self.assertEqual(callback.call_count, 1)

    def test_unsubscribe(self):
        callback = Mock()
        self.bus.subscribe(EventType.STATE_CHANGED, callback)
        self.assertTrue(self.bus.unsubscribe(EventType.STATE_CHANGED, callback))
        self.assertFalse(self.bus.unsubscribe(EventType.STATE_CHANGED, callback))
        self.assertFalse(self.bus.has_subscribers(EventType.STATE_CHANGED))

    def test_subscriber_may_unsubscribe_while_publishing(self):
        calls = []

        def once(**data):
            calls.append(data)
            self.bus.unsubscribe(EventType.PAGE_UNLOADED, once)

        other = Mock()
        self.bus.subscribe(EventType.PAGE_UNLOADED, once)
        self.bus.subscribe(EventType.PAGE_UNLOADED, other)
        self.bus.publish(EventType.PAGE_UNLOADED, offset=1)
        self.bus.publish(EventType.PAGE_UNLOADED, offset=2)
        self.assertEqual(len(calls), 1)
        self.assertEqual(other.call_count, 2)

    def test_failing_subscriber_is_logged_and_skipped(self):
        other = Mock()
        self.bus.subscribe(EventType.PAGE_RESOLVED, Mock(side_effect=RuntimeError("boom")))
        self.bus.subscribe(EventType.PAGE_RESOLVED, other)
        with self.assertLogs("pagewindow.core.event_bus", level="ERROR") as logs:
            self.bus.publish(EventType.PAGE_RESOLVED, offset=0, record_count=1)
        other.assert_called_once()
        self.assertIn("boom", logs.output[0])

    def test_counts_published_events(self):
        self.bus.publish(EventType.PAGE_REQUESTED, offset=0, token=1)
        self.bus.publish(EventType.PAGE_REQUESTED, offset=1, token=2)
        self.bus.publish(EventType.STATE_CHANGED, state=None)
        self.assertEqual(self.bus.published[EventType.PAGE_REQUESTED], 2)
        self.assertEqual(self.bus.published[EventType.STATE_CHANGED], 1)
        self.assertEqual(self.bus.published[EventType.PAGE_UNLOADED], 0)

    def test_event_types_and_clearing(self):
        self.bus.subscribe(EventType.PAGE_REQUESTED, Mock())
        self.bus.subscribe(EventType.TOTAL_PAGES_CHANGED, Mock())
        self.assertEqual(
            self.bus.get_event_types(),
            {EventType.PAGE_REQUESTED, EventType.TOTAL_PAGES_CHANGED},
        )
        self.bus.clear_all_subscriptions()
        self.assertEqual(self.bus.get_event_types(), set())


if __name__ == "__main__":
    unittest.main()
