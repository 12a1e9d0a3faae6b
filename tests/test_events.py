"""
Tests for the event bus
"""

from infrastructure.events import EventBus, UNAUTHENTICATED


class TestEventBus:
    """Subscription and delivery"""

    def test_emit_in_subscription_order(self):
        bus = EventBus()
        received = []
        bus.subscribe(UNAUTHENTICATED, lambda payload: received.append(("first", payload)))
        bus.subscribe(UNAUTHENTICATED, lambda payload: received.append(("second", payload)))

        bus.emit(UNAUTHENTICATED, "boom")

        assert received == [("first", "boom"), ("second", "boom")]

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        unsubscribe = bus.subscribe("tick", received.append)

        unsubscribe()
        unsubscribe()
        bus.emit("tick", 1)

        assert received == []
        assert bus.handler_count("tick") == 0

    def test_failing_handler_does_not_stop_others(self, caplog):
        bus = EventBus()
        received = []

        def broken(payload):
            raise RuntimeError("handler failure")

        bus.subscribe("tick", broken)
        bus.subscribe("tick", received.append)

        bus.emit("tick", 1)

        assert received == [1]
        assert "handler failure" in caplog.text

    def test_emit_without_subscribers(self):
        EventBus().emit("nobody-listens")
