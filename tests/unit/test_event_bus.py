"""Test EventBus publish/subscribe, re-entrancy, failure isolation and lifecycle."""

import pytest

from storefront.bus.events import Event, ItemAddedPayload, ItemRemovedPayload
from storefront.bus.memory_bus import EventBus
from storefront.core.enums import EventName
from storefront.core.errors import (
    BusClosedError,
    PayloadValidationError,
    SubscriptionError,
    UnknownEventError,
)

ADDED = EventName.CART_ITEM_ADDED
REMOVED = EventName.CART_ITEM_REMOVED
CLEARED = EventName.CART_CLEARED


def _added(pid: str = "1", name: str = "Mouse") -> ItemAddedPayload:
    return ItemAddedPayload(product_id=pid, product_name=name)


class TestPublishSubscribe:
    def test_publish_invokes_handler_with_payload(self, bus):
        received = []
        bus.subscribe(ADDED, received.append)

        event = bus.publish(ADDED, _added())

        assert isinstance(event, Event)
        assert event.name is ADDED
        assert received == [_added()]
        assert received[0].product_id == "1"

    def test_no_subscribers_is_silent(self, bus):
        event = bus.publish(ADDED, _added())
        assert event.detail == _added()
        assert bus.messages_processed == 0

    def test_only_matching_name_is_delivered(self, bus):
        received = []
        bus.subscribe(REMOVED, received.append)
        bus.publish(ADDED, _added())
        assert received == []

    def test_registration_order(self, bus):
        calls = []
        bus.subscribe(ADDED, lambda p: calls.append("a"))
        bus.subscribe(ADDED, lambda p: calls.append("b"))
        bus.subscribe(ADDED, lambda p: calls.append("c"))

        bus.publish(ADDED, _added())

        assert calls == ["a", "b", "c"]

    def test_string_name_is_accepted(self, bus):
        received = []
        bus.subscribe("cart:item-added", received.append)
        bus.publish("cart:item-added", {"productId": "7", "productName": "Pen"})
        assert received[0].product_id == "7"

    def test_signal_handler_takes_no_arguments(self, bus):
        calls = []
        bus.subscribe_signal(CLEARED, lambda: calls.append("cleared"))
        bus.publish(CLEARED)
        assert calls == ["cleared"]

    def test_messages_processed(self, bus):
        bus.subscribe(ADDED, lambda p: None)
        bus.subscribe(ADDED, lambda p: None)
        bus.publish(ADDED, _added())
        assert bus.messages_processed == 2


class TestUnsubscribe:
    def test_token_removes_only_its_registration(self, bus):
        a, b = [], []
        sub_a = bus.subscribe(ADDED, a.append)
        bus.subscribe(ADDED, b.append)

        sub_a()
        bus.publish(ADDED, _added())

        assert a == []
        assert len(b) == 1
        assert not sub_a.active

    def test_unsubscribe_is_idempotent(self, bus):
        sub = bus.subscribe(ADDED, lambda p: None)
        sub.unsubscribe()
        sub.unsubscribe()
        sub()
        assert bus.subscriber_count(ADDED) == 0

    def test_same_handler_twice_is_two_registrations(self, bus):
        received = []
        first = bus.subscribe(ADDED, received.append)
        bus.subscribe(ADDED, received.append)

        bus.publish(ADDED, _added())
        assert len(received) == 2

        first()
        bus.publish(ADDED, _added())
        assert len(received) == 3

    def test_subscriber_count(self, bus):
        bus.subscribe(ADDED, lambda p: None)
        bus.subscribe_signal(CLEARED, lambda: None)
        assert bus.subscriber_count(ADDED) == 1
        assert bus.subscriber_count() == 2


class TestReentrancy:
    def test_handler_can_publish_same_name(self, bus):
        calls = []

        def handler(payload):
            calls.append(payload.product_id)
            if payload.product_id == "1":
                bus.publish(ADDED, _added("2"))

        bus.subscribe(ADDED, handler)
        bus.publish(ADDED, _added("1"))

        assert calls == ["1", "2"]

    def test_nested_publish_completes_before_outer_continues(self, bus):
        calls = []
        bus.subscribe(ADDED, lambda p: (calls.append("added-1"), bus.publish(CLEARED)))
        bus.subscribe(ADDED, lambda p: calls.append("added-2"))
        bus.subscribe_signal(CLEARED, lambda: calls.append("cleared"))

        bus.publish(ADDED, _added())

        assert calls == ["added-1", "cleared", "added-2"]

    def test_publish_depth(self, bus):
        depths = []
        bus.subscribe(ADDED, lambda p: (depths.append(bus.publish_depth), bus.publish(CLEARED)))
        bus.subscribe_signal(CLEARED, lambda: depths.append(bus.publish_depth))

        bus.publish(ADDED, _added())

        assert depths == [1, 2]
        assert bus.publish_depth == 0

    def test_handler_added_during_publish_waits_for_next_publish(self, bus):
        late = []

        def handler(payload):
            bus.subscribe(ADDED, late.append)

        sub = bus.subscribe(ADDED, handler)
        bus.publish(ADDED, _added("1"))
        assert late == []

        sub()
        bus.publish(ADDED, _added("2"))
        assert [p.product_id for p in late] == ["2"]

    def test_unsubscribe_other_during_publish_keeps_snapshot(self, bus):
        received = []
        subs = {}

        def first(payload):
            subs["second"]()

        bus.subscribe(ADDED, first)
        subs["second"] = bus.subscribe(ADDED, received.append)
        bus.subscribe(ADDED, lambda p: received.append("third"))

        bus.publish(ADDED, _added())
        assert received == [_added(), "third"]

        received.clear()
        bus.publish(ADDED, _added())
        assert received == ["third"]

    def test_self_unsubscribe_during_publish(self, bus):
        calls = []
        holder = {}

        def once(payload):
            calls.append("once")
            holder["sub"]()

        holder["sub"] = bus.subscribe(ADDED, once)
        bus.subscribe(ADDED, lambda p: calls.append("other"))

        bus.publish(ADDED, _added())
        bus.publish(ADDED, _added())

        assert calls == ["once", "other", "other"]


class TestHandlerErrors:
    def test_error_does_not_stop_delivery(self, bus):
        received = []

        def bad(payload):
            raise ValueError("boom")

        bus.subscribe(ADDED, bad)
        bus.subscribe(ADDED, received.append)

        bus.publish(ADDED, _added())  # does not raise

        assert len(received) == 1

    def test_error_counts_and_dead_letters(self, bus):
        def bad(payload):
            raise RuntimeError("fail")

        sub = bus.subscribe(ADDED, bad)
        bus.publish(ADDED, _added())
        event = bus.publish(ADDED, _added())

        assert bus.get_error_counts() == {"cart:item-added": 2}
        letters = bus.dead_letters
        assert len(letters) == 2
        assert letters[-1].subscription_id == sub.id
        assert letters[-1].event_id == event.event_id
        assert letters[-1].error == "fail"

        drained = bus.clear_dead_letters()
        assert len(drained) == 2
        assert bus.dead_letters == []

    def test_error_is_logged(self, bus, caplog):
        bus.subscribe(ADDED, lambda p: 1 / 0)
        with caplog.at_level("ERROR"):
            bus.publish(ADDED, _added())
        assert "Handler error on event=cart:item-added" in caplog.text

    def test_logging_can_be_disabled(self, caplog):
        bus = EventBus(log_handler_errors=False)
        bus.subscribe(ADDED, lambda p: 1 / 0)
        with caplog.at_level("ERROR"):
            bus.publish(ADDED, _added())
        assert "Handler error" not in caplog.text
        assert bus.get_error_counts() == {"cart:item-added": 1}

    def test_on_handler_error_callback(self):
        seen = []
        bus = EventBus(on_handler_error=lambda name, sid, exc: seen.append((name, sid, str(exc))))

        def bad(payload):
            raise KeyError("x")

        sub = bus.subscribe(ADDED, bad)
        bus.publish(ADDED, _added())

        assert seen == [("cart:item-added", sub.id, "'x'")]

    def test_failing_error_callback_is_swallowed(self):
        received = []

        def broken_callback(name, sid, exc):
            raise RuntimeError("callback broke")

        bus = EventBus(on_handler_error=broken_callback)
        bus.subscribe(ADDED, lambda p: 1 / 0)
        bus.subscribe(ADDED, received.append)

        bus.publish(ADDED, _added())
        assert len(received) == 1


class TestValidation:
    def test_unknown_name_on_publish(self, bus):
        with pytest.raises(UnknownEventError, match="unknown event"):
            bus.publish("cart:exploded", {})

    def test_unknown_name_on_subscribe(self, bus):
        with pytest.raises(UnknownEventError):
            bus.subscribe("theme:changed", lambda p: None)

    def test_non_string_name_rejected(self, bus):
        with pytest.raises(UnknownEventError):
            bus.publish(42, None)

    def test_payload_subscription_on_signal_event(self, bus):
        with pytest.raises(SubscriptionError, match="subscribe_signal"):
            bus.subscribe(CLEARED, lambda p: None)

    def test_signal_subscription_on_payload_event(self, bus):
        with pytest.raises(SubscriptionError, match="subscribe\\(\\)"):
            bus.subscribe_signal(ADDED, lambda: None)

    def test_non_callable_handler(self, bus):
        with pytest.raises(SubscriptionError):
            bus.subscribe(ADDED, "not a function")

    def test_signal_rejects_payload(self, bus):
        with pytest.raises(PayloadValidationError, match="takes no payload"):
            bus.publish(CLEARED, {"anything": 1})

    def test_missing_payload(self, bus):
        with pytest.raises(PayloadValidationError, match="requires a payload"):
            bus.publish(ADDED)

    def test_wrong_model_class(self, bus):
        with pytest.raises(PayloadValidationError, match="expects ItemAddedPayload"):
            bus.publish(ADDED, ItemRemovedPayload(product_id="1"))

    def test_extra_field_rejected(self, bus):
        with pytest.raises(PayloadValidationError):
            bus.publish(ADDED, {"productId": "1", "productName": "x", "colour": "red"})

    def test_missing_field_rejected(self, bus):
        with pytest.raises(PayloadValidationError):
            bus.publish(ADDED, {"productId": "1"})

    def test_invalid_publish_delivers_nothing(self, bus):
        received = []
        bus.subscribe(ADDED, received.append)
        with pytest.raises(PayloadValidationError):
            bus.publish(ADDED, {"productId": "1"})
        assert received == []


class TestLifecycle:
    def test_close_releases_subscriptions(self, bus):
        sub = bus.subscribe(ADDED, lambda p: None)
        bus.close()
        assert bus.closed
        assert not sub.active
        assert bus.subscriber_count() == 0

    def test_publish_after_close_is_noop(self, bus):
        received = []
        bus.subscribe(ADDED, received.append)
        bus.close()
        bus.publish(ADDED, _added())
        assert received == []

    def test_subscribe_after_close_raises(self, bus):
        bus.close()
        with pytest.raises(BusClosedError):
            bus.subscribe(ADDED, lambda p: None)

    def test_context_manager_closes(self):
        with EventBus() as bus:
            sub = bus.subscribe(ADDED, lambda p: None)
        assert bus.closed
        assert not sub.active

    def test_close_is_idempotent(self, bus):
        bus.close()
        bus.close()
        assert bus.closed

    def test_independent_buses_do_not_share_subscribers(self):
        a, b = EventBus(), EventBus()
        received = []
        a.subscribe(ADDED, received.append)
        b.publish(ADDED, _added())
        assert received == []
