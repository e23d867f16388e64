"""
Unit tests for the admin OrderFeed and the in-memory subscription API.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from conftest import make_order
from core.exceptions import OrderStoreError
from core.order_store import InMemoryOrderStore, sort_newest_first
from models.order import Order, OrderStatus
from services.order_feed import OrderFeed


# Fixtures

@pytest.fixture
def store():
    return InMemoryOrderStore()


@pytest.fixture
def feed(store):
    feed = OrderFeed(store)
    yield feed
    feed.close()


# Tests

class TestSubscription:
    """InMemoryOrderStore push semantics."""

    def test_subscribe_pushes_current_list(self, store):
        make_order(store)
        received = []

        store.subscribe(received.append)

        assert len(received) == 1
        assert len(received[0]) == 1

    def test_every_change_pushes_full_list(self, store):
        received = []
        store.subscribe(received.append)

        order_id = make_order(store)
        store.update_status(order_id, OrderStatus.SEEN)
        store.delete(order_id)

        assert [len(update) for update in received] == [0, 1, 1, 0]
        assert received[2][0].status is OrderStatus.SEEN

    def test_newest_first(self):
        def at(name, hour):
            created = None if hour is None else datetime(2026, 10, 19, hour, tzinfo=timezone.utc)
            return Order("Felpa", "KANGAROO", "adult", "Nero", 1, name, "3B", "x", created_at=created)

        orders = [at("morning", 8), at("undated", None), at("evening", 18), at("noon", 12)]

        names = [order.name for order in sort_newest_first(orders)]
        assert names == ["evening", "noon", "morning", "undated"]

    def test_unsubscribe_stops_updates(self, store):
        received = []
        unsubscribe = store.subscribe(received.append)
        unsubscribe()
        unsubscribe()

        make_order(store)

        assert len(received) == 1
        assert store.subscriber_count == 0

    def test_failing_listener_does_not_block_others(self, store):
        received = []
        store.subscribe(lambda orders: None)
        broken = MagicMock(side_effect=[None, RuntimeError("boom")])
        store.subscribe(broken)
        store.subscribe(received.append)

        make_order(store)

        assert len(received[-1]) == 1


class TestOrderFeed:

    def test_closed_feed_is_empty(self, feed, store):
        make_order(store)
        assert not feed.is_open
        assert feed.orders() == []
        assert feed.counts() == (0, 0)

    def test_open_loads_and_follows_store(self, feed, store):
        make_order(store)
        feed.open()

        assert feed.is_open
        assert feed.counts() == (1, 1)
        assert feed.updated_at is not None

        make_order(store, name="Marco Rossi")
        assert feed.counts() == (2, 2)

    def test_only_new_filter(self, feed, store):
        first = make_order(store)
        make_order(store, name="Marco Rossi")
        store.update_status(first, OrderStatus.SEEN)
        feed.open()

        assert [o.name for o in feed.orders(only_new=True)] == ["Marco Rossi"]
        assert feed.counts() == (2, 1)

    def test_open_is_idempotent(self, feed, store):
        feed.open()
        feed.open()
        assert store.subscriber_count == 1

    def test_close_releases_subscription(self, feed, store):
        make_order(store)
        feed.open()
        feed.close()
        feed.close()

        assert not feed.is_open
        assert feed.orders() == []
        assert feed.updated_at is None
        assert store.subscriber_count == 0

    def test_ensure_open_reopens(self, feed, store):
        feed.ensure_open()
        assert feed.is_open
        assert store.subscriber_count == 1

    def test_failed_open_stays_closed(self):
        broken_store = MagicMock()
        broken_store.subscribe.side_effect = OrderStoreError("offline")
        feed = OrderFeed(broken_store)

        with pytest.raises(OrderStoreError):
            feed.open()

        assert not feed.is_open

    def test_refresh_noop_while_closed(self):
        mock_store = MagicMock()
        OrderFeed(mock_store).refresh()
        mock_store.list_orders.assert_not_called()

    def test_refresh_rereads_store(self):
        mock_store = MagicMock()
        mock_store.subscribe.return_value = MagicMock()
        mock_store.list_orders.return_value = []
        feed = OrderFeed(mock_store)
        feed.open()

        feed.refresh()

        mock_store.list_orders.assert_called_once_with()
