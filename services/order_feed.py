"""
Live order feed for the admin table.

The feed subscribes to the order store while an admin is signed in and
keeps the latest full list in memory. The admin page polls the table
partial, which renders straight from the feed instead of querying the
backend on every refresh.

Thread Safety:
    - Store callbacks may arrive on a background thread (MongoDB watcher)
    - Each update swaps in a new tuple; readers always see a whole list
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from core.order_store import OrderStore, Unsubscribe
from models.order import Order
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)


class OrderFeed:
    """
    Subscription-backed view of all orders.

    Attributes:
        is_open: Whether a store subscription is active
        updated_at: When the last update arrived (None before the first)
    """

    def __init__(self, store: OrderStore):
        self._store = store
        self._orders: Tuple[Order, ...] = ()
        self._unsubscribe: Optional[Unsubscribe] = None
        self._lock = threading.Lock()
        self.updated_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    def open(self) -> None:
        """
        Subscribe to the store. Idempotent.

        Raises:
            OrderStoreError: The initial read failed; the feed stays closed
        """
        with self._lock:
            if self._unsubscribe is not None:
                return
            self._unsubscribe = self._store.subscribe(self._on_update)
        logger.info("Order feed opened")

    def close(self) -> None:
        """Unsubscribe and drop the cached list. Idempotent."""
        with self._lock:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            self._orders = ()
            self.updated_at = None
        if unsubscribe is not None:
            unsubscribe()
            logger.info("Order feed closed")

    def ensure_open(self) -> None:
        """Reopen after a restart (the session cookie outlives the process)."""
        if not self.is_open:
            self.open()

    def refresh(self) -> None:
        """
        Re-read the store right away instead of waiting for the next push.

        Used after an admin write so the redirected page shows the result.
        No-op while closed.

        Raises:
            OrderStoreError: The read failed; the cached list is kept
        """
        if self.is_open:
            self._on_update(self._store.list_orders())

    def orders(self, only_new: bool = False) -> List[Order]:
        """
        Current orders, newest first.

        Args:
            only_new: Restrict to status NEW (missing status counts as NEW)
        """
        orders = self._orders
        if only_new:
            return [order for order in orders if order.is_new]
        return list(orders)

    def counts(self) -> Tuple[int, int]:
        """(total, new) counts of the current list."""
        orders = self._orders
        return len(orders), sum(1 for order in orders if order.is_new)

    def _on_update(self, orders: List[Order]) -> None:
        self._orders = tuple(orders)
        self.updated_at = datetime.now(timezone.utc)
        logger.debug(f"Order feed updated: {len(orders)} orders")
