"""
Order store interface and in-memory implementation.

The order store is the boundary to the hosted document database. Services
receive a store instance explicitly (see create_app) and never reach for a
global client, so tests can hand in an InMemoryOrderStore or a mock.

Live updates use a capability interface instead of a backend-specific
callback API:

    unsubscribe = store.subscribe(on_update)   # on_update(list_of_orders)
    ...
    unsubscribe()

on_update always receives the FULL list ordered by creation time,
newest first; subscribers replace their copy instead of patching it.
"""

from __future__ import annotations

import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Dict, List, Sequence

from core.exceptions import OrderDeleteError, OrderUpdateError
from models.order import Order, OrderStatus
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Hard per-commit limit of the backend
MAX_BATCH_OPERATIONS = 500

OrderListener = Callable[[List[Order]], None]
Unsubscribe = Callable[[], None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def sort_newest_first(orders: Sequence[Order]) -> List[Order]:
    """Order by created_at descending; records without a timestamp go last."""
    epoch = datetime.min.replace(tzinfo=timezone.utc)

    def sort_key(order: Order) -> datetime:
        created = order.created_at
        if created is None:
            return epoch
        if created.tzinfo is None:
            return created.replace(tzinfo=timezone.utc)
        return created

    return sorted(orders, key=sort_key, reverse=True)


class OrderStore(ABC):
    """
    Abstract order backend.

    Implementations wrap their driver errors in core.exceptions.OrderStoreError
    subclasses. Nothing here retries.
    """

    @abstractmethod
    def create(self, order: Order) -> str:
        """
        Persist a new order.

        The store assigns the id and the creation timestamp.

        Returns:
            The new order id
        """

    @abstractmethod
    def list_orders(self) -> List[Order]:
        """All orders, newest first."""

    @abstractmethod
    def list_order_ids(self) -> List[str]:
        """Ids of all orders currently stored."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> None:
        """Set one order's status."""

    @abstractmethod
    def delete(self, order_id: str) -> None:
        """Delete one order."""

    @abstractmethod
    def delete_batch(self, order_ids: Sequence[str]) -> int:
        """
        Delete several orders in one atomic commit.

        Raises:
            ValueError: More than MAX_BATCH_OPERATIONS ids

        Returns:
            Number of ids in the committed batch
        """

    @abstractmethod
    def subscribe(self, on_update: OrderListener) -> Unsubscribe:
        """
        Register for live order updates.

        on_update is called immediately with the current list and again
        after every change.

        Returns:
            Callable that removes the subscription (safe to call twice)
        """

    def ping(self) -> bool:
        """Whether the backend is reachable."""
        return True

    def close(self) -> None:
        """Release backend resources."""

    @staticmethod
    def check_batch_size(order_ids: Sequence[str]) -> None:
        if len(order_ids) > MAX_BATCH_OPERATIONS:
            raise ValueError(
                f"Batch of {len(order_ids)} exceeds the backend limit of "
                f"{MAX_BATCH_OPERATIONS} operations"
            )


class InMemoryOrderStore(OrderStore):
    """
    Process-local order store.

    Used in development (ORDER_BACKEND=memory) and in tests. All state is
    guarded by one lock; listeners are notified synchronously after each
    change, outside the lock.
    """

    def __init__(self):
        self._documents: Dict[str, Dict] = {}
        self._listeners: Dict[int, OrderListener] = {}
        self._next_listener_id = 0
        self._lock = threading.Lock()

    def create(self, order: Order) -> str:
        order_id = uuid.uuid4().hex
        document = order.to_document()
        document["createdAt"] = utc_now()

        with self._lock:
            self._documents[order_id] = document

        logger.debug(f"Stored order {order_id[:8]}")
        self._notify()
        return order_id

    def get(self, order_id: str) -> Order:
        with self._lock:
            document = self._documents.get(order_id)
            if document is None:
                raise KeyError(order_id)
            return Order.from_document(order_id, dict(document))

    def list_orders(self) -> List[Order]:
        with self._lock:
            orders = [
                Order.from_document(order_id, dict(document))
                for order_id, document in self._documents.items()
            ]
        return sort_newest_first(orders)

    def list_order_ids(self) -> List[str]:
        with self._lock:
            return list(self._documents)

    def update_status(self, order_id: str, status: OrderStatus) -> None:
        with self._lock:
            document = self._documents.get(order_id)
            if document is None:
                raise OrderUpdateError("Order not found", order_id=order_id)
            document["status"] = status.value
        self._notify()

    def delete(self, order_id: str) -> None:
        with self._lock:
            if self._documents.pop(order_id, None) is None:
                raise OrderDeleteError("Order not found", order_id=order_id)
        self._notify()

    def delete_batch(self, order_ids: Sequence[str]) -> int:
        self.check_batch_size(order_ids)
        with self._lock:
            for order_id in order_ids:
                self._documents.pop(order_id, None)
        self._notify()
        return len(order_ids)

    def subscribe(self, on_update: OrderListener) -> Unsubscribe:
        with self._lock:
            listener_id = self._next_listener_id
            self._next_listener_id += 1
            self._listeners[listener_id] = on_update

        on_update(self.list_orders())

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(listener_id, None)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners.values())
        if not listeners:
            return

        snapshot = self.list_orders()
        for listener in listeners:
            try:
                listener(list(snapshot))
            except Exception as e:
                logger.error(f"Order listener failed: {e}", exc_info=True)
