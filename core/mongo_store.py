"""
MongoDB-backed order store.

Orders live in one collection (default "orders"). Document shape:

    {_id, productType, modelKey, variant, color, size, qty, name,
     className, contact, notes, status, createdAt}

LIVE UPDATES:
    subscribe() is served by an OrderWatcher background thread that polls
    the collection and pushes the full list to every subscriber when it
    changed. The thread starts with the first subscriber and stops when the
    last one unsubscribes.

BATCHES:
    delete_batch() issues one delete_many over an $in filter, bounded by
    MAX_BATCH_OPERATIONS ids per call.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from core.exceptions import (
    OrderDeleteError,
    OrderStoreError,
    OrderUpdateError,
    OrderWriteError,
)
from core.order_store import OrderListener, OrderStore, Unsubscribe, utc_now
from models.order import Order, OrderStatus
from logging_config import get_logger, set_thread_name


# Module logger
logger = get_logger(__name__)


def _to_object_id(order_id: str) -> Any:
    """Use an ObjectId when the id looks like one; keep other ids as-is."""
    try:
        return ObjectId(order_id)
    except (InvalidId, TypeError):
        return order_id


def _snapshot_signature(orders: Sequence[Order]) -> Tuple:
    return tuple((o.id, o.status.value, o.created_at) for o in orders)


class OrderWatcher:
    """
    Background poller that turns the collection into a push feed.

    Attributes:
        poll_interval_seconds: Time between polls
        is_running: Whether the background thread is active
    """

    def __init__(
        self,
        fetch: Callable[[], List[Order]],
        listeners: Callable[[], List[OrderListener]],
        poll_interval_seconds: float = 2.0,
    ):
        self._fetch = fetch
        self._listeners = listeners
        self._poll_interval = poll_interval_seconds

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._state_lock = threading.Lock()
        self._is_running = False
        self._last_signature: Optional[Tuple] = None
        self._consecutive_failures = 0

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def poll_interval_seconds(self) -> float:
        return self._poll_interval

    def start(self, initial: Optional[List[Order]] = None) -> None:
        """Start polling. Safe to call when already running."""
        with self._state_lock:
            if self._is_running:
                return

            if initial is not None:
                self._last_signature = _snapshot_signature(initial)

            # A fresh event per run; a thread still winding down keeps its own
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._poll_loop,
                args=(self._stop_event,),
                name="OrderWatcher",
                daemon=True,
            )
            self._is_running = True
            self._thread.start()
        logger.info("Order watcher started")

    def stop(self, wait: bool = True) -> None:
        """
        Stop polling. Safe to call twice.

        Args:
            wait: Join the poll thread before returning. Callers holding a
                lock the poll thread takes must pass False.
        """
        with self._state_lock:
            if not self._is_running:
                return
            thread = self._thread
            self._stop_event.set()
            self._is_running = False
            self._thread = None
            self._last_signature = None

        if wait and thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=5.0)
            if thread.is_alive():
                logger.warning("Order watcher did not stop cleanly")
        logger.info("Order watcher stopped")

    def poll_once(self) -> bool:
        """
        Fetch the collection and push it if it changed.

        Returns:
            True if the poll succeeded, False otherwise
        """
        try:
            orders = self._fetch()
        except OrderStoreError as e:
            self._consecutive_failures += 1
            if self._consecutive_failures == 1:
                logger.warning(f"Order poll failed: {e}")
            elif self._consecutive_failures % 5 == 0:
                logger.error(f"Order poll still failing ({self._consecutive_failures} consecutive): {e}")
            return False

        if self._consecutive_failures:
            logger.info(f"Order poll recovered after {self._consecutive_failures} failures")
        self._consecutive_failures = 0

        signature = _snapshot_signature(orders)
        if signature == self._last_signature:
            return True
        self._last_signature = signature

        logger.debug(f"Order feed changed: {len(orders)} orders")
        for listener in self._listeners():
            try:
                listener(list(orders))
            except Exception as e:
                logger.error(f"Order listener failed: {e}", exc_info=True)
        return True

    def _poll_loop(self, stop_event: threading.Event) -> None:
        set_thread_name("OrderWatcher")
        while not stop_event.wait(timeout=self._poll_interval):
            self.poll_once()


class MongoOrderStore(OrderStore):
    """
    Order store on a pymongo collection.

    Driver errors are wrapped in OrderStoreError subclasses.
    """

    def __init__(
        self,
        collection: Collection,
        poll_interval_seconds: float = 2.0,
        client: Optional[MongoClient] = None,
    ):
        self._collection = collection
        self._client = client
        self._lock = threading.Lock()
        self._listeners: Dict[int, OrderListener] = {}
        self._next_listener_id = 0
        self._watcher = OrderWatcher(
            fetch=self.list_orders,
            listeners=self._current_listeners,
            poll_interval_seconds=poll_interval_seconds,
        )

    @classmethod
    def from_uri(
        cls,
        uri: str,
        database: str,
        collection: str = "orders",
        poll_interval_seconds: float = 2.0,
    ) -> "MongoOrderStore":
        """Connect lazily; the first operation opens the connection."""
        client = MongoClient(uri, serverSelectionTimeoutMS=5000, tz_aware=True)
        logger.info(f"MongoDB order store configured: {database}.{collection}")
        return cls(client[database][collection], poll_interval_seconds, client=client)

    @property
    def watcher(self) -> OrderWatcher:
        return self._watcher

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_orders(self) -> List[Order]:
        try:
            documents = list(self._collection.find().sort("createdAt", DESCENDING))
        except PyMongoError as e:
            raise OrderStoreError(f"Failed to read orders: {e}") from e

        orders = []
        for document in documents:
            order_id = str(document["_id"])
            orders.append(Order.from_document(order_id, document))
        return orders

    def list_order_ids(self) -> List[str]:
        try:
            return [str(doc["_id"]) for doc in self._collection.find({}, {"_id": 1})]
        except PyMongoError as e:
            raise OrderStoreError(f"Failed to read order ids: {e}") from e

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, order: Order) -> str:
        document = order.to_document()
        document["createdAt"] = utc_now()
        try:
            result = self._collection.insert_one(document)
        except PyMongoError as e:
            raise OrderWriteError(f"Failed to save order: {e}") from e
        return str(result.inserted_id)

    def update_status(self, order_id: str, status: OrderStatus) -> None:
        try:
            result = self._collection.update_one(
                {"_id": _to_object_id(order_id)},
                {"$set": {"status": status.value}},
            )
        except PyMongoError as e:
            raise OrderUpdateError(f"Failed to update order: {e}", order_id=order_id) from e

        if result.matched_count == 0:
            raise OrderUpdateError("Order not found", order_id=order_id)

    def delete(self, order_id: str) -> None:
        try:
            result = self._collection.delete_one({"_id": _to_object_id(order_id)})
        except PyMongoError as e:
            raise OrderDeleteError(f"Failed to delete order: {e}", order_id=order_id) from e

        if result.deleted_count == 0:
            raise OrderDeleteError("Order not found", order_id=order_id)

    def delete_batch(self, order_ids: Sequence[str]) -> int:
        self.check_batch_size(order_ids)
        if not order_ids:
            return 0

        try:
            self._collection.delete_many(
                {"_id": {"$in": [_to_object_id(order_id) for order_id in order_ids]}}
            )
        except PyMongoError as e:
            raise OrderDeleteError(f"Failed to delete batch of {len(order_ids)} orders: {e}") from e
        return len(order_ids)

    # ------------------------------------------------------------------
    # Live feed
    # ------------------------------------------------------------------

    def subscribe(self, on_update: OrderListener) -> Unsubscribe:
        initial = self.list_orders()

        with self._lock:
            listener_id = self._next_listener_id
            self._next_listener_id += 1
            self._listeners[listener_id] = on_update
            self._watcher.start(initial)

        on_update(list(initial))

        def unsubscribe() -> None:
            # Decide and stop under one lock so a concurrent subscribe sees
            # either the running watcher or a stopped one. The poll thread
            # takes self._lock, so it is not joined here.
            with self._lock:
                self._listeners.pop(listener_id, None)
                if not self._listeners:
                    self._watcher.stop(wait=False)

        return unsubscribe

    def _current_listeners(self) -> List[OrderListener]:
        with self._lock:
            return list(self._listeners.values())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def ping(self) -> bool:
        try:
            self._collection.database.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        self._watcher.stop()
        if self._client is not None:
            self._client.close()
