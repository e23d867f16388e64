"""
Order service: every write the storefront and the admin make.

The service owns validation and bulk-delete chunking; the order store only
knows single operations and single batches.

Failure semantics:
    - Validation errors are raised before any backend call.
    - Backend errors propagate once as OrderStoreError subclasses; nothing
      is retried.
    - delete_all_orders() commits batches sequentially. A failing batch
      stops the run; batches already committed stay deleted.
"""

from __future__ import annotations

from typing import List

from core.exceptions import (
    BatchDeleteError,
    OrderDeleteError,
    OrderStoreError,
    OrderUpdateError,
    OrderValidationError,
    OrderWriteError,
)
from core.order_store import MAX_BATCH_OPERATIONS, OrderStore
from models.order import CustomerDetails, Order, OrderRequest, OrderStatus
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

# Kept below the backend's MAX_BATCH_OPERATIONS per commit
DELETE_BATCH_SIZE = 450


def chunked(items: List[str], size: int) -> List[List[str]]:
    """Split items into consecutive chunks of at most size."""
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    return [items[i:i + size] for i in range(0, len(items), size)]


class OrderService:
    """
    Business operations on orders.

    Attributes:
        store: The order backend (passed in, never global)
        batch_size: Orders per delete commit
    """

    def __init__(self, store: OrderStore, batch_size: int = DELETE_BATCH_SIZE):
        if not 0 < batch_size <= MAX_BATCH_OPERATIONS:
            raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_OPERATIONS}")
        self.store = store
        self.batch_size = batch_size

    def submit_order(self, request: OrderRequest, customer: CustomerDetails) -> Order:
        """
        Validate and persist one preorder.

        Args:
            request: Product selection from the query string
            customer: Contact fields from the form

        Returns:
            The stored Order (with id)

        Raises:
            OrderValidationError: A required customer field is empty
            OrderWriteError: The backend rejected the write
        """
        missing = customer.missing_fields()
        if missing:
            raise OrderValidationError(missing)

        order = Order.from_submission(request, customer)

        try:
            order.id = self.store.create(order)
        except OrderWriteError:
            raise
        except OrderStoreError as e:
            raise OrderWriteError(e.message) from e

        logger.info(
            f"Order {order.id[:8]} received: {order.model_key}/{order.variant} "
            f"{order.color} size={order.size or '-'} qty={order.qty}"
        )
        return order

    def list_orders(self, only_new: bool = False) -> List[Order]:
        orders = self.store.list_orders()
        if only_new:
            return [order for order in orders if order.is_new]
        return orders

    def mark_seen(self, order_id: str) -> None:
        """
        Move one order from NEW to SEEN. Repeating it is harmless.

        Raises:
            OrderUpdateError: The backend rejected the update
        """
        try:
            self.store.update_status(order_id, OrderStatus.SEEN)
        except OrderUpdateError:
            raise
        except OrderStoreError as e:
            raise OrderUpdateError(e.message, order_id=order_id) from e
        logger.info(f"Order {order_id[:8]} marked as seen")

    def delete_order(self, order_id: str) -> None:
        """
        Delete one order.

        Raises:
            OrderDeleteError: The backend rejected the delete
        """
        try:
            self.store.delete(order_id)
        except OrderDeleteError:
            raise
        except OrderStoreError as e:
            raise OrderDeleteError(e.message, order_id=order_id) from e
        logger.info(f"Order {order_id[:8]} deleted")

    def delete_all_orders(self) -> int:
        """
        Delete every order that exists right now.

        Reads the full id set once, then commits sequential batches of at
        most batch_size ids. An empty store is a no-op.

        Returns:
            Number of orders deleted

        Raises:
            OrderStoreError: Reading the id set failed (nothing deleted)
            BatchDeleteError: A batch failed; earlier batches stay deleted
        """
        order_ids = self.store.list_order_ids()
        total = len(order_ids)
        if total == 0:
            logger.info("Delete all: no orders to delete")
            return 0

        batches = chunked(order_ids, self.batch_size)
        logger.info(f"Delete all: {total} orders in {len(batches)} batch(es)")

        deleted = 0
        for index, batch in enumerate(batches, start=1):
            try:
                self.store.delete_batch(batch)
            except (OrderStoreError, ValueError) as e:
                logger.error(
                    f"Delete all: batch {index}/{len(batches)} failed after "
                    f"{deleted} deletions: {e}"
                )
                raise BatchDeleteError(deleted=deleted, total=total, cause=e) from e
            deleted += len(batch)
            logger.debug(f"Delete all: batch {index}/{len(batches)} committed ({len(batch)} orders)")

        logger.info(f"Delete all: {deleted} orders deleted")
        return deleted
