"""
Services layer for PreorderWeb.

This module contains the business logic services:
- OrderService: Order submission, triage and batched bulk delete
- OrderFeed: Live order list held while an admin is signed in

Both receive the order store explicitly; neither creates backend clients.
"""

from .order_service import OrderService, DELETE_BATCH_SIZE
from .order_feed import OrderFeed

__all__ = [
    "OrderService",
    "DELETE_BATCH_SIZE",
    "OrderFeed",
]
