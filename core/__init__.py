"""
Core module for PreorderWeb.

Contains the backend boundary components:
- exceptions: Custom exception hierarchy
- order_store: Order store interface and in-memory implementation
- mongo_store: MongoDB order store with polling live feed
- auth: Single-admin authentication service
"""

from .exceptions import (
    PreorderWebError,
    ManifestError,
    ManifestGenerationError,
    ManifestConflictError,
    OrderValidationError,
    OrderStoreError,
    OrderWriteError,
    OrderUpdateError,
    OrderDeleteError,
    BatchDeleteError,
    AuthenticationError,
    InvalidCredentialsError,
)
from .order_store import OrderStore, InMemoryOrderStore, MAX_BATCH_OPERATIONS
from .auth import AdminUser, AuthService, ConfigAuthService

__all__ = [
    "PreorderWebError",
    "ManifestError",
    "ManifestGenerationError",
    "ManifestConflictError",
    "OrderValidationError",
    "OrderStoreError",
    "OrderWriteError",
    "OrderUpdateError",
    "OrderDeleteError",
    "BatchDeleteError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "OrderStore",
    "InMemoryOrderStore",
    "MAX_BATCH_OPERATIONS",
    "AdminUser",
    "AuthService",
    "ConfigAuthService",
]
