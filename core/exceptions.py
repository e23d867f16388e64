"""
Custom exceptions for PreorderWeb.

Exception Hierarchy:
    PreorderWebError (base)
    ├── ManifestError             - Manifest file unreadable
    │   ├── ManifestGenerationError - Images missing at build time (build gate)
    │   └── ManifestConflictError   - Same manifest key, different files
    ├── OrderValidationError      - Customer form incomplete (local, no backend call)
    ├── OrderStoreError           - Order backend call failed (runtime, graceful)
    │   ├── OrderWriteError
    │   ├── OrderUpdateError
    │   ├── OrderDeleteError
    │   └── BatchDeleteError      - Bulk delete stopped part way
    └── AuthenticationError
        └── InvalidCredentialsError

Usage:
    Manifest errors abort the manifest build script with a non-zero exit.
    Everything else is scoped to the single request that raised it: routes
    catch it, log it, and show the user a message.
"""

from typing import Optional, Dict, Any, List


class PreorderWebError(Exception):
    """
    Base exception for all PreorderWeb errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# MANIFEST ERRORS - raised by the offline build step
# =============================================================================

class ManifestError(PreorderWebError):
    """The product image manifest could not be read or built."""


class ManifestGenerationError(ManifestError):
    """
    One or more product images or placeholders are missing on disk.

    Carries every miss so the build output can list them all at once
    instead of failing on the first one.
    """

    def __init__(self, missing_assets: List[Any], missing_placeholders: List[str]):
        message = (
            f"Manifest generation failed: {len(missing_assets)} missing product image(s), "
            f"{len(missing_placeholders)} missing placeholder(s)"
        )
        details = {
            "resolution": "Add the expected image files to the products directory and re-run",
        }
        super().__init__(message, details)
        self.missing_assets = list(missing_assets)
        self.missing_placeholders = list(missing_placeholders)


class ManifestConflictError(ManifestError):
    """Two different files resolved to the same manifest key."""

    def __init__(self, key: str, existing: str, incoming: str):
        message = (
            f"Duplicate manifest key {key} detected with different files: "
            f"{existing} vs {incoming}"
        )
        super().__init__(message, {"key": key, "existing": existing, "incoming": incoming})
        self.key = key
        self.existing = existing
        self.incoming = incoming


# =============================================================================
# ORDER ERRORS - runtime, surfaced to the user, never retried
# =============================================================================

class OrderValidationError(PreorderWebError):
    """
    Required customer fields are missing.

    Detected before any backend call is made.
    """

    def __init__(self, missing_fields: List[str]):
        message = f"Missing required fields: {', '.join(missing_fields)}"
        super().__init__(message, {"missing_fields": list(missing_fields)})
        self.missing_fields = list(missing_fields)


class OrderStoreError(PreorderWebError):
    """
    Base class for order backend failures.

    The order store wraps driver exceptions in one of the subclasses below
    so routes never need to know which backend is configured.
    """

    def __init__(
        self,
        message: str,
        order_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if order_id:
            error_details["order_id"] = order_id
        super().__init__(message, error_details)
        self.order_id = order_id


class OrderWriteError(OrderStoreError):
    """Creating an order failed."""


class OrderUpdateError(OrderStoreError):
    """Updating an order's status failed; the status is unchanged."""


class OrderDeleteError(OrderStoreError):
    """Deleting a single order failed; the record is intact."""


class BatchDeleteError(OrderStoreError):
    """
    A delete batch failed to commit.

    Batches committed before the failure stay deleted. ``deleted`` is the
    number of orders removed before the failing batch.
    """

    def __init__(self, deleted: int, total: int, cause: Optional[BaseException] = None):
        message = f"Bulk delete stopped after {deleted} of {total} orders"
        details = {
            "deleted": deleted,
            "total": total,
            "resolution": "Run delete all again to remove the remaining orders",
        }
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message, details=details)
        self.deleted = deleted
        self.total = total


# =============================================================================
# AUTHENTICATION ERRORS
# =============================================================================

class AuthenticationError(PreorderWebError):
    """Admin authentication failed."""


class InvalidCredentialsError(AuthenticationError):
    """
    Email or password rejected.

    Deliberately does not say which of the two was wrong.
    """

    def __init__(self):
        super().__init__("Invalid email or password")
