"""
Order data models.

These models represent a preorder as it flows through the application:
catalog card -> query string -> confirmation form -> order store -> admin.

    OrderRequest     what the catalog card selected (carried in the URL)
    CustomerDetails  what the confirmation form collected
    Order            the persisted record
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Mapping, Optional
from urllib.parse import urlencode


MIN_QUANTITY = 1
MAX_QUANTITY = 10

REQUIRED_QUERY_PARAMS = ("productType", "modelKey", "variant", "color", "qty")


class OrderStatus(Enum):
    """
    Admin triage status of an order.

    Lifecycle:
        NEW -> SEEN
    """

    NEW = "new"
    """Submitted, not yet looked at."""

    SEEN = "seen"
    """Acknowledged by the admin."""

    @classmethod
    def parse(cls, value: Optional[str]) -> "OrderStatus":
        """Parse a stored status; anything unknown or missing reads as NEW."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEW


def clamp_quantity(value: Any) -> int:
    """
    Coerce a free-text quantity to an int in [1, 10].

    Numeric strings and floats are truncated ("3.7" -> 3). Anything that is
    not a finite number becomes 1.

    Example:
        >>> clamp_quantity("12")
        10
        >>> clamp_quantity("abc")
        1
    """
    if value is None or isinstance(value, bool):
        return MIN_QUANTITY

    if isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                return MIN_QUANTITY
            if not math.isfinite(as_float):
                return MIN_QUANTITY
            number = int(as_float)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return MIN_QUANTITY
        number = int(value)
    elif isinstance(value, int):
        number = value
    else:
        return MIN_QUANTITY

    return min(MAX_QUANTITY, max(MIN_QUANTITY, number))


@dataclass(frozen=True)
class OrderRequest:
    """
    Product selection carried from the catalog to the confirmation page.

    Built by the catalog card on submit and parsed back from the query
    string by the confirmation page.
    """

    product_type: str
    model_key: str
    variant: str
    color: str
    qty: int
    size: Optional[str] = None

    @classmethod
    def from_query(cls, args: Mapping[str, str]) -> Optional["OrderRequest"]:
        """
        Parse confirmation-page query parameters.

        Args:
            args: request.args (or any mapping of parameter name -> value)

        Returns:
            OrderRequest, or None if any required parameter is absent or blank
        """
        values = {}
        for name in REQUIRED_QUERY_PARAMS:
            raw = args.get(name)
            if raw is None or not str(raw).strip():
                return None
            values[name] = str(raw).strip()

        size = args.get("size")
        size = size.strip() if size and size.strip() else None

        return cls(
            product_type=values["productType"],
            model_key=values["modelKey"],
            variant=values["variant"],
            color=values["color"],
            qty=clamp_quantity(values["qty"]),
            size=size,
        )

    def to_query_params(self) -> Dict[str, str]:
        params = {
            "productType": self.product_type,
            "modelKey": self.model_key,
            "variant": self.variant,
            "color": self.color,
            "qty": str(self.qty),
        }
        if self.size:
            params["size"] = self.size
        return params

    def to_query(self) -> str:
        """URL-encoded query string (without the leading '?')."""
        return urlencode(self.to_query_params())


@dataclass
class CustomerDetails:
    """Contact fields collected on the confirmation page."""

    name: str = ""
    class_name: str = ""
    contact: str = ""
    notes: str = ""

    def missing_fields(self) -> List[str]:
        """Names of required fields that are empty after trimming."""
        missing = []
        if not self.name.strip():
            missing.append("name")
        if not self.class_name.strip():
            missing.append("className")
        if not self.contact.strip():
            missing.append("contact")
        return missing

    def to_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "className": self.class_name,
            "contact": self.contact,
            "notes": self.notes,
        }


@dataclass
class Order:
    """
    A persisted preorder.

    Created once by a customer submission. The only mutation afterwards is
    the admin moving status from NEW to SEEN; then it is eventually deleted.
    """

    product_type: str
    model_key: str
    variant: str
    color: str
    qty: int
    name: str
    class_name: str
    contact: str
    size: Optional[str] = None
    notes: str = ""
    status: OrderStatus = OrderStatus.NEW
    created_at: Optional[datetime] = None
    """Assigned by the order store when the record is written."""

    id: Optional[str] = field(default=None, compare=False)
    """Store-assigned document id."""

    @classmethod
    def from_submission(cls, request: OrderRequest, customer: CustomerDetails) -> "Order":
        """Combine the product selection and the customer fields into a NEW order."""
        return cls(
            product_type=request.product_type,
            model_key=request.model_key,
            variant=request.variant,
            color=request.color,
            size=request.size,
            qty=clamp_quantity(request.qty),
            name=customer.name.strip(),
            class_name=customer.class_name.strip(),
            contact=customer.contact.strip(),
            notes=customer.notes.strip(),
            status=OrderStatus.NEW,
        )

    @property
    def is_new(self) -> bool:
        return self.status == OrderStatus.NEW

    def mark_seen(self) -> "Order":
        """Copy with status SEEN. Idempotent."""
        return replace(self, status=OrderStatus.SEEN)

    def to_document(self) -> Dict[str, Any]:
        """Persisted record shape (without the id)."""
        return {
            "productType": self.product_type,
            "modelKey": self.model_key,
            "variant": self.variant,
            "color": self.color,
            "size": self.size if self.size else None,
            "qty": self.qty,
            "name": self.name,
            "className": self.class_name,
            "contact": self.contact,
            "notes": self.notes,
            "status": self.status.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_document(cls, order_id: str, doc: Dict[str, Any]) -> "Order":
        """
        Build an Order from a stored document.

        Tolerates older records without a status (read as NEW) or without a
        creation time.
        """
        created_at = doc.get("createdAt")
        if not isinstance(created_at, datetime):
            created_at = None

        return cls(
            id=order_id,
            product_type=doc.get("productType", ""),
            model_key=doc.get("modelKey", ""),
            variant=doc.get("variant", ""),
            color=doc.get("color", ""),
            size=doc.get("size") or None,
            qty=clamp_quantity(doc.get("qty")),
            name=doc.get("name", ""),
            class_name=doc.get("className", ""),
            contact=doc.get("contact", ""),
            notes=doc.get("notes", "") or "",
            status=OrderStatus.parse(doc.get("status")),
            created_at=created_at,
        )
