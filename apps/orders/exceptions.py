"""
Order domain errors.
Validation and not-found errors travel inside Err results; persistence
failures are raised.
"""

from __future__ import annotations

from typing import Any

from apps.common.types import OrderID, ProductID

# Validation error kinds (machine-readable reasons)
INVALID = 'invalid'
EMPTY = 'empty'
PRODUCT_NOT_FOUND = 'product_not_found'
NEGATIVE_TOTAL = 'negative_total'


class OrderError(Exception):
    """Base exception for order business errors"""


class OrderValidationError(OrderError):
    """Order request rejected before anything was written"""

    def __init__(self, kind: str, message: str, product_id: ProductID | None = None):
        self.kind = kind
        self.message = message
        self.product_id = product_id
        super().__init__(message)

    @classmethod
    def invalid(cls, message: str) -> OrderValidationError:
        return cls(INVALID, message)

    @classmethod
    def empty(cls) -> OrderValidationError:
        return cls(EMPTY, "An order must contain at least one product")

    @classmethod
    def product_not_found(cls, product_id: ProductID) -> OrderValidationError:
        return cls(PRODUCT_NOT_FOUND, f"Product not found: {product_id}", product_id=product_id)

    @classmethod
    def negative_total(cls) -> OrderValidationError:
        return cls(NEGATIVE_TOTAL, "Order total cannot be negative")

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {'kind': self.kind, 'detail': self.message}
        if self.product_id is not None:
            payload['product_id'] = self.product_id
        return payload


class OrderNotFoundError(OrderError):
    """Order does not exist or belongs to another user"""

    def __init__(self, order_id: OrderID | None = None):
        self.order_id = order_id
        super().__init__("Order not found")


class OrderPersistenceError(OrderError):
    """Storage failed while writing an order; the transaction was rolled back"""
