"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so callers can catch them uniformly and display user-friendly messages.
Storage faults are NOT domain exceptions: they surface as PersistenceError
after any in-flight stock change has been compensated.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated business rule."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product '{product_id}' not found")
        self.product_id = product_id


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class InsufficientStockError(DomainException):
    """A decrement would take on-hand quantity below zero.

    Carries enough detail for the caller to identify the offending line
    and decide whether to reduce the quantity, backorder or drop it.
    """

    def __init__(self, product_id: str, sku: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {sku} "
            f"(requested {requested}, available {available})"
        )
        self.product_id = product_id
        self.sku = sku
        self.requested = requested
        self.available = available


class InvalidTransitionError(DomainException):

    def __init__(self, current: str, target: str, reason: str | None = None) -> None:
        message = f"Invalid status transition from {current} to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.current = current
        self.target = target


class PersistenceError(Exception):
    """The underlying store failed to read or write."""
