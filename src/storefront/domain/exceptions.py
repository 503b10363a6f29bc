"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EmptyCartError(ValidationError):
    """An order was placed with no cart lines."""

    def __init__(self, message: str = "Cart must contain at least one item") -> None:
        super().__init__(message)


class InsufficientStockError(ValidationError):
    """A guarded decrement would have driven stock below its floor."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    """A cart line references a product the inventory store does not know."""


class StoreTimeoutError(DomainException):
    """A call to the inventory store or order ledger did not finish in time."""


# ---------------------------------------------------------------------------
# Placement failures
#
# The caller only ever sees the generic message; the underlying cause is
# chained through ``__cause__`` for logs and tests.
# ---------------------------------------------------------------------------


class PlacementFailed(DomainException):
    """Order placement ended in the FAILED state."""

    def __init__(self, message: str = "Order placement failed") -> None:
        super().__init__(message)


class ReservationFailure(PlacementFailed):
    """Reserving stock for a cart line failed."""


class AssemblyError(PlacementFailed):
    """The cart could not be turned into an order (malformed line data)."""


class PersistenceFailure(PlacementFailed):
    """The order ledger rejected or failed to store the order."""


@dataclass(frozen=True)
class CompensationFailure:
    """A restock issued during rollback that did not go through.

    Never raised: it is logged and attached to the placement outcome.
    """

    product_id: str
    quantity: int
    reason: str
