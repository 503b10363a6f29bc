"""Domain service: Order Placement.

Coordinates one placement request across the inventory store, the order
assembler and the order ledger:

    START -> RESERVING -> ASSEMBLING -> PERSISTING -> COMMITTED
                 \\             |             /
                  +------> ROLLING_BACK -> FAILED

Stock is reserved line by line before the order exists.  If anything after
the first reservation fails, every reservation recorded so far is undone
with a compensating restock.  Restocks that fail are logged and reported on
the outcome, never retried or raised: the caller always gets exactly one
terminal state.

A store call that overruns ``call_timeout`` keeps running on its worker.
A reservation that lands after its timeout is restocked as soon as it does.
A slow ledger insert is waited out, because it cannot be undone and its
result decides between COMMITTED and FAILED.

There is no transaction spanning the stock adjustments and the ledger
insert.  Atomicity is per product only, so a crash mid-request can leave
some reservations behind.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

import structlog

from storefront.domain.exceptions import (
    AssemblyError,
    CompensationFailure,
    EmptyCartError,
    PersistenceFailure,
    PlacementFailed,
    ProductNotFoundError,
    ReservationFailure,
    StoreTimeoutError,
    ValidationError,
)
from storefront.domain.model.order import CartLine, Order
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.inventory_store import InventoryStore
from storefront.domain.repository.order_ledger import OrderLedger
from storefront.domain.service.order_assembler import (
    FLAT_SURCHARGE,
    assemble,
    new_order_number,
    utc_now,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class PlacementState(Enum):
    START = "START"
    RESERVING = "RESERVING"
    ASSEMBLING = "ASSEMBLING"
    PERSISTING = "PERSISTING"
    COMMITTED = "COMMITTED"
    ROLLING_BACK = "ROLLING_BACK"
    FAILED = "FAILED"


@dataclass(frozen=True)
class PlacementPolicy:
    """Tunable behavior of a placement.

    ``strict_products`` aborts the placement when a cart line names an
    unknown product; when off, the line is logged and the order is still
    assembled and billed for it.  ``guard_stock`` makes reservations refuse
    to drive stock below zero.  ``call_timeout`` bounds every inventory
    store call, in seconds; a ledger insert that overruns it is waited out.
    """

    surcharge: Money = FLAT_SURCHARGE
    strict_products: bool = False
    guard_stock: bool = True
    call_timeout: float | None = None


@dataclass(frozen=True)
class Reservation:
    """One entry of the rollback ledger."""

    product_id: str
    quantity: int
    applied: bool = True  # False when the store did not know the product


@dataclass
class PlacementOutcome:
    state: PlacementState = PlacementState.START
    order: Order | None = None
    error: PlacementFailed | None = None
    reservations: list[Reservation] = field(default_factory=list)
    compensation_failures: list[CompensationFailure] = field(default_factory=list)
    transitions: list[PlacementState] = field(
        default_factory=lambda: [PlacementState.START]
    )

    @property
    def committed(self) -> bool:
        return self.state is PlacementState.COMMITTED

    def move_to(self, state: PlacementState) -> None:
        self.state = state
        self.transitions.append(state)


class OrderPlacementCoordinator:

    def __init__(
        self,
        inventory: InventoryStore,
        ledger: OrderLedger,
        policy: PlacementPolicy | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_order_number,
    ) -> None:
        self._inventory = inventory
        self._ledger = ledger
        self._policy = policy or PlacementPolicy()
        self._clock = clock
        self._id_factory = id_factory
        self._executor: ThreadPoolExecutor | None = None

    def place(self, user_id: str, cart_lines: Sequence[CartLine]) -> PlacementOutcome:
        """Run one placement to a terminal state.

        Raises EmptyCartError / ValidationError before touching any stock.
        Every later failure comes back as a FAILED outcome whose ``error``
        is a PlacementFailed subclass.
        """
        self._check_request(user_id, cart_lines)

        log = logger.bind(user_id=user_id)
        outcome = PlacementOutcome()
        log.info("Order placement started", line_count=len(cart_lines))

        try:
            outcome.move_to(PlacementState.RESERVING)
            self._reserve(cart_lines, outcome, log)

            outcome.move_to(PlacementState.ASSEMBLING)
            order = self._assemble(user_id, cart_lines)

            outcome.move_to(PlacementState.PERSISTING)
            self._persist(order, log)
        except PlacementFailed as exc:
            return self._roll_back(outcome, exc, log)

        outcome.order = order
        outcome.move_to(PlacementState.COMMITTED)
        log.info(
            "Order placement committed",
            order_number=order.order_number,
            total=order.total.to_plain(),
            total_items=order.total_items,
        )
        return outcome

    def compensate(
        self,
        reservations: Sequence[Reservation],
        log: Any = None,
    ) -> list[CompensationFailure]:
        """Restock every applied reservation, newest first.

        Best effort: a restock that fails is logged and returned, and the
        remaining ones are still attempted.
        """
        if log is None:
            log = logger
        failures: list[CompensationFailure] = []

        for reservation in reversed(reservations):
            if not reservation.applied:
                continue
            failure = self._restore(reservation, log, self._call)
            if failure is not None:
                failures.append(failure)

        return failures

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    # --- Phases ---------------------------------------------------------------

    @staticmethod
    def _check_request(user_id: str, cart_lines: Sequence[CartLine]) -> None:
        if not cart_lines:
            raise EmptyCartError()
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        for line in cart_lines:
            # checked before any stock moves
            if (
                not isinstance(line.quantity, int)
                or isinstance(line.quantity, bool)
                or line.quantity <= 0
            ):
                raise ValidationError(
                    f"Quantity for product '{line.product_id}' must be a positive integer"
                )

    def _reserve(
        self,
        cart_lines: Sequence[CartLine],
        outcome: PlacementOutcome,
        log: Any,
    ) -> None:
        floor = 0 if self._policy.guard_stock else None

        for line in cart_lines:
            try:
                product = self._call(
                    self._inventory.adjust_stock,
                    line.product_id,
                    -line.quantity,
                    floor=floor,
                    on_late=self._undo_late_reservation(line, log),
                )
            except StoreTimeoutError as exc:
                log.warning(
                    "Reservation outcome unknown",
                    product_id=line.product_id,
                    quantity=line.quantity,
                )
                raise ReservationFailure() from exc
            except Exception as exc:
                raise ReservationFailure() from exc

            if product is None:
                log.warning(
                    "Product not found",
                    product_id=line.product_id,
                    quantity=line.quantity,
                    strict=self._policy.strict_products,
                )
                if self._policy.strict_products:
                    raise ReservationFailure() from ProductNotFoundError(
                        f"Product not found: '{line.product_id}'"
                    )
                outcome.reservations.append(
                    Reservation(line.product_id, line.quantity, applied=False)
                )
                continue

            outcome.reservations.append(Reservation(line.product_id, line.quantity))
            log.debug(
                "Stock reserved",
                product_id=line.product_id,
                quantity=line.quantity,
                stock=product.stock,
            )

    def _assemble(self, user_id: str, cart_lines: Sequence[CartLine]) -> Order:
        try:
            return assemble(
                user_id,
                cart_lines,
                surcharge=self._policy.surcharge,
                clock=self._clock,
                id_factory=self._id_factory,
            )
        except Exception as exc:
            raise AssemblyError() from exc

    def _persist(self, order: Order, log: Any) -> None:
        timeout = self._policy.call_timeout
        try:
            if timeout is None:
                self._ledger.insert(order)
                return
            future = self._submit(self._ledger.insert, order)
            try:
                future.result(timeout=timeout)
            except FutureTimeoutError:
                # an insert cannot be taken back, so its result decides the terminal state
                log.warning(
                    "Order persistence overran timeout",
                    order_number=order.order_number,
                    timeout=timeout,
                )
                future.result()
        except Exception as exc:
            raise PersistenceFailure() from exc

    def _roll_back(
        self,
        outcome: PlacementOutcome,
        error: PlacementFailed,
        log: Any,
    ) -> PlacementOutcome:
        failed_in = outcome.state
        outcome.move_to(PlacementState.ROLLING_BACK)
        log.warning(
            "Order placement rolling back",
            failed_in=failed_in.value,
            cause=repr(error.__cause__),
            reservations=sum(1 for r in outcome.reservations if r.applied),
        )

        outcome.compensation_failures = self.compensate(outcome.reservations, log)
        outcome.error = error
        outcome.move_to(PlacementState.FAILED)
        log.error(
            "Order placement failed",
            failed_in=failed_in.value,
            error=type(error).__name__,
            compensation_failures=len(outcome.compensation_failures),
        )
        return outcome

    # --- Compensation ---------------------------------------------------------

    def _restore(
        self,
        reservation: Reservation,
        log: Any,
        call: Callable[..., Any],
    ) -> CompensationFailure | None:
        try:
            product = call(
                self._inventory.adjust_stock,
                reservation.product_id,
                reservation.quantity,
            )
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
        else:
            if product is not None:
                log.info(
                    "Stock restored",
                    product_id=reservation.product_id,
                    quantity=reservation.quantity,
                    stock=product.stock,
                )
                return None
            reason = "product not found"

        failure = CompensationFailure(
            product_id=reservation.product_id,
            quantity=reservation.quantity,
            reason=reason,
        )
        log.error(
            "Compensation failed",
            product_id=failure.product_id,
            quantity=failure.quantity,
            reason=failure.reason,
        )
        return failure

    def _undo_late_reservation(
        self, line: CartLine, log: Any
    ) -> Callable[[Future[Any]], None]:
        """Done-callback for a reservation that overran its timeout.

        The placement has already failed without counting this line, so a
        decrement that lands afterwards is restocked straight away.
        """
        def undo(future: Future[Any]) -> None:
            if future.cancelled() or future.exception() is not None:
                return
            if future.result() is None:
                return
            log.warning(
                "Reservation applied after timeout",
                product_id=line.product_id,
                quantity=line.quantity,
            )
            self._restore(Reservation(line.product_id, line.quantity), log, _invoke)

        return undo

    # --- Bounded calls --------------------------------------------------------

    def _call(
        self,
        fn: Callable[..., T],
        *args: Any,
        on_late: Callable[[Future[Any]], None] | None = None,
        **kwargs: Any,
    ) -> T:
        timeout = self._policy.call_timeout
        if timeout is None:
            return fn(*args, **kwargs)

        future = self._submit(fn, *args, **kwargs)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as exc:
            # cancel() only stops calls still queued; running ones finish later
            future.cancel()
            if on_late is not None:
                future.add_done_callback(on_late)
            raise StoreTimeoutError(
                f"{getattr(fn, '__qualname__', fn)} did not finish within {timeout}s"
            ) from exc

    def _submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Future[T]:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=4, thread_name_prefix="storefront-store"
            )
        return self._executor.submit(fn, *args, **kwargs)


def _invoke(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    return fn(*args, **kwargs)
