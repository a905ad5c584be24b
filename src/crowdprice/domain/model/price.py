"""Price aggregate -- the central mutable entity of the ledger.

A Price is a contributor's report that *amount* was observed for a
product at a store. It starts ``PENDING`` and a reviewer moves it exactly
once to ``VERIFIED`` or ``REJECTED``. Both outcomes are terminal.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from crowdprice.domain.exceptions import NotPendingError, ValidationError
from crowdprice.domain.model.value_objects import Money


class PriceState(Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass
class Price:
    """Aggregate root for a submitted price.

    Use ``Price.submit()`` for new submissions. The ``__init__`` is kept
    simple so repositories can reconstitute persisted prices in any state.

    Invariants:
    - ``amount`` is strictly positive (guaranteed by ``Money``)
    - ``state`` only moves PENDING -> VERIFIED or PENDING -> REJECTED
    """

    id: str
    product_id: str
    store_id: str
    submitted_by: str
    amount: Money
    state: PriceState = PriceState.PENDING
    reviewed_by: str | None = None
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW submissions only) ------------------------------

    @staticmethod
    def submit(
        product_id: str,
        store_id: str,
        submitted_by: str,
        amount: Money,
        registered_at: datetime | None = None,
    ) -> Price:
        if not product_id:
            raise ValidationError("Price must reference a product")
        if not store_id:
            raise ValidationError("Price must reference a store")
        if not submitted_by:
            raise ValidationError("Price must reference a submitter")

        price = Price(
            id=uuid.uuid4().hex,
            product_id=product_id,
            store_id=store_id,
            submitted_by=submitted_by,
            amount=amount,
        )
        if registered_at is not None:
            price.registered_at = registered_at
        return price

    # --- State transitions ----------------------------------------------------

    def approve(self, reviewer_id: str) -> None:
        """Transition PENDING -> VERIFIED."""
        self._assert_pending()
        self.state = PriceState.VERIFIED
        self.reviewed_by = reviewer_id

    def reject(self, reviewer_id: str) -> None:
        """Transition PENDING -> REJECTED. The record stays for audit."""
        self._assert_pending()
        self.state = PriceState.REJECTED
        self.reviewed_by = reviewer_id

    # --- Computed properties --------------------------------------------------

    @property
    def verified(self) -> bool:
        return self.state == PriceState.VERIFIED

    @property
    def is_pending(self) -> bool:
        return self.state == PriceState.PENDING

    @property
    def ranking_key(self) -> tuple:
        """Ordering used to pick the lowest price: amount, then earliest."""
        return (self.amount.amount, self.registered_at)

    # --- Internal helpers -----------------------------------------------------

    def _assert_pending(self) -> None:
        if self.state != PriceState.PENDING:
            raise NotPendingError(
                f"Price {self.id} was already reviewed "
                f"(current state is {self.state.value})"
            )
