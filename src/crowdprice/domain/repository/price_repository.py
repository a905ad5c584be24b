"""Abstract repository for the Price ledger.

Prices are appended once and updated at most once afterwards, by the
review workflow, through ``replace_if_state`` -- a compare-and-swap on the
stored lifecycle state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from crowdprice.domain.model.price import Price, PriceState


class PriceRepository(ABC):

    @abstractmethod
    def get_by_id(self, price_id: str) -> Price | None:
        """Return a price by its ID, or None if not found."""

    @abstractmethod
    def add(self, price: Price) -> None:
        """Append a newly submitted price."""

    @abstractmethod
    def replace_if_state(self, price: Price, expected: PriceState) -> bool:
        """Persist ``price`` only if the stored copy is still in ``expected``.

        Returns False, leaving storage untouched, when another writer got
        there first.
        """

    @abstractmethod
    def list_by_state(self, state: PriceState) -> list[Price]:
        """Return prices in ``state``, most recently registered first."""

    @abstractmethod
    def list_verified_for_products(
        self, product_ids: Iterable[str]
    ) -> dict[str, list[Price]]:
        """Verified prices grouped by product, in storage order."""

    @abstractmethod
    def list_recent_verified(self, limit: int) -> list[Price]:
        """The ``limit`` most recently registered verified prices."""
