"""Abstract append-only repository for Validation audit records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from crowdprice.domain.model.validation import Validation


class ValidationRepository(ABC):

    @abstractmethod
    def add_if_absent(self, validation: Validation) -> bool:
        """Append an audit record unless its price already has one.

        Check and append are atomic. Returns False, writing nothing, when a
        record for ``validation.price_id`` already exists. Records are never
        updated.
        """

    @abstractmethod
    def list_for_price(self, price_id: str) -> list[Validation]:
        """Return the audit trail of one price, oldest first."""
