"""JSON-file-backed implementation of PriceRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from crowdprice.domain.exceptions import ConflictError, EntityNotFoundError
from crowdprice.domain.model.price import Price, PriceState
from crowdprice.domain.model.value_objects import Money
from crowdprice.domain.repository.price_repository import PriceRepository
from crowdprice.infrastructure.persistence.json_document_store import JsonDocumentStore


class JsonPriceRepository(JsonDocumentStore, PriceRepository):

    # --- PriceRepository interface --------------------------------------------

    def get_by_id(self, price_id: str) -> Price | None:
        for raw in self._read():
            if raw["id"] == price_id:
                return self._to_domain(raw)
        return None

    def add(self, price: Price) -> None:
        with self._transaction() as records:
            if any(raw["id"] == price.id for raw in records):
                raise ConflictError(f"Price '{price.id}' already exists")
            records.append(self._to_raw(price))

    def replace_if_state(self, price: Price, expected: PriceState) -> bool:
        with self._locked():
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw["id"] != price.id:
                    continue
                if raw["state"] != expected.value:
                    return False
                records[i] = self._to_raw(price)
                self._persist_raw(records)
                return True
        raise EntityNotFoundError(f"Price '{price.id}' not found")

    def list_by_state(self, state: PriceState) -> list[Price]:
        prices = [
            self._to_domain(raw) for raw in self._read() if raw["state"] == state.value
        ]
        return sorted(prices, key=lambda p: p.registered_at, reverse=True)

    def list_verified_for_products(
        self, product_ids: Iterable[str]
    ) -> dict[str, list[Price]]:
        wanted = set(product_ids)
        grouped: dict[str, list[Price]] = {}
        for raw in self._read():
            if raw["state"] == PriceState.VERIFIED.value and raw["product_id"] in wanted:
                grouped.setdefault(raw["product_id"], []).append(self._to_domain(raw))
        return grouped

    def list_recent_verified(self, limit: int) -> list[Price]:
        return self.list_by_state(PriceState.VERIFIED)[:limit]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(price: Price) -> dict:
        return {
            "id": price.id,
            "product_id": price.product_id,
            "store_id": price.store_id,
            "submitted_by": price.submitted_by,
            "amount": str(price.amount.amount),
            "state": price.state.value,
            "reviewed_by": price.reviewed_by,
            "registered_at": price.registered_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Price:
        return Price(
            id=raw["id"],
            product_id=raw["product_id"],
            store_id=raw["store_id"],
            submitted_by=raw["submitted_by"],
            amount=Money(Decimal(raw["amount"])),
            state=PriceState(raw["state"]),
            reviewed_by=raw.get("reviewed_by"),
            registered_at=datetime.fromisoformat(raw["registered_at"]),
        )
