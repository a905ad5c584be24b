"""JSON-file-backed implementation of ValidationRepository."""

from __future__ import annotations

from datetime import datetime

from crowdprice.domain.model.validation import Decision, Validation
from crowdprice.domain.repository.validation_repository import ValidationRepository
from crowdprice.infrastructure.persistence.json_document_store import JsonDocumentStore


class JsonValidationRepository(JsonDocumentStore, ValidationRepository):

    def add_if_absent(self, validation: Validation) -> bool:
        with self._locked():
            records = self._load_raw()
            if any(raw["price_id"] == validation.price_id for raw in records):
                return False
            records.append(self._to_raw(validation))
            self._persist_raw(records)
        return True

    def list_for_price(self, price_id: str) -> list[Validation]:
        return [
            self._to_domain(raw) for raw in self._read() if raw["price_id"] == price_id
        ]

    @staticmethod
    def _to_raw(validation: Validation) -> dict:
        return {
            "id": validation.id,
            "price_id": validation.price_id,
            "reviewer_id": validation.reviewer_id,
            "decision": validation.decision.value,
            "decided_at": validation.decided_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Validation:
        return Validation(
            id=raw["id"],
            price_id=raw["price_id"],
            reviewer_id=raw["reviewer_id"],
            decision=Decision(raw["decision"]),
            decided_at=datetime.fromisoformat(raw["decided_at"]),
        )
