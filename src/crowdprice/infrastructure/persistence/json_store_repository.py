"""JSON-file-backed implementation of StoreRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from crowdprice.domain.exceptions import EntityNotFoundError
from crowdprice.domain.model.store import Store
from crowdprice.domain.repository.store_repository import StoreRepository
from crowdprice.infrastructure.persistence.json_document_store import JsonDocumentStore


class JsonStoreRepository(JsonDocumentStore, StoreRepository):

    # --- StoreRepository interface --------------------------------------------

    def get_by_id(self, store_id: str) -> Store | None:
        for raw in self._read():
            if raw["id"] == store_id:
                return self._to_domain(raw)
        return None

    def get_many(self, store_ids: Iterable[str]) -> dict[str, Store]:
        wanted = set(store_ids)
        return {
            raw["id"]: self._to_domain(raw)
            for raw in self._read()
            if raw["id"] in wanted
        }

    def get_by_name(self, name: str) -> Store | None:
        for raw in self._read():
            if raw["name"] == name:
                return self._to_domain(raw)
        return None

    def get_or_create(self, candidate: Store) -> tuple[Store, bool]:
        with self._locked():
            records = self._load_raw()
            for raw in records:
                if raw["name"] == candidate.name:
                    return self._to_domain(raw), False
            records.append(self._to_raw(candidate))
            self._persist_raw(records)
        return candidate, True

    def list_verified(self) -> list[Store]:
        return [self._to_domain(raw) for raw in self._read() if raw.get("verified")]

    def save(self, store: Store) -> None:
        with self._transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == store.id:
                    records[i] = self._to_raw(store)
                    return
            raise EntityNotFoundError(f"Store '{store.id}' not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(store: Store) -> dict:
        return {
            "id": store.id,
            "name": store.name,
            "address": store.address,
            "verified": store.verified,
            "created_at": store.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Store:
        return Store(
            id=raw["id"],
            name=raw["name"],
            address=raw.get("address", ""),
            verified=bool(raw.get("verified", False)),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
