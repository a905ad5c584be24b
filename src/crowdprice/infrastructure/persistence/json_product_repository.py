"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from crowdprice.domain.exceptions import ConflictError, DuplicateBarcodeError
from crowdprice.domain.model.product import Product
from crowdprice.domain.repository.product_repository import ProductRepository
from crowdprice.infrastructure.persistence.json_document_store import JsonDocumentStore


class JsonProductRepository(JsonDocumentStore, ProductRepository):

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._read():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        wanted = set(product_ids)
        return {
            raw["id"]: self._to_domain(raw)
            for raw in self._read()
            if raw["id"] in wanted
        }

    def get_by_barcode(self, barcode: str) -> Product | None:
        for raw in self._read():
            if raw.get("barcode") is not None and raw["barcode"] == barcode:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._read()]

    def add(self, product: Product) -> None:
        with self._transaction() as records:
            for raw in records:
                if raw["id"] == product.id:
                    raise ConflictError(f"Product '{product.id}' already exists")
                if product.barcode is not None and raw.get("barcode") == product.barcode:
                    raise DuplicateBarcodeError(
                        f"Barcode {product.barcode} is already registered "
                        f"to '{raw['name']}'"
                    )
            records.append(self._to_raw(product))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "barcode": product.barcode,
            "name": product.name,
            "brand": product.brand,
            "category": product.category,
            "created_by": product.created_by,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            barcode=raw.get("barcode"),
            name=raw["name"],
            brand=raw.get("brand", ""),
            category=raw.get("category", ""),
            created_by=raw.get("created_by"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
