"""Application service: Scan Barcode use case (query).

A hit shows the product; a miss tells the caller to offer the
create-product flow with the scanned code prefilled.
"""

from __future__ import annotations

from crowdprice.application.dto import ProductDTO, product_to_dto
from crowdprice.domain.exceptions import ValidationError
from crowdprice.domain.repository.product_repository import ProductRepository


class ScanBarcodeHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, barcode: str) -> ProductDTO | None:
        code = (barcode or "").strip()
        if not code:
            raise ValidationError("Barcode is required")
        product = self._product_repo.get_by_barcode(code)
        return product_to_dto(product) if product is not None else None
