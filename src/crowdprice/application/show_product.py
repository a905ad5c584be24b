"""Application service: Show Product use case (query).

The product detail view: the product and every verified price for it,
cheapest first.
"""

from __future__ import annotations

from crowdprice.application.dto import ProductDetailDTO, product_to_dto, quote_to_dto
from crowdprice.domain.exceptions import EntityNotFoundError
from crowdprice.domain.repository.product_repository import ProductRepository
from crowdprice.domain.service.price_aggregation_service import PriceAggregationService


class ShowProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        aggregation: PriceAggregationService,
    ) -> None:
        self._product_repo = product_repo
        self._aggregation = aggregation

    def handle(self, product_id: str) -> ProductDetailDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return ProductDetailDTO(
            product=product_to_dto(product),
            prices=[quote_to_dto(q) for q in self._aggregation.price_board(product_id)],
        )
