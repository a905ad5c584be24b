"""Application service: Show Lowest Price use case (query)."""

from __future__ import annotations

from crowdprice.application.dto import QuoteDTO, quote_to_dto
from crowdprice.domain.exceptions import EntityNotFoundError
from crowdprice.domain.repository.product_repository import ProductRepository
from crowdprice.domain.service.price_aggregation_service import PriceAggregationService


class ShowLowestPriceHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        aggregation: PriceAggregationService,
    ) -> None:
        self._product_repo = product_repo
        self._aggregation = aggregation

    def handle(self, product_id: str) -> QuoteDTO | None:
        """Return the lowest verified price, or None when nothing is verified."""
        if self._product_repo.get_by_id(product_id) is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        quote = self._aggregation.lowest_price(product_id)
        return quote_to_dto(quote) if quote is not None else None
