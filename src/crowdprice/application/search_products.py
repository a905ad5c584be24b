"""Application service: Search Products use case (query)."""

from __future__ import annotations

from crowdprice.application.dto import ProductQuoteDTO, product_quote_to_dto
from crowdprice.domain.exceptions import ValidationError
from crowdprice.domain.service.price_aggregation_service import PriceAggregationService


class SearchProductsHandler:

    def __init__(self, aggregation: PriceAggregationService) -> None:
        self._aggregation = aggregation

    def handle(self, term: str, limit: int | None = None) -> list[ProductQuoteDTO]:
        """Match name/brand substrings or an exact barcode.

        A blank term returns nothing rather than the whole catalog.
        """
        if limit is not None and limit <= 0:
            raise ValidationError("Search limit must be positive")
        return [product_quote_to_dto(q) for q in self._aggregation.search(term, limit=limit)]
