"""Application service: Show Featured Products use case (query)."""

from __future__ import annotations

from crowdprice.application.dto import ProductQuoteDTO, product_quote_to_dto
from crowdprice.domain.exceptions import ValidationError
from crowdprice.domain.service.price_aggregation_service import PriceAggregationService


class ShowFeaturedHandler:

    def __init__(self, aggregation: PriceAggregationService) -> None:
        self._aggregation = aggregation

    def handle(self, window: int) -> list[ProductQuoteDTO]:
        """Products behind the ``window`` latest verified prices."""
        if window <= 0:
            raise ValidationError("Featured window must be positive")
        return [product_quote_to_dto(q) for q in self._aggregation.featured(window)]
