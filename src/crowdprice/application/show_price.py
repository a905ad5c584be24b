"""Application service: Show Price use case (query).

Returns a price together with its validation audit trail.
"""

from __future__ import annotations

from crowdprice.application.dto import (
    PriceDetailDTO,
    price_to_dto,
    validation_to_dto,
)
from crowdprice.domain.exceptions import EntityNotFoundError
from crowdprice.domain.repository.price_repository import PriceRepository
from crowdprice.domain.repository.validation_repository import ValidationRepository


class ShowPriceHandler:

    def __init__(
        self,
        price_repo: PriceRepository,
        validation_repo: ValidationRepository,
    ) -> None:
        self._price_repo = price_repo
        self._validation_repo = validation_repo

    def handle(self, price_id: str) -> PriceDetailDTO:
        price = self._price_repo.get_by_id(price_id)
        if price is None:
            raise EntityNotFoundError(f"Price '{price_id}' not found")
        return PriceDetailDTO(
            price=price_to_dto(price),
            validations=[
                validation_to_dto(v)
                for v in self._validation_repo.list_for_price(price_id)
            ],
        )
