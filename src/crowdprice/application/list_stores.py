"""Application service: List Verified Stores use case (query)."""

from __future__ import annotations

from crowdprice.application.dto import StoreDTO, store_to_dto
from crowdprice.domain.repository.store_repository import StoreRepository


class ListVerifiedStoresHandler:

    def __init__(self, store_repo: StoreRepository) -> None:
        self._store_repo = store_repo

    def handle(self) -> list[StoreDTO]:
        return [store_to_dto(s) for s in self._store_repo.list_verified()]
