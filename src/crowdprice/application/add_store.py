"""Application service: Add Store use case.

Adding a store that already exists by exact name returns the existing
record instead of creating a duplicate.
"""

from __future__ import annotations

import structlog

from crowdprice.application.dto import StoreDTO, store_to_dto
from crowdprice.application.session import Session
from crowdprice.domain.model.store import Store
from crowdprice.domain.repository.store_repository import StoreRepository

logger = structlog.get_logger(__name__)


class AddStoreHandler:

    def __init__(self, store_repo: StoreRepository) -> None:
        self._store_repo = store_repo

    def handle(self, session: Session, name: str, address: str = "") -> StoreDTO:
        session.require_user("add stores")
        store, created = self._store_repo.get_or_create(Store.create(name, address))
        if created:
            logger.info("store_created", store_id=store.id, name=store.name)
        return store_to_dto(store)
