"""Application service: Verify Store use case.

Only reviewers can vouch for a store; verified stores become regular
submission targets.
"""

from __future__ import annotations

import structlog

from crowdprice.application.dto import StoreDTO, store_to_dto
from crowdprice.application.session import Session, authorize_reviewer
from crowdprice.domain.exceptions import EntityNotFoundError
from crowdprice.domain.repository.profile_repository import ProfileRepository
from crowdprice.domain.repository.store_repository import StoreRepository

logger = structlog.get_logger(__name__)


class VerifyStoreHandler:

    def __init__(
        self,
        store_repo: StoreRepository,
        profile_repo: ProfileRepository,
    ) -> None:
        self._store_repo = store_repo
        self._profile_repo = profile_repo

    def handle(self, session: Session, store_id: str) -> StoreDTO:
        reviewer = authorize_reviewer(session, self._profile_repo)

        store = self._store_repo.get_by_id(store_id)
        if store is None:
            raise EntityNotFoundError(f"Store '{store_id}' not found")

        if not store.verified:
            store.verify()
            self._store_repo.save(store)
            logger.info("store_verified", store_id=store.id, reviewer_id=reviewer.id)
        return store_to_dto(store)
