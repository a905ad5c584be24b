"""Application service: Show Pending Queue use case (query).

Lists pending prices newest first, each joined with its product, store
and submitter. The joins use one batched lookup per collection; a
missing related record leaves its field empty instead of failing the
whole queue.
"""

from __future__ import annotations

from crowdprice.application.dto import PendingPriceDTO, price_to_dto
from crowdprice.application.session import Session, authorize_reviewer
from crowdprice.domain.model.price import PriceState
from crowdprice.domain.repository.price_repository import PriceRepository
from crowdprice.domain.repository.product_repository import ProductRepository
from crowdprice.domain.repository.profile_repository import ProfileRepository
from crowdprice.domain.repository.store_repository import StoreRepository


class ShowPendingQueueHandler:

    def __init__(
        self,
        price_repo: PriceRepository,
        product_repo: ProductRepository,
        store_repo: StoreRepository,
        profile_repo: ProfileRepository,
    ) -> None:
        self._price_repo = price_repo
        self._product_repo = product_repo
        self._store_repo = store_repo
        self._profile_repo = profile_repo

    def handle(self, session: Session) -> list[PendingPriceDTO]:
        authorize_reviewer(session, self._profile_repo)

        pending = self._price_repo.list_by_state(PriceState.PENDING)
        if not pending:
            return []

        products = self._product_repo.get_many({p.product_id for p in pending})
        stores = self._store_repo.get_many({p.store_id for p in pending})
        users = self._profile_repo.get_many({p.submitted_by for p in pending})

        queue: list[PendingPriceDTO] = []
        for price in pending:
            product = products.get(price.product_id)
            store = stores.get(price.store_id)
            user = users.get(price.submitted_by)
            queue.append(
                PendingPriceDTO(
                    price=price_to_dto(price),
                    product_name=product.name if product is not None else None,
                    store_name=store.name if store is not None else None,
                    submitter_name=user.name if user is not None else None,
                )
            )
        return queue
