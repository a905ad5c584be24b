"""Application service: Create Product use case.

Adds a product to the catalog and rewards its creator. The barcode
uniqueness check and the insert are a single repository call, so two
contributors scanning the same new barcode cannot both create it.
"""

from __future__ import annotations

import structlog

from crowdprice.application.dto import ProductDTO, product_to_dto
from crowdprice.application.session import Session
from crowdprice.domain.model.product import Product
from crowdprice.domain.repository.product_repository import ProductRepository
from crowdprice.domain.service.rewards_ledger import PRODUCT_CREATED_REWARD, RewardsLedger

logger = structlog.get_logger(__name__)


class CreateProductHandler:

    def __init__(self, product_repo: ProductRepository, rewards: RewardsLedger) -> None:
        self._product_repo = product_repo
        self._rewards = rewards

    def handle(
        self,
        session: Session,
        name: str,
        brand: str,
        category: str = "",
        barcode: str | None = None,
    ) -> ProductDTO:
        user_id = session.require_user("add products")

        product = Product.create(
            name=name,
            brand=brand,
            category=category,
            barcode=barcode,
            created_by=user_id,
        )
        self._product_repo.add(product)
        logger.info("product_created", product_id=product.id, barcode=product.barcode)

        # Reward only once the product is stored.
        self._rewards.credit_points(user_id, PRODUCT_CREATED_REWARD, reason="product_created")
        return product_to_dto(product)
