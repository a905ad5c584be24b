"""Application service: Submit Price use case.

A contributor reports a price seen at a store. The new price always
enters the ledger as pending and earns nothing until a reviewer
approves it.

Two entry points:
- ``handle`` targets an existing store by ID; the store must be verified.
- ``handle_at_named_store`` names the store; an unknown name creates an
  unverified store through an atomic get-or-create, so retrying after a
  failed insert reuses the same store.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from crowdprice.application.dto import PriceDTO, price_to_dto
from crowdprice.application.session import Session
from crowdprice.domain.exceptions import EntityNotFoundError, ValidationError
from crowdprice.domain.model.price import Price
from crowdprice.domain.model.product import Product
from crowdprice.domain.model.store import Store
from crowdprice.domain.model.value_objects import Money
from crowdprice.domain.repository.price_repository import PriceRepository
from crowdprice.domain.repository.product_repository import ProductRepository
from crowdprice.domain.repository.store_repository import StoreRepository

logger = structlog.get_logger(__name__)


class SubmitPriceHandler:

    def __init__(
        self,
        price_repo: PriceRepository,
        product_repo: ProductRepository,
        store_repo: StoreRepository,
    ) -> None:
        self._price_repo = price_repo
        self._product_repo = product_repo
        self._store_repo = store_repo

    def handle(
        self,
        session: Session,
        product_id: str,
        store_id: str,
        amount: str | float | Decimal,
    ) -> PriceDTO:
        user_id = session.require_user("submit prices")
        money = Money.of(amount)
        product = self._load_product(product_id)

        store = self._store_repo.get_by_id(store_id)
        if store is None:
            raise EntityNotFoundError(f"Store '{store_id}' not found")
        if not store.verified:
            raise ValidationError(
                f"Store '{store.name}' is not verified; submit with the store name instead"
            )

        return self._record(user_id, product, store, money)

    def handle_at_named_store(
        self,
        session: Session,
        product_id: str,
        store_name: str,
        amount: str | float | Decimal,
    ) -> PriceDTO:
        user_id = session.require_user("submit prices")
        money = Money.of(amount)
        product = self._load_product(product_id)
        candidate = Store.create(store_name)

        store, created = self._store_repo.get_or_create(candidate)
        if created:
            logger.info("store_created", store_id=store.id, name=store.name)

        return self._record(user_id, product, store, money)

    # --- Internal helpers -----------------------------------------------------

    def _load_product(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        return product

    def _record(self, user_id: str, product: Product, store: Store, money: Money) -> PriceDTO:
        price = Price.submit(
            product_id=product.id,
            store_id=store.id,
            submitted_by=user_id,
            amount=money,
        )
        self._price_repo.add(price)
        logger.info(
            "price_submitted",
            price_id=price.id,
            product_id=product.id,
            store_id=store.id,
            amount=str(money.amount),
        )
        return price_to_dto(price)
