"""Composition root -- wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from crowdprice.application.session import Session, StartSessionHandler
from crowdprice.domain.service.price_aggregation_service import PriceAggregationService
from crowdprice.domain.service.price_review_service import PriceReviewService
from crowdprice.domain.service.rewards_ledger import RewardsLedger
from crowdprice.infrastructure.config import Settings
from crowdprice.infrastructure.identity import StaticIdentityProvider
from crowdprice.infrastructure.persistence.json_price_repository import JsonPriceRepository
from crowdprice.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from crowdprice.infrastructure.persistence.json_profile_repository import (
    JsonProfileRepository,
)
from crowdprice.infrastructure.persistence.json_store_repository import JsonStoreRepository
from crowdprice.infrastructure.persistence.json_validation_repository import (
    JsonValidationRepository,
)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(
        settings.data_dir / "products.json", settings.storage_timeout_seconds
    )


def store_repository(settings: Settings) -> JsonStoreRepository:
    return JsonStoreRepository(
        settings.data_dir / "stores.json", settings.storage_timeout_seconds
    )


def price_repository(settings: Settings) -> JsonPriceRepository:
    return JsonPriceRepository(
        settings.data_dir / "prices.json", settings.storage_timeout_seconds
    )


def validation_repository(settings: Settings) -> JsonValidationRepository:
    return JsonValidationRepository(
        settings.data_dir / "validations.json", settings.storage_timeout_seconds
    )


def profile_repository(settings: Settings) -> JsonProfileRepository:
    return JsonProfileRepository(
        settings.data_dir / "users.json", settings.storage_timeout_seconds
    )


def rewards_ledger(settings: Settings) -> RewardsLedger:
    return RewardsLedger(profile_repository(settings))


def aggregation_service(settings: Settings) -> PriceAggregationService:
    return PriceAggregationService(
        product_repo=product_repository(settings),
        store_repo=store_repository(settings),
        price_repo=price_repository(settings),
    )


def review_service(settings: Settings) -> PriceReviewService:
    return PriceReviewService(
        price_repo=price_repository(settings),
        validation_repo=validation_repository(settings),
        profile_repo=profile_repository(settings),
        rewards=rewards_ledger(settings),
    )


def start_session(settings: Settings, user_id: str | None = None) -> Session:
    """Open a session for ``user_id``, falling back to the configured user."""
    handler = StartSessionHandler(
        identity=StaticIdentityProvider(user_id or settings.user),
        profile_repo=profile_repository(settings),
        attempts=settings.identity_retry_attempts,
        wait_seconds=settings.identity_retry_wait_seconds,
    )
    return handler.handle()
