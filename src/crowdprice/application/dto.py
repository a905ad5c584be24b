"""Data Transfer Objects -- plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from crowdprice.domain.model.price import Price
from crowdprice.domain.model.product import Product
from crowdprice.domain.model.store import Store
from crowdprice.domain.model.user import UserProfile
from crowdprice.domain.model.validation import Validation
from crowdprice.domain.service.price_aggregation_service import PriceQuote, ProductQuote

UNKNOWN_STORE = "Unknown store"


@dataclass(frozen=True)
class ProductDTO:
    id: str
    barcode: str | None
    name: str
    brand: str
    category: str
    created_by: str | None
    created_at: str


@dataclass(frozen=True)
class StoreDTO:
    id: str
    name: str
    address: str
    verified: bool


@dataclass(frozen=True)
class PriceDTO:
    id: str
    product_id: str
    store_id: str
    submitted_by: str
    amount: str  # formatted, e.g. "$150.00"
    state: str
    verified: bool
    reviewed_by: str | None
    registered_at: str


@dataclass(frozen=True)
class QuoteDTO:
    """A verified price as displayed next to a product."""

    price_id: str
    amount: str
    store_id: str
    store_name: str
    registered_at: str


@dataclass(frozen=True)
class ProductQuoteDTO:
    product: ProductDTO
    lowest: QuoteDTO | None


@dataclass(frozen=True)
class ProductDetailDTO:
    product: ProductDTO
    prices: list[QuoteDTO]  # cheapest first


@dataclass(frozen=True)
class PendingPriceDTO:
    """Output: one entry of the review queue with its related records."""

    price: PriceDTO
    product_name: str | None
    store_name: str | None
    submitter_name: str | None


@dataclass(frozen=True)
class ValidationDTO:
    id: str
    price_id: str
    reviewer_id: str
    decision: str
    decided_at: str


@dataclass(frozen=True)
class PriceDetailDTO:
    price: PriceDTO
    validations: list[ValidationDTO]


@dataclass(frozen=True)
class ProfileDTO:
    id: str
    name: str
    email: str
    role: str
    points: int
    registered_at: str


# --- Mapping -----------------------------------------------------------------


def _fmt(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        barcode=product.barcode,
        name=product.name,
        brand=product.brand,
        category=product.category,
        created_by=product.created_by,
        created_at=_fmt(product.created_at),
    )


def store_to_dto(store: Store) -> StoreDTO:
    return StoreDTO(
        id=store.id,
        name=store.name,
        address=store.address,
        verified=store.verified,
    )


def price_to_dto(price: Price) -> PriceDTO:
    return PriceDTO(
        id=price.id,
        product_id=price.product_id,
        store_id=price.store_id,
        submitted_by=price.submitted_by,
        amount=str(price.amount),
        state=price.state.value,
        verified=price.verified,
        reviewed_by=price.reviewed_by,
        registered_at=_fmt(price.registered_at),
    )


def quote_to_dto(quote: PriceQuote) -> QuoteDTO:
    return QuoteDTO(
        price_id=quote.price.id,
        amount=str(quote.price.amount),
        store_id=quote.price.store_id,
        store_name=quote.store.name if quote.store is not None else UNKNOWN_STORE,
        registered_at=_fmt(quote.price.registered_at),
    )


def product_quote_to_dto(quote: ProductQuote) -> ProductQuoteDTO:
    return ProductQuoteDTO(
        product=product_to_dto(quote.product),
        lowest=quote_to_dto(quote.lowest) if quote.lowest is not None else None,
    )


def validation_to_dto(validation: Validation) -> ValidationDTO:
    return ValidationDTO(
        id=validation.id,
        price_id=validation.price_id,
        reviewer_id=validation.reviewer_id,
        decision=validation.decision.value,
        decided_at=_fmt(validation.decided_at),
    )


def profile_to_dto(profile: UserProfile) -> ProfileDTO:
    return ProfileDTO(
        id=profile.id,
        name=profile.name,
        email=profile.email,
        role=profile.role.value,
        points=profile.points,
        registered_at=_fmt(profile.registered_at),
    )
