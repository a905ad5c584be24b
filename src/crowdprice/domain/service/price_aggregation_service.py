"""Domain service: Price Aggregation.

Read-only computations over the price ledger and the catalog: the lowest
verified price of a product, product search and the featured list. No
state of its own; every call reads fresh from the repositories.

Related records are always fetched in batches (``get_many`` and
``list_verified_for_products``) rather than one lookup per row.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from crowdprice.domain.model.price import Price
from crowdprice.domain.model.product import Product
from crowdprice.domain.model.store import Store
from crowdprice.domain.repository.price_repository import PriceRepository
from crowdprice.domain.repository.product_repository import ProductRepository
from crowdprice.domain.repository.store_repository import StoreRepository


@dataclass(frozen=True)
class PriceQuote:
    """A verified price together with the store it was seen at.

    ``store`` is None if the store record has gone missing.
    """

    price: Price
    store: Store | None


@dataclass(frozen=True)
class ProductQuote:
    product: Product
    lowest: PriceQuote | None


def select_lowest(prices: Iterable[Price]) -> Price | None:
    """Return the cheapest verified price, or None.

    Equal amounts are resolved in favour of the earliest registration;
    if the timestamps tie as well, the first one in ``prices`` wins.
    """
    return min(
        (p for p in prices if p.verified),
        key=lambda p: p.ranking_key,
        default=None,
    )


class PriceAggregationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        store_repo: StoreRepository,
        price_repo: PriceRepository,
    ) -> None:
        self._product_repo = product_repo
        self._store_repo = store_repo
        self._price_repo = price_repo

    def lowest_price(self, product_id: str) -> PriceQuote | None:
        grouped = self._price_repo.list_verified_for_products([product_id])
        best = select_lowest(grouped.get(product_id, []))
        if best is None:
            return None
        return PriceQuote(price=best, store=self._store_repo.get_by_id(best.store_id))

    def price_board(self, product_id: str) -> list[PriceQuote]:
        """Every verified price of a product, cheapest first."""
        grouped = self._price_repo.list_verified_for_products([product_id])
        prices = sorted(grouped.get(product_id, []), key=lambda p: p.ranking_key)
        stores = self._store_repo.get_many({p.store_id for p in prices})
        return [PriceQuote(price=p, store=stores.get(p.store_id)) for p in prices]

    def search(self, term: str, limit: int | None = None) -> list[ProductQuote]:
        """Products matching ``term``, each with its lowest price.

        Products without any verified price are kept, with ``lowest=None``.
        """
        term = (term or "").strip()
        if not term:
            return []
        products = [p for p in self._product_repo.list_all() if p.matches(term)]
        if limit is not None:
            products = products[:limit]
        return self._quote(products)

    def featured(self, window: int) -> list[ProductQuote]:
        """Products behind the ``window`` most recent verified prices.

        Recency only picks the products. The attached quote is each
        product's current lowest price, which may differ from the recent
        price that selected it.
        """
        if window <= 0:
            return []
        recent = self._price_repo.list_recent_verified(window)
        product_ids = list(dict.fromkeys(p.product_id for p in recent))
        products = self._product_repo.get_many(product_ids)
        return self._quote([products[pid] for pid in product_ids if pid in products])

    # --- Internal helpers -----------------------------------------------------

    def _quote(self, products: list[Product]) -> list[ProductQuote]:
        if not products:
            return []
        grouped = self._price_repo.list_verified_for_products(p.id for p in products)
        lowest = {p.id: select_lowest(grouped.get(p.id, [])) for p in products}
        stores = self._store_repo.get_many(
            {best.store_id for best in lowest.values() if best is not None}
        )

        quotes: list[ProductQuote] = []
        for product in products:
            best = lowest[product.id]
            quote = None
            if best is not None:
                quote = PriceQuote(price=best, store=stores.get(best.store_id))
            quotes.append(ProductQuote(product=product, lowest=quote))
        return quotes
