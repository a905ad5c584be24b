"""Unit tests for the price aggregation engine."""

from datetime import datetime, timedelta, timezone

from crowdprice.domain.model.price import Price, PriceState
from crowdprice.domain.model.product import Product
from crowdprice.domain.model.store import Store
from crowdprice.domain.model.value_objects import Money
from crowdprice.domain.service.price_aggregation_service import (
    PriceAggregationService,
    select_lowest,
)
from tests.fakes import FakePriceRepository, FakeProductRepository, FakeStoreRepository

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def _price(
    product_id: str,
    amount: str,
    store_id: str = "s1",
    minutes: int = 0,
    state: PriceState = PriceState.VERIFIED,
    price_id: str | None = None,
) -> Price:
    return Price(
        id=price_id or f"{product_id}-{amount}-{store_id}-{minutes}",
        product_id=product_id,
        store_id=store_id,
        submitted_by="alice",
        amount=Money.of(amount),
        state=state,
        registered_at=T0 + timedelta(minutes=minutes),
    )


def _setup(prices: list[Price]):
    products = [
        Product(id="A", name="Arroz Largo Fino", brand="Gallo", category="Almacen", barcode="111"),
        Product(id="B", name="Leche Entera", brand="La Serenisima", category="Lacteos", barcode="222"),
        Product(id="C", name="Cafe Molido", brand="La Virginia", category="Almacen"),
    ]
    stores = [
        Store(id="s1", name="Coto", verified=True),
        Store(id="s2", name="Dia", verified=True),
    ]
    service = PriceAggregationService(
        product_repo=FakeProductRepository(products),
        store_repo=FakeStoreRepository(stores),
        price_repo=FakePriceRepository(prices),
    )
    return service


class TestSelectLowest:

    def test_empty_returns_none(self):
        assert select_lowest([]) is None

    def test_ignores_unverified_prices(self):
        prices = [
            _price("A", "50", state=PriceState.PENDING),
            _price("A", "40", state=PriceState.REJECTED),
            _price("A", "90"),
        ]
        assert select_lowest(prices).amount == Money.of("90")

    def test_tie_goes_to_earliest_registration(self):
        late = _price("A", "100", store_id="s1", minutes=30)
        early = _price("A", "100", store_id="s2", minutes=5)
        assert select_lowest([late, early]) is early

    def test_exact_tie_keeps_sequence_order(self):
        first = _price("A", "100", price_id="first")
        second = _price("A", "100", price_id="second")
        assert select_lowest([first, second]) is first


class TestLowestPrice:

    def test_none_without_verified_prices(self):
        service = _setup([_price("A", "10", state=PriceState.PENDING)])
        assert service.lowest_price("A") is None

    def test_returns_minimum_with_store(self):
        service = _setup([_price("A", "200", "s1"), _price("A", "150", "s2")])
        quote = service.lowest_price("A")
        assert quote.price.amount == Money.of("150")
        assert quote.store.name == "Dia"

    def test_higher_verified_price_does_not_change_result(self):
        prices = [_price("A", "150", "s2")]
        before = _setup(prices).lowest_price("A")
        after = _setup(prices + [_price("A", "175", "s1", minutes=10)]).lowest_price("A")
        assert after.price.id == before.price.id

    def test_lower_verified_price_always_wins(self):
        prices = [_price("A", "150", "s2")]
        after = _setup(prices + [_price("A", "149.99", "s1", minutes=10)]).lowest_price("A")
        assert after.price.amount == Money.of("149.99")

    def test_missing_store_yields_empty_store(self):
        service = _setup([_price("A", "10", store_id="gone")])
        quote = service.lowest_price("A")
        assert quote.store is None


class TestSearch:

    def test_matches_name_substring(self):
        service = _setup([])
        assert [q.product.id for q in service.search("leche")] == ["B"]

    def test_matches_brand_substring(self):
        service = _setup([])
        assert [q.product.id for q in service.search("virginia")] == ["C"]

    def test_matches_exact_barcode(self):
        service = _setup([])
        assert [q.product.id for q in service.search("111")] == ["A"]

    def test_products_without_prices_are_included(self):
        service = _setup([_price("A", "80")])
        quotes = {q.product.id: q for q in service.search("a")}
        assert quotes["A"].lowest.price.amount == Money.of("80")
        assert quotes["B"].lowest is None

    def test_blank_term_returns_nothing(self):
        assert _setup([]).search("   ") == []

    def test_limit(self):
        assert len(_setup([]).search("a", limit=1)) == 1


class TestFeatured:

    def test_recent_prices_select_products_in_recency_order(self):
        prices = [
            _price("A", "100", minutes=1),
            _price("B", "50", minutes=2),
            _price("A", "120", minutes=3),
        ]
        featured = _setup(prices).featured(10)
        assert [q.product.id for q in featured] == ["A", "B"]

    def test_attached_price_is_current_lowest_not_the_recent_one(self):
        prices = [
            _price("A", "90", minutes=1),
            _price("A", "130", minutes=5),
        ]
        featured = _setup(prices).featured(1)
        assert [q.product.id for q in featured] == ["A"]
        assert featured[0].lowest.price.amount == Money.of("90")

    def test_window_limits_scanned_prices(self):
        prices = [
            _price("A", "10", minutes=1),
            _price("B", "10", minutes=2),
            _price("C", "10", minutes=3),
        ]
        assert [q.product.id for q in _setup(prices).featured(2)] == ["C", "B"]

    def test_pending_prices_are_not_featured(self):
        service = _setup([_price("A", "10", state=PriceState.PENDING)])
        assert service.featured(10) == []

    def test_unknown_products_skipped(self):
        service = _setup([_price("ghost", "10")])
        assert service.featured(10) == []


class TestPriceBoard:

    def test_sorted_cheapest_first(self):
        prices = [
            _price("A", "120", "s1", minutes=1),
            _price("A", "95", "s2", minutes=2),
            _price("A", "95", "s1", minutes=0),
            _price("A", "10", "s1", state=PriceState.REJECTED),
        ]
        board = _setup(prices).price_board("A")
        assert [(str(q.price.amount), q.store.name) for q in board] == [
            ("$95.00", "Coto"),
            ("$95.00", "Dia"),
            ("$120.00", "Coto"),
        ]
