"""Integration tests for the CreateProduct and ScanBarcode use cases."""

import pytest

from crowdprice.application.create_product import CreateProductHandler
from crowdprice.application.scan_barcode import ScanBarcodeHandler
from crowdprice.application.session import Session
from crowdprice.domain.exceptions import (
    DuplicateBarcodeError,
    UnauthorizedError,
    ValidationError,
)
from crowdprice.domain.model.user import UserProfile
from crowdprice.domain.service.rewards_ledger import RewardsLedger
from tests.fakes import FakeProductRepository, FakeProfileRepository

ALICE = Session(user_id="alice")


def _setup():
    product_repo = FakeProductRepository()
    profile_repo = FakeProfileRepository(
        [UserProfile(id="alice", name="Alice", email="alice@example.com")]
    )
    handler = CreateProductHandler(product_repo, RewardsLedger(profile_repo))
    return handler, product_repo, profile_repo


class TestCreateProduct:

    def test_creates_product_and_awards_20_points(self):
        handler, product_repo, profile_repo = _setup()

        dto = handler.handle(ALICE, "Yerba Mate", "Taragui", "Infusiones", "7790387")

        stored = product_repo.get_by_id(dto.id)
        assert stored.name == "Yerba Mate"
        assert stored.barcode == "7790387"
        assert stored.created_by == "alice"
        assert profile_repo.get_by_id("alice").points == 20

    def test_product_without_barcode(self):
        handler, product_repo, _ = _setup()
        dto = handler.handle(ALICE, "Pan casero", "Panaderia")
        assert dto.barcode is None
        assert len(product_repo.list_all()) == 1

    def test_products_without_barcode_do_not_collide(self):
        handler, product_repo, _ = _setup()
        handler.handle(ALICE, "Pan", "Panaderia")
        handler.handle(ALICE, "Pan", "Panaderia")
        assert len(product_repo.list_all()) == 2

    def test_duplicate_barcode_rejected_without_reward(self):
        handler, product_repo, profile_repo = _setup()
        handler.handle(ALICE, "Yerba Mate", "Taragui", barcode="7790387")

        with pytest.raises(DuplicateBarcodeError):
            handler.handle(ALICE, "Otra Yerba", "Playadito", barcode="7790387")

        assert len(product_repo.list_all()) == 1
        assert profile_repo.get_by_id("alice").points == 20

    def test_invalid_product_awards_nothing(self):
        handler, product_repo, profile_repo = _setup()
        with pytest.raises(ValidationError):
            handler.handle(ALICE, "", "Brand")
        assert product_repo.list_all() == []
        assert profile_repo.get_by_id("alice").points == 0

    def test_anonymous_caller_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(UnauthorizedError):
            handler.handle(Session.anonymous(), "Yerba", "Taragui")


class TestScanBarcode:

    def test_hit(self):
        handler, product_repo, _ = _setup()
        created = handler.handle(ALICE, "Yerba Mate", "Taragui", barcode="7790387")

        found = ScanBarcodeHandler(product_repo).handle("7790387")

        assert found.id == created.id

    def test_miss_returns_none(self):
        assert ScanBarcodeHandler(FakeProductRepository()).handle("000") is None

    def test_blank_barcode_rejected(self):
        with pytest.raises(ValidationError, match="Barcode is required"):
            ScanBarcodeHandler(FakeProductRepository()).handle("  ")
