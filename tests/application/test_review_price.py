"""End-to-end review scenarios: submit, review, then read the lowest price."""

import pytest

from crowdprice.application.review_price import ReviewPriceHandler
from crowdprice.application.session import Session
from crowdprice.application.show_lowest_price import ShowLowestPriceHandler
from crowdprice.application.show_price import ShowPriceHandler
from crowdprice.application.submit_price import SubmitPriceHandler
from crowdprice.domain.exceptions import (
    NotPendingError,
    UnauthorizedError,
    ValidationError,
)
from crowdprice.domain.model.product import Product
from crowdprice.domain.model.store import Store
from crowdprice.domain.model.user import Role, UserProfile
from crowdprice.domain.service.price_aggregation_service import PriceAggregationService
from crowdprice.domain.service.price_review_service import PriceReviewService
from crowdprice.domain.service.rewards_ledger import RewardsLedger
from tests.fakes import (
    FakePriceRepository,
    FakeProductRepository,
    FakeProfileRepository,
    FakeStoreRepository,
    FakeValidationRepository,
)

ALICE = Session(user_id="alice")
RITA = Session(user_id="rita")


class _World:
    """All handlers wired over one set of in-memory repositories."""

    def __init__(self) -> None:
        self.products = FakeProductRepository(
            [Product(id="P", name="Leche", brand="La Serenisima", category="Lacteos")]
        )
        self.stores = FakeStoreRepository(
            [Store(id="S", name="Dia", verified=True), Store(id="T", name="Coto", verified=True)]
        )
        self.prices = FakePriceRepository()
        self.validations = FakeValidationRepository()
        self.profiles = FakeProfileRepository([
            UserProfile(id="alice", name="Alice", email="alice@example.com"),
            UserProfile(id="rita", name="Rita", email="rita@example.com", role=Role.SUPERVISOR),
        ])
        rewards = RewardsLedger(self.profiles)
        aggregation = PriceAggregationService(self.products, self.stores, self.prices)

        self.submit = SubmitPriceHandler(self.prices, self.products, self.stores)
        self.review = ReviewPriceHandler(
            PriceReviewService(self.prices, self.validations, self.profiles, rewards)
        )
        self.lowest = ShowLowestPriceHandler(self.products, aggregation)
        self.show_price = ShowPriceHandler(self.prices, self.validations)

    def points(self, user_id: str) -> int:
        return self.profiles.get_by_id(user_id).points


class TestApproveScenario:

    def test_approved_price_becomes_lowest_and_rewards_submitter(self):
        world = _World()
        submitted = world.submit.handle(ALICE, "P", "S", "150.00")
        assert world.lowest.handle("P") is None

        reviewed = world.review.handle(RITA, submitted.id, "approve")

        assert reviewed.state == "verified"
        assert reviewed.reviewed_by == "rita"
        quote = world.lowest.handle("P")
        assert quote.amount == "$150.00"
        assert quote.store_name == "Dia"
        assert world.points("alice") == 10

    def test_cheaper_approved_price_wins(self):
        world = _World()
        expensive = world.submit.handle(ALICE, "P", "S", "200")
        cheap = world.submit.handle(ALICE, "P", "T", "150")

        world.review.handle(RITA, expensive.id, "approve")
        world.review.handle(RITA, cheap.id, "approve")

        quote = world.lowest.handle("P")
        assert quote.price_id == cheap.id
        assert quote.store_name == "Coto"
        assert world.points("alice") == 20

    def test_pending_price_never_counts(self):
        world = _World()
        approved = world.submit.handle(ALICE, "P", "S", "200")
        world.submit.handle(ALICE, "P", "T", "1")
        world.review.handle(RITA, approved.id, "approve")

        assert world.lowest.handle("P").price_id == approved.id


class TestRejectScenario:

    def test_rejection_leaves_lowest_and_points_untouched(self):
        world = _World()
        kept = world.submit.handle(ALICE, "P", "S", "150")
        world.review.handle(RITA, kept.id, "approve")
        bogus = world.submit.handle(ALICE, "P", "T", "5")

        reviewed = world.review.handle(RITA, bogus.id, "reject")

        assert reviewed.state == "rejected"
        assert reviewed.verified is False
        assert world.lowest.handle("P").price_id == kept.id
        assert world.points("alice") == 10

    def test_rejection_is_audited(self):
        world = _World()
        bogus = world.submit.handle(ALICE, "P", "S", "5")
        world.review.handle(RITA, bogus.id, "reject")

        detail = world.show_price.handle(bogus.id)

        assert detail.price.state == "rejected"
        assert len(detail.validations) == 1
        assert detail.validations[0].decision == "rechazado"
        assert detail.validations[0].reviewer_id == "rita"


class TestReviewGuards:

    def test_second_review_fails(self):
        world = _World()
        submitted = world.submit.handle(ALICE, "P", "S", "150")
        world.review.handle(RITA, submitted.id, "approve")

        with pytest.raises(NotPendingError):
            world.review.handle(RITA, submitted.id, "reject")

        assert world.show_price.handle(submitted.id).price.state == "verified"
        assert len(world.validations.list_all()) == 1
        assert world.points("alice") == 10

    def test_contributor_cannot_review(self):
        world = _World()
        submitted = world.submit.handle(ALICE, "P", "S", "150")
        with pytest.raises(UnauthorizedError):
            world.review.handle(ALICE, submitted.id, "approve")
        assert world.show_price.handle(submitted.id).price.state == "pending"

    def test_anonymous_cannot_review(self):
        world = _World()
        submitted = world.submit.handle(ALICE, "P", "S", "150")
        with pytest.raises(UnauthorizedError, match="signed in"):
            world.review.handle(Session.anonymous(), submitted.id, "approve")

    def test_unknown_action(self):
        world = _World()
        submitted = world.submit.handle(ALICE, "P", "S", "150")
        with pytest.raises(ValidationError, match="Unknown review action"):
            world.review.handle(RITA, submitted.id, "maybe")
        assert world.validations.list_all() == []

    def test_action_is_case_insensitive(self):
        world = _World()
        submitted = world.submit.handle(ALICE, "P", "S", "150")
        assert world.review.handle(RITA, submitted.id, " APPROVE ").state == "verified"
