"""Application service: Review Price use case.

Thin wrapper around the review domain service: resolves the caller and
the requested action, then lets the service enforce the workflow.
"""

from __future__ import annotations

from crowdprice.application.dto import PriceDTO, price_to_dto
from crowdprice.application.session import Session
from crowdprice.domain.model.validation import Decision
from crowdprice.domain.service.price_review_service import PriceReviewService


class ReviewPriceHandler:

    def __init__(self, review_service: PriceReviewService) -> None:
        self._review_service = review_service

    def handle(self, session: Session, price_id: str, action: str) -> PriceDTO:
        """Approve or reject a pending price.

        Args:
            session: The caller; must be a supervisor or admin.
            price_id: The price to review.
            action: ``"approve"`` or ``"reject"``.
        """
        reviewer_id = session.require_user("review prices")
        decision = Decision.from_action(action)
        price = self._review_service.review(price_id, reviewer_id, decision)
        return price_to_dto(price)
