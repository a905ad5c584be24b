"""Domain service: Price Review workflow.

Moves a pending price to VERIFIED or REJECTED on behalf of a reviewer,
writes the Validation audit record and, on approval, rewards the
submitter.

Like every multi-step flow in this package it works in two phases:
  Phase 1 -- load and validate: reviewer role, price existence, submitter
             profile.  Nothing is written if any check fails.
  Phase 2 -- commit: a compare-and-swap on the stored state (only one
             concurrent reviewer can win), then the audit record, then the
             reward.  Points are never credited before the transition is
             stored.

Phase 2 is resumable. The audit record is written at most once per price
and the reward at most once per price, so when a step after the
compare-and-swap fails, the same reviewer repeating the same decision
completes the missing steps instead of being told the price is no longer
pending.
"""

from __future__ import annotations

import structlog

from crowdprice.domain.exceptions import (
    EntityNotFoundError,
    NotPendingError,
    UnauthorizedError,
)
from crowdprice.domain.model.price import Price, PriceState
from crowdprice.domain.model.user import UserProfile
from crowdprice.domain.model.validation import Decision, Validation
from crowdprice.domain.repository.price_repository import PriceRepository
from crowdprice.domain.repository.profile_repository import ProfileRepository
from crowdprice.domain.repository.validation_repository import ValidationRepository
from crowdprice.domain.service.rewards_ledger import (
    PRICE_APPROVED_REWARD,
    RewardsLedger,
    price_approved_award_key,
)

logger = structlog.get_logger(__name__)

_OUTCOME = {
    Decision.APPROVED: PriceState.VERIFIED,
    Decision.REJECTED: PriceState.REJECTED,
}


class PriceReviewService:

    def __init__(
        self,
        price_repo: PriceRepository,
        validation_repo: ValidationRepository,
        profile_repo: ProfileRepository,
        rewards: RewardsLedger,
    ) -> None:
        self._price_repo = price_repo
        self._validation_repo = validation_repo
        self._profile_repo = profile_repo
        self._rewards = rewards

    def review(self, price_id: str, reviewer_id: str, decision: Decision) -> Price:
        """Apply ``decision`` to the price and return its reviewed state.

        Raises:
            UnauthorizedError: reviewer unknown or not a supervisor/admin.
            EntityNotFoundError: price or its submitter's profile is missing.
            NotPendingError: the price was already reviewed, including by a
                concurrent reviewer that won the race. A repeat of a review
                whose audit record or reward is still missing finishes that
                review instead.
        """
        # Phase 1: load and validate
        reviewer = self._profile_repo.get_by_id(reviewer_id)
        if reviewer is None or not reviewer.can_review:
            raise UnauthorizedError("Only supervisors and admins can review prices")

        price = self._price_repo.get_by_id(price_id)
        if price is None:
            raise EntityNotFoundError(f"Price '{price_id}' not found")

        if not price.is_pending:
            return self._resume(price, reviewer, decision)

        if decision is Decision.APPROVED:
            if self._profile_repo.get_by_id(price.submitted_by) is None:
                raise EntityNotFoundError(
                    f"Submitter profile '{price.submitted_by}' not found"
                )
            price.approve(reviewer.id)
        else:
            price.reject(reviewer.id)

        # Phase 2: commit
        if not self._price_repo.replace_if_state(price, PriceState.PENDING):
            raise NotPendingError(f"Price {price_id} was already reviewed")

        self._complete(price, reviewer, decision)
        logger.info(
            "price_reviewed",
            price_id=price.id,
            reviewer_id=reviewer.id,
            decision=decision.value,
        )
        return price

    # --- Internal helpers -----------------------------------------------------

    def _complete(self, price: Price, reviewer: UserProfile, decision: Decision) -> bool:
        """Write whichever follow-up steps are missing. True if any was."""
        recorded = self._validation_repo.add_if_absent(
            Validation.record(price.id, reviewer.id, decision)
        )
        rewarded = False
        if decision is Decision.APPROVED:
            rewarded = self._rewards.credit_once(
                price.submitted_by,
                PRICE_APPROVED_REWARD,
                award_key=price_approved_award_key(price.id),
                reason="price_approved",
            )
        return recorded or rewarded

    def _resume(self, price: Price, reviewer: UserProfile, decision: Decision) -> Price:
        # Only the reviewer whose decision was stored may finish it.
        if price.state != _OUTCOME[decision] or price.reviewed_by != reviewer.id:
            raise NotPendingError(
                f"Price {price.id} was already reviewed "
                f"(current state is {price.state.value})"
            )
        if not self._complete(price, reviewer, decision):
            raise NotPendingError(f"Price {price.id} was already reviewed")

        logger.warning(
            "price_review_resumed",
            price_id=price.id,
            reviewer_id=reviewer.id,
            decision=decision.value,
        )
        return price
