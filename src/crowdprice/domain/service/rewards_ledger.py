"""Domain service: Rewards Ledger.

Credits contribution points to user profiles. The schedule is flat on
purpose: every approved price and every new product earns the same fixed
reward, with no diminishing returns and no rate limiting.
"""

from __future__ import annotations

import structlog

from crowdprice.domain.exceptions import ValidationError
from crowdprice.domain.repository.profile_repository import ProfileRepository

logger = structlog.get_logger(__name__)

PRICE_APPROVED_REWARD = 10
PRODUCT_CREATED_REWARD = 20


def price_approved_award_key(price_id: str) -> str:
    return f"price-approved:{price_id}"


class RewardsLedger:

    def __init__(self, profile_repo: ProfileRepository) -> None:
        self._profile_repo = profile_repo

    def credit_points(self, user_id: str, amount: int, reason: str = "manual") -> int:
        """Add ``amount`` points to ``user_id`` and return the new balance.

        The increment is delegated to the repository so it is applied
        against the stored balance, never against a stale in-memory copy.
        """
        _check_amount(amount)
        balance = self._profile_repo.increment_points(user_id, amount)
        logger.info(
            "points_credited",
            user_id=user_id,
            amount=amount,
            reason=reason,
            balance=balance,
        )
        return balance

    def credit_once(self, user_id: str, amount: int, award_key: str, reason: str) -> bool:
        """Credit ``amount`` unless ``award_key`` was already credited.

        Returns True if the points were added by this call. Safe to repeat
        after a failure: the key and the balance are stored together.
        """
        _check_amount(amount)
        balance = self._profile_repo.increment_points_once(user_id, amount, award_key)
        if balance is None:
            logger.debug("points_already_credited", user_id=user_id, award_key=award_key)
            return False
        logger.info(
            "points_credited",
            user_id=user_id,
            amount=amount,
            reason=reason,
            balance=balance,
        )
        return True


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"Points must be an integer, got {amount!r}")
    if amount < 0:
        raise ValidationError("Points awarded cannot be negative")
