"""Validation -- immutable audit record of a reviewer's decision."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from crowdprice.domain.exceptions import ValidationError


class Decision(Enum):
    APPROVED = "aprobado"
    REJECTED = "rechazado"

    @staticmethod
    def from_action(action: str) -> Decision:
        """Map a reviewer action ('approve' / 'reject') to a decision."""
        normalized = (action or "").strip().lower()
        if normalized == "approve":
            return Decision.APPROVED
        if normalized == "reject":
            return Decision.REJECTED
        raise ValidationError(
            f"Unknown review action {action!r}, expected 'approve' or 'reject'"
        )


@dataclass(frozen=True)
class Validation:
    """One record per reviewed price. Never updated or deleted."""

    id: str
    price_id: str
    reviewer_id: str
    decision: Decision
    decided_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def record(price_id: str, reviewer_id: str, decision: Decision) -> Validation:
        return Validation(
            id=uuid.uuid4().hex,
            price_id=price_id,
            reviewer_id=reviewer_id,
            decision=decision,
        )
