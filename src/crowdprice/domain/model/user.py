"""UserProfile -- the contributor/reviewer record kept by the profile store.

The authentication provider owns identities; this module only models the
profile document attached to an identity: role and points balance.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from crowdprice.domain.exceptions import ValidationError


class Role(Enum):
    USER = "usuario"
    SUPERVISOR = "supervisor"
    ADMIN = "admin"


REVIEWER_ROLES = frozenset({Role.SUPERVISOR, Role.ADMIN})


@dataclass
class UserProfile:
    """Profile of a registered user.

    ``points`` only grows: awards are additive and nothing spends them.
    Role changes are administrative and happen outside this package.
    """

    id: str
    name: str
    email: str
    role: Role = Role.USER
    points: int = 0
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def register(user_id: str, name: str, email: str) -> UserProfile:
        """Create the profile for a newly signed-up user."""
        if not user_id or not user_id.strip():
            raise ValidationError("User id is required")
        if not name or not name.strip():
            raise ValidationError("User name is required")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid email address: {email!r}")
        return UserProfile(
            id=user_id.strip(),
            name=name.strip(),
            email=email.strip().lower(),
        )

    @property
    def can_review(self) -> bool:
        return self.role in REVIEWER_ROLES
