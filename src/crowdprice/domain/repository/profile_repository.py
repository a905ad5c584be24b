"""Abstract repository for UserProfile documents.

Profiles belong to the external identity/profile store; the core only
reads them and bumps their points balance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from crowdprice.domain.model.user import UserProfile


class ProfileRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> UserProfile | None:
        """Return a profile by user ID, or None if not found."""

    @abstractmethod
    def get_many(self, user_ids: Iterable[str]) -> dict[str, UserProfile]:
        """Batched lookup. Unknown IDs are simply absent from the result."""

    @abstractmethod
    def add(self, profile: UserProfile) -> None:
        """Insert a new profile.

        Raises ConflictError if the ID or the email is already registered.
        """

    @abstractmethod
    def increment_points(self, user_id: str, amount: int) -> int:
        """Atomically add ``amount`` to the stored balance.

        Returns the new balance. Raises EntityNotFoundError for an
        unknown user.
        """

    @abstractmethod
    def increment_points_once(self, user_id: str, amount: int, award_key: str) -> int | None:
        """Like ``increment_points``, but at most once per ``award_key``.

        The key is stored on the profile in the same write as the new
        balance. Returns the new balance, or None when the award was
        already applied.
        """
