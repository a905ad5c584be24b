"""Abstract accessor for the authentication provider."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IdentityProvider(ABC):

    @abstractmethod
    def current_user_id(self) -> str | None:
        """Return the authenticated user's ID, or None when signed out."""
