"""Abstract repository for Store aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from crowdprice.domain.model.store import Store


class StoreRepository(ABC):

    @abstractmethod
    def get_by_id(self, store_id: str) -> Store | None:
        """Return a store by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, store_ids: Iterable[str]) -> dict[str, Store]:
        """Batched lookup. Unknown IDs are simply absent from the result."""

    @abstractmethod
    def get_by_name(self, name: str) -> Store | None:
        """Return the store with exactly this (case-sensitive) name."""

    @abstractmethod
    def get_or_create(self, candidate: Store) -> tuple[Store, bool]:
        """Return the store named ``candidate.name``, inserting ``candidate``
        if none exists.

        The lookup and the insert happen atomically, so concurrent calls
        with the same name leave exactly one store behind. The boolean is
        True when ``candidate`` was inserted.
        """

    @abstractmethod
    def list_verified(self) -> list[Store]:
        """Return every verified store."""

    @abstractmethod
    def save(self, store: Store) -> None:
        """Persist an updated store."""
