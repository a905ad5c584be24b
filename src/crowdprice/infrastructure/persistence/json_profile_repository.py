"""JSON-file-backed implementation of ProfileRepository."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from crowdprice.domain.exceptions import ConflictError, EntityNotFoundError
from crowdprice.domain.model.user import Role, UserProfile
from crowdprice.domain.repository.profile_repository import ProfileRepository
from crowdprice.infrastructure.persistence.json_document_store import JsonDocumentStore


class JsonProfileRepository(JsonDocumentStore, ProfileRepository):

    # --- ProfileRepository interface ------------------------------------------

    def get_by_id(self, user_id: str) -> UserProfile | None:
        for raw in self._read():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    def get_many(self, user_ids: Iterable[str]) -> dict[str, UserProfile]:
        wanted = set(user_ids)
        return {
            raw["id"]: self._to_domain(raw)
            for raw in self._read()
            if raw["id"] in wanted
        }

    def add(self, profile: UserProfile) -> None:
        with self._transaction() as records:
            for raw in records:
                if raw["id"] == profile.id:
                    raise ConflictError(f"User '{profile.id}' is already registered")
                if raw["email"] == profile.email:
                    raise ConflictError(f"Email {profile.email} is already registered")
            records.append(self._to_raw(profile))

    def increment_points(self, user_id: str, amount: int) -> int:
        with self._transaction() as records:
            raw = self._find(records, user_id)
            raw["points"] = raw.get("points", 0) + amount
            return raw["points"]

    def increment_points_once(self, user_id: str, amount: int, award_key: str) -> int | None:
        with self._locked():
            records = self._load_raw()
            raw = self._find(records, user_id)
            awards = raw.setdefault("awards", [])
            if award_key in awards:
                return None
            awards.append(award_key)
            raw["points"] = raw.get("points", 0) + amount
            self._persist_raw(records)
            return raw["points"]

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _find(records: list[dict], user_id: str) -> dict:
        for raw in records:
            if raw["id"] == user_id:
                return raw
        raise EntityNotFoundError(f"User '{user_id}' not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(profile: UserProfile) -> dict:
        return {
            "id": profile.id,
            "name": profile.name,
            "email": profile.email,
            "role": profile.role.value,
            "points": profile.points,
            "awards": [],
            "registered_at": profile.registered_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> UserProfile:
        return UserProfile(
            id=raw["id"],
            name=raw["name"],
            email=raw["email"],
            role=Role(raw.get("role", Role.USER.value)),
            points=raw.get("points", 0),
            registered_at=datetime.fromisoformat(raw["registered_at"]),
        )
