"""Application service: Show Profile use case (query)."""

from __future__ import annotations

from crowdprice.application.dto import ProfileDTO, profile_to_dto
from crowdprice.domain.exceptions import EntityNotFoundError
from crowdprice.domain.repository.profile_repository import ProfileRepository


class ShowProfileHandler:

    def __init__(self, profile_repo: ProfileRepository) -> None:
        self._profile_repo = profile_repo

    def handle(self, user_id: str) -> ProfileDTO:
        profile = self._profile_repo.get_by_id(user_id)
        if profile is None:
            raise EntityNotFoundError(f"User '{user_id}' not found")
        return profile_to_dto(profile)
