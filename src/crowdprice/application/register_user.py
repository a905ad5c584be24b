"""Application service: Register User use case.

Creates the profile document that accompanies a new sign-up. Every new
user starts as a plain contributor with zero points.
"""

from __future__ import annotations

import structlog

from crowdprice.application.dto import ProfileDTO, profile_to_dto
from crowdprice.domain.model.user import UserProfile
from crowdprice.domain.repository.profile_repository import ProfileRepository

logger = structlog.get_logger(__name__)


class RegisterUserHandler:

    def __init__(self, profile_repo: ProfileRepository) -> None:
        self._profile_repo = profile_repo

    def handle(self, user_id: str, name: str, email: str) -> ProfileDTO:
        profile = UserProfile.register(user_id=user_id, name=name, email=email)
        self._profile_repo.add(profile)
        logger.info("user_registered", user_id=profile.id)
        return profile_to_dto(profile)
