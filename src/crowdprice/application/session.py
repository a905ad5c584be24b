"""Caller identity passed explicitly into every use case.

A ``Session`` is opened once per client session from the identity
provider and the profile store, then handed to each handler. Handlers
never read ambient "current user" state.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from crowdprice.domain.exceptions import (
    EntityNotFoundError,
    UnauthorizedError,
    UnavailableError,
)
from crowdprice.domain.model.user import UserProfile
from crowdprice.domain.repository.identity_provider import IdentityProvider
from crowdprice.domain.repository.profile_repository import ProfileRepository

logger = structlog.get_logger(__name__)

MAX_PROFILE_ATTEMPTS = 3


@dataclass(frozen=True)
class Session:
    """Who is calling. ``user_id`` is None for anonymous sessions."""

    user_id: str | None = None
    profile: UserProfile | None = None

    @staticmethod
    def anonymous() -> Session:
        return Session()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def require_user(self, action: str) -> str:
        """Return the caller's user ID or refuse anonymous callers."""
        if self.user_id is None:
            raise UnauthorizedError(f"You must be signed in to {action}")
        return self.user_id


def authorize_reviewer(session: Session, profile_repo: ProfileRepository) -> UserProfile:
    """Check the reviewer role against the stored profile.

    The role cached on the session is not trusted; it is read again from
    the profile store.
    """
    user_id = session.require_user("review prices")
    profile = profile_repo.get_by_id(user_id)
    if profile is None or not profile.can_review:
        raise UnauthorizedError("Only supervisors and admins can review prices")
    return profile


class StartSessionHandler:
    """Open a session for whoever the identity provider says is signed in.

    The profile lookup is the only storage call in the package that is
    retried: up to three attempts with linear backoff, and only when the
    store is unavailable. A missing profile fails immediately.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        profile_repo: ProfileRepository,
        attempts: int = MAX_PROFILE_ATTEMPTS,
        wait_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._identity = identity
        self._profile_repo = profile_repo
        self._attempts = max(1, min(attempts, MAX_PROFILE_ATTEMPTS))
        self._wait_seconds = wait_seconds
        self._sleep = sleep

    def handle(self) -> Session:
        user_id = self._identity.current_user_id()
        if user_id is None:
            return Session.anonymous()

        retryer = Retrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_incrementing(start=self._wait_seconds, increment=self._wait_seconds),
            retry=retry_if_exception_type(UnavailableError),
            before_sleep=_log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        profile = retryer(self._profile_repo.get_by_id, user_id)
        if profile is None:
            raise EntityNotFoundError(f"No profile registered for user '{user_id}'")

        logger.debug("session_started", user_id=user_id, role=profile.role.value)
        return Session(user_id=user_id, profile=profile)


def _log_retry(retry_state) -> None:
    logger.warning(
        "profile_lookup_retry",
        attempt=retry_state.attempt_number,
        error=str(retry_state.outcome.exception()),
    )
