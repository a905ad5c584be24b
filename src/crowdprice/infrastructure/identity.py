"""Identity provider backed by configuration.

The command line has no login screen: the signed-in user is whatever
``--user`` or ``CROWDPRICE_USER`` says.
"""

from __future__ import annotations

from crowdprice.domain.repository.identity_provider import IdentityProvider


class StaticIdentityProvider(IdentityProvider):

    def __init__(self, user_id: str | None) -> None:
        self._user_id = user_id.strip() if user_id and user_id.strip() else None

    def current_user_id(self) -> str | None:
        return self._user_id
