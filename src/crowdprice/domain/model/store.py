"""Store aggregate.

A store is identified for de-duplication purposes by its exact name.
Contributors can create stores on the fly while submitting a price;
those start unverified until a reviewer vouches for them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from crowdprice.domain.exceptions import ValidationError


@dataclass
class Store:

    id: str
    name: str
    address: str = ""
    verified: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(name: str, address: str = "", verified: bool = False) -> Store:
        # Names are matched exactly, so only surrounding whitespace is trimmed.
        if not name or not name.strip():
            raise ValidationError("Store name is required")
        return Store(
            id=uuid.uuid4().hex,
            name=name.strip(),
            address=(address or "").strip(),
            verified=verified,
        )

    def verify(self) -> None:
        self.verified = True
