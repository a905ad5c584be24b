"""Product aggregate.

Products are created by contributors, either directly or after a barcode
scan finds nothing. They are never deleted; prices reference them by id.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from crowdprice.domain.exceptions import ValidationError


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Product:
    """A product in the catalog.

    ``barcode`` is optional: manually entered products may have none.
    When present it is unique across the catalog, which the repository
    enforces on insert.
    """

    id: str
    name: str
    brand: str
    category: str
    barcode: str | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        brand: str,
        category: str = "",
        barcode: str | None = None,
        created_by: str | None = None,
    ) -> Product:
        """Create a new product, enforcing required fields."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not brand or not brand.strip():
            raise ValidationError("Product brand is required")

        code = barcode.strip() if barcode else None
        return Product(
            id=_new_id(),
            name=name.strip(),
            brand=brand.strip(),
            category=(category or "").strip(),
            barcode=code or None,
            created_by=created_by,
        )

    def matches(self, term: str) -> bool:
        """Search predicate: name/brand substring or exact barcode."""
        if self.barcode is not None and self.barcode == term:
            return True
        needle = term.lower()
        return needle in self.name.lower() or needle in self.brand.lower()
