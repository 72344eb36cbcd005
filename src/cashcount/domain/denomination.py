"""Denomination reference catalog."""

from decimal import Decimal
from typing import Optional

from cashcount.database.base import Database
from cashcount.domain.entities import Denomination as DenominationEntity
from cashcount.domain.errors import ValidationError
from cashcount.logging_config import get_logger

logger = get_logger("domain.denomination")


# Default catalog, ids assigned in this order
DEFAULT_DENOMINATIONS = [
    Decimal("2000"),
    Decimal("500"),
    Decimal("200"),
    Decimal("100"),
    Decimal("50"),
    Decimal("20"),
    Decimal("10"),
    Decimal("5"),
    Decimal("2"),
    Decimal("1"),
]


class DenominationService:
    """Read access to the denomination catalog, plus seeding."""

    def __init__(self, db: Database):
        """Initialize denomination service.

        Args:
            db: Database instance
        """
        self.db = db

    def lookup(self, denomination_id: int) -> Optional[Decimal]:
        """Return the value of a denomination, or None if it is not in the catalog."""
        denomination = self.db.get_denomination(denomination_id)
        if denomination is None:
            return None
        return denomination.value

    def list_all(self) -> list[DenominationEntity]:
        """List all denominations, highest value first."""
        return self.db.list_denominations()

    def snapshot(self) -> dict[int, Decimal]:
        """Load the whole catalog as an id -> value mapping in one read."""
        return {d.id: d.value for d in self.db.list_denominations()}

    def value_index(self) -> dict[Decimal, int]:
        """Load the catalog as a value -> id mapping.

        When several denominations share a value, the lowest id wins.
        """
        index: dict[Decimal, int] = {}
        for denomination in sorted(self.db.list_denominations(), key=lambda d: d.id):
            index.setdefault(denomination.value, denomination.id)
        return index

    def add_denomination(self, value: Decimal, denomination_id: Optional[int] = None) -> int:
        """Add a denomination to the catalog.

        Raises:
            ValidationError: If value is not positive
            ConflictError: If denomination_id is already used
        """
        if value <= 0:
            raise ValidationError(f"Denomination value must be positive, got {value}")
        new_id = self.db.create_denomination(value=value, denomination_id=denomination_id)
        logger.info("Added denomination %s with value %s", new_id, value)
        return new_id

    def seed_defaults(self, force: bool = False) -> int:
        """Populate the catalog with DEFAULT_DENOMINATIONS.

        Args:
            force: Replace an existing catalog instead of refusing

        Returns:
            Number of denominations created

        Raises:
            ValidationError: If the catalog is not empty and force is False,
                or if statement lines still reference the current catalog
        """
        existing = self.db.list_denominations()
        if existing and not force:
            raise ValidationError(
                f"Denomination catalog already has {len(existing)} entries. Use --force to replace it."
            )
        if existing and self.db.count_breakdown_lines():
            raise ValidationError(
                "Cannot replace denominations while statements still reference them. "
                "Delete those statements first."
            )

        with self.db.transaction():
            if existing:
                self.db.delete_all_denominations()
            for position, value in enumerate(DEFAULT_DENOMINATIONS, start=1):
                self.db.create_denomination(value=value, denomination_id=position)

        logger.info("Seeded %d default denominations", len(DEFAULT_DENOMINATIONS))
        return len(DEFAULT_DENOMINATIONS)
