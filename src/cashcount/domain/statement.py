"""Statement domain service.

Keeps a statement header, its breakdown lines and the denomination catalog
consistent. Every multi-step write runs inside a single database transaction,
so a rejected request leaves neither a header nor any lines behind.
"""

from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

from cashcount.database.base import Database
from cashcount.domain.denomination import DenominationService
from cashcount.domain.entities import (
    DenominationAmount,
    DenominationCount,
    Statement as StatementEntity,
    StatementView,
)
from cashcount.domain.errors import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
    negative_quantity,
    statement_access_denied,
    statement_not_found,
    unknown_denomination,
    unknown_denomination_value,
)
from cashcount.logging_config import get_logger

logger = get_logger("domain.statement")


class StatementService:
    """Service for managing cash-denomination statements."""

    def __init__(self, db: Database, denominations: Optional[DenominationService] = None):
        """Initialize statement service.

        Args:
            db: Database instance
            denominations: Denomination catalog (defaults to one over the same db)
        """
        self.db = db
        self.denominations = denominations or DenominationService(db)

    def create_statement(
        self,
        owner_id: int,
        store_name: str,
        date: date,
        total_amount: Decimal,
        denomination_details: Sequence[DenominationCount] = (),
        notes: Optional[str] = None,
    ) -> int:
        """Create a statement with its denomination breakdown.

        All lines are priced from one snapshot of the catalog. Each line total
        is computed here as quantity x value; callers cannot supply it.

        Args:
            owner_id: Authenticated user creating the statement
            store_name: Store visited
            date: Statement date
            total_amount: Total as entered by the user
            denomination_details: (denomination id, quantity) pairs, may be empty
            notes: Optional notes

        Returns:
            Statement ID

        Raises:
            ValidationError: If a denomination id is unknown or a quantity is negative
        """
        snapshot = self.denominations.snapshot()
        priced = []
        for detail in denomination_details:
            value = snapshot.get(detail.denomination_id)
            if value is None:
                logger.warning(
                    "Rejected statement for user %s: unknown denomination %s",
                    owner_id,
                    detail.denomination_id,
                )
                raise ValidationError(unknown_denomination(detail.denomination_id))
            _check_quantity(detail.quantity)
            priced.append((detail.denomination_id, detail.quantity, value * detail.quantity))

        with self.db.transaction():
            statement_id = self.db.create_statement(
                owner_id=owner_id,
                store_name=store_name,
                date=date,
                total_amount=total_amount,
                notes=notes,
            )
            for denomination_id, quantity, line_total in priced:
                self.db.add_statement_line(
                    statement_id=statement_id,
                    denomination_id=denomination_id,
                    quantity=quantity,
                    line_total=line_total,
                )

        logger.info(
            "Created statement %s for user %s with %d lines", statement_id, owner_id, len(priced)
        )
        return statement_id

    def get_statement(self, statement_id: int) -> Optional[StatementEntity]:
        """Get statement header by ID.

        Returns:
            Statement entity or None if not found
        """
        return self.db.get_statement(statement_id)

    def get_statement_view(self, statement_id: int) -> StatementView:
        """Get one statement with its breakdown lines.

        Raises:
            NotFoundError: If the statement doesn't exist
        """
        views = self.db.list_statement_views(statement_id=statement_id)
        if views:
            return views[0]
        raise NotFoundError(statement_not_found(statement_id))

    def list_statements(self, owner_id: Optional[int] = None) -> list[StatementView]:
        """List statements, newest date first, each with its breakdown lines.

        Args:
            owner_id: If given, only this user's statements
        """
        return self.db.list_statement_views(owner_id=owner_id)

    def update_statement(
        self,
        owner_id: int,
        statement_id: int,
        store_name: str,
        date: date,
        total_amount: Decimal,
        denominations: Sequence[DenominationAmount] = (),
        notes: Optional[str] = None,
    ) -> None:
        """Replace a statement's header fields and its whole breakdown.

        Lines are keyed by denomination value. Line totals are recomputed from
        the catalog; a client-supplied total is ignored.

        Raises:
            ForbiddenError: If the statement doesn't exist or belongs to someone else
            ValidationError: If a value is not in the catalog or a quantity is negative
        """
        statement = self.db.get_statement(statement_id)
        if statement is None or statement.owner_id != owner_id:
            logger.warning("User %s denied update of statement %s", owner_id, statement_id)
            raise ForbiddenError(statement_access_denied())

        value_index = self.denominations.value_index()
        priced = []
        for amount in denominations:
            denomination_id = value_index.get(amount.value)
            if denomination_id is None:
                raise ValidationError(unknown_denomination_value(amount.value))
            _check_quantity(amount.quantity)
            priced.append((denomination_id, amount.quantity, amount.value * amount.quantity))

        with self.db.transaction():
            self.db.update_statement(
                statement_id=statement_id,
                store_name=store_name,
                date=date,
                total_amount=total_amount,
                notes=notes,
            )
            self.db.delete_statement_lines(statement_id)
            for denomination_id, quantity, line_total in priced:
                self.db.add_statement_line(
                    statement_id=statement_id,
                    denomination_id=denomination_id,
                    quantity=quantity,
                    line_total=line_total,
                )

        logger.info("Updated statement %s (%d lines)", statement_id, len(priced))

    def delete_statement(self, statement_id: int, owner_id: Optional[int] = None) -> StatementEntity:
        """Delete a statement and all its breakdown lines.

        Args:
            statement_id: Statement to delete
            owner_id: If given, the statement must belong to this user

        Returns:
            The deleted statement header

        Raises:
            NotFoundError: If the statement doesn't exist
            ForbiddenError: If owner_id is given and doesn't match
        """
        statement = self.db.get_statement(statement_id)
        if statement is None:
            raise NotFoundError(statement_not_found(statement_id))
        if owner_id is not None and statement.owner_id != owner_id:
            logger.warning("User %s denied delete of statement %s", owner_id, statement_id)
            raise ForbiddenError(statement_access_denied())

        with self.db.transaction():
            self.db.delete_statement(statement_id)

        logger.info("Deleted statement %s", statement_id)
        return statement


def _check_quantity(quantity: int) -> None:
    if quantity < 0:
        raise ValidationError(negative_quantity(quantity))
