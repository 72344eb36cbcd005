"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from cashcount.domain.entities import (
    User,
    Denomination,
    Statement,
    BreakdownLine,
    StatementView,
)


class Database(ABC):
    """Abstract database interface for cashcount.

    Every mutating method commits immediately unless it runs inside
    ``transaction()``, in which case the outermost block decides.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def clone(self) -> "Database":
        """Return a new handle on the same database with its own session."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Group writes atomically: commit on success, roll back on any exception."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, email: str, password_hash: str) -> int:
        """Create a user. Returns user ID.

        Raises:
            ConflictError: If the email is already registered
        """
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Denomination operations
    @abstractmethod
    def create_denomination(self, value: Decimal, denomination_id: Optional[int] = None) -> int:
        """Add a denomination to the catalog. Returns denomination ID."""
        pass

    @abstractmethod
    def get_denomination(self, denomination_id: int) -> Optional[Denomination]:
        """Get denomination by ID."""
        pass

    @abstractmethod
    def list_denominations(self) -> list[Denomination]:
        """List all denominations, highest value first."""
        pass

    @abstractmethod
    def delete_all_denominations(self) -> int:
        """Remove every denomination from the catalog. Returns number removed."""
        pass

    # Statement operations
    @abstractmethod
    def create_statement(
        self,
        owner_id: int,
        store_name: str,
        date: date,
        total_amount: Decimal,
        notes: Optional[str] = None,
    ) -> int:
        """Create a statement header. Returns statement ID."""
        pass

    @abstractmethod
    def get_statement(self, statement_id: int) -> Optional[Statement]:
        """Get statement header by ID."""
        pass

    @abstractmethod
    def update_statement(
        self,
        statement_id: int,
        store_name: str,
        date: date,
        total_amount: Decimal,
        notes: Optional[str] = None,
    ) -> None:
        """Overwrite all header fields of a statement."""
        pass

    @abstractmethod
    def delete_statement(self, statement_id: int) -> None:
        """Delete a statement header together with its breakdown lines."""
        pass

    @abstractmethod
    def list_statement_views(
        self, owner_id: Optional[int] = None, statement_id: Optional[int] = None
    ) -> list[StatementView]:
        """List statements with their breakdown lines nested underneath.

        Args:
            owner_id: If given, only statements owned by this user
            statement_id: If given, only this statement

        Statements are ordered by date, newest first. A statement without
        lines carries an empty ``lines`` tuple.
        """
        pass

    # Breakdown line operations
    @abstractmethod
    def add_statement_line(
        self, statement_id: int, denomination_id: int, quantity: int, line_total: Decimal
    ) -> int:
        """Add a breakdown line to a statement. Returns line ID."""
        pass

    @abstractmethod
    def list_statement_lines(self, statement_id: int) -> list[BreakdownLine]:
        """Get all breakdown lines of a statement."""
        pass

    @abstractmethod
    def delete_statement_lines(self, statement_id: int) -> int:
        """Delete all breakdown lines of a statement. Returns number removed."""
        pass

    @abstractmethod
    def count_breakdown_lines(self) -> int:
        """Count breakdown lines across all statements."""
        pass
