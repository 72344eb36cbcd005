"""Domain model entities for cashcount.

These are pure data classes representing business concepts, independent of
database schema. Storage rows are converted into these by the mappers in
``cashcount.database.mappers``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class User:
    """Registered user domain entity."""

    id: int
    email: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class Denomination:
    """Currency denomination from the reference catalog."""

    id: int
    value: Decimal


@dataclass(frozen=True)
class Statement:
    """Statement header domain entity."""

    id: int
    owner_id: int
    store_name: str
    date: date
    total_amount: Decimal
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class BreakdownLine:
    """One denomination count belonging to a statement."""

    id: int
    statement_id: int
    denomination_id: int
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class StatementLineView:
    """Breakdown line joined with its denomination value."""

    denomination_id: int
    value: Decimal
    quantity: int
    total: Decimal


@dataclass(frozen=True)
class StatementView:
    """Statement header with its breakdown lines nested underneath."""

    statement: Statement
    lines: tuple[StatementLineView, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DenominationCount:
    """Caller-supplied count keyed by denomination id (create)."""

    denomination_id: int
    quantity: int


@dataclass(frozen=True)
class DenominationAmount:
    """Caller-supplied count keyed by denomination value (update).

    ``total`` is what the client computed; the service recomputes it.
    """

    value: Decimal
    quantity: int
    total: Optional[Decimal] = None
