"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the services never see ORM rows.
"""

from cashcount.domain import entities as domain
from cashcount.database.models import (
    User as ORMUser,
    Denomination as ORMDenomination,
    Statement as ORMStatement,
    StatementDenomination as ORMStatementDenomination,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        password_hash=orm_user.password,
        created_at=orm_user.created_at,
    )


def denomination_to_domain(orm_denomination: ORMDenomination) -> domain.Denomination:
    """Convert SQLAlchemy Denomination model to domain Denomination entity."""
    return domain.Denomination(id=orm_denomination.id, value=orm_denomination.value)


def statement_to_domain(orm_statement: ORMStatement) -> domain.Statement:
    """Convert SQLAlchemy Statement model to domain Statement entity."""
    return domain.Statement(
        id=orm_statement.id,
        owner_id=orm_statement.user_id,
        store_name=orm_statement.store_name,
        date=orm_statement.date,
        total_amount=orm_statement.total_amount,
        notes=orm_statement.notes,
        created_at=orm_statement.created_at,
    )


def breakdown_line_to_domain(orm_line: ORMStatementDenomination) -> domain.BreakdownLine:
    """Convert SQLAlchemy StatementDenomination model to domain BreakdownLine entity."""
    return domain.BreakdownLine(
        id=orm_line.id,
        statement_id=orm_line.statement_id,
        denomination_id=orm_line.denomination_id,
        quantity=orm_line.quantity,
        line_total=orm_line.total,
    )
