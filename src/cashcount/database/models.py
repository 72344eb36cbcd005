"""SQLAlchemy models for cashcount database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    CheckConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session
from sqlalchemy.pool import StaticPool

Base = declarative_base()


class User(Base):
    """Registered user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False)
    password = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    statements = relationship("Statement", back_populates="owner")


class Denomination(Base):
    """Reference catalog of currency denominations."""

    __tablename__ = "denomination_master"

    id = Column(Integer, primary_key=True)
    value = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (CheckConstraint("value > 0", name="ck_denomination_value_positive"),)


class Statement(Base):
    """Statement header model."""

    __tablename__ = "statements"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    store_name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    owner = relationship("User", back_populates="statements")
    lines = relationship(
        "StatementDenomination",
        back_populates="statement",
        cascade="all, delete-orphan",
    )


class StatementDenomination(Base):
    """Breakdown line: count of one denomination within a statement."""

    __tablename__ = "statement_denominations"

    id = Column(Integer, primary_key=True)
    statement_id = Column(
        Integer, ForeignKey("statements.id", ondelete="CASCADE"), nullable=False
    )
    denomination_id = Column(Integer, ForeignKey("denomination_master.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_line_quantity_non_negative"),)

    # Relationships
    statement = relationship("Statement", back_populates="lines")
    denomination = relationship("Denomination")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite only enforces foreign keys (and ON DELETE CASCADE) when asked to."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _is_in_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    An in-memory SQLite database lives inside a single connection, so every
    session (and every request thread) is handed that same connection.
    """
    if _is_in_memory_sqlite(database_url):
        engine = create_engine(
            database_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
