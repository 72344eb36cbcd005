"""Shared pytest fixtures for cashcount tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from cashcount.config import Settings
from cashcount.database.factories import create_sqlite_database
from cashcount.domain.denomination import DenominationService
from cashcount.domain.entities import DenominationCount
from cashcount.domain.statement import StatementService
from cashcount.domain.user import UserService

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def token_secret():
    """Secret used to sign tokens in tests."""
    return TEST_SECRET


@pytest.fixture
def denomination_service(temp_db):
    """Create a DenominationService with a temporary database."""
    return DenominationService(temp_db)


@pytest.fixture
def statement_service(temp_db):
    """Create a StatementService with a temporary database."""
    return StatementService(temp_db)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database and cheap hashing."""
    return UserService(temp_db, secret=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def seeded_denominations(denomination_service):
    """Seed the default catalog and return a value -> id mapping."""
    denomination_service.seed_defaults()
    return {d.value: d.id for d in denomination_service.list_all()}


@pytest.fixture
def sample_user(user_service):
    """Register a sample user."""
    return user_service.register("owner@example.com", "owner-password")


@pytest.fixture
def other_user(user_service):
    """Register a second user who owns nothing."""
    return user_service.register("other@example.com", "other-password")


@pytest.fixture
def sample_statement(statement_service, sample_user, seeded_denominations):
    """Create a statement with two breakdown lines (5 x 100, 2 x 50)."""
    return statement_service.create_statement(
        owner_id=sample_user.id,
        store_name="Main Street",
        date=date(2024, 1, 1),
        total_amount=Decimal("600"),
        denomination_details=[
            DenominationCount(denomination_id=seeded_denominations[Decimal("100")], quantity=5),
            DenominationCount(denomination_id=seeded_denominations[Decimal("50")], quantity=2),
        ],
        notes="Morning count",
    )


@pytest.fixture
def settings(temp_db):
    """Settings pointing at the temporary database."""
    return Settings(
        database_url=temp_db.database_url,
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
