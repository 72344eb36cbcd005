"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from cashcount.domain import entities
from cashcount.domain.errors import ConflictError, NotFoundError, StorageError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_user_returns_domain_model(self, temp_db):
        """Test that get_user returns a domain User entity."""
        user_id = temp_db.create_user(email="a@example.com", password_hash="hash")

        user = temp_db.get_user(user_id)

        assert isinstance(user, entities.User)
        assert user.id == user_id
        assert user.email == "a@example.com"
        assert user.password_hash == "hash"
        assert isinstance(user.created_at, datetime)

    def test_get_user_by_email(self, temp_db):
        """Test looking a user up by email."""
        user_id = temp_db.create_user(email="a@example.com", password_hash="hash")

        assert temp_db.get_user_by_email("a@example.com").id == user_id
        assert temp_db.get_user_by_email("missing@example.com") is None

    def test_duplicate_email_conflicts(self, temp_db):
        """Test that registering the same email twice raises ConflictError."""
        temp_db.create_user(email="a@example.com", password_hash="hash")

        with pytest.raises(ConflictError, match="already exists"):
            temp_db.create_user(email="a@example.com", password_hash="other")

        assert len(temp_db.list_users()) == 1

    def test_concurrent_duplicate_email_conflicts(self, temp_db, monkeypatch):
        """An email registered by another handle after the lookup still conflicts."""
        other = temp_db.clone()

        def lookup_then_lose_race(email):
            other.create_user(email=email, password_hash="first")
            return None

        monkeypatch.setattr(temp_db, "get_user_by_email", lookup_then_lose_race)

        with pytest.raises(ConflictError, match="already exists"):
            temp_db.create_user(email="a@example.com", password_hash="second")

        other.disconnect()
        assert [u.password_hash for u in temp_db.list_users()] == ["first"]

    def test_list_denominations_highest_first(self, temp_db):
        """Test that denominations come back ordered by value, descending."""
        temp_db.create_denomination(Decimal("10"))
        temp_db.create_denomination(Decimal("500"))
        temp_db.create_denomination(Decimal("0.50"))

        denominations = temp_db.list_denominations()

        assert [d.value for d in denominations] == [Decimal("500"), Decimal("10"), Decimal("0.50")]
        for d in denominations:
            assert isinstance(d, entities.Denomination)

    def test_create_denomination_with_explicit_id(self, temp_db):
        """Test that an explicit id is honoured and cannot be reused."""
        assert temp_db.create_denomination(Decimal("100"), denomination_id=7) == 7
        assert temp_db.get_denomination(7).value == Decimal("100")

        with pytest.raises(ConflictError):
            temp_db.create_denomination(Decimal("200"), denomination_id=7)

    def test_get_statement_returns_domain_model(self, temp_db, sample_user):
        """Test that get_statement returns a domain Statement entity."""
        statement_id = temp_db.create_statement(
            owner_id=sample_user.id,
            store_name="Store",
            date=date(2024, 1, 15),
            total_amount=Decimal("12.50"),
            notes="note",
        )

        statement = temp_db.get_statement(statement_id)

        assert isinstance(statement, entities.Statement)
        assert statement.owner_id == sample_user.id
        assert statement.store_name == "Store"
        assert statement.date == date(2024, 1, 15)
        assert statement.total_amount == Decimal("12.50")
        assert statement.notes == "note"

    def test_update_missing_statement(self, temp_db):
        """Test that updating a missing statement raises NotFoundError."""
        with pytest.raises(NotFoundError):
            temp_db.update_statement(
                statement_id=99, store_name="x", date=date(2024, 1, 1), total_amount=Decimal("0")
            )

    def test_delete_statement_cascades_to_lines(self, temp_db, sample_user):
        """Test that deleting a header removes its lines."""
        denomination_id = temp_db.create_denomination(Decimal("20"))
        statement_id = temp_db.create_statement(
            owner_id=sample_user.id, store_name="S", date=date(2024, 1, 1), total_amount=Decimal("40")
        )
        temp_db.add_statement_line(statement_id, denomination_id, 2, Decimal("40"))

        temp_db.delete_statement(statement_id)

        assert temp_db.get_statement(statement_id) is None
        assert temp_db.list_statement_lines(statement_id) == []

    def test_delete_statement_lines(self, temp_db, sample_user):
        """Test that delete_statement_lines clears every line of one statement only."""
        denomination_id = temp_db.create_denomination(Decimal("20"))
        first = temp_db.create_statement(
            owner_id=sample_user.id, store_name="A", date=date(2024, 1, 1), total_amount=Decimal("0")
        )
        second = temp_db.create_statement(
            owner_id=sample_user.id, store_name="B", date=date(2024, 1, 1), total_amount=Decimal("0")
        )
        temp_db.add_statement_line(first, denomination_id, 1, Decimal("20"))
        temp_db.add_statement_line(first, denomination_id, 2, Decimal("40"))
        temp_db.add_statement_line(second, denomination_id, 3, Decimal("60"))

        assert temp_db.delete_statement_lines(first) == 2
        assert temp_db.list_statement_lines(first) == []
        assert len(temp_db.list_statement_lines(second)) == 1

    def test_statement_views_have_empty_lines_not_placeholders(self, temp_db, sample_user):
        """Test that a header with no lines lists with an empty tuple."""
        statement_id = temp_db.create_statement(
            owner_id=sample_user.id, store_name="S", date=date(2024, 1, 1), total_amount=Decimal("0")
        )

        views = temp_db.list_statement_views()

        assert len(views) == 1
        assert isinstance(views[0], entities.StatementView)
        assert views[0].statement.id == statement_id
        assert views[0].lines == ()

    def test_statement_views_filter_by_id(self, temp_db, sample_user):
        """Test narrowing the aggregated listing to one statement."""
        temp_db.create_statement(
            owner_id=sample_user.id, store_name="A", date=date(2024, 1, 1), total_amount=Decimal("0")
        )
        second = temp_db.create_statement(
            owner_id=sample_user.id, store_name="B", date=date(2024, 1, 2), total_amount=Decimal("0")
        )

        views = temp_db.list_statement_views(statement_id=second)

        assert [v.statement.store_name for v in views] == ["B"]


class TestTransactions:
    """Tests for explicit transaction boundaries."""

    def test_commit_on_success(self, temp_db, sample_user):
        """Test that writes inside a successful block are visible to other sessions."""
        with temp_db.transaction():
            statement_id = temp_db.create_statement(
                owner_id=sample_user.id, store_name="S", date=date(2024, 1, 1), total_amount=Decimal("0")
            )

        other = temp_db.clone()
        try:
            assert other.get_statement(statement_id) is not None
        finally:
            other.disconnect()

    def test_rollback_on_exception(self, temp_db, sample_user):
        """Test that an exception undoes every write in the block."""
        denomination_id = temp_db.create_denomination(Decimal("20"))

        with pytest.raises(RuntimeError):
            with temp_db.transaction():
                statement_id = temp_db.create_statement(
                    owner_id=sample_user.id, store_name="S", date=date(2024, 1, 1), total_amount=Decimal("20")
                )
                temp_db.add_statement_line(statement_id, denomination_id, 1, Decimal("20"))
                raise RuntimeError("boom")

        assert temp_db.list_statement_views() == []
        assert temp_db.list_statement_lines(statement_id) == []

    def test_nested_blocks_join_outer(self, temp_db, sample_user):
        """Test that a failure after an inner block still rolls back the inner writes."""
        with pytest.raises(RuntimeError):
            with temp_db.transaction():
                with temp_db.transaction():
                    temp_db.create_statement(
                        owner_id=sample_user.id, store_name="S", date=date(2024, 1, 1), total_amount=Decimal("0")
                    )
                raise RuntimeError("boom")

        assert temp_db.list_statement_views() == []

    def test_database_errors_become_storage_errors(self, temp_db):
        """Test that constraint violations inside a block surface as StorageError."""
        with pytest.raises(StorageError):
            with temp_db.transaction():
                # No such user: the foreign key is enforced
                temp_db.create_statement(
                    owner_id=424242, store_name="S", date=date(2024, 1, 1), total_amount=Decimal("0")
                )

        assert temp_db.list_statement_views() == []
