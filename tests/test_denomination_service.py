"""Tests for DenominationService."""

import pytest
from decimal import Decimal

from cashcount.domain.denomination import DEFAULT_DENOMINATIONS
from cashcount.domain.errors import ConflictError, ValidationError


def test_lookup_known_and_unknown(denomination_service, seeded_denominations):
    """Known ids resolve to their value, unknown ids to None."""
    assert denomination_service.lookup(seeded_denominations[Decimal("500")]) == Decimal("500")
    assert denomination_service.lookup(999) is None


def test_list_all_descending(denomination_service, seeded_denominations):
    """The catalog lists highest value first."""
    values = [d.value for d in denomination_service.list_all()]
    assert values == sorted(values, reverse=True)
    assert values == DEFAULT_DENOMINATIONS


def test_snapshot_maps_ids_to_values(denomination_service, seeded_denominations):
    """The snapshot covers the whole catalog."""
    snapshot = denomination_service.snapshot()
    assert len(snapshot) == len(DEFAULT_DENOMINATIONS)
    for value, denomination_id in seeded_denominations.items():
        assert snapshot[denomination_id] == value


def test_seed_defaults_assigns_ids_in_order(denomination_service):
    """Seeding gives 2000 id 1 down to 1 with id 10."""
    assert denomination_service.seed_defaults() == 10
    assert denomination_service.lookup(1) == Decimal("2000")
    assert denomination_service.lookup(10) == Decimal("1")


def test_seed_defaults_refuses_non_empty_catalog(denomination_service, seeded_denominations):
    """Seeding twice without force is rejected."""
    with pytest.raises(ValidationError, match="--force"):
        denomination_service.seed_defaults()


def test_seed_defaults_force_replaces_catalog(denomination_service):
    """Force wipes an unused catalog and seeds the defaults."""
    denomination_service.add_denomination(Decimal("3"), denomination_id=1)

    denomination_service.seed_defaults(force=True)

    assert [d.value for d in denomination_service.list_all()] == DEFAULT_DENOMINATIONS


def test_seed_defaults_force_refuses_catalog_in_use(denomination_service, sample_statement):
    """Force cannot drop denominations that statement lines still point at."""
    with pytest.raises(ValidationError, match="still reference"):
        denomination_service.seed_defaults(force=True)

    assert len(denomination_service.list_all()) == len(DEFAULT_DENOMINATIONS)


def test_add_denomination_rejects_non_positive(denomination_service):
    """Denomination values must be positive."""
    with pytest.raises(ValidationError):
        denomination_service.add_denomination(Decimal("0"))
    with pytest.raises(ValidationError):
        denomination_service.add_denomination(Decimal("-5"))


def test_add_denomination_duplicate_id(denomination_service):
    """An id can only be used once."""
    denomination_service.add_denomination(Decimal("5"), denomination_id=3)
    with pytest.raises(ConflictError):
        denomination_service.add_denomination(Decimal("10"), denomination_id=3)


def test_value_index_prefers_lowest_id(denomination_service):
    """Shared values resolve to the lowest id."""
    denomination_service.add_denomination(Decimal("100"), denomination_id=9)
    denomination_service.add_denomination(Decimal("100"), denomination_id=4)
    denomination_service.add_denomination(Decimal("50"), denomination_id=5)

    index = denomination_service.value_index()

    assert index[Decimal("100")] == 4
    assert index[Decimal("100.00")] == 4
    assert index[Decimal("50")] == 5
