"""Totals per category over half-open date ranges."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from spendtrack.errors import StorageError, ValidationError
from spendtrack.services.aggregation import totals_by_category, totals_for_month


class _BrokenTransactionRepo:
    def totals_by_category(self, start, end):
        raise OperationalError("SELECT", {}, Exception("no such table: transactions"))


def test_start_is_included_and_end_is_excluded(transaction_repo, transaction_factory):
    transaction_factory(amount=10.0, category="fun", date="2024-02-01")
    transaction_factory(amount=2.5, category="fun", date="2024-02-29")
    transaction_factory(amount=100.0, category="fun", date="2024-03-01")

    totals = totals_by_category("2024-02-01", "2024-03-01", repository=transaction_repo)

    assert totals == {"fun": 12.5}


def test_categories_without_rows_are_absent(transaction_repo, transaction_factory):
    transaction_factory(amount=8.0, category="groceries", date="2024-06-03")

    totals = totals_by_category("2024-06-01", "2024-07-01", repository=transaction_repo)

    assert "fun" not in totals
    assert totals["groceries"] == 8.0


def test_totals_for_month_defaults_missing_categories(transaction_repo, transaction_factory, categories):
    transaction_factory(amount=8.0, category="groceries", date="2024-06-03")
    transaction_factory(amount=4.0, category="groceries", date="2024-06-04")

    totals = totals_for_month("2024-06", repository=transaction_repo, categories=categories)

    assert totals == {"fun": 0.0, "groceries": 12.0, "boucherie": 0.0}


def test_totals_for_december_roll_into_next_year(transaction_repo, transaction_factory, categories):
    transaction_factory(amount=30.0, category="fun", date="2024-12-31")
    transaction_factory(amount=70.0, category="fun", date="2025-01-01")

    totals = totals_for_month("2024-12", repository=transaction_repo, categories=categories)

    assert totals["fun"] == 30.0


def test_deleted_transactions_disappear_from_totals(transaction_repo, transaction_factory):
    keep = transaction_factory(amount=5.0, category="fun", date="2024-06-10")
    drop = transaction_factory(amount=7.0, category="fun", date="2024-06-11")

    transaction_repo.delete_many([drop.id])

    totals = totals_by_category("2024-06-01", "2024-07-01", repository=transaction_repo)
    assert totals == {"fun": keep.amount}


@pytest.mark.parametrize("bound", ["2024-6-01", "2024-06-31", "June", "", "2024-06-01\n"])
def test_malformed_bounds_are_rejected(transaction_repo, bound):
    with pytest.raises(ValidationError):
        totals_by_category(bound, "2024-07-01", repository=transaction_repo)


def test_storage_failure_surfaces_as_could_not_load_totals():
    with pytest.raises(StorageError, match="Could not load totals"):
        totals_by_category("2024-06-01", "2024-07-01", repository=_BrokenTransactionRepo())
