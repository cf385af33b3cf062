"""Ledger write paths: validation, persistence and change notifications."""

from __future__ import annotations

from datetime import date

import pytest

from spendtrack.errors import NotFoundError, ValidationError
from spendtrack.services import ledger_service


@pytest.fixture
def notifications(bus):
    calls: list[int] = []
    bus.subscribe(lambda: calls.append(1))
    return calls


def _insert(repo, categories, bus, amount=12.0, category="fun", label=None, txn_date="2024-06-01"):
    return ledger_service.insert_transaction(
        amount, category, label, txn_date, repository=repo, categories=categories, bus=bus
    )


def test_insert_persists_and_publishes(transaction_repo, categories, bus, notifications):
    txn = _insert(transaction_repo, categories, bus, amount="9,90", label="  pizza  ")

    assert txn.id is not None
    assert txn.amount == 9.9
    assert txn.label == "pizza"
    assert notifications == [1]
    assert [row.id for row in transaction_repo.list_all()] == [txn.id]


def test_blank_label_is_stored_as_none(transaction_repo, categories, bus):
    txn = _insert(transaction_repo, categories, bus, label="   ")
    assert txn.label is None


def test_date_objects_are_stored_as_iso_strings(transaction_repo, categories, bus):
    txn = _insert(transaction_repo, categories, bus, txn_date=date(2024, 3, 7))
    assert txn.date == "2024-03-07"


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": 0},
        {"amount": -3},
        {"amount": float("nan")},
        {"amount": "twelve"},
        {"amount": 10**400},
        {"category": "rent"},
        {"txn_date": "2024-6-1"},
        {"txn_date": "2024-02-30"},
        {"txn_date": None},
    ],
)
def test_invalid_input_never_reaches_storage(transaction_repo, categories, bus, notifications, overrides):
    with pytest.raises(ValidationError):
        _insert(transaction_repo, categories, bus, **overrides)

    assert transaction_repo.list_all() == []
    assert notifications == []


def test_list_transactions_most_recent_id_first(transaction_repo, categories, bus):
    first = _insert(transaction_repo, categories, bus, txn_date="2024-06-20")
    second = _insert(transaction_repo, categories, bus, txn_date="2024-06-01")

    rows = ledger_service.list_transactions(repository=transaction_repo)

    assert [txn.id for txn in rows] == [second.id, first.id]


def test_list_transactions_for_a_month(transaction_repo, categories, bus):
    _insert(transaction_repo, categories, bus, txn_date="2024-05-31")
    june = _insert(transaction_repo, categories, bus, txn_date="2024-06-01")

    rows = ledger_service.list_transactions(
        repository=transaction_repo, month_start="2024-06-01", month_end="2024-07-01"
    )

    assert [txn.id for txn in rows] == [june.id]


def test_update_replaces_all_fields_but_id(transaction_repo, categories, bus, notifications):
    txn = _insert(transaction_repo, categories, bus, label="old")

    updated = ledger_service.update_transaction(
        txn.id, 30, "groceries", "", "2024-06-09",
        repository=transaction_repo, categories=categories, bus=bus,
    )

    assert updated.id == txn.id
    assert (updated.amount, updated.category, updated.label, updated.date) == (
        30.0, "groceries", None, "2024-06-09",
    )
    assert notifications == [1, 1]


def test_update_of_vanished_transaction_raises_not_found(transaction_repo, categories, bus, notifications):
    with pytest.raises(NotFoundError):
        ledger_service.update_transaction(
            404, 10, "fun", None, "2024-06-01",
            repository=transaction_repo, categories=categories, bus=bus,
        )
    assert notifications == []


def test_delete_removes_exactly_those_ids(transaction_repo, categories, bus, notifications):
    keep = _insert(transaction_repo, categories, bus)
    drop = _insert(transaction_repo, categories, bus)
    notifications.clear()

    removed = ledger_service.delete_transactions({drop.id}, repository=transaction_repo, bus=bus)

    assert removed == 1
    assert [txn.id for txn in transaction_repo.list_all()] == [keep.id]
    assert notifications == [1]


def test_delete_empty_set_is_silent_noop(transaction_repo, bus, notifications):
    removed = ledger_service.delete_transactions(set(), repository=transaction_repo, bus=bus)

    assert removed == 0
    assert notifications == []


def test_listener_error_surfaces_after_commit(transaction_repo, categories, bus):
    def broken() -> None:
        raise RuntimeError("refresh failed")

    bus.subscribe(broken)

    with pytest.raises(RuntimeError, match="refresh failed"):
        _insert(transaction_repo, categories, bus, label="kept")

    assert [txn.label for txn in transaction_repo.list_all()] == ["kept"]
