"""Transaction persistence with validation and change notification."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..constants.categories import CategorySet
from ..domain.repositories.transaction import TransactionRepository
from ..errors import NotFoundError, StorageError
from ..logging_config import get_logger
from ..models.transaction import Transaction
from .events import ChangeBus
from .validation import normalize_label, validate_category, validate_date, validate_transaction_amount

logger = get_logger("services.ledger")


def build_transaction(
    amount: str | float,
    category: str,
    label: Optional[str],
    txn_date: str | date,
    *,
    categories: CategorySet,
    transaction_id: Optional[int] = None,
) -> Transaction:
    """Validate raw inputs and return an unsaved ``Transaction``."""

    return Transaction(
        id=transaction_id,
        amount=validate_transaction_amount(amount),
        category=validate_category(category, categories),
        label=normalize_label(label),
        date=validate_date(txn_date),
    )


def list_transactions(
    *,
    repository: TransactionRepository,
    month_start: Optional[str] = None,
    month_end: Optional[str] = None,
) -> list[Transaction]:
    """Return transactions, most recent id first, optionally limited to ``[month_start, month_end)``."""

    try:
        if month_start is not None and month_end is not None:
            return repository.filter_by_date_range(
                validate_date(month_start), validate_date(month_end)
            )
        return repository.list_all()
    except SQLAlchemyError as exc:
        logger.exception("Could not load transactions")
        raise StorageError("Could not load transactions.") from exc


def insert_transaction(
    amount: str | float,
    category: str,
    label: Optional[str],
    txn_date: str | date,
    *,
    repository: TransactionRepository,
    categories: CategorySet,
    bus: ChangeBus | None = None,
) -> Transaction:
    """Validate, persist and announce a new transaction.

    The row is committed before listeners run, so an exception raised by a
    listener reaches the caller even though the transaction was saved.
    Retrying such a call stores the transaction a second time.
    """

    txn = build_transaction(amount, category, label, txn_date, categories=categories)
    try:
        saved = repository.create(txn)
    except SQLAlchemyError as exc:
        logger.exception("Could not save transaction", extra={"category": txn.category})
        raise StorageError("Could not save transaction.") from exc

    logger.info(
        "Transaction added",
        extra={"transaction_id": saved.id, "category": saved.category, "date": saved.date},
    )
    if bus is not None:
        bus.publish()
    return saved


def update_transaction(
    transaction_id: int,
    amount: str | float,
    category: str,
    label: Optional[str],
    txn_date: str | date,
    *,
    repository: TransactionRepository,
    categories: CategorySet,
    bus: ChangeBus | None = None,
) -> Transaction:
    """Replace every field of an existing transaction except its id.

    Raises ``NotFoundError`` when the transaction was deleted in the meantime.
    As with inserts, listener exceptions surface after the change is committed.
    """

    txn = build_transaction(
        amount, category, label, txn_date, categories=categories, transaction_id=transaction_id
    )
    try:
        updated = repository.update(txn)
    except SQLAlchemyError as exc:
        logger.exception("Could not update transaction", extra={"transaction_id": transaction_id})
        raise StorageError("Could not update transaction.") from exc

    if updated is None:
        raise NotFoundError(f"Transaction {transaction_id} is no longer available.")

    logger.info("Transaction updated", extra={"transaction_id": transaction_id})
    if bus is not None:
        bus.publish()
    return updated


def delete_transactions(
    transaction_ids: Iterable[int],
    *,
    repository: TransactionRepository,
    bus: ChangeBus | None = None,
) -> int:
    """Delete exactly the given ids and return how many rows went away.

    An empty id set is a no-op: no storage call and no notification.
    """

    ids = set(transaction_ids)
    if not ids:
        return 0
    try:
        removed = repository.delete_many(sorted(ids))
    except SQLAlchemyError as exc:
        logger.exception("Could not delete transactions", extra={"count": len(ids)})
        raise StorageError("Could not delete transactions.") from exc

    logger.info("Transactions deleted", extra={"requested": len(ids), "removed": removed})
    if bus is not None:
        bus.publish()
    return removed
