"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...models.transaction import Transaction


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self) -> list[Transaction]:
        """List all transactions, most recent id first."""
        with self.session_factory() as session:
            statement = select(Transaction).order_by(Transaction.id.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def filter_by_date_range(self, start: str, end: str) -> list[Transaction]:
        """Get transactions dated in ``[start, end)``, most recent id first."""
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.date >= start)
                .where(Transaction.date < end)
                .order_by(Transaction.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: Transaction) -> Transaction:
        """Create a new transaction."""
        with self.session_factory() as session:
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def update(self, transaction: Transaction) -> Optional[Transaction]:
        """Overwrite amount, category, label and date of an existing row.

        Returns ``None`` when no row with ``transaction.id`` exists.
        """
        with self.session_factory() as session:
            existing = session.get(Transaction, transaction.id)
            if existing is None:
                return None
            existing.amount = transaction.amount
            existing.category = transaction.category
            existing.label = transaction.label
            existing.date = transaction.date
            session.add(existing)
            session.commit()
            session.refresh(existing)
            session.expunge(existing)
            return existing

    def delete_many(self, transaction_ids: Iterable[int]) -> int:
        """Delete every transaction whose id is in ``transaction_ids``."""
        ids = list(dict.fromkeys(transaction_ids))
        if not ids:
            return 0
        with self.session_factory() as session:
            rows = session.exec(
                select(Transaction).where(Transaction.id.in_(ids))  # type: ignore
            ).all()
            for row in rows:
                session.delete(row)
            session.commit()
            return len(rows)

    def totals_by_category(self, start: str, end: str) -> dict[str, float]:
        """Sum amounts per category over the half-open range ``[start, end)``.

        Categories without matching rows are absent from the result.
        """
        with self.session_factory() as session:
            statement = (
                select(Transaction.category, func.sum(Transaction.amount))
                .where(Transaction.date >= start)
                .where(Transaction.date < end)
                .group_by(Transaction.category)
            )
            return {category: float(total or 0.0) for category, total in session.exec(statement).all()}
