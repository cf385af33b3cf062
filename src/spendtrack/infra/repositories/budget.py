"""SQLModel implementation of Budget repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session, select

from ...models.budget import Budget

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SQLModelBudgetRepository:
    """SQLModel-based budget repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_exact(self, month: str, category: str) -> Optional[Budget]:
        """Return the budget set explicitly for ``(month, category)``."""
        with self.session_factory() as session:
            row = session.exec(
                select(Budget).where(Budget.month == month).where(Budget.category == category)
            ).first()
            if row:
                session.expunge(row)
            return row

    def latest_on_or_before(self, month: str, category: str) -> Optional[Budget]:
        """Return the most recent budget for ``category`` at or before ``month``.

        Month keys are zero-padded ``YYYY-MM`` strings, so string ordering is
        calendar ordering.
        """
        with self.session_factory() as session:
            statement = (
                select(Budget)
                .where(Budget.category == category)
                .where(Budget.month <= month)
                .order_by(Budget.month.desc())  # type: ignore
                .limit(1)
            )
            row = session.exec(statement).first()
            if row:
                session.expunge(row)
            return row

    def upsert(self, month: str, category: str, amount: float) -> None:
        """Insert or overwrite the ``(month, category)`` row in one statement.

        Uses ``INSERT ... ON CONFLICT (month, category) DO UPDATE`` so that
        concurrent writers can never create a duplicate key.
        """
        with self.session_factory() as session:
            connection = session.connection()
            dialect = connection.dialect.name
            insert = _UPSERT_DIALECTS.get(dialect)
            if insert is None:
                raise NotImplementedError(f"Budget upsert is not supported on {dialect!r}")
            statement = insert(Budget).values(month=month, category=category, amount=amount)
            statement = statement.on_conflict_do_update(
                index_elements=["month", "category"],
                set_={"amount": statement.excluded.amount},
            )
            connection.execute(statement)
            session.commit()

    def delete(self, month: str, category: str) -> bool:
        """Delete the ``(month, category)`` row if present."""
        with self.session_factory() as session:
            row = session.exec(
                select(Budget).where(Budget.month == month).where(Budget.category == category)
            ).first()
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True
