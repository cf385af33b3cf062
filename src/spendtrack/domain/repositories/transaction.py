"""Transaction repository protocol."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ...models.transaction import Transaction


class TransactionRepository(Protocol):
    """Repository for managing transaction entities."""

    def list_all(self) -> list[Transaction]:
        """List all transactions, most recent id first."""
        ...

    def filter_by_date_range(self, start: str, end: str) -> list[Transaction]:
        """Get transactions dated in ``[start, end)``."""
        ...

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction and return it with its id."""
        ...

    def update(self, transaction: Transaction) -> Optional[Transaction]:
        """Replace every field but the id; ``None`` when the row is gone."""
        ...

    def delete_many(self, transaction_ids: Iterable[int]) -> int:
        """Delete the given ids and return how many rows were removed."""
        ...

    def totals_by_category(self, start: str, end: str) -> dict[str, float]:
        """Sum amounts per category for ``start <= date < end``."""
        ...
