"""Budget repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.budget import Budget


class BudgetRepository(Protocol):
    """Repository for monthly per-category budgets."""

    def get_exact(self, month: str, category: str) -> Optional[Budget]:
        """Return the row keyed exactly at ``(month, category)``."""
        ...

    def latest_on_or_before(self, month: str, category: str) -> Optional[Budget]:
        """Return the most recent row for ``category`` with ``month <= month``."""
        ...

    def upsert(self, month: str, category: str, amount: float) -> None:
        """Insert or overwrite the ``(month, category)`` row atomically."""
        ...

    def delete(self, month: str, category: str) -> bool:
        """Delete the exact row; return whether one existed."""
        ...
