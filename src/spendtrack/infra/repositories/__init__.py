"""Concrete repository implementations using SQLModel."""

from .budget import SQLModelBudgetRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelBudgetRepository",
    "SQLModelTransactionRepository",
]
