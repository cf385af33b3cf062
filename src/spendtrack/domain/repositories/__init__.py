"""Repository protocol definitions for domain layer."""

from .budget import BudgetRepository
from .transaction import TransactionRepository

__all__ = [
    "BudgetRepository",
    "TransactionRepository",
]
