"""SQLModel table exports."""

from .budget import Budget
from .transaction import Transaction

__all__ = [
    "Budget",
    "Transaction",
]
