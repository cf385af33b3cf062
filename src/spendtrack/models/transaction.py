"""SQLModel definition for spending transactions."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Transaction(SQLModel, table=True):
    """A single hand-entered spending record.

    ``date`` is kept as a zero-padded ISO ``YYYY-MM-DD`` string so that range
    queries can rely on lexicographic ordering.
    """

    __tablename__: ClassVar[str] = "transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    amount: float = Field(nullable=False, description="Positive amount in currency units")
    category: str = Field(nullable=False, index=True, max_length=64)
    label: Optional[str] = Field(default=None, max_length=255)
    date: str = Field(nullable=False, index=True, max_length=10)
