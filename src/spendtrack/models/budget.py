"""Monthly budget table."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Budget(SQLModel, table=True):
    """Explicit budget for one category in one ``YYYY-MM`` month.

    At most one row exists per ``(month, category)``; months without a row
    inherit the most recent earlier amount at resolution time.
    """

    __tablename__: ClassVar[str] = "budgets"
    __table_args__: ClassVar[tuple] = (
        UniqueConstraint("month", "category", name="budgets_month_category_idx"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    month: str = Field(nullable=False, index=True, max_length=7)
    category: str = Field(nullable=False, max_length=64)
    amount: float = Field(nullable=False)
