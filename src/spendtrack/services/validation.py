"""Input validation shared by ledger and budget services.

Every check runs before any storage call and raises ``ValidationError`` with a
message suitable for showing to the user.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from ..constants.categories import CategorySet
from ..errors import ValidationError
from ..utils.format import parse_amount_input
from ..utils.months import is_month_key


def _finite_amount(raw: str | float | int) -> float:
    amount = parse_amount_input(raw)
    if not math.isfinite(amount):
        raise ValidationError("Enter a valid amount.")
    return amount


def validate_transaction_amount(raw: str | float | int) -> float:
    """Transactions must carry a finite amount strictly greater than zero."""

    amount = _finite_amount(raw)
    if amount <= 0:
        raise ValidationError("Enter a valid amount greater than 0.")
    return amount


def validate_budget_amount(raw: str | float | int) -> float:
    """Budgets accept any finite amount of zero or more."""

    amount = _finite_amount(raw)
    if amount < 0:
        raise ValidationError("Enter a valid amount (0 or more).")
    return amount


def validate_category(name: str, categories: CategorySet) -> str:
    return categories.validate(name)


def normalize_label(label: Optional[str]) -> Optional[str]:
    """Trim labels; empty or blank labels are stored as ``None``."""

    if label is None:
        return None
    trimmed = label.strip()
    return trimmed or None


def validate_date(value: str | date) -> str:
    """Return a zero-padded ISO ``YYYY-MM-DD`` string for a real calendar day."""

    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValidationError("Transaction date is required.")
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise ValidationError(f"Invalid date {value!r}; expected YYYY-MM-DD.") from exc
    if parsed.isoformat() != value:
        raise ValidationError(f"Invalid date {value!r}; expected zero-padded YYYY-MM-DD.")
    return value


def validate_month(value: str) -> str:
    """Month keys must be zero-padded ``YYYY-MM`` strings."""

    if not is_month_key(value):
        raise ValidationError(f"Invalid month {value!r}; expected YYYY-MM.")
    return value
