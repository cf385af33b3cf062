"""Budgeting domain services: effective budget resolution and budget writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..constants.categories import CategorySet
from ..domain.repositories.budget import BudgetRepository
from ..errors import StorageError
from ..logging_config import get_logger
from .validation import validate_budget_amount, validate_category, validate_month

logger = get_logger("services.budgeting")


@dataclass(frozen=True, slots=True)
class EffectiveBudget:
    """Budget in force for one category in one month.

    ``exact`` is True only when a row exists for that very month; otherwise
    ``amount`` is carried forward from the latest earlier month (or 0).
    """

    category: str
    amount: float
    exact: bool

    @property
    def inherited(self) -> bool:
        return not self.exact


def _resolve_one(month: str, category: str, repository: BudgetRepository) -> EffectiveBudget:
    row = repository.get_exact(month, category)
    if row is not None:
        return EffectiveBudget(category=category, amount=float(row.amount), exact=True)

    row = repository.latest_on_or_before(month, category)
    if row is not None:
        return EffectiveBudget(category=category, amount=float(row.amount), exact=False)

    return EffectiveBudget(category=category, amount=0.0, exact=False)


def resolve_budgets(
    month: str,
    categories: Iterable[str],
    *,
    repository: BudgetRepository,
    category_set: Optional[CategorySet] = None,
) -> dict[str, EffectiveBudget]:
    """Resolve the effective budget of each category for ``month``.

    Resolution per category: the exact month row if present, else the most
    recent row at or before ``month``, else 0. The result keeps the order of
    ``categories``. Any storage failure aborts the whole call; no partial
    mapping is returned.
    """

    month = validate_month(month)
    names = list(dict.fromkeys(categories))
    if category_set is not None:
        for name in names:
            validate_category(name, category_set)

    resolved: dict[str, EffectiveBudget] = {}
    try:
        for name in names:
            resolved[name] = _resolve_one(month, name, repository)
    except SQLAlchemyError as exc:
        logger.exception("Budget resolution failed", extra={"month": month})
        raise StorageError("Could not load budgets.") from exc
    return resolved


def set_budget(
    month: str,
    category: str,
    amount: str | float,
    *,
    repository: BudgetRepository,
    category_set: CategorySet,
) -> float:
    """Upsert the explicit budget for ``(month, category)`` and return the stored amount.

    Repeating the call with the same arguments leaves exactly one row.
    """

    month = validate_month(month)
    category = validate_category(category, category_set)
    value = validate_budget_amount(amount)
    try:
        repository.upsert(month, category, value)
    except SQLAlchemyError as exc:
        logger.exception("Could not update budget", extra={"month": month, "category": category})
        raise StorageError("Could not update budget.") from exc

    logger.info("Budget set", extra={"month": month, "category": category, "amount": value})
    return value


def reset_budget(
    month: str,
    category: str,
    *,
    repository: BudgetRepository,
    category_set: CategorySet,
) -> bool:
    """Drop the explicit budget for ``(month, category)`` so the month inherits again.

    Returns whether a row was removed; a missing row is not an error.
    """

    month = validate_month(month)
    category = validate_category(category, category_set)
    try:
        removed = repository.delete(month, category)
    except SQLAlchemyError as exc:
        logger.exception("Could not reset budget", extra={"month": month, "category": category})
        raise StorageError("Could not reset budget.") from exc

    logger.info("Budget reset", extra={"month": month, "category": category, "removed": removed})
    return removed
