"""Spending totals per category over half-open date ranges."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from ..constants.categories import CategorySet
from ..domain.repositories.transaction import TransactionRepository
from ..errors import StorageError
from ..logging_config import get_logger
from ..utils.months import month_bounds
from .validation import validate_date, validate_month

logger = get_logger("services.aggregation")


def totals_by_category(
    month_start: str, month_end: str, *, repository: TransactionRepository
) -> dict[str, float]:
    """Sum transaction amounts per category for ``month_start <= date < month_end``.

    Categories with no transactions in range are absent from the result.
    The query either returns every total or raises ``StorageError``.
    """

    start = validate_date(month_start)
    end = validate_date(month_end)
    try:
        return repository.totals_by_category(start, end)
    except SQLAlchemyError as exc:
        logger.exception("Totals query failed", extra={"start": start, "end": end})
        raise StorageError("Could not load totals.") from exc


def totals_for_month(
    month: str, *, repository: TransactionRepository, categories: CategorySet
) -> dict[str, float]:
    """Totals for every configured category in ``month``; missing ones default to 0."""

    start, end = month_bounds(validate_month(month))
    raw = totals_by_category(start, end, repository=repository)
    totals = categories.zeroed()
    for category in totals:
        totals[category] = raw.get(category, 0.0)
    return totals
