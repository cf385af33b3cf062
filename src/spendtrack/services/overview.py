"""Spend-vs-budget overview for one month.

Combines category totals with effective budgets into the numbers behind the
progress donuts, and provides a loader that drops results of abandoned loads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from ..constants.categories import CategorySet
from ..domain.repositories.budget import BudgetRepository
from ..domain.repositories.transaction import TransactionRepository
from ..errors import SpendTrackError
from ..logging_config import get_logger
from ..utils.months import month_label
from .aggregation import totals_for_month
from .budgeting import EffectiveBudget, resolve_budgets
from .events import ChangeBus

logger = get_logger("services.overview")

COLOR_OVER = "#ef4444"
COLOR_WARNING = "#fb923c"
COLOR_CAUTION = "#facc15"
COLOR_OK = "#22c55e"


def progress_color(percent: float) -> str:
    """Map a spent-of-budget percentage to the donut stroke color."""

    if percent >= 100:
        return COLOR_OVER
    if percent >= 80:
        return COLOR_WARNING
    if percent >= 50:
        return COLOR_CAUTION
    return COLOR_OK


@dataclass(slots=True)
class CategoryProgress:
    """Spending against the effective budget for a single category."""

    category: str
    spent: float
    budget: float
    exact: bool

    @property
    def percent(self) -> float:
        return self.spent / self.budget * 100 if self.budget > 0 else 0.0

    @property
    def progress(self) -> float:
        """Fraction of the donut to fill, clamped to ``[0, 1]``."""
        if self.budget <= 0:
            return 0.0
        return max(0.0, min(self.spent / self.budget, 1.0))

    @property
    def color(self) -> str:
        return progress_color(self.percent)

    @property
    def remaining(self) -> float:
        return round(self.budget - self.spent, 2)


@dataclass(slots=True)
class MonthOverview:
    month: str
    categories: list[CategoryProgress] = field(default_factory=list)

    @property
    def label(self) -> str:
        return month_label(self.month)

    @property
    def total_spent(self) -> float:
        return round(sum(item.spent for item in self.categories), 2)

    @property
    def total_budget(self) -> float:
        return round(sum(item.budget for item in self.categories), 2)

    def get(self, category: str) -> Optional[CategoryProgress]:
        for item in self.categories:
            if item.category == category:
                return item
        return None


def combine(
    month: str,
    totals: Mapping[str, float],
    budgets: Mapping[str, EffectiveBudget],
    categories: CategorySet,
) -> MonthOverview:
    """Merge totals and budgets; categories missing from either side count as 0."""

    rows = []
    for name in categories:
        budget = budgets.get(name)
        rows.append(
            CategoryProgress(
                category=name,
                spent=float(totals.get(name, 0.0)),
                budget=budget.amount if budget else 0.0,
                exact=budget.exact if budget else False,
            )
        )
    return MonthOverview(month=month, categories=rows)


def build_overview(
    month: str,
    *,
    transaction_repo: TransactionRepository,
    budget_repo: BudgetRepository,
    categories: CategorySet,
) -> MonthOverview:
    totals = totals_for_month(month, repository=transaction_repo, categories=categories)
    budgets = resolve_budgets(
        month, categories, repository=budget_repo, category_set=categories
    )
    return combine(month, totals, budgets, categories)


class LoadHandle:
    """Liveness flag for one overview load."""

    __slots__ = ("month", "active", "completed")

    def __init__(self, month: str) -> None:
        self.month = month
        self.active = True
        self.completed = False

    def cancel(self) -> None:
        self.active = False


class OverviewLoader:
    """Loads month overviews and refreshes them on change notifications.

    Results (and errors) of a load whose handle was cancelled before they
    arrived are dropped without reaching the callbacks.
    """

    def __init__(
        self,
        *,
        transaction_repo: TransactionRepository,
        budget_repo: BudgetRepository,
        categories: CategorySet,
        bus: ChangeBus,
    ) -> None:
        self.transaction_repo = transaction_repo
        self.budget_repo = budget_repo
        self.categories = categories
        self.bus = bus

    def load(
        self,
        month: str,
        on_ready: Callable[[MonthOverview], None],
        on_error: Optional[Callable[[SpendTrackError], None]] = None,
        *,
        handle: Optional[LoadHandle] = None,
    ) -> LoadHandle:
        """Compute the overview for ``month`` and hand it to ``on_ready``.

        ``handle.active`` is checked after every storage step; once it is
        cleared nothing more is delivered.
        """
        handle = handle or LoadHandle(month)
        try:
            totals = totals_for_month(
                month, repository=self.transaction_repo, categories=self.categories
            )
            if not handle.active:
                return handle
            budgets = resolve_budgets(
                month, self.categories, repository=self.budget_repo, category_set=self.categories
            )
        except SpendTrackError as exc:
            if not handle.active:
                logger.debug("Dropped error from abandoned load", extra={"month": month})
                return handle
            if on_error is None:
                raise
            on_error(exc)
            return handle

        if not handle.active:
            logger.debug("Dropped stale overview", extra={"month": month})
            return handle
        on_ready(combine(month, totals, budgets, self.categories))
        handle.completed = True
        return handle

    def watch(
        self,
        month: str,
        on_ready: Callable[[MonthOverview], None],
        on_error: Optional[Callable[[SpendTrackError], None]] = None,
    ) -> Callable[[], None]:
        """Load now and again after every publish; returns a stop callable.

        A refresh supersedes the load before it, and stopping cancels the
        load in flight.
        """

        current: list[LoadHandle] = []

        def refresh() -> None:
            if current:
                current.pop().cancel()
            handle = LoadHandle(month)
            current.append(handle)
            self.load(month, on_ready, on_error, handle=handle)

        refresh()
        unsubscribe = self.bus.subscribe(refresh)

        def stop() -> None:
            unsubscribe()
            if current:
                current.pop().cancel()

        return stop
