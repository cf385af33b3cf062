"""Application context for dependency injection.

The context is the application root: it owns the engine, repositories, the
category allow-list and the change bus, and exposes the operations UI
surfaces call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .constants.categories import CategorySet
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelBudgetRepository, SQLModelTransactionRepository
from .logging_config import get_logger
from .models.transaction import Transaction
from .services import aggregation, budgeting, ledger_service
from .services.budgeting import EffectiveBudget
from .services.events import ChangeBus, Listener
from .services.overview import MonthOverview, OverviewLoader, build_overview
from .utils.months import month_key

logger = get_logger("context")


@dataclass
class AppContext:
    """Centralized application context with repositories and shared state."""

    config: BaseConfig
    engine: Engine
    session_factory: Callable
    transaction_repo: SQLModelTransactionRepository
    budget_repo: SQLModelBudgetRepository
    categories: CategorySet
    bus: ChangeBus = field(default_factory=ChangeBus)

    # Transactions

    def list_transactions(self) -> list[Transaction]:
        return ledger_service.list_transactions(repository=self.transaction_repo)

    def insert_transaction(
        self, amount: str | float, category: str, label: Optional[str], txn_date: str | date
    ) -> Transaction:
        return ledger_service.insert_transaction(
            amount,
            category,
            label,
            txn_date,
            repository=self.transaction_repo,
            categories=self.categories,
            bus=self.bus,
        )

    def update_transaction(
        self,
        transaction_id: int,
        amount: str | float,
        category: str,
        label: Optional[str],
        txn_date: str | date,
    ) -> Transaction:
        return ledger_service.update_transaction(
            transaction_id,
            amount,
            category,
            label,
            txn_date,
            repository=self.transaction_repo,
            categories=self.categories,
            bus=self.bus,
        )

    def delete_transactions(self, transaction_ids: Iterable[int]) -> int:
        return ledger_service.delete_transactions(
            transaction_ids, repository=self.transaction_repo, bus=self.bus
        )

    def on_transactions_changed(self, listener: Listener) -> Callable[[], None]:
        """Subscribe to transaction writes; returns the unsubscribe callable."""
        return self.bus.subscribe(listener)

    # Aggregation and budgets

    def totals_by_category(self, month_start: str, month_end: str) -> dict[str, float]:
        return aggregation.totals_by_category(
            month_start, month_end, repository=self.transaction_repo
        )

    def resolve_budgets(
        self, month: str, categories: Optional[Iterable[str]] = None
    ) -> dict[str, EffectiveBudget]:
        return budgeting.resolve_budgets(
            month,
            self.categories if categories is None else categories,
            repository=self.budget_repo,
            category_set=self.categories,
        )

    def set_budget(self, month: str, category: str, amount: str | float) -> float:
        return budgeting.set_budget(
            month, category, amount, repository=self.budget_repo, category_set=self.categories
        )

    def reset_budget(self, month: str, category: str) -> bool:
        return budgeting.reset_budget(
            month, category, repository=self.budget_repo, category_set=self.categories
        )

    def overview(self, month: Optional[str] = None) -> MonthOverview:
        return build_overview(
            month or month_key(date.today()),
            transaction_repo=self.transaction_repo,
            budget_repo=self.budget_repo,
            categories=self.categories,
        )

    def overview_loader(self) -> OverviewLoader:
        return OverviewLoader(
            transaction_repo=self.transaction_repo,
            budget_repo=self.budget_repo,
            categories=self.categories,
            bus=self.bus,
        )

    def close(self) -> None:
        self.bus.clear()
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    context = AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        transaction_repo=SQLModelTransactionRepository(session_factory),
        budget_repo=SQLModelBudgetRepository(session_factory),
        categories=config.category_set(),
    )
    logger.info(
        "Application context ready",
        extra={"database": engine.url.render_as_string(hide_password=True), "categories": list(context.categories)},
    )
    return context
