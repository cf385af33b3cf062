"""Pytest configuration and shared fixtures for SpendTrack tests.

Provides an isolated SQLite database per test, repositories bound to it, and
factories for test data, so nothing touches the real application database.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from spendtrack.config import BaseConfig
from spendtrack.constants.categories import CategorySet
from spendtrack.context import create_app_context
from spendtrack.infra.database import create_session_factory
from spendtrack.infra.repositories import SQLModelBudgetRepository, SQLModelTransactionRepository
from spendtrack.models import Budget, Transaction
from spendtrack.services.events import ChangeBus


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Point configuration at a per-test data directory."""

    monkeypatch.setenv("SPENDTRACK_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("SPENDTRACK_DEV_MODE", "false")
    monkeypatch.delenv("SPENDTRACK_DATABASE_URL", raising=False)
    monkeypatch.delenv("SPENDTRACK_CATEGORIES", raising=False)
    monkeypatch.delenv("SPENDTRACK_LOG_LEVEL", raising=False)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Plain session for arranging rows and inspecting results directly."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories receive in the application."""
    return create_session_factory(db_engine)


@pytest.fixture
def transaction_repo(session_factory) -> SQLModelTransactionRepository:
    return SQLModelTransactionRepository(session_factory)


@pytest.fixture
def budget_repo(session_factory) -> SQLModelBudgetRepository:
    return SQLModelBudgetRepository(session_factory)


@pytest.fixture
def categories() -> CategorySet:
    return CategorySet(("fun", "groceries", "boucherie"))


@pytest.fixture
def bus() -> ChangeBus:
    return ChangeBus()


@pytest.fixture
def app_context(tmp_path):
    """Fully wired application context on a temporary database file."""
    config = BaseConfig()
    config.DATABASE_URL = f"sqlite:///{tmp_path / 'app.db'}"
    context = create_app_context(config)
    yield context
    context.close()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def transaction_factory(db_session):
    """Factory for persisting transactions directly, bypassing validation.

    Returns:
        Callable: Function that creates and persists Transaction instances
    """

    def _create_transaction(
        amount: float = 10.0,
        category: str = "fun",
        date: str = "2024-06-15",
        label: str | None = None,
    ) -> Transaction:
        transaction = Transaction(amount=amount, category=category, date=date, label=label)
        db_session.add(transaction)
        db_session.commit()
        db_session.refresh(transaction)
        return transaction

    return _create_transaction


@pytest.fixture
def budget_factory(db_session):
    """Factory for persisting budget rows directly."""

    def _create_budget(month: str, category: str, amount: float) -> Budget:
        budget = Budget(month=month, category=category, amount=amount)
        db_session.add(budget)
        db_session.commit()
        db_session.refresh(budget)
        return budget

    return _create_budget
