"""Service module exports."""

from . import (
    aggregation,
    budgeting,
    events,
    ledger_service,
    overview,
    validation,
)

__all__ = [
    "aggregation",
    "budgeting",
    "events",
    "ledger_service",
    "overview",
    "validation",
]
