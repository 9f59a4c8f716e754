"""
Core business logic services.

Layer-pure services that depend only on:
- stockledger/core/entities/*
- stockledger/core/exceptions.py

NO infrastructure imports and no I/O.
"""

from stockledger.core.services.balance_projector import (
    FOLDED_MOVEMENT_KINDS,
    WarehouseBalances,
    compute_balances,
)
from stockledger.core.services.physical_count import (
    CountCandidateRow,
    CountedRow,
    CountFilters,
    apply_counts,
    build_candidate_rows,
    count_key,
    select_lines_to_save,
    summarize,
)
from stockledger.core.services.reports import (
    ExistenceRow,
    ValuationSummary,
    build_existence_report,
    low_stock_items,
    summarize_valuation,
)
from stockledger.core.services.transfer_availability import (
    ItemAvailability,
    assess_availability,
    ensure_available,
)
from stockledger.core.services.valuation import ValuationEngine

__all__ = [
    # Projection
    "FOLDED_MOVEMENT_KINDS",
    "WarehouseBalances",
    "compute_balances",
    # Valuation
    "ValuationEngine",
    # Transfers
    "ItemAvailability",
    "assess_availability",
    "ensure_available",
    # Physical count
    "CountFilters",
    "CountCandidateRow",
    "CountedRow",
    "count_key",
    "build_candidate_rows",
    "apply_counts",
    "select_lines_to_save",
    "summarize",
    # Reports
    "ExistenceRow",
    "ValuationSummary",
    "build_existence_report",
    "low_stock_items",
    "summarize_valuation",
]
