"""Inventory ledger and warehouse balance engine."""

__version__ = "1.0.0"
