"""In-memory store for debtor records."""

from debt_tracker.store.debtors import DebtorStore

__all__ = ["DebtorStore"]
