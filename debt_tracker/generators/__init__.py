"""Sample data generators for demos and tests."""

from debt_tracker.generators.debtor import DebtorGenerator

__all__ = ["DebtorGenerator"]
