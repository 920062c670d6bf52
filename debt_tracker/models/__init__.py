"""Domain models for debtor tracking."""

from debt_tracker.models.debtor import Debtor, DebtorDraft
from debt_tracker.models.enums import ContactKind, DebtorStatus

__all__ = ["ContactKind", "Debtor", "DebtorDraft", "DebtorStatus"]
