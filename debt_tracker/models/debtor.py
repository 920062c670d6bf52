"""Debtor model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from debt_tracker.models.enums import ContactKind, DebtorStatus


@dataclass(frozen=True)
class DebtorDraft:
    """Validated form input for creating or editing a debtor."""

    name: str
    contact: str
    amount: Decimal  # Principal
    installments: int
    interest_rate: Decimal  # Monthly percentage (e.g., 2.5 for 2.5%)
    due_date: date  # First installment
    contact_kind: ContactKind = ContactKind.CPF


@dataclass(frozen=True)
class Debtor:
    """Borrower record (devedor).

    Records are immutable: store operations build a replacement with
    ``dataclasses.replace`` instead of mutating fields.
    """

    debtor_id: str
    name: str
    contact: str
    amount: Decimal
    installments: int
    paid_installments: int
    interest_rate: Decimal
    monthly_payment: Decimal
    due_date: date
    status: DebtorStatus
    contact_kind: ContactKind = ContactKind.CPF
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    @property
    def remaining_installments(self) -> int:
        return self.installments - self.paid_installments

    @property
    def outstanding_balance(self) -> Decimal:
        """Amount still owed (saldo devedor)."""
        return self.monthly_payment * self.remaining_installments

    @property
    def is_fully_paid(self) -> bool:
        return self.paid_installments >= self.installments
