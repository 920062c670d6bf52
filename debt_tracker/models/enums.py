"""Enumeration types for debtor records."""

from enum import Enum


class DebtorStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"

    @property
    def label(self) -> str:
        """pt-BR display label."""
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    DebtorStatus.PENDING: "Pendente",
    DebtorStatus.PAID: "Pago",
    DebtorStatus.OVERDUE: "Atrasado",
}


class ContactKind(str, Enum):
    CPF = "CPF"
    PHONE = "PHONE"
