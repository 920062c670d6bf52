"""Dashboard summary cards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from debt_tracker.models import Debtor, DebtorStatus
from debt_tracker.status import effective_status


@dataclass(frozen=True)
class DashboardSummary:
    """Totals shown above the debtor table."""

    debtor_count: int
    total_lent: Decimal  # Total emprestado
    monthly_receivable: Decimal  # A receber/mês
    pending_amount: Decimal  # Valor pendente
    overdue_count: int


def summarize(debtors: Iterable[Debtor], today: date | datetime | None = None) -> DashboardSummary:
    """Compute the dashboard cards for ``debtors`` as of ``today``.

    Debtors stored as PAID are excluded from the receivable and pending
    sums. The overdue count uses the effective status, not the stored one.
    """
    debtors = list(debtors)
    open_debtors = [d for d in debtors if d.status != DebtorStatus.PAID]

    return DashboardSummary(
        debtor_count=len(debtors),
        total_lent=sum((d.amount for d in debtors), Decimal(0)),
        monthly_receivable=sum((d.monthly_payment for d in open_debtors), Decimal(0)),
        pending_amount=sum((d.outstanding_balance for d in open_debtors), Decimal(0)),
        overdue_count=sum(
            1 for d in debtors if effective_status(d, today) == DebtorStatus.OVERDUE
        ),
    )
