"""Monthly receivables report (extrato mensal)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Iterator

from dateutil.relativedelta import relativedelta

from debt_tracker.exceptions import ValidationError
from debt_tracker.models import Debtor

MONTH_NAMES = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)


@dataclass(frozen=True)
class ReportEntry:
    """One projected installment of one debtor."""

    debtor: Debtor
    installment_index: int  # 0-based
    projected_due_date: date
    is_paid_in_month: bool

    @property
    def installment_number(self) -> int:
        """1-based position, as shown in "3/12"."""
        return self.installment_index + 1

    @property
    def amount(self) -> Decimal:
        return self.debtor.monthly_payment


@dataclass(frozen=True)
class MonthlyReport:
    """Entries falling in one calendar month plus their totals."""

    month: int  # 0-11
    entries: tuple[ReportEntry, ...]
    month_total: Decimal
    month_paid: Decimal

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month]

    @property
    def month_pending(self) -> Decimal:
        return self.month_total - self.month_paid

    def __len__(self) -> int:
        return len(self.entries)


def iter_schedule(debtor: Debtor) -> Iterator[tuple[int, date]]:
    """Yield ``(index, due_date)`` for every installment of ``debtor``.

    Installment ``i`` falls ``i`` calendar months after the first due date;
    days past the end of a shorter month clamp to its last day.
    """
    for i in range(debtor.installments):
        yield i, debtor.due_date + relativedelta(months=i)


def project_month(
    debtors: Iterable[Debtor],
    month: int | None = None,
    today: date | datetime | None = None,
) -> MonthlyReport:
    """Project every debtor's schedule onto one month of the year.

    Parameters
    ----------
    debtors : Iterable[Debtor]
        Collection to project, in display order.
    month : int | None
        Month index 0 (January) to 11 (December). Defaults to the month
        of ``today``.
    today : date | datetime | None
        Reference date for the default month. Defaults to today.

    Returns
    -------
    MonthlyReport
        Matching entries in collection order, then schedule order. The
        filter compares month-of-year only, so installments from every year
        of a long schedule land in the same month.
    """
    if month is None:
        month = (today or date.today()).month - 1
    if isinstance(month, bool) or not isinstance(month, int) or not 0 <= month <= 11:
        raise ValidationError(f"Month index must be between 0 and 11, got {month!r}")

    entries = []
    for debtor in debtors:
        for i, projected in iter_schedule(debtor):
            if projected.month - 1 != month:
                continue
            entries.append(
                ReportEntry(
                    debtor=debtor,
                    installment_index=i,
                    projected_due_date=projected,
                    is_paid_in_month=i < debtor.paid_installments,
                )
            )

    month_total = sum((e.amount for e in entries), Decimal(0))
    month_paid = sum((e.amount for e in entries if e.is_paid_in_month), Decimal(0))
    return MonthlyReport(
        month=month,
        entries=tuple(entries),
        month_total=month_total,
        month_paid=month_paid,
    )
