"""Read-time status derivation.

The stored ``Debtor.status`` only ever moves between PENDING and PAID through
store operations. Whether a debtor is overdue depends on today's date, so it
is computed on every read and never written back.
"""

from datetime import date, datetime
from typing import Iterable

from debt_tracker.models import Debtor, DebtorStatus


def _as_day(value: date | datetime | None) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def effective_status(debtor: Debtor, today: date | datetime | None = None) -> DebtorStatus:
    """Return the status to display for ``debtor`` on ``today``.

    Parameters
    ----------
    debtor : Debtor
        Record to inspect.
    today : date | datetime | None
        Reference day; datetimes are truncated to their calendar day.
        Defaults to the local current date.

    Returns
    -------
    DebtorStatus
        PAID when stored as paid, OVERDUE when ``today`` is strictly after
        the due date, PENDING otherwise.
    """
    if debtor.status == DebtorStatus.PAID:
        return DebtorStatus.PAID
    if _as_day(today) > debtor.due_date:
        return DebtorStatus.OVERDUE
    return DebtorStatus.PENDING


def overdue_debtors(
    debtors: Iterable[Debtor], today: date | datetime | None = None
) -> list[Debtor]:
    """Debtors whose effective status is OVERDUE, in collection order."""
    day = _as_day(today)
    return [d for d in debtors if effective_status(d, day) == DebtorStatus.OVERDUE]
