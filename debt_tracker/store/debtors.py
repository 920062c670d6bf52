"""In-memory debtor store with functional updates."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, Iterator

from debt_tracker.exceptions import DebtorNotFoundError, InvalidDebtorStateError
from debt_tracker.finance import calculate_monthly_payment, schedule_end
from debt_tracker.logging import debtor_logger
from debt_tracker.models import Debtor, DebtorDraft, DebtorStatus

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class DebtorStore:
    """Ordered, immutable collection of debtors.

    Every mutation returns a new store and leaves the original untouched,
    so a caller holding the previous store still sees the previous data.
    """

    debtors: tuple[Debtor, ...] = ()
    id_factory: Callable[[], str] = field(default=_new_id, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.debtors)

    def __iter__(self) -> Iterator[Debtor]:
        return iter(self.debtors)

    def _with(self, debtors: tuple[Debtor, ...]) -> DebtorStore:
        return replace(self, debtors=debtors)

    def _index_of(self, debtor_id: str) -> int:
        for idx, debtor in enumerate(self.debtors):
            if debtor.debtor_id == debtor_id:
                return idx
        debtor_logger(logger, debtor_id).warning("Debtor %s not found", debtor_id)
        raise DebtorNotFoundError(debtor_id)

    def _replace_at(self, idx: int, debtor: Debtor) -> DebtorStore:
        return self._with(self.debtors[:idx] + (debtor,) + self.debtors[idx + 1 :])

    def get(self, debtor_id: str) -> Debtor:
        """Return the debtor with ``debtor_id``."""
        return self.debtors[self._index_of(debtor_id)]

    def add(self, draft: DebtorDraft) -> DebtorStore:
        """Append a new debtor built from ``draft``.

        The new record starts with no paid installments and PENDING status.
        """
        debtor_id = self.id_factory()
        if any(d.debtor_id == debtor_id for d in self.debtors):
            raise InvalidDebtorStateError(f"Debtor id {debtor_id} already in use")
        schedule_end(draft.due_date, draft.installments)

        debtor = Debtor(
            debtor_id=debtor_id,
            name=draft.name,
            contact=draft.contact,
            contact_kind=draft.contact_kind,
            amount=draft.amount,
            installments=draft.installments,
            paid_installments=0,
            interest_rate=draft.interest_rate,
            monthly_payment=calculate_monthly_payment(
                draft.amount, draft.interest_rate, draft.installments
            ),
            due_date=draft.due_date,
            status=DebtorStatus.PENDING,
            created_at=datetime.now(),
        )
        debtor_logger(logger, debtor_id).info("Added debtor %s (%s)", debtor.name, debtor_id)
        return self._with(self.debtors + (debtor,))

    def edit(
        self,
        debtor_id: str,
        draft: DebtorDraft,
        paid_installments: int | None = None,
        status: DebtorStatus | None = None,
    ) -> DebtorStore:
        """Replace the editable fields of a debtor and recompute its payment.

        ``paid_installments`` and ``status`` are kept unless given. Payments
        already recorded are not reconciled against a changed schedule.
        """
        idx = self._index_of(debtor_id)
        current = self.debtors[idx]

        paid = current.paid_installments if paid_installments is None else paid_installments
        if not 0 <= paid <= draft.installments:
            raise InvalidDebtorStateError(
                f"Debtor {debtor_id} would have {paid} paid of {draft.installments} installments"
            )
        schedule_end(draft.due_date, draft.installments)

        updated = replace(
            current,
            name=draft.name,
            contact=draft.contact,
            contact_kind=draft.contact_kind,
            amount=draft.amount,
            installments=draft.installments,
            interest_rate=draft.interest_rate,
            due_date=draft.due_date,
            monthly_payment=calculate_monthly_payment(
                draft.amount, draft.interest_rate, draft.installments
            ),
            paid_installments=paid,
            status=current.status if status is None else status,
        )
        debtor_logger(logger, debtor_id).info("Edited debtor %s", debtor_id)
        return self._replace_at(idx, updated)

    def delete(self, debtor_id: str) -> DebtorStore:
        """Remove a debtor."""
        idx = self._index_of(debtor_id)
        debtor_logger(logger, debtor_id).info("Deleted debtor %s", debtor_id)
        return self._with(self.debtors[:idx] + self.debtors[idx + 1 :])

    def pay_installment(self, debtor_id: str) -> DebtorStore:
        """Record one paid installment.

        Reaching the last installment marks the debtor PAID. A debtor
        already PAID stays PAID. Once every installment is paid this is a
        no-op and returns the same store.
        """
        idx = self._index_of(debtor_id)
        current = self.debtors[idx]
        if current.paid_installments >= current.installments:
            debtor_logger(logger, debtor_id).debug("Debtor %s already fully paid", debtor_id)
            return self

        paid = current.paid_installments + 1
        # PAID is never undone, even after an edit added installments
        if paid == current.installments or current.status == DebtorStatus.PAID:
            status = DebtorStatus.PAID
        else:
            status = DebtorStatus.PENDING
        debtor_logger(logger, debtor_id).info(
            "Debtor %s paid installment %d/%d", debtor_id, paid, current.installments
        )
        return self._replace_at(idx, replace(current, paid_installments=paid, status=status))

    def pay_total(self, debtor_id: str) -> DebtorStore:
        """Settle every remaining installment at once."""
        idx = self._index_of(debtor_id)
        current = self.debtors[idx]
        debtor_logger(logger, debtor_id).info("Debtor %s paid in full", debtor_id)
        return self._replace_at(
            idx,
            replace(current, paid_installments=current.installments, status=DebtorStatus.PAID),
        )

    def summary(self) -> dict[str, int]:
        """Return counts by stored status."""
        counts = {status.value.lower(): 0 for status in DebtorStatus}
        for debtor in self.debtors:
            counts[debtor.status.value.lower()] += 1
        return {"debtors": len(self.debtors), **counts}
