"""Application state container for the debtor dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Mapping

from debt_tracker.exceptions import ValidationError
from debt_tracker.forms import parse_debtor_form
from debt_tracker.models import ContactKind, Debtor
from debt_tracker.reports import DashboardSummary, MonthlyReport, project_month, summarize
from debt_tracker.status import overdue_debtors
from debt_tracker.store import DebtorStore
from debt_tracker.validation import get_contact_strategy


class Modal(str, Enum):
    ADD = "ADD"
    EDIT = "EDIT"
    OVERDUE = "OVERDUE"
    REPORT = "REPORT"


@dataclass(frozen=True)
class AppState:
    """Everything the dashboard shows, owned in one immutable value.

    Actions return a new ``AppState``; derived views (summary, overdue list,
    monthly report) are recomputed from the store on every call.
    """

    store: DebtorStore = field(default_factory=DebtorStore)
    contact_kind: ContactKind = ContactKind.CPF
    modal: Modal | None = None
    editing_id: str | None = None
    selected_month: int = field(default_factory=lambda: date.today().month - 1)
    warnings: tuple[tuple[str, str], ...] = ()

    @property
    def debtors(self) -> tuple[Debtor, ...]:
        return self.store.debtors

    # --- Modal navigation ---

    def open_modal(self, modal: Modal, debtor_id: str | None = None) -> AppState:
        if modal == Modal.EDIT:
            if debtor_id is None:
                raise ValidationError("Editing requires a debtor id")
            self.store.get(debtor_id)  # raises DebtorNotFoundError
        return replace(self, modal=modal, editing_id=debtor_id, warnings=())

    def close_modal(self) -> AppState:
        return replace(self, modal=None, editing_id=None, warnings=())

    def select_month(self, month: int) -> AppState:
        if not 0 <= month <= 11:
            raise ValidationError(f"Month index must be between 0 and 11, got {month}")
        return replace(self, selected_month=month)

    # --- Store actions ---

    def submit_debtor_form(self, fields: Mapping[str, str]) -> AppState:
        """Submit the add or edit form currently open.

        An accepted form updates the store and closes the modal. A blocked
        form returns the state unchanged. Contact warnings from an accepted
        form are kept on the new state for display.
        """
        result = parse_debtor_form(fields, get_contact_strategy(self.contact_kind))
        if result is None:
            return self

        if self.modal == Modal.EDIT and self.editing_id is not None:
            store = self.store.edit(self.editing_id, result.draft)
        else:
            store = self.store.add(result.draft)

        closed = self.close_modal()
        return replace(closed, store=store, warnings=tuple(result.warnings.items()))

    def pay_installment(self, debtor_id: str) -> AppState:
        return replace(self, store=self.store.pay_installment(debtor_id))

    def pay_total(self, debtor_id: str) -> AppState:
        return replace(self, store=self.store.pay_total(debtor_id))

    def delete_debtor(self, debtor_id: str) -> AppState:
        return replace(self, store=self.store.delete(debtor_id))

    # --- Derived views ---

    def summary(self, today: date | datetime | None = None) -> DashboardSummary:
        return summarize(self.store, today)

    def overdue(self, today: date | datetime | None = None) -> list[Debtor]:
        return overdue_debtors(self.store, today)

    def report(self, today: date | datetime | None = None) -> MonthlyReport:
        return project_month(self.store, self.selected_month, today)
