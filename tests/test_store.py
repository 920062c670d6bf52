"""Tests for DebtorStore functional updates."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from debt_tracker.exceptions import DebtorNotFoundError, InvalidDebtorStateError, ValidationError
from debt_tracker.models import DebtorDraft, DebtorStatus
from debt_tracker.store import DebtorStore


class TestAdd:
    """Tests for adding debtors."""

    def test_add_initial_state(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        """New debtors start pending with nothing paid."""
        debtor = store.add(sample_draft).get("debtor-1")

        assert debtor.debtor_id == "debtor-1"
        assert debtor.name == "Maria Souza"
        assert debtor.paid_installments == 0
        assert debtor.status == DebtorStatus.PENDING
        assert debtor.monthly_payment == Decimal("100")

    def test_add_does_not_touch_original(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        updated = store.add(sample_draft)
        assert len(store) == 0
        assert len(updated) == 1

    def test_add_preserves_order(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        for name in ["A", "B", "C"]:
            store = store.add(replace(sample_draft, name=name))
        assert [d.name for d in store] == ["A", "B", "C"]

    def test_default_ids_are_unique(self, sample_draft: DebtorDraft) -> None:
        store = DebtorStore()
        for _ in range(20):
            store = store.add(sample_draft)
        assert len({d.debtor_id for d in store}) == 20

    def test_ids_not_reused_after_delete(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        store = store.add(sample_draft).delete("debtor-1").add(sample_draft)
        assert [d.debtor_id for d in store] == ["debtor-2"]

    def test_duplicate_id_rejected(self, sample_draft: DebtorDraft) -> None:
        store = DebtorStore(id_factory=lambda: "same").add(sample_draft)
        with pytest.raises(InvalidDebtorStateError, match="already in use"):
            store.add(sample_draft)

    def test_schedule_past_calendar_end_rejected(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        with pytest.raises(ValidationError, match="run past year"):
            store.add(replace(sample_draft, installments=120000))

    def test_add_with_interest(self, store: DebtorStore, phone_draft: DebtorDraft) -> None:
        debtor = store.add(phone_draft).get("debtor-1")
        assert debtor.monthly_payment.quantize(Decimal("0.01")) == Decimal("114.26")


class TestEdit:
    """Tests for editing debtors."""

    def test_edit_recomputes_payment(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        store = store.add(sample_draft)
        edited = store.edit("debtor-1", replace(sample_draft, amount=Decimal("2400"))).get("debtor-1")
        assert edited.amount == Decimal("2400")
        assert edited.monthly_payment == Decimal("200")

    def test_edit_preserves_payments_and_status(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        store = store.add(sample_draft).pay_installment("debtor-1").pay_installment("debtor-1")
        edited = store.edit("debtor-1", replace(sample_draft, name="Maria S.")).get("debtor-1")
        assert edited.name == "Maria S."
        assert edited.paid_installments == 2
        assert edited.status == DebtorStatus.PENDING
        assert edited.debtor_id == "debtor-1"

    def test_edit_with_explicit_values(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        store = store.add(sample_draft)
        edited = store.edit(
            "debtor-1", sample_draft, paid_installments=12, status=DebtorStatus.PAID
        ).get("debtor-1")
        assert edited.paid_installments == 12
        assert edited.status == DebtorStatus.PAID

    def test_edit_does_not_reconcile_schedule(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        """Shrinking the schedule keeps the recorded payments as they are."""
        store = store.add(sample_draft)
        for _ in range(3):
            store = store.pay_installment("debtor-1")
        edited = store.edit("debtor-1", replace(sample_draft, installments=3)).get("debtor-1")
        assert edited.paid_installments == 3
        assert edited.status == DebtorStatus.PENDING

    def test_edit_below_paid_count_rejected(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        store = store.add(sample_draft)
        for _ in range(5):
            store = store.pay_installment("debtor-1")
        with pytest.raises(InvalidDebtorStateError):
            store.edit("debtor-1", replace(sample_draft, installments=4))

    def test_edit_schedule_past_calendar_end_rejected(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        store = store.add(sample_draft)
        with pytest.raises(ValidationError):
            store.edit("debtor-1", replace(sample_draft, due_date=date(9999, 6, 1)))
        assert store.get("debtor-1").due_date == date(2024, 1, 15)

    def test_edit_keeps_position(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        store = store.add(replace(sample_draft, name="A")).add(replace(sample_draft, name="B"))
        store = store.edit("debtor-1", replace(sample_draft, name="Z"))
        assert [d.name for d in store] == ["Z", "B"]

    def test_edit_unknown(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        with pytest.raises(DebtorNotFoundError, match="not found"):
            store.edit("missing", sample_draft)


class TestDelete:
    """Tests for deleting debtors."""

    def test_add_then_delete_restores_length(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        """End-to-end: 1200 over 12 at 0% costs 100/month and deletes cleanly."""
        store = store.add(replace(sample_draft, name="Existing"))
        before = len(store)

        store = store.add(sample_draft)
        added = store.debtors[-1]
        assert added.monthly_payment == Decimal("100")

        store = store.delete(added.debtor_id)
        assert len(store) == before

    def test_delete_only_matching(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        store = store.add(replace(sample_draft, name="A")).add(replace(sample_draft, name="B"))
        assert [d.name for d in store.delete("debtor-1")] == ["B"]

    def test_delete_unknown(self, store: DebtorStore) -> None:
        with pytest.raises(DebtorNotFoundError):
            store.delete("missing")


class TestPayInstallment:
    """Tests for paying one installment."""

    def test_increments(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        debtor = store.add(sample_draft).pay_installment("debtor-1").get("debtor-1")
        assert debtor.paid_installments == 1
        assert debtor.status == DebtorStatus.PENDING

    def test_last_installment_marks_paid(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        store = store.add(replace(sample_draft, installments=3))
        store = store.pay_installment("debtor-1").pay_installment("debtor-1")
        assert store.get("debtor-1").paid_installments == 2

        store = store.pay_installment("debtor-1")
        debtor = store.get("debtor-1")
        assert debtor.paid_installments == 3
        assert debtor.status == DebtorStatus.PAID

    def test_noop_when_fully_paid(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        """Paying past the last installment changes nothing."""
        store = store.add(replace(sample_draft, installments=1)).pay_installment("debtor-1")
        again = store.pay_installment("debtor-1")
        assert again is store
        assert again.get("debtor-1").paid_installments == 1

    def test_does_not_set_overdue(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        """Even a long-past due date leaves the stored status PENDING."""
        store = store.add(replace(sample_draft, due_date=date(2000, 1, 1)))
        assert store.pay_installment("debtor-1").get("debtor-1").status == DebtorStatus.PENDING

    def test_paid_stays_paid_after_schedule_grows(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        """A settled debtor whose schedule was extended is not reopened by a payment."""
        store = store.add(sample_draft).pay_total("debtor-1")
        store = store.edit("debtor-1", replace(sample_draft, installments=24))
        assert store.get("debtor-1").status == DebtorStatus.PAID

        debtor = store.pay_installment("debtor-1").get("debtor-1")
        assert debtor.paid_installments == 13
        assert debtor.status == DebtorStatus.PAID

    def test_record_is_replaced_not_mutated(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        store = store.add(sample_draft)
        before = store.get("debtor-1")
        after = store.pay_installment("debtor-1").get("debtor-1")
        assert before.paid_installments == 0
        assert after is not before

    def test_pay_unknown(self, store: DebtorStore) -> None:
        with pytest.raises(DebtorNotFoundError):
            store.pay_installment("missing")


class TestPayTotal:
    """Tests for settling a debtor in full."""

    def test_pay_total(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        debtor = store.add(sample_draft).pay_total("debtor-1").get("debtor-1")
        assert debtor.paid_installments == 12
        assert debtor.status == DebtorStatus.PAID
        assert debtor.outstanding_balance == 0

    def test_pay_total_when_already_paid(
        self, store: DebtorStore, sample_draft: DebtorDraft
    ) -> None:
        debtor = store.add(sample_draft).pay_total("debtor-1").pay_total("debtor-1").get("debtor-1")
        assert debtor.paid_installments == 12


class TestQueries:
    """Tests for store queries."""

    def test_get_unknown(self, store: DebtorStore) -> None:
        with pytest.raises(DebtorNotFoundError):
            store.get("missing")

    def test_outstanding_balance(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        debtor = store.add(sample_draft).pay_installment("debtor-1").get("debtor-1")
        assert debtor.remaining_installments == 11
        assert debtor.outstanding_balance == Decimal("1100")
        assert not debtor.is_fully_paid

    def test_summary(self, store: DebtorStore, sample_draft: DebtorDraft) -> None:
        store = store.add(sample_draft).add(sample_draft).pay_total("debtor-2")
        assert store.summary() == {"debtors": 2, "pending": 1, "paid": 1, "overdue": 0}
