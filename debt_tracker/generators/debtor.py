"""Sample debtor generator."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Iterator

from debt_tracker.generators.base import BaseGenerator
from debt_tracker.models import ContactKind, DebtorDraft
from debt_tracker.store import DebtorStore
from debt_tracker.validation import format_phone


class DebtorGenerator(BaseGenerator):
    """Generate plausible personal-loan debtors."""

    INSTALLMENT_CHOICES = [3, 6, 10, 12, 18, 24]

    # Monthly rates (percent) typical of informal personal loans
    RATE_RANGE = (0.0, 8.0)

    AREA_CODES = ["11", "21", "31", "41", "51", "61", "71", "81", "85", "92"]

    def __init__(
        self,
        seed: int | None = None,
        contact_kind: ContactKind = ContactKind.CPF,
    ) -> None:
        super().__init__(seed)
        self.contact_kind = contact_kind

    def generate(self, today: date | None = None) -> DebtorDraft:
        """Generate a single debtor draft.

        Parameters
        ----------
        today : date | None
            Anchor for the first due date, drawn from six months before to
            two months after it. Defaults to today.

        Returns
        -------
        DebtorDraft
            Generated draft, ready for ``DebtorStore.add``.
        """
        today = today or date.today()
        amount = Decimal(self.rng.randint(5, 200) * 100)
        # Roughly a quarter of loans between friends carry no interest
        if self.chance(0.25):
            rate = Decimal(0)
        else:
            rate = Decimal(str(round(self.rng.uniform(*self.RATE_RANGE), 1)))

        return DebtorDraft(
            name=self.fake.name(),
            contact=self._contact(),
            contact_kind=self.contact_kind,
            amount=amount,
            installments=self.rng.choice(self.INSTALLMENT_CHOICES),
            interest_rate=rate,
            due_date=self.month_offset(today, -6, 2),
        )

    def generate_batch(self, count: int, today: date | None = None) -> Iterator[DebtorDraft]:
        """Generate multiple debtor drafts.

        Parameters
        ----------
        count : int
            Number of drafts to generate.
        today : date | None
            Anchor date passed to ``generate``.

        Yields
        ------
        DebtorDraft
            Generated drafts.
        """
        for _ in range(count):
            yield self.generate(today)

    def populate(
        self,
        store: DebtorStore,
        count: int,
        today: date | None = None,
        paid_off_rate: float = 0.15,
    ) -> DebtorStore:
        """Add ``count`` debtors to ``store`` with some payment history.

        Each debtor has a random number of installments already paid;
        ``paid_off_rate`` of them are settled in full.
        """
        for draft in self.generate_batch(count, today):
            store = store.add(draft)
            debtor_id = store.debtors[-1].debtor_id

            if self.chance(paid_off_rate):
                store = store.pay_total(debtor_id)
                continue

            for _ in range(self.rng.randint(0, draft.installments - 1)):
                store = store.pay_installment(debtor_id)
        return store

    def _contact(self) -> str:
        if self.contact_kind == ContactKind.PHONE:
            # Mobile numbers: area code + 9 + eight digits
            number = f"{self.rng.choice(self.AREA_CODES)}9{self.rng.randint(0, 99999999):08d}"
            return format_phone(number)
        return self.fake.cpf()
