"""Debtor form parsing: the input boundary between raw text and drafts."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Mapping

from debt_tracker.exceptions import ValidationError
from debt_tracker.finance import schedule_end
from debt_tracker.models import Debtor, DebtorDraft
from debt_tracker.validation import ContactStrategy, contact_warning

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "contact", "amount", "installments", "interest_rate", "due_date")

# Dots are thousands separators only after a nonzero leading group ("1.000"),
# so "0.500" stays a plain decimal
_BR_DECIMAL = re.compile(r"^-?[1-9]\d{0,2}(\.\d{3})+(,\d+)?$|^-?\d+,\d+$")


@dataclass
class FormResult:
    """Parsed draft plus the soft warnings to show next to the fields."""

    draft: DebtorDraft
    warnings: dict[str, str] = field(default_factory=dict)


def parse_decimal(text: str) -> Decimal | None:
    """Parse ``1234.56`` or pt-BR ``1.234,56``; None when unparsable."""
    text = text.strip().replace("R$", "").strip()
    if _BR_DECIMAL.match(text):
        text = text.replace(".", "").replace(",", ".")
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def parse_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_date(text: str) -> date | None:
    """Parse ISO ``YYYY-MM-DD`` or ``dd/mm/yyyy`` as a calendar date."""
    text = text.strip()
    try:
        if "/" in text:
            day, month, year = (int(part) for part in text.split("/"))
            return date(year, month, day)
        return date.fromisoformat(text)
    except ValueError:
        return None


def parse_debtor_form(
    fields: Mapping[str, str], strategy: ContactStrategy
) -> FormResult | None:
    """Turn raw form fields into a draft.

    Returns None when the submission must be blocked: a required field is
    empty, a number or date does not parse, the loan terms are outside
    their domain (no installments, non-positive amount, negative rate) or
    the last installment would fall past the end of the calendar. A
    malformed contact only adds a warning and never blocks.
    """
    values = {name: (fields.get(name) or "").strip() for name in REQUIRED_FIELDS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        logger.debug("Form blocked, missing fields: %s", ", ".join(missing))
        return None

    amount = parse_decimal(values["amount"])
    installments = parse_int(values["installments"])
    rate = parse_decimal(values["interest_rate"])
    due_date = parse_date(values["due_date"])

    if amount is None or installments is None or rate is None or due_date is None:
        logger.debug("Form blocked, unparsable numeric or date field")
        return None

    if amount <= 0 or installments < 1 or rate < 0:
        logger.debug(
            "Form blocked, terms out of range: amount=%s installments=%s rate=%s",
            amount,
            installments,
            rate,
        )
        return None

    try:
        schedule_end(due_date, installments)
    except ValidationError:
        logger.debug(
            "Form blocked, %d installments from %s overflow the calendar", installments, due_date
        )
        return None

    contact = strategy.format(values["contact"])
    warnings = {}
    warning = contact_warning(contact, strategy)
    if warning:
        warnings["contact"] = warning

    draft = DebtorDraft(
        name=values["name"],
        contact=contact,
        contact_kind=strategy.kind,
        amount=amount,
        installments=installments,
        interest_rate=rate,
        due_date=due_date,
    )
    return FormResult(draft=draft, warnings=warnings)


def form_fields(draft: DebtorDraft | Debtor) -> dict[str, str]:
    """Inverse of ``parse_debtor_form``, used to pre-fill the edit form."""
    return {
        "name": draft.name,
        "contact": draft.contact,
        "amount": str(draft.amount).replace(".", ","),
        "installments": str(draft.installments),
        "interest_rate": str(draft.interest_rate).replace(".", ","),
        "due_date": draft.due_date.isoformat(),
    }
