"""Contact validation strategies: Brazilian CPF and phone numbers.

Both strategies share one interface so the form layer can swap them::

    strategy = get_contact_strategy("CPF")
    strategy.format("12345678909")   # '123.456.789-09'
    strategy.is_valid("123.456.789-09")
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from debt_tracker.exceptions import ConfigurationError
from debt_tracker.models.enums import ContactKind

_NON_DIGITS = re.compile(r"\D")


def only_digits(value: str) -> str:
    """Strip everything that is not a digit."""
    return _NON_DIGITS.sub("", value)


def _all_same(digits: str) -> bool:
    return len(set(digits)) == 1


def _cpf_check_digit(digits: list[int]) -> int:
    """Check digit over ``digits`` with weights len+1 .. 2."""
    total = sum(d * w for d, w in zip(digits, range(len(digits) + 1, 1, -1)))
    remainder = (total * 10) % 11
    return 0 if remainder >= 10 else remainder


def is_valid_cpf(value: str) -> bool:
    """Validate a CPF by its two check digits."""
    cleaned = only_digits(value)
    if len(cleaned) != 11 or _all_same(cleaned):
        return False

    digits = [int(c) for c in cleaned]
    if _cpf_check_digit(digits[:9]) != digits[9]:
        return False
    return _cpf_check_digit(digits[:10]) == digits[10]


def format_cpf(value: str) -> str:
    """Punctuate a CPF progressively as it is typed (``XXX.XXX.XXX-XX``).

    Input with more than 11 digits is returned untouched.
    """
    digits = only_digits(value)
    if len(digits) > 11:
        return value

    formatted = digits[:3]
    if len(digits) > 3:
        formatted += "." + digits[3:6]
    if len(digits) > 6:
        formatted += "." + digits[6:9]
    if len(digits) > 9:
        formatted += "-" + digits[9:]
    return formatted


def is_valid_phone(value: str) -> bool:
    """Accept 10 (landline) or 11 (mobile) digits including the area code."""
    digits = only_digits(value)
    return len(digits) in (10, 11) and not _all_same(digits)


def format_phone(value: str) -> str:
    """Punctuate a phone number progressively (``(XX) XXXXX-XXXX``).

    Input with more than 11 digits is returned untouched.
    """
    digits = only_digits(value)
    if len(digits) > 11:
        return value
    if not digits:
        return ""
    if len(digits) <= 2:
        return f"({digits}"

    area, number = digits[:2], digits[2:]
    # Mobile numbers carry a ninth digit, landlines split 4-4
    split = 5 if len(digits) == 11 else 4
    if len(number) <= split:
        return f"({area}) {number}"
    return f"({area}) {number[:split]}-{number[split:]}"


class ContactStrategy(ABC):
    """Formatting and validation rules for one kind of contact."""

    kind: ContactKind
    digits: int
    warning: str

    def clean(self, value: str) -> str:
        return only_digits(value)

    @abstractmethod
    def format(self, value: str) -> str:
        """Apply the progressive input mask."""

    @abstractmethod
    def is_valid(self, value: str) -> bool:
        """Whether a complete value passes the kind-specific checks."""

    def is_complete(self, value: str) -> bool:
        """Whether enough digits were typed to judge the value."""
        return len(self.clean(value)) >= self.digits


class CpfStrategy(ContactStrategy):
    kind = ContactKind.CPF
    digits = 11
    warning = "Este CPF não é válido!"

    def format(self, value: str) -> str:
        return format_cpf(value)

    def is_valid(self, value: str) -> bool:
        return is_valid_cpf(value)


class PhoneStrategy(ContactStrategy):
    kind = ContactKind.PHONE
    digits = 10
    warning = "Este telefone não é válido!"

    def format(self, value: str) -> str:
        return format_phone(value)

    def is_valid(self, value: str) -> bool:
        return is_valid_phone(value)


_STRATEGIES: dict[ContactKind, ContactStrategy] = {
    ContactKind.CPF: CpfStrategy(),
    ContactKind.PHONE: PhoneStrategy(),
}


def get_contact_strategy(kind: ContactKind | str) -> ContactStrategy:
    """Resolve a strategy from a ``ContactKind`` or its name."""
    if isinstance(kind, ContactKind):
        return _STRATEGIES[kind]
    try:
        return _STRATEGIES[ContactKind(str(kind).upper())]
    except ValueError:
        raise ConfigurationError(f"Unknown contact kind: {kind!r}") from None


def contact_warning(value: str, strategy: ContactStrategy) -> str | None:
    """Return a soft warning for a complete but invalid contact.

    Incomplete input gets no warning yet; the caller never blocks on it.
    """
    if value and strategy.is_complete(value) and not strategy.is_valid(value):
        return strategy.warning
    return None
