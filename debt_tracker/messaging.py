"""Payment reminder deep links (WhatsApp click-to-chat)."""

from urllib.parse import quote

from debt_tracker.config import MessagingConfig
from debt_tracker.exceptions import InvalidDebtorStateError
from debt_tracker.finance import format_brl, format_date_br
from debt_tracker.models import ContactKind, Debtor
from debt_tracker.validation import is_valid_phone, only_digits


def reminder_message(debtor: Debtor) -> str:
    """Reminder text for a debtor's overdue installment."""
    return (
        f"Olá {debtor.name}, notamos que sua parcela venceu em "
        f"{format_date_br(debtor.due_date)} no valor de "
        f"{format_brl(debtor.monthly_payment)}!"
    )


def reminder_link(debtor: Debtor, config: MessagingConfig | None = None) -> str:
    """Build a click-to-chat URL carrying the reminder text.

    The link is only constructed; nothing is sent and no delivery is
    tracked.

    Raises
    ------
    InvalidDebtorStateError
        If the debtor's contact is not a usable phone number.
    """
    config = config or MessagingConfig()
    if debtor.contact_kind != ContactKind.PHONE or not is_valid_phone(debtor.contact):
        raise InvalidDebtorStateError(
            f"Debtor {debtor.debtor_id} has no phone number to send a reminder to"
        )

    phone = config.country_code + only_digits(debtor.contact)
    return f"{config.base_url}/{phone}?text={quote(reminder_message(debtor))}"
