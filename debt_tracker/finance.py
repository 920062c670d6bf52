"""Loan arithmetic and pt-BR display formatting."""

from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from debt_tracker.exceptions import ValidationError


def calculate_monthly_payment(
    principal: Decimal | int | str,
    rate: Decimal | int | str,
    periods: int,
) -> Decimal:
    """Return the fixed periodic payment for a loan (PRICE system).

    Parameters
    ----------
    principal : Decimal | int | str
        Amount borrowed. Must be positive.
    rate : Decimal | int | str
        Interest rate in percent per period (``2.5`` means 2.5%). Must be >= 0.
    periods : int
        Number of installments. Must be >= 1.

    Returns
    -------
    Decimal
        Unrounded payment; rounding happens only when displayed.

    Raises
    ------
    ValidationError
        If any argument is outside its domain.
    """
    principal = Decimal(str(principal))
    rate = Decimal(str(rate))

    if isinstance(periods, bool) or not isinstance(periods, int) or periods < 1:
        raise ValidationError(f"Number of installments must be a positive integer, got {periods!r}")
    if principal <= 0:
        raise ValidationError(f"Principal must be positive, got {principal}")
    if rate < 0:
        raise ValidationError(f"Interest rate cannot be negative, got {rate}")

    if rate == 0:
        return principal / periods

    r = rate / 100
    factor = (1 + r) ** periods
    return principal * (r * factor) / (factor - 1)


def format_brl(value: Decimal | float | int) -> str:
    """Format a value as Brazilian currency, e.g. ``R$ 1.234,56``."""
    value = Decimal(str(value)).quantize(Decimal("0.01"))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.2f}"  # 1,234.56
    swapped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {swapped}"


def format_date_br(value: date) -> str:
    """Format a date as ``dd/mm/yyyy``."""
    return value.strftime("%d/%m/%Y")


def format_rate(value: Decimal) -> str:
    """Format a monthly percentage rate, e.g. ``2,5%``."""
    return f"{Decimal(str(value)).normalize():f}".replace(".", ",") + "%"


def schedule_end(first_due: date, periods: int) -> date:
    """Due date of the last of ``periods`` monthly installments.

    Raises
    ------
    ValidationError
        If the schedule runs past the last representable date.
    """
    try:
        return first_due + relativedelta(months=periods - 1)
    except (ValueError, OverflowError):
        raise ValidationError(
            f"{periods} installments from {first_due.isoformat()} run past year {date.max.year}"
        ) from None
