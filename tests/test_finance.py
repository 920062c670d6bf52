"""Tests for loan arithmetic and display formatting."""

from datetime import date
from decimal import Decimal

import pytest

from debt_tracker.exceptions import ValidationError
from debt_tracker.finance import (
    calculate_monthly_payment,
    format_brl,
    format_date_br,
    format_rate,
    schedule_end,
)


class TestCalculateMonthlyPayment:
    """Tests for the PRICE payment formula."""

    @pytest.mark.parametrize(
        "principal,periods",
        [(Decimal("1200"), 12), (Decimal("1000"), 3), (Decimal("999.99"), 7), (Decimal("50"), 1)],
    )
    def test_zero_rate_is_straight_division(self, principal: Decimal, periods: int) -> None:
        """Without interest the payment is principal / periods."""
        assert calculate_monthly_payment(principal, 0, periods) == principal / periods

    def test_zero_rate_example(self) -> None:
        assert calculate_monthly_payment(1200, 0, 12) == Decimal("100")

    @pytest.mark.parametrize("rate", ["0.1", "1", "2.5", "10"])
    @pytest.mark.parametrize("periods", [1, 2, 12, 60])
    def test_positive_rate_pays_more_than_principal(self, rate: str, periods: int) -> None:
        """Interest makes the total paid exceed the principal."""
        principal = Decimal("1000")
        payment = calculate_monthly_payment(principal, rate, periods)
        assert payment * periods > principal

    def test_known_value(self) -> None:
        """1000 at 2.5% over 10 months is about 114.26."""
        payment = calculate_monthly_payment(Decimal("1000"), Decimal("2.5"), 10)
        assert payment.quantize(Decimal("0.01")) == Decimal("114.26")

    def test_single_period_with_interest(self) -> None:
        """One period repays principal plus one month of interest."""
        payment = calculate_monthly_payment(Decimal("1000"), Decimal("5"), 1)
        assert payment == Decimal("1050")

    def test_result_is_not_rounded(self) -> None:
        payment = calculate_monthly_payment(Decimal("100"), 0, 3)
        assert payment != payment.quantize(Decimal("0.01"))

    def test_zero_periods_rejected(self) -> None:
        with pytest.raises(ValidationError, match="installments"):
            calculate_monthly_payment(Decimal("100"), 0, 0)

    def test_negative_periods_rejected(self) -> None:
        with pytest.raises(ValidationError):
            calculate_monthly_payment(Decimal("100"), 1, -3)

    def test_negative_rate_rejected(self) -> None:
        with pytest.raises(ValidationError, match="negative"):
            calculate_monthly_payment(Decimal("100"), Decimal("-1"), 12)

    def test_non_positive_principal_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Principal"):
            calculate_monthly_payment(Decimal("0"), 1, 12)


class TestFormatting:
    """Tests for pt-BR display helpers."""

    def test_format_brl(self) -> None:
        assert format_brl(Decimal("1234.56")) == "R$ 1.234,56"

    def test_format_brl_rounds_for_display(self) -> None:
        assert format_brl(Decimal("33.333333")) == "R$ 33,33"

    def test_format_brl_millions(self) -> None:
        assert format_brl(1500000) == "R$ 1.500.000,00"

    def test_format_brl_negative(self) -> None:
        assert format_brl(Decimal("-10.5")) == "-R$ 10,50"

    def test_format_date_br(self) -> None:
        assert format_date_br(date(2024, 1, 5)) == "05/01/2024"

    def test_format_rate(self) -> None:
        assert format_rate(Decimal("2.50")) == "2,5%"
        assert format_rate(Decimal("10")) == "10%"
        assert format_rate(Decimal("0")) == "0%"


class TestScheduleEnd:
    """Tests for the last installment date."""

    def test_single_installment_is_first_due(self) -> None:
        assert schedule_end(date(2024, 1, 15), 1) == date(2024, 1, 15)

    def test_clamps_to_month_end(self) -> None:
        assert schedule_end(date(2024, 1, 31), 2) == date(2024, 2, 29)

    def test_last_representable_month(self) -> None:
        assert schedule_end(date(9999, 1, 1), 12) == date(9999, 12, 1)

    @pytest.mark.parametrize("periods", [13, 120000, 10**30])
    def test_past_calendar_end_rejected(self, periods: int) -> None:
        with pytest.raises(ValidationError, match="run past year 9999"):
            schedule_end(date(9999, 1, 1), periods)
