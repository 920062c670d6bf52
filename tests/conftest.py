"""Pytest configuration and fixtures."""

import itertools
from datetime import date
from decimal import Decimal

import pytest

from debt_tracker.config import AuthConfig, TrackerConfig
from debt_tracker.models import ContactKind, DebtorDraft
from debt_tracker.store import DebtorStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed reference day."""
    return date(2024, 6, 15)


@pytest.fixture
def valid_cpf() -> str:
    """A CPF with correct check digits."""
    return "529.982.247-25"


@pytest.fixture
def sample_draft(valid_cpf: str) -> DebtorDraft:
    """Interest-free loan of 1200 in 12 installments."""
    return DebtorDraft(
        name="Maria Souza",
        contact=valid_cpf,
        amount=Decimal("1200"),
        installments=12,
        interest_rate=Decimal("0"),
        due_date=date(2024, 1, 15),
    )


@pytest.fixture
def phone_draft() -> DebtorDraft:
    """Loan with interest and a phone contact."""
    return DebtorDraft(
        name="João da Silva",
        contact="(11) 98765-4321",
        contact_kind=ContactKind.PHONE,
        amount=Decimal("1000"),
        installments=10,
        interest_rate=Decimal("2.5"),
        due_date=date(2024, 7, 10),
    )


@pytest.fixture
def store() -> DebtorStore:
    """Empty store with predictable ids (debtor-1, debtor-2, ...)."""
    counter = itertools.count(1)
    return DebtorStore(id_factory=lambda: f"debtor-{next(counter)}")


@pytest.fixture
def tracker_config(tmp_path) -> TrackerConfig:
    """Config whose session file lives in a temp directory."""
    return TrackerConfig(auth=AuthConfig(session_file=tmp_path / "session.json"))
