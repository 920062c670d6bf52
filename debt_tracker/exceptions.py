"""Exception hierarchy for debt-tracker.

Everything raised on purpose derives from ``DebtTrackerError``; the CLI
catches that base class and prints the message.
"""


class DebtTrackerError(Exception):
    """Base exception for all debt-tracker errors."""


class DebtorNotFoundError(DebtTrackerError):
    """No debtor in the store matches the given id (or id prefix)."""

    def __init__(self, debtor_id: str) -> None:
        super().__init__(f"Debtor {debtor_id} not found")
        self.debtor_id = debtor_id


class InvalidDebtorStateError(DebtTrackerError):
    """The operation does not apply to the debtor as it currently stands."""


class ValidationError(DebtTrackerError):
    """An input falls outside the accepted domain."""


class ConfigurationError(DebtTrackerError):
    """Raised when configuration is invalid or missing."""


class AuthenticationError(DebtTrackerError):
    """A username/password pair was rejected."""
