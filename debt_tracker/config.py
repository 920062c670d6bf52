"""Configuration management for debt-tracker."""

from dataclasses import dataclass, field
from pathlib import Path

from debt_tracker.exceptions import ConfigurationError
from debt_tracker.models.enums import ContactKind

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("standard", "json")


def _default_session_file() -> Path:
    return Path.home() / ".debt_tracker" / "session.json"


@dataclass
class AuthConfig:
    """Fixed credential pair and where the session flag is kept."""

    username: str = "admin"
    password: str = "admin"
    session_file: Path = field(default_factory=_default_session_file)
    session_key: str = "isAuthenticated"


@dataclass
class MessagingConfig:
    """Deep-link settings for payment reminders."""

    base_url: str = "https://wa.me"
    country_code: str = "55"

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if not self.country_code.isdigit():
            raise ConfigurationError(f"Country code must be numeric, got {self.country_code!r}")


@dataclass
class TrackerConfig:
    """Main configuration for debt-tracker."""

    auth: AuthConfig = field(default_factory=AuthConfig)
    messaging: MessagingConfig = field(default_factory=MessagingConfig)
    contact_kind: ContactKind = ContactKind.CPF
    log_level: str = "INFO"
    log_format: str = "standard"
    seed: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.contact_kind, ContactKind):
            try:
                self.contact_kind = ContactKind(str(self.contact_kind).upper())
            except ValueError:
                raise ConfigurationError(f"Unknown contact kind: {self.contact_kind!r}") from None

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")

        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {self.log_format!r}")

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Create config from environment variables."""
        import os

        auth = AuthConfig(
            username=os.getenv("DEBT_TRACKER_USERNAME", "admin"),
            password=os.getenv("DEBT_TRACKER_PASSWORD", "admin"),
        )
        session_file = os.getenv("DEBT_TRACKER_SESSION_FILE")
        if session_file:
            auth.session_file = Path(session_file).expanduser()

        messaging = MessagingConfig(
            base_url=os.getenv("DEBT_TRACKER_MESSAGING_URL", "https://wa.me"),
            country_code=os.getenv("DEBT_TRACKER_COUNTRY_CODE", "55"),
        )

        seed = os.getenv("SEED")
        try:
            seed_value = int(seed) if seed else None
        except ValueError:
            raise ConfigurationError(f"SEED must be an integer, got {seed!r}") from None

        return cls(
            auth=auth,
            messaging=messaging,
            contact_kind=os.getenv("DEBT_TRACKER_CONTACT_KIND", "CPF"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed=seed_value,
        )
