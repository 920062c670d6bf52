"""Single-user session flag backed by a JSON key-value file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from debt_tracker.config import AuthConfig
from debt_tracker.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class SessionStore:
    """Keeps the "logged in" boolean between runs.

    Only the flag is persisted; debtor data never is.
    """

    def __init__(self, config: AuthConfig | None = None) -> None:
        """Initialize the session store.

        Parameters
        ----------
        config : AuthConfig | None
            Credentials, session file and key. Defaults to ``AuthConfig()``.
        """
        self.config = config or AuthConfig()

    @property
    def path(self) -> Path:
        return Path(self.config.session_file)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)

    def is_authenticated(self) -> bool:
        return self._read().get(self.config.session_key) is True

    def login(self, username: str, password: str) -> None:
        """Check the credentials and persist the flag.

        Raises
        ------
        AuthenticationError
            If the pair does not match the configured one.
        """
        if username != self.config.username or password != self.config.password:
            logger.warning("Rejected login for user %r", username)
            raise AuthenticationError("Usuário ou senha inválidos")

        data = self._read()
        data[self.config.session_key] = True
        self._write(data)
        logger.info("User %s logged in", username)

    def logout(self) -> None:
        """Clear the flag; other keys in the file are left alone."""
        data = self._read()
        if data.pop(self.config.session_key, None) is not None:
            self._write(data)
        logger.info("Logged out")
