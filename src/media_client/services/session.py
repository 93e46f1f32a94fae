"""Session credential access and authentication state."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from media_client.domain.session import SessionState, UserProfile

TOKEN_KEY = "authToken"
USER_KEY = "user"

_logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """String key-value store holding the session token and profile."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value."""

    def remove_item(self, key: str) -> None:
        """Remove a value if present."""


@dataclass
class Session:
    """Read/write lifecycle of the stored session."""

    store: CredentialStore

    def load(self) -> SessionState:
        """Read the current token and profile; a malformed profile reads as absent."""
        token = self.store.get_item(TOKEN_KEY) or None
        return SessionState(token=token, user=self._load_user())

    def save(self, token: str, user: UserProfile | dict[str, object] | None) -> None:
        """Persist a freshly issued token and profile."""
        self.store.set_item(TOKEN_KEY, token)
        if user is None:
            self.store.remove_item(USER_KEY)
            return
        profile = user if isinstance(user, UserProfile) else UserProfile(**user)
        self.store.set_item(USER_KEY, profile.model_dump_json(exclude_none=True))

    def clear(self) -> None:
        self.store.remove_item(TOKEN_KEY)
        self.store.remove_item(USER_KEY)

    def _load_user(self) -> UserProfile | None:
        raw = self.store.get_item(USER_KEY)
        if not raw:
            return None
        try:
            return UserProfile.model_validate_json(raw)
        except ValidationError:
            _logger.warning("Error parsing stored user profile; treating as absent")
            return None


@dataclass
class SessionAccessor:
    """Answers authentication queries and builds request headers."""

    session: Session

    def authorization_headers(self) -> dict[str, str]:
        """Headers for an authorized JSON request."""
        headers = {"Content-Type": "application/json"}
        token = self.session.load().token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def is_authenticated(self) -> bool:
        return self.session.load().authenticated

    def current_user(self) -> UserProfile | None:
        return self.session.load().user
