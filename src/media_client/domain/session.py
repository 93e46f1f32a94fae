"""Domain models for the stored user session."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """Profile of the signed-in user."""

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the credential store."""

    token: str | None
    user: UserProfile | None

    @property
    def authenticated(self) -> bool:
        return bool(self.token)
