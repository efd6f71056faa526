from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(BaseModel):
    """Signed-in user as returned by ``auth/profile``."""

    uid: str = Field(..., description="User identifier")
    email: str = Field(..., description="User email address")

    model_config = ConfigDict(frozen=True)


class Session(BaseModel):
    """Tokens of the signed-in user. Mutated in place by the authentication component."""

    is_signed_in: bool = False
    access_token: str = ""
    refresh_token: str = ""
    expires_on: datetime = Field(default=EPOCH, description="Access token expiry (UTC)")

    model_config = ConfigDict(validate_assignment=True)

    def sign_in(self, access_token: str, refresh_token: str, ttl: timedelta) -> None:
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.expires_on = utcnow() + ttl
        self.is_signed_in = True

    def restore(self, refresh_token: str) -> None:
        """Sign in from a persisted refresh token only; the access token stays expired."""
        self.refresh_token = refresh_token
        self.is_signed_in = True

    def renewed(self, access_token: str, ttl: timedelta) -> None:
        self.access_token = access_token
        self.expires_on = utcnow() + ttl

    def reset(self) -> None:
        self.is_signed_in = False
        self.access_token = ""
        self.refresh_token = ""
        self.expires_on = EPOCH

    def is_expiring(self, leeway: timedelta) -> bool:
        return utcnow() >= self.expires_on - leeway
