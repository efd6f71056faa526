"""
Email/OTP authentication and the signed-in session.

One :class:`AuthenticationApi` owns one :class:`~coreend.dto.session.Session`.
Access tokens are renewed lazily: :meth:`AuthenticationApi.get_access_token`
renews when the token is within the leeway window of its expiry, so no
background timer is needed. A failed renewal logs the session out.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Dict, Optional

from coreend.api.module_api import ModuleApi
from coreend.dto.result import AccessTokenResult, ProfileResult, Result
from coreend.dto.session import Profile, Session
from coreend.io.exceptions import (
    AlreadySignedInError,
    CoreEndError,
    EmptyCredentialsError,
    NotSignedInError,
    RenewalFailedError,
    ValidationError,
)
from coreend.io.persistence import NullTokenStore, TokenStore

if TYPE_CHECKING:
    from coreend.api.api import Api

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TOKEN_TTL = timedelta(minutes=15)
DEFAULT_RENEW_LEEWAY = timedelta(seconds=30)


def _string_field(data: Any, key: str) -> str:
    """Return ``data[key]`` when ``data`` is an object and the value is a string, else ``""``."""
    if not isinstance(data, dict):
        return ""
    value = data.get(key)
    return value if isinstance(value, str) else ""


class AuthenticationApi(ModuleApi):

    def __init__(
        self,
        api: "Api",
        token_store: Optional[TokenStore] = None,
        access_token_ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL,
        renew_leeway: timedelta = DEFAULT_RENEW_LEEWAY,
    ):
        super().__init__(api)
        self.session = Session()
        self._token_store = token_store if token_store is not None else NullTokenStore()
        self._access_token_ttl = access_token_ttl
        self._renew_leeway = renew_leeway
        self._renew_lock = asyncio.Lock()
        self.restore()

    def _endpoint_prefix(self) -> str:
        return "auth"

    def restore(self) -> bool:
        """
        Sign in from a refresh token kept in the token store.

        Only the refresh token is restored; the access token stays expired so the
        next call that needs one renews it first. Does nothing when already signed in.
        """
        if self.session.is_signed_in:
            return False
        refresh_token = self._token_store.load()
        if not refresh_token:
            return False
        self.session.restore(refresh_token)
        logger.debug("Restored session from persisted refresh token")
        return True

    def is_signed_in(self) -> bool:
        return self.session.is_signed_in

    async def _auth_headers(self, require_auth: bool) -> Dict[str, str]:
        if not require_auth:
            return {}
        token = (await self.get_access_token()).unwrap()
        return {"Authorization": f"Bearer {token}"}

    # --- Tokens ---------------------------------------------------
    async def get_access_token(self) -> AccessTokenResult:
        """
        Return a valid access token, renewing it first if it expires within the leeway.

        Concurrent callers that find the token expiring wait on the same lock and
        re-check after it is released, so only the first one sends ``auth/renew``.
        """
        try:
            if not self.is_signed_in():
                raise NotSignedInError()

            if self.session.is_expiring(self._renew_leeway):
                async with self._renew_lock:
                    if not self.is_signed_in():
                        raise NotSignedInError()
                    if self.session.is_expiring(self._renew_leeway):
                        renewed = await self._renew()
                        if renewed.error is not None:
                            raise RenewalFailedError(cause=renewed.error)

            return AccessTokenResult.success(self.session.access_token)
        except CoreEndError as error:
            self._force_logout()
            return AccessTokenResult.failure(error)

    async def renew(self) -> Result:
        """Exchange the refresh token for a new access token. Logs out on failure."""
        async with self._renew_lock:
            return await self._renew()

    async def _renew(self) -> Result:
        try:
            if not self.is_signed_in():
                raise NotSignedInError()

            resp = await self._api.post(
                f"{self.endpoint}/renew",
                json={"refreshToken": self.session.refresh_token},
            )
            access_token = _string_field(self._api.parse_json(resp), "accessToken")
            if not access_token:
                raise EmptyCredentialsError("Could not renew: server returned no access token")

            self.session.renewed(access_token, self._access_token_ttl)
            logger.info("Access token renewed")
            return Result.success()
        except CoreEndError as error:
            self._force_logout()
            return Result.failure(error)

    # --- Sign in --------------------------------------------------
    async def login(self, email: str) -> Result:
        """Ask the server to send a one-time password to ``email``."""
        try:
            if self.is_signed_in():
                raise AlreadySignedInError()

            await self._api.post(f"{self.endpoint}/login", json={"email": email})
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)

    async def verify(self, email: str, otp: str) -> Result:
        """Exchange the one-time password for tokens and sign in."""
        try:
            if self.is_signed_in():
                raise AlreadySignedInError()

            resp = await self._api.post(f"{self.endpoint}/verify", json={"email": email, "otp": otp})
            data = self._api.parse_json(resp)
            access_token = _string_field(data, "accessToken")
            refresh_token = _string_field(data, "refreshToken")
            if not access_token or not refresh_token:
                raise EmptyCredentialsError()

            self.session.sign_in(access_token, refresh_token, self._access_token_ttl)
            self._persist(refresh_token)
            logger.info("Signed in")
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)

    # --- Profile --------------------------------------------------
    async def profile(self) -> ProfileResult:
        try:
            if not self.is_signed_in():
                raise NotSignedInError()
            headers = await self._auth_headers(True)

            resp = await self._api.get(f"{self.endpoint}/profile", headers=headers)
            data = self._api.parse_json(resp)
            uid = _string_field(data, "uid")
            email = _string_field(data, "email")
            if not uid or not email:
                raise ValidationError("Could not get profile")

            return ProfileResult.success(Profile(uid=uid, email=email))
        except CoreEndError as error:
            return ProfileResult.failure(error)

    # --- Sign out -------------------------------------------------
    async def invalidate(self) -> Result:
        """Revoke the refresh token on the server. The local session is logged out regardless."""
        try:
            if not self.is_signed_in():
                raise NotSignedInError()

            await self._api.post(
                f"{self.endpoint}/invalidate",
                json={"refreshToken": self.session.refresh_token},
            )
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)
        finally:
            self._force_logout()

    async def remove(self) -> Result:
        """Delete the account on the server. The local session is logged out regardless."""
        try:
            if not self.is_signed_in():
                raise NotSignedInError()
            headers = await self._auth_headers(True)

            await self._api.delete(f"{self.endpoint}/remove", headers=headers)
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)
        finally:
            self._force_logout()

    async def logout(self) -> Result:
        """Forget the session locally and clear the persisted refresh token."""
        try:
            if not self.is_signed_in():
                raise NotSignedInError()
            self._logout()
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)

    def _persist(self, refresh_token: str) -> None:
        try:
            self._token_store.save(refresh_token)
        except OSError as e:
            logger.warning(f"Could not persist refresh token: {e}")

    def _logout(self) -> None:
        try:
            self._token_store.clear()
        except OSError as e:
            logger.warning(f"Could not clear persisted refresh token: {e}")
        self.session.reset()
        logger.info("Logged out")

    def _force_logout(self) -> None:
        if self.session.is_signed_in:
            self._logout()
