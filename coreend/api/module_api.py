from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from coreend.api.api import Api


def captcha_params(captcha_token: Optional[str]) -> Dict[str, str]:
    """Query parameters carrying an anti-abuse captcha response, if any."""
    return {"hcaptchaResponse": captcha_token} if captcha_token else {}


class ModuleApi:
    """Base class for concrete API clients."""

    def __init__(self, api: "Api"):
        self._api = api

    def _endpoint_prefix(self) -> str:
        raise NotImplementedError()

    @property
    def endpoint(self) -> str:
        return self._endpoint_prefix().rstrip("/")

    async def _auth_headers(self, require_auth: bool) -> Dict[str, str]:
        """
        Headers for a request, with a bearer token when ``require_auth`` is set.

        :raises CoreEndError: if no access token can be obtained.
        """
        if not require_auth:
            return {}
        token = (await self._api.authentication().get_access_token()).unwrap()
        return {"Authorization": f"Bearer {token}"}
