from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from coreend.api.module_api import ModuleApi, captcha_params
from coreend.dto.result import Result, UrlResult
from coreend.io.exceptions import CoreEndError, ValidationError
from coreend.io.fs import UploadSource, read_upload

if TYPE_CHECKING:
    from coreend.api.api import Api


class StorageFilesApi(ModuleApi):
    """Files of one storage."""

    def __init__(self, api: "Api", storage_id: int):
        super().__init__(api)
        self.storage_id = storage_id

    def _endpoint_prefix(self) -> str:
        return f"storages/{self.storage_id}/files"

    async def get(self, file_name: str, require_auth: bool = False) -> UrlResult:
        """Return a URL (possibly signed and time-limited) to download ``file_name``."""
        try:
            headers = await self._auth_headers(require_auth)
            resp = await self._api.get(f"{self.endpoint}/{file_name}", headers=headers)
            data = self._api.parse_json(resp)
            url = data.get("url") if isinstance(data, dict) else None
            if not url or not isinstance(url, str):
                raise ValidationError(f"Server returned no url for file {file_name!r}")
            return UrlResult.success(url)
        except CoreEndError as error:
            return UrlResult.failure(error)

    async def create(
        self,
        file: UploadSource,
        file_name: Optional[str] = None,
        require_auth: bool = False,
        captcha_token: Optional[str] = None,
    ) -> Result:
        """
        Upload ``file`` as multipart form data.

        :param file: Path, raw bytes or binary file object.
        :param file_name: Name to store the file under. Defaults to the file's own name.
        :param require_auth: Send the bearer token of the signed-in user.
        :param captcha_token: Anti-abuse captcha response, if the storage requires one.
        """
        try:
            headers = await self._auth_headers(require_auth)
            try:
                name, content = read_upload(file, file_name)
            except (OSError, ValueError) as e:
                raise ValidationError(f"Can not read upload: {e}") from e
            await self._api.post(
                self.endpoint,
                params=captcha_params(captcha_token),
                data={"fileName": name},
                files={"file": (name, content)},
                headers=headers,
            )
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)

    async def remove(self, file_name: str, require_auth: bool = False) -> Result:
        try:
            headers = await self._auth_headers(require_auth)
            await self._api.delete(f"{self.endpoint}/{file_name}", headers=headers)
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)
