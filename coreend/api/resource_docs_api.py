from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from coreend.api.module_api import ModuleApi, captcha_params
from coreend.dto.result import IdResult, ItemsResult, Result
from coreend.io.exceptions import CoreEndError, ValidationError

if TYPE_CHECKING:
    from coreend.api.api import Api

DocId = Union[int, str]


class ResourceDocsApi(ModuleApi):
    """Documents of one resource (collection)."""

    def __init__(self, api: "Api", resource_id: int):
        super().__init__(api)
        self.resource_id = resource_id

    def _endpoint_prefix(self) -> str:
        return f"resources/{self.resource_id}/docs"

    # --- Retrieval ------------------------------------------------
    async def get(
        self,
        id: Optional[DocId] = None,
        page: Optional[int] = None,
        require_auth: bool = False,
    ) -> ItemsResult:
        """
        Fetch one document by ``id``, or a page of the collection.

        The payload is passed through as the server sends it: a single
        document for ``id``, otherwise whatever the backend returns for ``page``.
        """
        try:
            headers = await self._auth_headers(require_auth)
            params = {"page": page} if page is not None else None
            doc = "" if id is None else str(id)
            resp = await self._api.get(f"{self.endpoint}/{doc}", params=params, headers=headers)
            items = self._api.parse_json(resp)
            if items is None:
                raise ValidationError("Server returned no documents")
            return ItemsResult.success(items)
        except CoreEndError as error:
            return ItemsResult.failure(error)

    # --- Creation -------------------------------------------------
    async def create(
        self,
        item: Dict[str, Any],
        require_auth: bool = False,
        captcha_token: Optional[str] = None,
    ) -> IdResult:
        """Create a document and return the identifier assigned by the server."""
        try:
            headers = await self._auth_headers(require_auth)
            resp = await self._api.post(
                self.endpoint,
                json={"data": item},
                params=captcha_params(captcha_token),
                headers=headers,
            )
            new_id = self._api.parse_json(resp)
            if new_id is None:
                raise ValidationError("Server returned no document id")
            return IdResult.success(new_id)
        except CoreEndError as error:
            return IdResult.failure(error)

    # --- Update ---------------------------------------------------
    async def update(self, item: Dict[str, Any], require_auth: bool = False) -> Result:
        try:
            headers = await self._auth_headers(require_auth)
            await self._api.put(self.endpoint, json={"data": item}, headers=headers)
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)

    # --- Deletion -------------------------------------------------
    async def remove(self, id: DocId, require_auth: bool = False) -> Result:
        try:
            headers = await self._auth_headers(require_auth)
            await self._api.delete(f"{self.endpoint}/{id}", headers=headers)
            return Result.success()
        except CoreEndError as error:
            return Result.failure(error)
