from __future__ import annotations

import os
from datetime import timedelta
from typing import Optional

import httpx

from coreend.api._api import _Api
from coreend.api.auth_api import AuthenticationApi
from coreend.api.resource_docs_api import ResourceDocsApi
from coreend.api.storage_files_api import StorageFilesApi
from coreend.io.persistence import TokenStore, token_store_from_path
from coreend.io.settings import CoreEndSettings, default_env_path


class Api(_Api):
    """
    One CoreEnd SDK instance: a project, its HTTP client and its signed-in session.

    Instances are independent; two of them never share a session unless they
    are given the same token store.
    """

    def __init__(
        self,
        project_id: int,
        settings: Optional[CoreEndSettings] = None,
        token_store: Optional[TokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings if settings is not None else CoreEndSettings()
        super().__init__(base_url=self._settings.base_url(project_id), transport=transport)

        self.project_id = project_id
        if token_store is None:
            token_store = token_store_from_path(self._settings.COREEND_TOKEN_STORE_PATH)
        self._token_store = token_store
        self._authentication_api: Optional[AuthenticationApi] = None

    @property
    def settings(self) -> CoreEndSettings:
        return self._settings

    def authentication(self) -> AuthenticationApi:
        """Authentication context of this instance, created on first use."""
        if self._authentication_api is None:
            self._authentication_api = AuthenticationApi(
                self,
                token_store=self._token_store,
                access_token_ttl=timedelta(minutes=self._settings.COREEND_ACCESS_TOKEN_TTL_MIN),
                renew_leeway=timedelta(seconds=self._settings.COREEND_RENEW_LEEWAY_SEC),
            )
        return self._authentication_api

    def resource_docs(self, resource_id: int) -> ResourceDocsApi:
        return ResourceDocsApi(self, resource_id)

    def storage_files(self, storage_id: int) -> StorageFilesApi:
        return StorageFilesApi(self, storage_id)

    @classmethod
    def from_env(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "Api":
        """Create API client from environment variables."""
        from dotenv import load_dotenv

        load_dotenv(os.getenv("COREEND_ENV_FILE", default_env_path()))
        settings = CoreEndSettings()
        if settings.COREEND_PROJECT_ID is None:
            raise ValueError("COREEND_PROJECT_ID must be set in environment variables.")
        return cls(project_id=settings.COREEND_PROJECT_ID, settings=settings, transport=transport)
