"""
Process-wide default SDK instance.

Call :func:`init_coreend` once, then use the factories. Calling a factory
before initialization, or initializing twice, raises.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from coreend.api.api import Api
from coreend.api.auth_api import AuthenticationApi
from coreend.api.resource_docs_api import ResourceDocsApi
from coreend.api.storage_files_api import StorageFilesApi
from coreend.io.exceptions import AlreadyInitializedError, NotInitializedError
from coreend.io.persistence import TokenStore
from coreend.io.settings import CoreEndSettings

logger = logging.getLogger(__name__)

_instance: Optional[Api] = None


def init_coreend(
    project_id: int,
    settings: Optional[CoreEndSettings] = None,
    token_store: Optional[TokenStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Api:
    """
    Initialize the default SDK instance for ``project_id``.

    :raises AlreadyInitializedError: if the SDK was initialized before.
    """
    global _instance
    if _instance is not None:
        raise AlreadyInitializedError()

    _instance = Api(project_id=project_id, settings=settings, token_store=token_store, transport=transport)
    logger.info(f"CoreEnd SDK initialized for project {project_id}")
    return _instance


def enforce_is_initialized() -> Api:
    if _instance is None:
        raise NotInitializedError()
    return _instance


def resource_docs(resource_id: int) -> ResourceDocsApi:
    return enforce_is_initialized().resource_docs(resource_id)


def storage_files(storage_id: int) -> StorageFilesApi:
    return enforce_is_initialized().storage_files(storage_id)


def authentication() -> AuthenticationApi:
    return enforce_is_initialized().authentication()
