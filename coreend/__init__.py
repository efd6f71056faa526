"""
Public package interface for the CoreEnd SDK.

Initialize once with :func:`init_coreend`, then use :func:`resource_docs`,
:func:`storage_files` and :func:`authentication`. Every operation is a
coroutine returning a result envelope with either ``error`` or a payload set.
"""

from __future__ import annotations

from coreend.api.api import Api
from coreend.api.auth_api import AuthenticationApi
from coreend.api.resource_docs_api import ResourceDocsApi
from coreend.api.storage_files_api import StorageFilesApi
from coreend.client import (
    authentication,
    enforce_is_initialized,
    init_coreend,
    resource_docs,
    storage_files,
)
from coreend.dto.result import (
    AccessTokenResult,
    IdResult,
    ItemsResult,
    ProfileResult,
    Result,
    UrlResult,
)
from coreend.dto.session import Profile, Session
from coreend.io.exceptions import (
    AlreadyInitializedError,
    AlreadySignedInError,
    CoreEndError,
    EmptyCredentialsError,
    NotInitializedError,
    NotSignedInError,
    PreconditionError,
    RenewalFailedError,
    TransportError,
    ValidationError,
)
from coreend.io.persistence import (
    REFRESH_TOKEN_KEY,
    FileTokenStore,
    MemoryTokenStore,
    NullTokenStore,
    TokenStore,
)
from coreend.io.settings import CoreEndSettings

__all__ = [
    "Api",
    "AuthenticationApi",
    "ResourceDocsApi",
    "StorageFilesApi",
    "init_coreend",
    "enforce_is_initialized",
    "resource_docs",
    "storage_files",
    "authentication",
    "Result",
    "ItemsResult",
    "IdResult",
    "UrlResult",
    "AccessTokenResult",
    "ProfileResult",
    "Profile",
    "Session",
    "CoreEndError",
    "NotInitializedError",
    "AlreadyInitializedError",
    "PreconditionError",
    "AlreadySignedInError",
    "NotSignedInError",
    "RenewalFailedError",
    "ValidationError",
    "EmptyCredentialsError",
    "TransportError",
    "TokenStore",
    "NullTokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    "REFRESH_TOKEN_KEY",
    "CoreEndSettings",
]
