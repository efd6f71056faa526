"""
Result envelopes returned by every public operation.

An envelope holds either an ``error`` or its payload, never both and never
neither. Operations with no payload return :class:`Result`, which is valid
with or without an error.
"""

from __future__ import annotations

from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from coreend.dto.session import Profile
from coreend.io.exceptions import CoreEndError


class Result(BaseModel):
    error: Optional[CoreEndError] = None

    payload_field: ClassVar[Optional[str]] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def check_exactly_one(self):
        field = self.payload_field
        if field is None:
            return self
        has_payload = getattr(self, field) is not None
        has_error = self.error is not None
        if has_payload == has_error:
            raise ValueError(f"{type(self).__name__} must carry exactly one of 'error' and {field!r}")
        return self

    @classmethod
    def success(cls, value: Any = None):
        if cls.payload_field is None:
            return cls()
        return cls(**{cls.payload_field: value})

    @classmethod
    def failure(cls, error: CoreEndError):
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the payload, or raise the carried error."""
        if self.error is not None:
            raise self.error
        if self.payload_field is None:
            return None
        return getattr(self, self.payload_field)


class ItemsResult(Result):
    items: Optional[Any] = None

    payload_field: ClassVar[Optional[str]] = "items"


class IdResult(Result):
    id: Optional[Any] = None

    payload_field: ClassVar[Optional[str]] = "id"


class UrlResult(Result):
    url: Optional[str] = None

    payload_field: ClassVar[Optional[str]] = "url"


class AccessTokenResult(Result):
    access_token: Optional[str] = None

    payload_field: ClassVar[Optional[str]] = "access_token"


class ProfileResult(Result):
    profile: Optional[Profile] = None

    payload_field: ClassVar[Optional[str]] = "profile"
