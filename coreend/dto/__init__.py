from coreend.dto.result import (
    AccessTokenResult,
    IdResult,
    ItemsResult,
    ProfileResult,
    Result,
    UrlResult,
)
from coreend.dto.session import Profile, Session

"""
Session state, profile and result envelopes.
"""
