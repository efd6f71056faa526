"""
Settings model for the SDK, read from environment variables or a
``coreend.env`` file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

COREEND_ENV_FILENAME = "coreend.env"


def default_env_path() -> Path:
    return Path.cwd() / COREEND_ENV_FILENAME


def _normalize_host(host: str) -> str:
    """_normalize_host"""
    parsed = urlparse(host if "://" in host else f"//{host}")
    return (parsed.netloc or parsed.path).strip("/")


class CoreEndSettings(BaseSettings):
    """
    Settings model for the CoreEnd SDK via environment variables
    or other settings sources supported by `pydantic-settings`.
    """

    COREEND_PROJECT_ID: Optional[int] = None
    COREEND_API_HOST: str = "api.coreend.tech"
    COREEND_API_SCHEME: str = "https"
    COREEND_TOKEN_STORE_PATH: Optional[Path] = None
    COREEND_ACCESS_TOKEN_TTL_MIN: int = Field(default=15, gt=0)
    COREEND_RENEW_LEEWAY_SEC: int = Field(default=30, ge=0)

    model_config = SettingsConfigDict(
        env_file=COREEND_ENV_FILENAME,
        extra="ignore",
    )

    def base_url(self, project_id: int) -> str:
        """Base URL of every request made on behalf of ``project_id``."""
        host = _normalize_host(self.COREEND_API_HOST)
        return f"{self.COREEND_API_SCHEME}://{host}/v1/projects/{project_id}/"
