"""Configuration types for yoomoney_api."""

import os
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_HOST = "https://yoomoney.ru"
SDK_VERSION = "1.0.0"


class ApiClientConfig(BaseModel):
    """Configuration for the API client."""
    host: str = DEFAULT_HOST
    api_path: str = "/api"
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = f"yoomoney-api-python/{SDK_VERSION}"
    access_token: Optional[str] = None
    instance_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiClientConfig":
        """Builds configuration from ``YOOMONEY_*`` environment variables."""
        return cls(
            host=os.getenv("YOOMONEY_HOST", DEFAULT_HOST),
            access_token=os.getenv("YOOMONEY_ACCESS_TOKEN") or None,
            instance_id=os.getenv("YOOMONEY_INSTANCE_ID") or None,
            timeout_seconds=float(os.getenv("YOOMONEY_TIMEOUT_SECONDS", "30")),
        )


class HostsProvider:
    """Base URLs of the remote service derived from configuration."""

    def __init__(self, config: Optional[ApiClientConfig] = None):
        self.config = config or ApiClientConfig()

    @property
    def money(self) -> str:
        return self.config.host.rstrip("/")

    @property
    def money_api(self) -> str:
        return self.money + self.config.api_path
