"""HTTP client executing API requests over httpx."""

import logging
from typing import Dict, Optional, TypeVar

import httpx

from ..types import ApiClientConfig, HostsProvider, HttpHeaders
from .request import ApiRequest


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiClient:
    """Executes ``ApiRequest`` instances against the remote service.

    Transport failures (``httpx.RequestError``) are not interpreted and
    propagate to the caller unchanged.

    Example:
        async with ApiClient(ApiClientConfig(access_token="...")) as client:
            context = await client.execute(ShowcaseRequest(pattern_id="337"))
    """

    def __init__(
        self,
        config: Optional[ApiClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize client.

        Args:
            config: Client configuration; defaults are used when omitted
            http_client: Preconfigured httpx client; created from config when omitted
        """
        self.config = config or ApiClientConfig()
        self.hosts = HostsProvider(self.config)
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=self.config.timeout_seconds)

    @property
    def access_token(self) -> Optional[str]:
        return self.config.access_token

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Sets or clears the OAuth token used for authorized methods."""
        self.config = self.config.model_copy(update={"access_token": access_token})

    def is_authorized(self) -> bool:
        return bool(self.config.access_token)

    def build_request(self, request: ApiRequest) -> httpx.Request:
        """Converts an ``ApiRequest`` into an httpx request."""
        headers: Dict[str, str] = {HttpHeaders.USER_AGENT: self.config.user_agent}
        if self.is_authorized():
            headers[HttpHeaders.AUTHORIZATION] = f"Bearer {self.config.access_token}"
        headers.update(request.headers)

        content = None
        if request.method.supports_request_body:
            content = request.body
            headers[HttpHeaders.CONTENT_TYPE] = request.content_type

        return self._http_client.build_request(
            request.method.value,
            request.request_url(self.hosts),
            headers=headers,
            content=content
        )

    async def execute(self, request: ApiRequest[T]) -> T:
        """Performs one HTTP call and parses its response.

        Args:
            request: API request to execute

        Returns:
            Result produced by ``request.parse``
        """
        http_request = self.build_request(request)
        logger.info(f"{http_request.method} {http_request.url}")
        response = await self._http_client.send(http_request)
        logger.info(f"{response.status_code} {response.reason_phrase} for {http_request.url}")
        return request.parse(response)

    async def close(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
