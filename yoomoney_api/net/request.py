"""Request abstraction shared by every API method."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Generic, Mapping, Optional, Type, TypeVar
from urllib.parse import quote_plus

import httpx
from pydantic import BaseModel

from ..types import (
    HostsProvider,
    HttpHeaders,
    MimeTypes,
    ProtocolError,
    ResourceNotFoundError,
    ResourceState,
    error_for_status
)
from .responses import format_http_date, parse_date_header, process_error, request_url


logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class Method(str, Enum):
    DELETE = "DELETE"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"

    @property
    def supports_request_body(self) -> bool:
        return self not in (Method.DELETE, Method.GET)


def _iter_transmittable(params: Mapping[str, Optional[str]]):
    for key, value in params.items():
        if not key or not value:
            continue
        yield key, value


def encode_parameters(params: Mapping[str, Optional[str]]) -> bytes:
    """Encodes parameters as a form-urlencoded UTF-8 body.

    Entries with an empty key or an empty value are not transmitted.
    """
    return "&".join(
        f"{quote_plus(key)}={quote_plus(value)}"
        for key, value in _iter_transmittable(params)
    ).encode("utf-8")


def encode_query(params: Mapping[str, Optional[str]]) -> str:
    """Encodes parameters as a query string, empty if nothing is transmitted."""
    query = encode_parameters(params).decode("utf-8")
    return f"?{query}" if query else ""


def _to_parameter_value(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, datetime):
        return format_http_date(value)
    return str(value)


class ApiRequest(ABC, Generic[T]):
    """Single call to the remote service and the parser of its response."""

    @property
    @abstractmethod
    def method(self) -> Method:
        ...

    @abstractmethod
    def request_url(self, hosts: HostsProvider) -> str:
        ...

    @property
    @abstractmethod
    def headers(self) -> Dict[str, str]:
        ...

    @property
    @abstractmethod
    def parameters(self) -> Dict[str, str]:
        ...

    @property
    def body(self) -> bytes:
        return encode_parameters(self.parameters)

    @property
    def content_type(self) -> str:
        return MimeTypes.FORM_URLENCODED

    @abstractmethod
    def parse(self, response: httpx.Response) -> T:
        """Converts the HTTP response into the request's result."""
        ...


class BaseApiRequest(ApiRequest[T]):
    """Request that accumulates its own parameters and headers."""

    def __init__(self):
        self._parameters: Dict[str, str] = {}
        self._headers: Dict[str, str] = {}

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    @property
    def parameters(self) -> Dict[str, str]:
        return dict(self._parameters)

    def add_parameter(self, name: str, value) -> "BaseApiRequest[T]":
        """Adds a parameter; ``None`` values are skipped."""
        converted = _to_parameter_value(value)
        if converted is not None:
            self._parameters[name] = converted
        return self

    def add_parameters(self, params: Mapping[str, Optional[str]]) -> "BaseApiRequest[T]":
        for name, value in params.items():
            self.add_parameter(name, value)
        return self

    def add_header(self, name: str, value) -> "BaseApiRequest[T]":
        """Adds a header; ``None`` values are skipped."""
        converted = _to_parameter_value(value)
        if converted is not None:
            self._headers[name] = converted
        return self

    def request_url(self, hosts: HostsProvider) -> str:
        url = self.request_url_base(hosts)
        if not self.method.supports_request_body:
            url += encode_query(self.parameters)
        return url

    @abstractmethod
    def request_url_base(self, hosts: HostsProvider) -> str:
        """URL of the method without the query string."""
        ...


class PostApiRequest(BaseApiRequest[M]):
    """POST method call whose 200 body is a JSON document of ``result_type``."""

    def __init__(self, result_type: Type[M]):
        super().__init__()
        self.result_type = result_type

    @property
    def method(self) -> Method:
        return Method.POST

    def parse(self, response: httpx.Response) -> M:
        if response.status_code == 200:
            logger.debug(f"{self.result_type.__name__} response: {response.text}")
            return self.result_type.model_validate_json(response.content)
        logger.warning(f"{self.result_type.__name__} request failed with {response.status_code}")
        raise error_for_status(
            response.status_code,
            url=request_url(response),
            payload=response.text or None
        )


class HttpResourceResponse(BaseModel, Generic[M]):
    """Result of a conditional document fetch."""
    resource_state: ResourceState
    content_type: Optional[str] = None
    last_modified: Optional[datetime] = None
    expires: Optional[datetime] = None
    document: Optional[M] = None


class DocumentApiRequest(BaseApiRequest[HttpResourceResponse[M]], Generic[M]):
    """GET of a cacheable document honouring ``If-Modified-Since``."""

    def __init__(self, document_type: Type[M], last_modified: Optional[datetime] = None):
        super().__init__()
        self.document_type = document_type
        self.add_header(HttpHeaders.IF_MODIFIED_SINCE, last_modified)

    @property
    def method(self) -> Method:
        return Method.GET

    def parse(self, response: httpx.Response) -> HttpResourceResponse[M]:
        code = response.status_code
        if code in (200, 304):
            document = None
            content_type = None
            resource_state = ResourceState.NOT_MODIFIED
            if code == 200:
                resource_state = ResourceState.DOCUMENT
                content_type = response.headers.get(HttpHeaders.CONTENT_TYPE)
                document = self.document_type.model_validate_json(response.content)
            return HttpResourceResponse[self.document_type](
                resource_state=resource_state,
                content_type=content_type,
                last_modified=parse_date_header(response, HttpHeaders.LAST_MODIFIED),
                expires=parse_date_header(response, HttpHeaders.EXPIRES),
                document=document
            )
        if code == 404:
            raise ResourceNotFoundError(request_url(response))
        logger.warning(f"Unexpected document response code {code}")
        raise ProtocolError(
            process_error(response),
            status_code=code,
            url=request_url(response),
            payload=response.text or None
        )