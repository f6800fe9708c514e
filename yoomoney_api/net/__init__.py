"""Net package exports for yoomoney_api."""

from .request import (
    Method,
    ApiRequest,
    BaseApiRequest,
    PostApiRequest,
    DocumentApiRequest,
    HttpResourceResponse,
    encode_parameters,
    encode_query
)
from .responses import (
    format_http_date,
    parse_date_header,
    process_error,
    request_url,
    utc_now
)
from .client import ApiClient

__all__ = [
    "Method",
    "ApiRequest",
    "BaseApiRequest",
    "PostApiRequest",
    "DocumentApiRequest",
    "HttpResourceResponse",
    "encode_parameters",
    "encode_query",

    "format_http_date",
    "parse_date_header",
    "process_error",
    "request_url",
    "utc_now",

    "ApiClient"
]
