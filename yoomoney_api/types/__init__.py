"""Types package for yoomoney_api - states, errors, configuration and payment results."""

from .state import (
    ShowcaseState,
    PaymentProcessState,
    RequestStatus,
    ProcessStatus,
    ResourceState,
    HttpHeaders,
    MimeTypes
)

from .errors import (
    YooMoneyError,
    ResourceNotFoundError,
    ProtocolError,
    InvalidRequestError,
    InvalidTokenError,
    InsufficientScopeError,
    InvalidStateError,
    ConstructionError,
    ApiErrorCode,
    error_for_status
)

from .config import (
    DEFAULT_HOST,
    SDK_VERSION,
    ApiClientConfig,
    HostsProvider
)

from .payments import (
    BaseRequestPayment,
    RequestPayment,
    RequestExternalPayment,
    BaseProcessPayment,
    ProcessPayment,
    ProcessExternalPayment,
    ExternalCard,
    InstanceId
)

__all__ = [

    "ShowcaseState",
    "PaymentProcessState",
    "RequestStatus",
    "ProcessStatus",
    "ResourceState",
    "HttpHeaders",
    "MimeTypes",

    "YooMoneyError",
    "ResourceNotFoundError",
    "ProtocolError",
    "InvalidRequestError",
    "InvalidTokenError",
    "InsufficientScopeError",
    "InvalidStateError",
    "ConstructionError",
    "ApiErrorCode",
    "error_for_status",

    "DEFAULT_HOST",
    "SDK_VERSION",
    "ApiClientConfig",
    "HostsProvider",

    "BaseRequestPayment",
    "RequestPayment",
    "RequestExternalPayment",
    "BaseProcessPayment",
    "ProcessPayment",
    "ProcessExternalPayment",
    "ExternalCard",
    "InstanceId"
]
