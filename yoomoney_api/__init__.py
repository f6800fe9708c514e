"""yoomoney_api - async client for YooMoney showcases and payments."""

# Types
from .types import (
    # States
    ShowcaseState,
    PaymentProcessState,
    RequestStatus,
    ProcessStatus,
    ResourceState,

    # Configuration
    SDK_VERSION,
    ApiClientConfig,
    HostsProvider,

    # Error Types
    YooMoneyError,
    ResourceNotFoundError,
    ProtocolError,
    InvalidRequestError,
    InvalidTokenError,
    InsufficientScopeError,
    InvalidStateError,
    ConstructionError,
    ApiErrorCode,

    # Payment results
    RequestPayment,
    RequestExternalPayment,
    ProcessPayment,
    ProcessExternalPayment,
    ExternalCard,
    InstanceId
)

# Transport
from .net import (
    ApiClient,
    ApiRequest,
    BaseApiRequest,
    PostApiRequest,
    DocumentApiRequest,
    HttpResourceResponse
)

# Showcase forms and wizard
from .showcase import (
    Showcase,
    Group,
    Select,
    Option,
    validate,
    flatten,
    ShowcaseContext,
    ShowcaseRequest,
    ShowcaseSubmitRequest
)

# Payment API methods
from .core import (
    RequestPaymentRequest,
    ProcessPaymentRequest,
    RequestExternalPaymentRequest,
    ProcessExternalPaymentRequest,
    InstanceIdRequest
)

# Payment processes
from .processes import (
    ParameterProvider,
    PaymentParameters,
    SavedState,
    BasePaymentProcess,
    PaymentProcess,
    ExternalPaymentProcess,
    PaymentSavedState,
    ExternalPaymentSavedState
)

__version__ = SDK_VERSION

__all__ = [
    # States
    "ShowcaseState",
    "PaymentProcessState",
    "RequestStatus",
    "ProcessStatus",
    "ResourceState",

    # Configuration
    "SDK_VERSION",
    "ApiClientConfig",
    "HostsProvider",

    # Error Types
    "YooMoneyError",
    "ResourceNotFoundError",
    "ProtocolError",
    "InvalidRequestError",
    "InvalidTokenError",
    "InsufficientScopeError",
    "InvalidStateError",
    "ConstructionError",
    "ApiErrorCode",

    # Payment results
    "RequestPayment",
    "RequestExternalPayment",
    "ProcessPayment",
    "ProcessExternalPayment",
    "ExternalCard",
    "InstanceId",

    # Transport
    "ApiClient",
    "ApiRequest",
    "BaseApiRequest",
    "PostApiRequest",
    "DocumentApiRequest",
    "HttpResourceResponse",

    # Showcase
    "Showcase",
    "Group",
    "Select",
    "Option",
    "validate",
    "flatten",
    "ShowcaseContext",
    "ShowcaseRequest",
    "ShowcaseSubmitRequest",

    # Payment API methods
    "RequestPaymentRequest",
    "ProcessPaymentRequest",
    "RequestExternalPaymentRequest",
    "ProcessExternalPaymentRequest",
    "InstanceIdRequest",

    # Payment processes
    "ParameterProvider",
    "PaymentParameters",
    "SavedState",
    "BasePaymentProcess",
    "PaymentProcess",
    "ExternalPaymentProcess",
    "PaymentSavedState",
    "ExternalPaymentSavedState"
]
