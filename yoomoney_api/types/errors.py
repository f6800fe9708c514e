"""Error types raised by the SDK and service error codes."""

from typing import List, Optional


class YooMoneyError(Exception):
    """Base error for the YooMoney API client."""
    pass


class ResourceNotFoundError(YooMoneyError):
    """Remote resource answered with 404."""

    def __init__(self, url: Optional[str] = None):
        super().__init__(f"resource not found: {url}")
        self.url = url


class ProtocolError(YooMoneyError):
    """Server answered with a status code the caller does not expect.

    Carries the raw diagnostic body so the failure can be logged or the
    operation resumed from a saved state.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        payload: Optional[str] = None
    ):
        """Initialize protocol error.

        Args:
            message: Human-readable summary
            status_code: HTTP status code of the response
            url: Requested URL
            payload: Response body as text, if any
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.payload = payload


class InvalidRequestError(ProtocolError):
    """API method answered with 400."""
    pass


class InvalidTokenError(ProtocolError):
    """API method answered with 401: token is missing, expired or revoked."""
    pass


class InsufficientScopeError(ProtocolError):
    """API method answered with 403: token lacks the required scope."""
    pass


class InvalidStateError(YooMoneyError):
    """Payment process state and stored results are inconsistent."""
    pass


class ConstructionError(YooMoneyError):
    """Form component built with contradictory constraints.

    Deliberately not a ValueError so that it propagates out of pydantic
    validation as is.
    """
    pass


class ApiErrorCode:
    """Values of the ``error`` field returned by payment methods."""
    ILLEGAL_PARAMS = "illegal_params"
    ILLEGAL_PARAM_CSC = "illegal_param_csc"
    ILLEGAL_PARAM_EXT_AUTH_SUCCESS_URI = "illegal_param_ext_auth_success_uri"
    ILLEGAL_PARAM_EXT_AUTH_FAIL_URI = "illegal_param_ext_auth_fail_uri"
    NOT_ENOUGH_FUNDS = "not_enough_funds"
    LIMIT_EXCEEDED = "limit_exceeded"
    MONEY_SOURCE_NOT_AVAILABLE = "money_source_not_available"
    PAYMENT_REFUSED = "payment_refused"
    AUTHORIZATION_REJECT = "authorization_reject"
    ACCOUNT_BLOCKED = "account_blocked"
    PAYEE_NOT_FOUND = "payee_not_found"
    CONTRACT_NOT_FOUND = "contract_not_found"
    TECHNICAL_ERROR = "technical_error"

    @classmethod
    def get_all_codes(cls) -> List[str]:
        """Returns all defined error codes."""
        return [
            value for key, value in vars(cls).items()
            if key.isupper() and isinstance(value, str)
        ]


def error_for_status(
    status_code: int,
    url: Optional[str] = None,
    payload: Optional[str] = None
) -> YooMoneyError:
    """Maps an HTTP status code of an API method call to an error instance."""
    if status_code == 404:
        return ResourceNotFoundError(url)
    error_mapping = {
        400: InvalidRequestError,
        401: InvalidTokenError,
        403: InsufficientScopeError,
    }
    error_type = error_mapping.get(status_code, ProtocolError)
    return error_type(
        f"unexpected response code {status_code} for {url}",
        status_code=status_code,
        url=url,
        payload=payload
    )
