"""Payment API methods.

Each request is a form-urlencoded POST to ``<money_api>/<method>`` whose 200
response decodes into the matching result model.
"""

from typing import Dict, Optional

from ..net import PostApiRequest
from ..types import (
    HostsProvider,
    InstanceId,
    ProcessExternalPayment,
    ProcessPayment,
    RequestExternalPayment,
    RequestPayment
)


def _require(value: Optional[str], name: str) -> str:
    if not value:
        raise ValueError(f"{name} is null or empty")
    return value


class RequestPaymentRequest(PostApiRequest[RequestPayment]):
    """``request-payment``: creates a wallet payment from showcase parameters."""

    def __init__(self, pattern_id: str, payment_parameters: Optional[Dict[str, str]] = None):
        super().__init__(RequestPayment)
        self.add_parameter("pattern_id", _require(pattern_id, "pattern_id"))
        self.add_parameters(payment_parameters or {})

    def request_url_base(self, hosts: HostsProvider) -> str:
        return f"{hosts.money_api}/request-payment"


class TestResult:
    """Outcomes a test ``process-payment`` call can be asked to produce."""
    __test__ = False

    SUCCESS = "success"
    CONTRACT_NOT_FOUND = "contract_not_found"
    NOT_ENOUGH_FUNDS = "not_enough_funds"
    LIMIT_EXCEEDED = "limit_exceeded"
    MONEY_SOURCE_NOT_AVAILABLE = "money_source_not_available"
    ILLEGAL_PARAM_CSC = "illegal_param_csc"
    PAYMENT_REFUSED = "payment_refused"
    AUTHORIZATION_REJECT = "authorization_reject"
    ACCOUNT_BLOCKED = "account_blocked"
    ILLEGAL_PARAM_EXT_AUTH_SUCCESS_URI = "illegal_param_ext_auth_success_uri"
    ILLEGAL_PARAM_EXT_AUTH_FAIL_URI = "illegal_param_ext_auth_fail_uri"


class ProcessPaymentRequest(PostApiRequest[ProcessPayment]):
    """``process-payment``: confirms a payment created by ``request-payment``.

    Repeating the call with the same ``request_id`` is safe; the server
    answers with the state of the same payment.
    """

    def __init__(
        self,
        request_id: str,
        money_source: Optional[str] = None,
        csc: Optional[str] = None,
        ext_auth_success_uri: Optional[str] = None,
        ext_auth_fail_uri: Optional[str] = None
    ):
        """Initialize request.

        Args:
            request_id: Identifier returned by ``request-payment``
            money_source: Money source id, e.g. ``wallet`` or a card id
            csc: Card security code, for card money sources
            ext_auth_success_uri: Return URI after successful 3-D Secure
            ext_auth_fail_uri: Return URI after failed 3-D Secure
        """
        super().__init__(ProcessPayment)
        self.add_parameter("request_id", _require(request_id, "request_id"))
        self.add_parameter("money_source", money_source)
        self.add_parameter("csc", csc)
        self.add_parameter("ext_auth_success_uri", ext_auth_success_uri)
        self.add_parameter("ext_auth_fail_uri", ext_auth_fail_uri)

    def test_card_available(self) -> "ProcessPaymentRequest":
        """Marks the call as a test payment with a linked card available."""
        self.add_parameter("test_payment", True)
        self.add_parameter("test_card", True)
        return self

    def set_test_result(self, test_result: str) -> "ProcessPaymentRequest":
        """Marks the call as a test payment ending with ``test_result``."""
        self.add_parameter("test_payment", True)
        self.add_parameter("test_result", test_result)
        return self

    def request_url_base(self, hosts: HostsProvider) -> str:
        return f"{hosts.money_api}/process-payment"


class RequestExternalPaymentRequest(PostApiRequest[RequestExternalPayment]):
    """``request-external-payment``: creates a payment from a bank card."""

    def __init__(self, instance_id: str, pattern_id: str, payment_parameters: Dict[str, str]):
        super().__init__(RequestExternalPayment)
        if not payment_parameters:
            raise ValueError("payment_parameters is null or empty")
        self.add_parameter("instance_id", _require(instance_id, "instance_id"))
        self.add_parameter("pattern_id", _require(pattern_id, "pattern_id"))
        self.add_parameters(payment_parameters)

    def request_url_base(self, hosts: HostsProvider) -> str:
        return f"{hosts.money_api}/request-external-payment"


class ProcessExternalPaymentRequest(PostApiRequest[ProcessExternalPayment]):
    """``process-external-payment``: confirms an external payment.

    The card is either a saved one (``money_source_token`` with ``csc``) or
    entered on the bank page, in which case ``request_token`` asks the server
    to return a token for reuse.
    """

    def __init__(
        self,
        instance_id: str,
        request_id: str,
        ext_auth_success_uri: Optional[str] = None,
        ext_auth_fail_uri: Optional[str] = None,
        money_source_token: Optional[str] = None,
        csc: Optional[str] = None,
        request_token: bool = False
    ):
        super().__init__(ProcessExternalPayment)
        self.add_parameter("instance_id", _require(instance_id, "instance_id"))
        self.add_parameter("request_id", _require(request_id, "request_id"))
        self.add_parameter("ext_auth_success_uri", ext_auth_success_uri)
        self.add_parameter("ext_auth_fail_uri", ext_auth_fail_uri)
        if money_source_token:
            self.add_parameter("money_source_token", money_source_token)
            self.add_parameter("csc", _require(csc, "csc"))
        else:
            self.add_parameter("request_token", request_token)

    def request_url_base(self, hosts: HostsProvider) -> str:
        return f"{hosts.money_api}/process-external-payment"


class InstanceIdRequest(PostApiRequest[InstanceId]):
    """``instance-id``: registers an application instance for external payments."""

    def __init__(self, client_id: str):
        super().__init__(InstanceId)
        self.add_parameter("client_id", _require(client_id, "client_id"))

    def request_url_base(self, hosts: HostsProvider) -> str:
        return f"{hosts.money_api}/instance-id"
