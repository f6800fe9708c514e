"""Unit tests for yoomoney_api.core.payment module."""

from decimal import Decimal

import httpx
import pytest

from yoomoney_api.core import (
    InstanceIdRequest,
    ProcessExternalPaymentRequest,
    ProcessPaymentRequest,
    RequestExternalPaymentRequest,
    RequestPaymentRequest,
    TestResult
)
from yoomoney_api.types import (
    HostsProvider,
    InsufficientScopeError,
    ProcessStatus,
    RequestPayment,
    RequestStatus
)


HOSTS = HostsProvider()


class TestRequestPaymentRequest:
    """Test request-payment method."""

    def test_parameters(self):
        """Test URL and parameters."""
        request = RequestPaymentRequest("5551", {"phone": "79001234567", "sum": "100.00"})

        assert request.request_url(HOSTS) == "https://yoomoney.ru/api/request-payment"
        assert request.parameters == {"pattern_id": "5551", "phone": "79001234567", "sum": "100.00"}

    def test_pattern_id_required(self):
        """Test that an empty pattern id is rejected."""
        with pytest.raises(ValueError):
            RequestPaymentRequest("", {})

    def test_parse(self, request_payment_json):
        """Test decoding of the result."""
        response = httpx.Response(200, json=request_payment_json)
        result = RequestPaymentRequest("5551").parse(response)

        assert isinstance(result, RequestPayment)
        assert result.status == RequestStatus.SUCCESS
        assert result.request_id == "req-123"
        assert result.contract_amount == Decimal("100.5")

    def test_parse_forbidden(self):
        """Test that 403 raises InsufficientScopeError."""
        response = httpx.Response(403, request=httpx.Request("POST", "https://yoomoney.ru/api/request-payment"))
        with pytest.raises(InsufficientScopeError):
            RequestPaymentRequest("5551").parse(response)


class TestProcessPaymentRequest:
    """Test process-payment method."""

    def test_parameters(self):
        """Test optional parameters."""
        request = ProcessPaymentRequest(
            "req-123",
            money_source="wallet",
            ext_auth_success_uri="https://shop/success"
        )

        assert request.request_url(HOSTS) == "https://yoomoney.ru/api/process-payment"
        assert request.parameters == {
            "request_id": "req-123",
            "money_source": "wallet",
            "ext_auth_success_uri": "https://shop/success"
        }

    def test_request_id_only(self):
        """Test the repeat form of the call."""
        assert ProcessPaymentRequest("req-123").parameters == {"request_id": "req-123"}

    def test_request_id_required(self):
        """Test that a missing request id is rejected."""
        with pytest.raises(ValueError):
            ProcessPaymentRequest(None)

    def test_test_payment_flags(self):
        """Test test-payment parameters."""
        request = ProcessPaymentRequest("req-123").test_card_available().set_test_result(TestResult.NOT_ENOUGH_FUNDS)

        assert request.parameters["test_payment"] == "true"
        assert request.parameters["test_card"] == "true"
        assert request.parameters["test_result"] == "not_enough_funds"

    def test_parse_in_progress(self):
        """Test decoding of a pending result."""
        response = httpx.Response(200, json={"status": "in_progress", "next_retry": 5000})
        result = ProcessPaymentRequest("req-123").parse(response)

        assert result.status == ProcessStatus.IN_PROGRESS
        assert result.next_retry_seconds == 5.0


class TestExternalPaymentRequests:
    """Test external payment methods."""

    def test_request_external_payment(self):
        """Test request-external-payment parameters."""
        request = RequestExternalPaymentRequest("instance-1", "5551", {"sum": "10"})

        assert request.request_url(HOSTS) == "https://yoomoney.ru/api/request-external-payment"
        assert request.parameters == {"instance_id": "instance-1", "pattern_id": "5551", "sum": "10"}

    @pytest.mark.parametrize("instance_id, params", [
        ("", {"sum": "10"}),
        ("instance-1", {}),
    ])
    def test_request_external_payment_arguments(self, instance_id, params):
        """Test that instance id and parameters are required."""
        with pytest.raises(ValueError):
            RequestExternalPaymentRequest(instance_id, "5551", params)

    def test_process_with_saved_card(self):
        """Test process-external-payment with a card token."""
        request = ProcessExternalPaymentRequest(
            "instance-1",
            "req-123",
            ext_auth_success_uri="https://shop/success",
            ext_auth_fail_uri="https://shop/fail",
            money_source_token="token-1",
            csc="123"
        )

        assert request.request_url(HOSTS) == "https://yoomoney.ru/api/process-external-payment"
        assert request.parameters == {
            "instance_id": "instance-1",
            "request_id": "req-123",
            "ext_auth_success_uri": "https://shop/success",
            "ext_auth_fail_uri": "https://shop/fail",
            "money_source_token": "token-1",
            "csc": "123"
        }

    def test_process_with_request_token(self):
        """Test process-external-payment for a new card."""
        request = ProcessExternalPaymentRequest("instance-1", "req-123", request_token=True)

        assert request.parameters["request_token"] == "true"
        assert "money_source_token" not in request.parameters

    def test_process_saved_card_requires_csc(self):
        """Test that a card token needs a security code."""
        with pytest.raises(ValueError):
            ProcessExternalPaymentRequest("instance-1", "req-123", money_source_token="token-1")

    def test_instance_id(self):
        """Test instance-id method."""
        request = InstanceIdRequest("client-1")
        response = httpx.Response(200, json={"status": "success", "instance_id": "instance-1"})

        assert request.request_url(HOSTS) == "https://yoomoney.ru/api/instance-id"
        assert request.parameters == {"client_id": "client-1"}
        assert request.parse(response).instance_id == "instance-1"
