"""Shared pytest fixtures for yoomoney_api tests."""

import copy
import json

import httpx
import pytest

from yoomoney_api.net import ApiClient
from yoomoney_api.types import ApiClientConfig


SHOWCASE_JSON = {
    "title": "Mobile phone top-up",
    "hidden_fields": {
        "scid": 5551,
        "test": True
    },
    "money_source": ["wallet", "payment-card"],
    "form": [
        {
            "type": "tel",
            "name": "phone",
            "label": "Phone number",
            "value": "79001234567"
        },
        {
            "type": "amount",
            "name": "sum",
            "label": "Amount",
            "min": 10,
            "max": 15000,
            "value": "100.00"
        },
        {
            "type": "select",
            "name": "operator",
            "label": "Operator",
            "value": "mts",
            "options": [
                {"label": "MTS", "value": "mts"},
                {
                    "label": "Other",
                    "value": "other",
                    "group": [
                        {"type": "text", "name": "operator_name", "maxlength": 32}
                    ]
                }
            ]
        },
        {
            "type": "submit",
            "label": "Pay"
        }
    ]
}

SECOND_STEP_JSON = {
    "title": "Confirm payment",
    "hidden_fields": {"step": "2"},
    "form": [
        {"type": "checkbox", "name": "agree", "label": "I agree", "checked": True}
    ]
}


@pytest.fixture
def showcase_json():
    """Showcase document of the first wizard step."""
    return copy.deepcopy(SHOWCASE_JSON)


@pytest.fixture
def second_step_json():
    """Showcase document of the second wizard step."""
    return copy.deepcopy(SECOND_STEP_JSON)


@pytest.fixture
def config():
    """Client configuration with a token and an instance id."""
    return ApiClientConfig(access_token="test-token", instance_id="instance-1")


@pytest.fixture
def make_client(config):
    """Factory building an ApiClient whose HTTP calls are answered by ``handler``."""
    def factory(handler, client_config=None):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ApiClient(client_config or config, http_client=http_client)
    return factory


def json_response(status_code, document, headers=None):
    """httpx response carrying a JSON document."""
    return httpx.Response(
        status_code,
        content=json.dumps(document).encode("utf-8"),
        headers={"Content-Type": "application/json", **(headers or {})}
    )


@pytest.fixture
def respond_json():
    """Builder of JSON responses for MockTransport handlers."""
    return json_response


@pytest.fixture
def request_payment_json():
    """Successful request-payment result."""
    return {
        "status": "success",
        "request_id": "req-123",
        "contract_amount": 100.5,
        "balance": 1000,
        "money_source": {"wallet": {"allowed": True}},
        "title": "Mobile phone top-up"
    }


@pytest.fixture
def process_success_json():
    """Successful process-payment result."""
    return {
        "status": "success",
        "payment_id": "pay-456",
        "invoice_id": "inv-789",
        "balance": 899.5,
        "credit_amount": 100.5
    }
