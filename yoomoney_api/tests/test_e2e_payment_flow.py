"""End-to-end integration tests: showcase wizard to completed payment."""

from urllib.parse import parse_qs

import httpx
import pytest
from unittest.mock import AsyncMock

from yoomoney_api import (
    ExternalPaymentProcess,
    PaymentParameters,
    PaymentProcess,
    PaymentProcessState,
    ProcessStatus,
    ShowcaseRequest,
    ShowcaseState
)


def form_of(request):
    return {key: values[0] for key, values in parse_qs(request.content.decode("utf-8")).items()}


class FakeYooMoney:
    """In-memory server answering the showcase and payment methods."""

    def __init__(self, showcase_json, second_step_json, respond_json, pending_polls=1):
        self.showcase_json = showcase_json
        self.second_step_json = second_step_json
        self.respond_json = respond_json
        self.pending_polls = pending_polls
        self.calls = []

    def __call__(self, request):
        path = request.url.path
        form = form_of(request) if request.method == "POST" else {}
        self.calls.append((request.method, path, form))

        if path == "/api/showcase/5551":
            return self.respond_json(300, self.showcase_json, {
                "Location": "/api/showcase/5551/step1",
                "Last-Modified": "Tue, 02 Jan 2024 03:04:05 GMT"
            })
        if path == "/api/showcase/5551/step1":
            if form.get("sum") == "20000":
                document = dict(self.showcase_json, error=[{"name": "sum", "alert": "Too much"}])
                return self.respond_json(400, document)
            return self.respond_json(300, self.second_step_json, {"Location": "/api/showcase/5551/step2"})
        if path == "/api/showcase/5551/step2":
            params = {key: value for key, value in form.items()}
            return self.respond_json(200, {"params": params})
        if path in ("/api/request-payment", "/api/request-external-payment"):
            return self.respond_json(200, {"status": "success", "request_id": "req-1", "contract_amount": 100})
        if path in ("/api/process-payment", "/api/process-external-payment"):
            if self.pending_polls > 0:
                self.pending_polls -= 1
                return self.respond_json(200, {"status": "in_progress", "next_retry": 1000})
            return self.respond_json(200, {"status": "success", "payment_id": "pay-1"})
        return httpx.Response(404)


@pytest.fixture
def server(showcase_json, second_step_json, respond_json):
    return FakeYooMoney(showcase_json, second_step_json, respond_json)


class TestE2EPaymentFlow:
    """End-to-end flow over a fake HTTP transport."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_wallet_payment(self, server, make_client):
        """Walk the wizard, then pay from the wallet with one pending poll."""
        client = make_client(server)

        context = await client.execute(ShowcaseRequest(pattern_id="5551"))
        assert context.current_step.showcase.is_valid()

        context = await client.execute(context.create_request())
        assert context.state == ShowcaseState.HAS_NEXT_STEP
        assert context.history_size == 1
        assert context.current_step.showcase.is_valid()

        context = await client.execute(context.create_request())
        assert context.state == ShowcaseState.COMPLETED
        assert context.params == {"step": "2", "agree": "true"}

        parameters = PaymentParameters.from_showcase_context("5551", context, money_source="wallet")
        sleep = AsyncMock()
        process = PaymentProcess(client, parameters, sleep=sleep)

        assert await process.proceed() is False
        assert await process.proceed() is True
        assert process.state == PaymentProcessState.COMPLETED
        assert process.process_payment.status == ProcessStatus.SUCCESS
        sleep.assert_awaited_once_with(1.0)

        methods = [(method, path) for method, path, _ in server.calls]
        assert methods == [
            ("GET", "/api/showcase/5551"),
            ("POST", "/api/showcase/5551/step1"),
            ("POST", "/api/showcase/5551/step2"),
            ("POST", "/api/request-payment"),
            ("POST", "/api/process-payment"),
            ("POST", "/api/process-payment"),
        ]
        assert server.calls[1][2]["phone"] == "79001234567"
        assert server.calls[3][2] == {"pattern_id": "5551", "step": "2", "agree": "true"}
        assert server.calls[4][2] == {"request_id": "req-1", "money_source": "wallet"}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_invalid_params_then_back(self, server, make_client):
        """Correct a rejected step, go back and forward again."""
        client = make_client(server)
        context = await client.execute(ShowcaseRequest(pattern_id="5551"))
        context.current_step.showcase.form.items[1].value = "20000"

        context = await client.execute(context.create_request())
        assert context.state == ShowcaseState.INVALID_PARAMS
        assert context.history_size == 0
        assert context.current_step.showcase.errors[0].alert == "Too much"

        context.current_step.showcase.form.items[1].value = "150.00"
        context = await client.execute(context.create_request())
        assert context.state == ShowcaseState.HAS_NEXT_STEP

        context.pop_step()
        assert context.history_size == 0
        assert context.current_step.submit_url == "https://yoomoney.ru/api/showcase/5551/step1"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_external_payment(self, server, make_client):
        """Pay by a new bank card without authorization."""
        server.pending_polls = 0
        client = make_client(server)
        parameters = PaymentParameters(pattern_id="5551", payment_parameters={"sum": "100.00"}, request_token=True)
        process = ExternalPaymentProcess(client, parameters)

        await process.proceed()
        assert await process.proceed() is True

        assert server.calls[0][1] == "/api/request-external-payment"
        assert server.calls[0][2]["instance_id"] == "instance-1"
        assert server.calls[1][2] == {"instance_id": "instance-1", "request_id": "req-1", "request_token": "true"}
