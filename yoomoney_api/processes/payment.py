"""Wallet and bank card payment processes."""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from ..core import (
    ProcessExternalPaymentRequest,
    ProcessPaymentRequest,
    RequestExternalPaymentRequest,
    RequestPaymentRequest
)
from ..net import ApiClient
from ..types import (
    ExternalCard,
    ProcessExternalPayment,
    ProcessPayment,
    RequestExternalPayment,
    RequestPayment
)
from .base import BasePaymentProcess, ParameterProvider, SavedState, money_source_id


class PaymentSavedState(SavedState[RequestPayment, ProcessPayment]):
    request_type = RequestPayment
    process_type = ProcessPayment


class ExternalPaymentSavedState(SavedState[RequestExternalPayment, ProcessExternalPayment]):
    request_type = RequestExternalPayment
    process_type = ProcessExternalPayment


class PaymentProcess(BasePaymentProcess[RequestPayment, ProcessPayment]):
    """Payment from the user's wallet; requires an authorized client."""

    saved_state_type = PaymentSavedState

    def create_request_payment(self) -> RequestPaymentRequest:
        return RequestPaymentRequest(
            self.parameter_provider.pattern_id,
            self.parameter_provider.payment_parameters
        )

    def create_process_payment(self) -> ProcessPaymentRequest:
        provider = self.parameter_provider
        return ProcessPaymentRequest(
            self._request_id(),
            money_source=money_source_id(provider.money_source),
            csc=provider.csc,
            ext_auth_success_uri=provider.ext_auth_success_uri,
            ext_auth_fail_uri=provider.ext_auth_fail_uri
        )

    def create_repeat_process_payment(self) -> ProcessPaymentRequest:
        return ProcessPaymentRequest(self._request_id())

    def _request_id(self) -> Optional[str]:
        return self.request_payment.request_id if self.request_payment is not None else None


class ExternalPaymentProcess(BasePaymentProcess[RequestExternalPayment, ProcessExternalPayment]):
    """Payment from a bank card, available without authorization.

    Requires an application ``instance_id``, taken from the client config
    when not given.
    """

    saved_state_type = ExternalPaymentSavedState

    def __init__(
        self,
        client: ApiClient,
        parameter_provider: ParameterProvider,
        instance_id: Optional[str] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        super().__init__(client, parameter_provider, sleep=sleep)
        self.instance_id = instance_id or client.config.instance_id

    def set_instance_id(self, instance_id: str) -> None:
        self.instance_id = instance_id

    def create_request_payment(self) -> RequestExternalPaymentRequest:
        return RequestExternalPaymentRequest(
            self.instance_id,
            self.parameter_provider.pattern_id,
            self.parameter_provider.payment_parameters
        )

    def create_process_payment(self) -> ProcessExternalPaymentRequest:
        return self._create_process_external_payment()

    def create_repeat_process_payment(self) -> ProcessExternalPaymentRequest:
        return self._create_process_external_payment()

    def _create_process_external_payment(self) -> ProcessExternalPaymentRequest:
        provider = self.parameter_provider
        request_id = self.request_payment.request_id if self.request_payment is not None else None
        money_source = provider.money_source
        if isinstance(money_source, ExternalCard) and provider.csc:
            return ProcessExternalPaymentRequest(
                self.instance_id,
                request_id,
                ext_auth_success_uri=provider.ext_auth_success_uri,
                ext_auth_fail_uri=provider.ext_auth_fail_uri,
                money_source_token=money_source.money_source_token,
                csc=provider.csc
            )
        return ProcessExternalPaymentRequest(
            self.instance_id,
            request_id,
            ext_auth_success_uri=provider.ext_auth_success_uri,
            ext_auth_fail_uri=provider.ext_auth_fail_uri,
            request_token=provider.request_token
        )
