"""Payment method results returned by the remote service."""

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .state import ProcessStatus, RequestStatus


class BaseRequestPayment(BaseModel):
    """Common part of request-payment results."""
    model_config = ConfigDict(extra="ignore")

    status: RequestStatus
    error: Optional[str] = None
    request_id: Optional[str] = None
    contract_amount: Optional[Decimal] = None
    title: Optional[str] = None


class RequestPayment(BaseRequestPayment):
    """Result of a wallet request-payment call."""
    balance: Optional[Decimal] = None
    money_source: Dict[str, Any] = Field(default_factory=dict)
    recipient_account_status: Optional[str] = None
    account_unblock_uri: Optional[str] = None


class RequestExternalPayment(BaseRequestPayment):
    """Result of a request-external-payment call."""
    pass


class BaseProcessPayment(BaseModel):
    """Common part of process-payment results.

    ``next_retry`` is the server's delay hint in milliseconds; it is only
    meaningful while the status is ``in_progress`` or ``ext_auth_required``.
    """
    model_config = ConfigDict(extra="ignore")

    status: ProcessStatus
    error: Optional[str] = None
    invoice_id: Optional[str] = None
    acs_uri: Optional[str] = None
    acs_params: Dict[str, str] = Field(default_factory=dict)
    next_retry: int = Field(default=0, ge=0)

    @property
    def next_retry_seconds(self) -> float:
        return self.next_retry / 1000


class ProcessPayment(BaseProcessPayment):
    """Result of a wallet process-payment call."""
    payment_id: Optional[str] = None
    balance: Optional[Decimal] = None
    payer: Optional[str] = None
    payee: Optional[str] = None
    credit_amount: Optional[Decimal] = None
    account_unblock_uri: Optional[str] = None
    payee_uid: Optional[str] = None
    hold_for_pickup_link: Optional[str] = None


class ExternalCard(BaseModel):
    """Bank card saved for external payments."""
    money_source_token: str
    type: Optional[str] = None
    pan_fragment: Optional[str] = None


class ProcessExternalPayment(BaseProcessPayment):
    """Result of a process-external-payment call."""
    money_source: Optional[ExternalCard] = None


class InstanceId(BaseModel):
    """Result of an instance-id call."""
    model_config = ConfigDict(extra="ignore")

    status: RequestStatus
    error: Optional[str] = None
    instance_id: Optional[str] = None
