"""Payment process state machine.

A payment is created by a "request" call and confirmed by a "process" call.
The process call may answer ``in_progress`` (or ``ext_auth_required``) and
has to be repeated with the same request id after the server's delay hint
until a terminal status arrives. ``BasePaymentProcess`` hides that behind
``proceed`` and ``repeat`` and exposes a ``SavedState`` snapshot so a
process can be resumed in another session.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, Protocol, Type, TypeVar, Union

from pydantic import BaseModel, Field

from ..net import ApiClient, ApiRequest
from ..showcase import ShowcaseContext
from ..types import (
    BaseProcessPayment,
    BaseRequestPayment,
    ExternalCard,
    InvalidStateError,
    PaymentProcessState,
    ProcessStatus,
    ShowcaseState
)


logger = logging.getLogger(__name__)

RP = TypeVar("RP", bound=BaseRequestPayment)
PP = TypeVar("PP", bound=BaseProcessPayment)

MoneySource = Union[str, ExternalCard]


class ParameterProvider(Protocol):
    """Source of the parameters a payment process sends.

    ``money_source`` is a wallet money source id (``wallet`` or a card id)
    or a saved ``ExternalCard``; ``request_token`` asks the server to save a
    card entered on the bank page.
    """
    pattern_id: str
    payment_parameters: Dict[str, str]
    money_source: Optional[MoneySource]
    csc: Optional[str]
    ext_auth_success_uri: Optional[str]
    ext_auth_fail_uri: Optional[str]
    request_token: bool


class PaymentParameters(BaseModel):
    """Plain ``ParameterProvider`` holding fixed values."""
    pattern_id: str = Field(min_length=1)
    payment_parameters: Dict[str, str] = Field(default_factory=dict)
    money_source: Optional[MoneySource] = None
    csc: Optional[str] = None
    ext_auth_success_uri: Optional[str] = None
    ext_auth_fail_uri: Optional[str] = None
    request_token: bool = False

    @classmethod
    def from_showcase_context(
        cls,
        pattern_id: str,
        context: ShowcaseContext,
        **kwargs: Any
    ) -> "PaymentParameters":
        """Takes the final parameters of a completed showcase wizard.

        Raises:
            ValueError: If the wizard is not completed
        """
        if context.state != ShowcaseState.COMPLETED:
            raise ValueError(f"showcase is not completed: {context.state.value}")
        return cls(pattern_id=pattern_id, payment_parameters=context.params, **kwargs)


def money_source_id(money_source: Optional[MoneySource]) -> Optional[str]:
    """Identifier transmitted as ``money_source``."""
    if isinstance(money_source, ExternalCard):
        return money_source.money_source_token
    return money_source


class SavedState(Generic[RP, PP]):
    """Snapshot of a payment process.

    The results present must match the state:

    - ``CREATED``: no results;
    - ``STARTED``: request result only;
    - ``PROCESSING`` and ``COMPLETED``: both results.

    Subclasses pin the result types through ``request_type`` and
    ``process_type``.
    """
    request_type: Type[BaseRequestPayment] = BaseRequestPayment
    process_type: Type[BaseProcessPayment] = BaseProcessPayment

    def __init__(
        self,
        request_payment: Optional[RP],
        process_payment: Optional[PP],
        state: PaymentProcessState
    ):
        """Initialize snapshot.

        Raises:
            InvalidStateError: If the results do not match the state
        """
        try:
            state = PaymentProcessState(state)
        except ValueError:
            raise InvalidStateError(f"Unknown payment process state: {state!r}")
        needs_request = state != PaymentProcessState.CREATED
        needs_process = state in (PaymentProcessState.PROCESSING, PaymentProcessState.COMPLETED)
        self._check("request_payment", request_payment, needs_request, self.request_type, state)
        self._check("process_payment", process_payment, needs_process, self.process_type, state)

        self.request_payment = request_payment
        self.process_payment = process_payment
        self.state = state

    @staticmethod
    def _check(name: str, value, required: bool, expected_type: type, state: PaymentProcessState) -> None:
        if required and value is None:
            raise InvalidStateError(f"{name} is required in state {state.value}")
        if not required and value is not None:
            raise InvalidStateError(f"{name} must be absent in state {state.value}")
        if value is not None and not isinstance(value, expected_type):
            raise InvalidStateError(f"{name} must be {expected_type.__name__}, got {type(value).__name__}")

    @property
    def flags(self) -> int:
        """Compact state code for persistence."""
        return self.state.ordinal

    @staticmethod
    def parse_flags(flags: int) -> PaymentProcessState:
        states = list(PaymentProcessState)
        index = flags % 10
        if flags < 0 or index >= len(states):
            raise InvalidStateError(f"invalid flags: {flags}")
        return states[index]

    @classmethod
    def from_flags(cls, request_payment: Optional[RP], process_payment: Optional[PP], flags: int):
        """Restores a snapshot persisted as its results and ``flags``."""
        return cls(request_payment, process_payment, cls.parse_flags(flags))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible form of the snapshot."""
        return {
            "request_payment": self.request_payment.model_dump(mode="json") if self.request_payment else None,
            "process_payment": self.process_payment.model_dump(mode="json") if self.process_payment else None,
            "flags": self.flags
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        request_payment = data.get("request_payment")
        process_payment = data.get("process_payment")
        return cls.from_flags(
            cls.request_type.model_validate(request_payment) if request_payment is not None else None,
            cls.process_type.model_validate(process_payment) if process_payment is not None else None,
            data.get("flags", 0)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, SavedState):
            return NotImplemented
        return self.request_payment == other.request_payment and \
            self.process_payment == other.process_payment and \
            self.state == other.state

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(state={self.state.value}, "
            f"request_payment={self.request_payment!r}, process_payment={self.process_payment!r})"
        )


class BasePaymentProcess(ABC, Generic[RP, PP]):
    """Drives a request/process pair of payment calls to completion.

    ``proceed`` advances the process by one step:

    - ``CREATED``: request call, state becomes ``STARTED``;
    - ``STARTED``: process call;
    - ``PROCESSING``: repeat-process call.

    ``repeat`` re-sends the call that produced the current state:

    - ``STARTED``: request call;
    - ``PROCESSING``: process call;
    - ``COMPLETED``: repeat-process call.

    A process call answering ``in_progress`` is re-sent after its
    ``next_retry`` delay until the status changes. The first
    ``ext_auth_required`` stops with ``PROCESSING`` so the caller can send
    the user to ``acs_uri``; a repeated one is polled like ``in_progress``.
    Any other status completes the process.

    Transport and protocol errors propagate; the state then reflects the
    last call that succeeded.
    """

    saved_state_type: Type[SavedState] = SavedState

    def __init__(
        self,
        client: ApiClient,
        parameter_provider: ParameterProvider,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """Initialize payment process.

        Args:
            client: API client executing the calls
            parameter_provider: Source of the payment parameters
            sleep: Coroutine function waiting the given number of seconds between polls
        """
        if client is None:
            raise ValueError("client is required")
        if parameter_provider is None:
            raise ValueError("parameter_provider is required")
        self.client = client
        self.parameter_provider = parameter_provider
        self._sleep = sleep
        self._request_payment: Optional[RP] = None
        self._process_payment: Optional[PP] = None
        self._state = PaymentProcessState.CREATED

    @property
    def state(self) -> PaymentProcessState:
        return self._state

    @property
    def request_payment(self) -> Optional[RP]:
        return self._request_payment

    @property
    def process_payment(self) -> Optional[PP]:
        return self._process_payment

    def is_completed(self) -> bool:
        return self._state == PaymentProcessState.COMPLETED

    async def proceed(self) -> bool:
        """Advances the process.

        Returns:
            True if the process is completed
        """
        if self._state == PaymentProcessState.CREATED:
            await self._execute_request_payment()
        elif self._state == PaymentProcessState.STARTED:
            await self._execute_process_payment(self.create_process_payment())
        elif self._state == PaymentProcessState.PROCESSING:
            await self._execute_process_payment(self.create_repeat_process_payment())
        return self.is_completed()

    async def repeat(self) -> bool:
        """Repeats the last step, e.g. after an interrupted call.

        Returns:
            True if the process is completed
        """
        if self._state == PaymentProcessState.STARTED:
            await self._execute_request_payment()
        elif self._state == PaymentProcessState.PROCESSING:
            await self._execute_process_payment(self.create_process_payment())
        elif self._state == PaymentProcessState.COMPLETED:
            await self._execute_process_payment(self.create_repeat_process_payment())
        return self.is_completed()

    def reset(self) -> None:
        """Returns to ``CREATED`` dropping both results."""
        self._request_payment = None
        self._process_payment = None
        self._state = PaymentProcessState.CREATED

    def get_saved_state(self) -> SavedState:
        return self.create_saved_state(self._request_payment, self._process_payment, self._state)

    def restore_saved_state(self, saved_state: SavedState) -> None:
        if saved_state is None:
            raise ValueError("saved_state is required")
        if not isinstance(saved_state, self.saved_state_type):
            raise InvalidStateError(
                f"{type(self).__name__} cannot restore {type(saved_state).__name__}"
            )
        self._request_payment = saved_state.request_payment
        self._process_payment = saved_state.process_payment
        self._state = saved_state.state
        logger.info(f"Restored {type(self).__name__} in state {self._state.value}")

    def set_access_token(self, access_token: Optional[str]) -> None:
        self.client.set_access_token(access_token)

    @abstractmethod
    def create_request_payment(self) -> ApiRequest[RP]:
        ...

    @abstractmethod
    def create_process_payment(self) -> ApiRequest[PP]:
        ...

    @abstractmethod
    def create_repeat_process_payment(self) -> ApiRequest[PP]:
        """Process call re-sent while the payment is processing."""
        ...

    def create_saved_state(
        self,
        request_payment: Optional[RP],
        process_payment: Optional[PP],
        state: PaymentProcessState
    ) -> SavedState:
        return self.saved_state_type(request_payment, process_payment, state)

    async def _execute_request_payment(self) -> None:
        self._request_payment = await self.client.execute(self.create_request_payment())
        self._state = PaymentProcessState.STARTED
        logger.info(
            f"Payment requested: status {self._request_payment.status.value}, "
            f"request_id {self._request_payment.request_id}"
        )

    async def _execute_process_payment(self, request: ApiRequest[PP]) -> None:
        previous = self._process_payment.status if self._process_payment is not None else None
        while True:
            self._process_payment = await self.client.execute(request)
            status = self._process_payment.status

            if status == ProcessStatus.EXT_AUTH_REQUIRED and previous != ProcessStatus.EXT_AUTH_REQUIRED:
                self._state = PaymentProcessState.PROCESSING
                logger.info(f"External authorization required at {self._process_payment.acs_uri}")
                return

            if status in (ProcessStatus.IN_PROGRESS, ProcessStatus.EXT_AUTH_REQUIRED):
                self._state = PaymentProcessState.PROCESSING
                delay = self._process_payment.next_retry_seconds
                logger.info(f"Payment {status.value}, retrying in {delay}s")
                await self._sleep(delay)
                previous = status
                continue

            self._state = PaymentProcessState.COMPLETED
            logger.info(f"Payment processed: status {status.value}")
            return
