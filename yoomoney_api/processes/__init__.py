"""Payment processes for yoomoney_api."""

from .base import (
    ParameterProvider,
    PaymentParameters,
    SavedState,
    BasePaymentProcess,
    money_source_id
)
from .payment import (
    PaymentSavedState,
    ExternalPaymentSavedState,
    PaymentProcess,
    ExternalPaymentProcess
)

__all__ = [
    "ParameterProvider",
    "PaymentParameters",
    "SavedState",
    "BasePaymentProcess",
    "money_source_id",

    "PaymentSavedState",
    "ExternalPaymentSavedState",
    "PaymentProcess",
    "ExternalPaymentProcess"
]
