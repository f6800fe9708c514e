"""Core package exports for yoomoney_api - payment API methods."""

from .payment import (
    RequestPaymentRequest,
    ProcessPaymentRequest,
    RequestExternalPaymentRequest,
    ProcessExternalPaymentRequest,
    InstanceIdRequest,
    TestResult
)

__all__ = [
    "RequestPaymentRequest",
    "ProcessPaymentRequest",
    "RequestExternalPaymentRequest",
    "ProcessExternalPaymentRequest",
    "InstanceIdRequest",
    "TestResult"
]
