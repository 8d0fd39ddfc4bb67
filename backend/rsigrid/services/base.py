"""
Base Service Interface

Ingestion, indicator and grid services share this contract, and every
failure they raise is a ServiceError subclass.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for the candle, indicator and grid services.

    A service takes one typed request (CandleRequest, a candle batch,
    GridRequest) and produces one typed result. Anything it cannot handle
    surfaces as a ServiceError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name, used as ServiceError.service_name and in logs."""

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the service once.

        Raises:
            ServiceError: If the request cannot be served
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the service (and its upstream, if any) can take requests."""


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Request parameters out of range (display window, kline limit)."""


class ExternalAPIError(ServiceError):
    """Binance request failed or returned an unusable payload."""


class NumericError(ServiceError):
    """Indicator math attempted on unusable input (empty window, bad period)."""
