"""Abstract base transport and error types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class TransportError(Exception):
    """
    Base exception for transport errors.

    Every failure raised by a transport is an instance of this class, so
    callers can handle all transports uniformly. The original exception,
    when there is one, is kept on ``cause``.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.status_code = status_code
        self.response_body = response_body


class TransportConnectionError(TransportError):
    """Connection could not be established or was severed."""

    pass


class TransportTimeoutError(TransportError):
    """No response arrived within the configured bound."""

    def __init__(
        self,
        message: str,
        timeout: float,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause=cause)
        self.timeout = timeout


class MalformedResponseError(TransportError):
    """Response bytes were not a valid JSON document."""

    pass


class HTTPStatusError(TransportError):
    """Server answered with a non-success HTTP status."""

    pass


class Transport(ABC):
    """
    Abstract base class for MCP transports.

    A transport moves one request envelope to the server and returns one
    response envelope. It performs no retries and owns its own failure
    mapping: anything that goes wrong surfaces as a TransportError.
    """

    @abstractmethod
    def send(self, request: dict[str, Any]) -> dict[str, Any]:
        """
        Perform one request/response round trip.

        Args:
            request: JSON-RPC request envelope.

        Returns:
            The decoded response envelope.

        Raises:
            TransportError: If the round trip fails for any reason.
        """
        pass

    def close(self) -> None:
        """Release transport resources. Safe to call more than once."""
        pass

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
