"""Protocol error types and error codes."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from mcpwire.methods import Method

if TYPE_CHECKING:
    from mcpwire.protocol.messages import JSONRPCError

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ErrorKind(str, Enum):
    """Distinguishes a failed handshake from any other failed operation."""

    CLIENT_ERROR = "client_error"
    INITIALIZATION_ERROR = "initialization_error"

    def __str__(self) -> str:
        return self.value


# Human-readable prefix per operation, used when an error is displayed
OPERATION_LABELS: dict[str, str] = {
    Method.INITIALIZE.value: "Failed to initialize",
    Method.PING.value: "Ping failed",
    Method.TOOLS_LIST.value: "Failed to list tools",
    Method.TOOLS_CALL.value: "Failed to call tool",
    Method.PROMPTS_LIST.value: "Failed to list prompts",
    Method.PROMPTS_GET.value: "Failed to get prompt",
    Method.RESOURCES_LIST.value: "Failed to list resources",
    Method.RESOURCES_READ.value: "Failed to read resource",
    Method.RESOURCES_TEMPLATES_LIST.value: "Failed to list resource templates",
    Method.RESOURCES_SUBSCRIBE.value: "Failed to subscribe to resource",
    Method.RESOURCES_UNSUBSCRIBE.value: "Failed to unsubscribe from resource",
    Method.LOGGING_SET_LEVEL.value: "Failed to set logging level",
    Method.COMPLETION_COMPLETE.value: "Failed to get completions",
}


class ClientError(Exception):
    """
    Server-reported protocol error.

    Raised when a response envelope carries an ``error`` member. The
    structured fields are kept as received; the display string is only
    assembled by ``describe()`` / ``str()``.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        kind: ErrorKind = ErrorKind.CLIENT_ERROR,
        code: int | None = None,
        data: Any = None,
        subject: str | None = None,
    ):
        """
        Args:
            operation: Method name of the failed request.
            message: Message supplied by the server.
            kind: Error kind tag.
            code: JSON-RPC error code, if the server sent one.
            data: Optional ``data`` member of the server error.
            subject: Tool, prompt or resource the request was about.
        """
        super().__init__(message)
        self.operation = str(operation)
        self.message = message
        self.kind = kind
        self.code = code
        self.data = data
        self.subject = subject

    @property
    def error_type(self) -> str:
        """Kind tag as a plain string."""
        return self.kind.value

    @classmethod
    def from_error(
        cls,
        operation: str,
        error: "JSONRPCError",
        kind: ErrorKind = ErrorKind.CLIENT_ERROR,
        subject: str | None = None,
    ) -> "ClientError":
        """Create from a decoded JSON-RPC error object."""
        return cls(
            operation=operation,
            message=error.message,
            kind=kind,
            code=error.code,
            data=error.data,
            subject=subject,
        )

    def describe(self) -> str:
        """Render the error for display."""
        label = OPERATION_LABELS.get(self.operation, f"Request '{self.operation}' failed")
        if self.subject:
            label = f"{label} '{self.subject}'"
        return f"{label}: {self.message}"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"ClientError(operation={self.operation!r}, message={self.message!r}, "
            f"kind={self.kind.value}, code={self.code})"
        )
