"""JSON-RPC 2.0 message types for MCP protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mcpwire.protocol.errors import INTERNAL_ERROR

JSONRPC_VERSION = "2.0"

RequestId = str | int


@dataclass
class JSONRPCRequest:
    """
    JSON-RPC 2.0 request message.

    ``params`` is left out of the wire form entirely when None.
    """

    method: str
    id: RequestId
    params: dict[str, Any] | None = None
    jsonrpc: str = field(default=JSONRPC_VERSION, init=False)

    def __post_init__(self) -> None:
        if not self.method:
            raise ValueError("method is required")

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        msg: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "method": str(self.method),
            "id": self.id,
        }
        if self.params is not None:
            msg["params"] = self.params
        return msg

    def __str__(self) -> str:
        return f"Request({self.method}, id={self.id})"


@dataclass
class JSONRPCError:
    """JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.data is not None:
            error["data"] = self.data
        return error

    @classmethod
    def from_dict(cls, data: Any) -> "JSONRPCError":
        """Create from JSON value; tolerates servers that send a bare string."""
        if not isinstance(data, dict):
            return cls(code=INTERNAL_ERROR, message=str(data))
        return cls(
            code=data.get("code", INTERNAL_ERROR),
            message=data.get("message", "Unknown error"),
            data=data.get("data"),
        )


@dataclass
class JSONRPCResponse:
    """
    JSON-RPC 2.0 response message.

    An ``error`` member takes precedence over ``result``; the two are not
    checked for mutual exclusivity.
    """

    id: RequestId | None
    result: Any = None
    error: JSONRPCError | None = None
    jsonrpc: str = field(default=JSONRPC_VERSION, init=False)

    @property
    def is_error(self) -> bool:
        """Check if this is an error response."""
        return self.error is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JSONRPCResponse":
        """Create from JSON dict. A null ``error`` counts as absent."""
        error = None
        if data.get("error") is not None:
            error = JSONRPCError.from_dict(data["error"])
        return cls(
            id=data.get("id"),
            result=data.get("result"),
            error=error,
        )

    def __str__(self) -> str:
        if self.is_error:
            return f"Response(id={self.id}, error={self.error.code})"
        return f"Response(id={self.id}, success)"
