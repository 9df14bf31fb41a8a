"""
MCP Protocol Core.

JSON-RPC 2.0 envelopes, the protocol error type and the client that maps
each MCP operation onto one transport round trip.
"""

from mcpwire.protocol.messages import (
    JSONRPC_VERSION,
    JSONRPCRequest,
    JSONRPCResponse,
    JSONRPCError,
)
from mcpwire.protocol.errors import (
    ClientError,
    ErrorKind,
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
)
from mcpwire.protocol.types import (
    PROTOCOL_VERSION,
    LogLevel,
    CompletionRef,
    CompletionArgument,
)
from mcpwire.protocol.client import MCPClient

__all__ = [
    # Messages
    "JSONRPC_VERSION",
    "JSONRPCRequest",
    "JSONRPCResponse",
    "JSONRPCError",
    # Errors
    "ClientError",
    "ErrorKind",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    # Types
    "PROTOCOL_VERSION",
    "LogLevel",
    "CompletionRef",
    "CompletionArgument",
    # Client
    "MCPClient",
]
