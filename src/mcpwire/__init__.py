"""
Synchronous Model Context Protocol (MCP) client.

Submodules:
- protocol: JSON-RPC 2.0 envelopes, ClientError and MCPClient
- transport: stdio and HTTP transports with a shared error taxonomy
- methods: protocol method names
- pagination: cursor-following helpers for list operations
- config: mcp.json server configuration loading
"""

from mcpwire.methods import Method

# Transport layer
from mcpwire.transport import (
    Transport,
    HTTPTransport,
    HTTPTransportConfig,
    StdioTransport,
    StdioTransportConfig,
    TransportError,
    TransportConnectionError,
    TransportTimeoutError,
    MalformedResponseError,
    HTTPStatusError,
)

# Protocol layer
from mcpwire.protocol import (
    MCPClient,
    ClientError,
    ErrorKind,
    LogLevel,
    CompletionRef,
    CompletionArgument,
    PROTOCOL_VERSION,
)

__version__ = "0.1.0"

__all__ = [
    "Method",
    # Transport
    "Transport",
    "HTTPTransport",
    "HTTPTransportConfig",
    "StdioTransport",
    "StdioTransportConfig",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "MalformedResponseError",
    "HTTPStatusError",
    # Protocol
    "MCPClient",
    "ClientError",
    "ErrorKind",
    "LogLevel",
    "CompletionRef",
    "CompletionArgument",
    "PROTOCOL_VERSION",
]
