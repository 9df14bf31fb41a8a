"""
MCP Transport Layer.

Interchangeable request/response transports: line-delimited stdio and
HTTP POST. Each implements ``Transport.send`` and maps its own failures
onto the shared TransportError taxonomy.
"""

from mcpwire.transport.types import (
    DEFAULT_HEADERS,
    HTTPTransportConfig,
    StdioTransportConfig,
    merge_headers,
)
from mcpwire.transport.base import (
    Transport,
    TransportError,
    TransportConnectionError,
    TransportTimeoutError,
    MalformedResponseError,
    HTTPStatusError,
)
from mcpwire.transport.readers import (
    LineReader,
    FileDescriptorLineReader,
    BufferLineReader,
    reader_for,
)
from mcpwire.transport.stdio import StdioTransport
from mcpwire.transport.http import HTTPTransport

__all__ = [
    "Transport",
    "HTTPTransportConfig",
    "StdioTransportConfig",
    "DEFAULT_HEADERS",
    "merge_headers",
    "TransportError",
    "TransportConnectionError",
    "TransportTimeoutError",
    "MalformedResponseError",
    "HTTPStatusError",
    "LineReader",
    "FileDescriptorLineReader",
    "BufferLineReader",
    "reader_for",
    "StdioTransport",
    "HTTPTransport",
]
