"""MCP protocol client implementation."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from mcpwire.methods import Method
from mcpwire.protocol.errors import ClientError, ErrorKind
from mcpwire.protocol.messages import JSONRPCRequest, JSONRPCResponse, RequestId
from mcpwire.protocol.types import (
    PROTOCOL_VERSION,
    CompletionArgument,
    CompletionRef,
    LogLevel,
)
from mcpwire.transport.base import Transport

logger = logging.getLogger(__name__)


class MCPClient:
    """
    Core MCP protocol client.

    Turns each protocol operation into exactly one request/response round
    trip over the transport it was constructed with. Responses carrying an
    ``error`` member raise ClientError; otherwise ``result`` is returned
    as received. Transport failures propagate unchanged.

    Not thread-safe: one caller at a time per instance.
    """

    def __init__(self, transport: Transport):
        """
        Initialize MCP client.

        Args:
            transport: Transport layer for communication. Owned by the client.
        """
        self._transport = transport
        self._request_id = 0
        self._server_info: dict[str, Any] | None = None
        self._capabilities: dict[str, Any] | None = None
        self._initialized = False

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def server_info(self) -> dict[str, Any] | None:
        """Server identity from the last successful initialize, else None."""
        return self._server_info

    @property
    def capabilities(self) -> dict[str, Any] | None:
        """Server capabilities from the last successful initialize, else None."""
        return self._capabilities

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def request(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        request_id: RequestId | None = None,
        *,
        kind: ErrorKind = ErrorKind.CLIENT_ERROR,
        subject: str | None = None,
    ) -> Any:
        """
        Send a request and return its result.

        Args:
            method: The RPC method name.
            params: Method parameters; omitted from the envelope when None.
            request_id: Explicit id. When None the next counter value is used.
            kind: Error kind to tag a server-reported error with.
            subject: Name or URI included when the error is displayed.

        Returns:
            The ``result`` member of the response, unmodified.

        Raises:
            ClientError: If the response carries an ``error`` member.
            TransportError: Propagated from the transport as-is.
        """
        if request_id is None:
            request_id = self._next_request_id()
        request = JSONRPCRequest(method=method, id=request_id, params=params)

        logger.debug(f"Sending {request}")
        response = JSONRPCResponse.from_dict(self._transport.send(request.to_dict()))
        logger.debug(f"Received {response}")

        if response.is_error:
            raise ClientError.from_error(method, response.error, kind=kind, subject=subject)
        return response.result

    def initialize_session(
        self,
        protocol_version: str = PROTOCOL_VERSION,
        capabilities: dict[str, Any] | None = None,
        client_info: dict[str, Any] | None = None,
        request_id: RequestId | None = None,
    ) -> Any:
        """
        Perform the initialize handshake and cache the server's identity.

        Session state is only updated when the server reports no error.

        Raises:
            ClientError: With kind INITIALIZATION_ERROR if the server refuses.
        """
        params = {
            "protocolVersion": protocol_version,
            "capabilities": capabilities or {},
            "clientInfo": client_info or {},
        }
        result = self.request(
            Method.INITIALIZE,
            params,
            request_id,
            kind=ErrorKind.INITIALIZATION_ERROR,
        )

        self._initialized = True
        if isinstance(result, dict):
            self._server_info = result.get("serverInfo")
            self._capabilities = result.get("capabilities")
        return result

    def ping(self, request_id: RequestId | None = None) -> Any:
        return self.request(Method.PING, None, request_id)

    def list_tools(self, cursor: str | None = None, request_id: RequestId | None = None) -> Any:
        return self.request(Method.TOOLS_LIST, _cursor_params(cursor), request_id)

    def call_tool(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
        request_id: RequestId | None = None,
    ) -> Any:
        """Invoke a tool. Empty ``arguments`` are left out of the request."""
        return self.request(
            Method.TOOLS_CALL,
            _named_params(name, arguments),
            request_id,
            subject=name,
        )

    def list_prompts(self, cursor: str | None = None, request_id: RequestId | None = None) -> Any:
        return self.request(Method.PROMPTS_LIST, _cursor_params(cursor), request_id)

    def get_prompt(
        self,
        name: str,
        arguments: Mapping[str, Any] | None = None,
        request_id: RequestId | None = None,
    ) -> Any:
        """Fetch a prompt. Empty ``arguments`` are left out of the request."""
        return self.request(
            Method.PROMPTS_GET,
            _named_params(name, arguments),
            request_id,
            subject=name,
        )

    def list_resources(self, cursor: str | None = None, request_id: RequestId | None = None) -> Any:
        return self.request(Method.RESOURCES_LIST, _cursor_params(cursor), request_id)

    def read_resource(self, uri: str, request_id: RequestId | None = None) -> Any:
        return self.request(Method.RESOURCES_READ, {"uri": uri}, request_id, subject=uri)

    def list_resource_templates(
        self, cursor: str | None = None, request_id: RequestId | None = None
    ) -> Any:
        return self.request(Method.RESOURCES_TEMPLATES_LIST, _cursor_params(cursor), request_id)

    def subscribe_resource(self, uri: str, request_id: RequestId | None = None) -> Any:
        return self.request(Method.RESOURCES_SUBSCRIBE, {"uri": uri}, request_id, subject=uri)

    def unsubscribe_resource(self, uri: str, request_id: RequestId | None = None) -> Any:
        return self.request(Method.RESOURCES_UNSUBSCRIBE, {"uri": uri}, request_id, subject=uri)

    def set_logging_level(
        self, level: LogLevel | str, request_id: RequestId | None = None
    ) -> Any:
        if isinstance(level, LogLevel):
            level = level.value
        return self.request(Method.LOGGING_SET_LEVEL, {"level": level}, request_id)

    def complete(
        self,
        ref: CompletionRef | Mapping[str, Any],
        argument: CompletionArgument | Mapping[str, Any],
        request_id: RequestId | None = None,
    ) -> Any:
        """
        Request argument completions for a prompt or resource template.

        Args:
            ref: ``{"type": "ref/prompt", "name": ...}`` or a CompletionRef.
            argument: ``{"name": ..., "value": ...}`` or a CompletionArgument.
        """
        params = {
            "ref": _to_wire(ref),
            "argument": _to_wire(argument),
        }
        return self.request(Method.COMPLETION_COMPLETE, params, request_id)

    def close(self) -> None:
        """Close the owned transport."""
        self._transport.close()

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    def __enter__(self) -> "MCPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _cursor_params(cursor: str | None) -> dict[str, Any] | None:
    return {"cursor": cursor} if cursor is not None else None


def _named_params(name: str, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
    params: dict[str, Any] = {"name": name}
    if arguments:
        params["arguments"] = dict(arguments)
    return params


def _to_wire(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return dict(value)
