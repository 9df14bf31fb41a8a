"""HTTP request/response transport implementation for MCP."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from mcpwire.lib import oj
from mcpwire.transport.base import (
    HTTPStatusError,
    MalformedResponseError,
    Transport,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)
from mcpwire.transport.types import DEFAULT_TIMEOUT, HTTPTransportConfig

logger = logging.getLogger(__name__)


class HTTPTransport(Transport):
    """
    HTTP transport: each envelope is one POST, each response body one envelope.

    A single ``httpx.Client`` is reused across calls. Its connect, read,
    write and pool timeouts all equal the configured timeout.
    """

    def __init__(
        self,
        config: HTTPTransportConfig,
        *,
        http_transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize HTTP transport.

        Args:
            config: Endpoint, timeout and header overrides.
            http_transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
        """
        self.config = config
        self._headers = config.effective_headers
        self._client = httpx.Client(
            timeout=httpx.Timeout(config.timeout),
            transport=http_transport,
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> "HTTPTransport":
        """Build a transport without constructing the config by hand."""
        config = HTTPTransportConfig(url=url, timeout=timeout, headers=dict(headers or {}))
        return cls(config, **kwargs)

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def timeout(self) -> float:
        return self.config.timeout

    @property
    def headers(self) -> dict[str, str]:
        """Effective headers (defaults overlaid with overrides)."""
        return dict(self._headers)

    def send(self, request: dict[str, Any]) -> dict[str, Any]:
        """
        POST one request envelope and decode the response envelope.

        Raises:
            TransportTimeoutError: Connect or read deadline exceeded.
            TransportConnectionError: Connection refused, reset or dropped.
            HTTPStatusError: Non-2xx status; carries status code and body.
            MalformedResponseError: Body is not a JSON object.
            TransportError: Any other httpx failure.
        """
        body = oj.dumps(request)
        logger.debug(f"POST {self.config.url} {request.get('method')} id={request.get('id')}")

        try:
            response = self._client.post(
                self.config.url,
                content=body,
                headers=self._headers,
            )
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"Request timeout: {e}", timeout=self.timeout, cause=e
            ) from e
        except httpx.NetworkError as e:
            raise TransportConnectionError(f"Connection failed: {e}", cause=e) from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}", cause=e) from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        if not response.is_success:
            raise HTTPStatusError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            result = oj.loads(response.content)
        except oj.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Invalid JSON response: {e}",
                cause=e,
                response_body=response.text,
            ) from e

        if not isinstance(result, dict):
            raise MalformedResponseError(
                "Invalid JSON response: expected an object",
                response_body=response.text,
            )

        logger.debug(f"Received response id={result.get('id')} status={response.status_code}")
        return result

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
