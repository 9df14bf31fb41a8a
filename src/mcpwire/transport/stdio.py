"""Line-delimited stdio transport implementation for MCP."""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Any, BinaryIO

from mcpwire.lib import oj
from mcpwire.transport.base import (
    MalformedResponseError,
    Transport,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)
from mcpwire.transport.readers import LineReader, reader_for
from mcpwire.transport.types import StdioTransportConfig

logger = logging.getLogger(__name__)


class StdioTransport(Transport):
    """
    Stdio transport: one JSON document per line in each direction.

    Requests are written to ``output`` and responses read from ``input``,
    both UTF-8. By default these are the current process's stdout and
    stdin, which suits a client launched as a child of its server.

    Known liability: when a call times out, a response that arrives later
    stays unread and will be consumed by the next call. Enable
    ``drain_after_timeout`` in the config to discard pending input before
    the request that follows a timeout.
    """

    def __init__(
        self,
        config: StdioTransportConfig | None = None,
        *,
        input: BinaryIO | None = None,
        output: BinaryIO | None = None,
        reader: LineReader | None = None,
    ):
        self.config = config or StdioTransportConfig()
        self.input = input if input is not None else sys.stdin.buffer
        self.output = output if output is not None else sys.stdout.buffer
        self._reader = reader or reader_for(self.input)
        self._timed_out = False

    @classmethod
    def for_process(
        cls,
        process: subprocess.Popen,
        config: StdioTransportConfig | None = None,
    ) -> "StdioTransport":
        """
        Bind to the pipes of a child process started with stdin/stdout=PIPE.

        Args:
            process: The running server process.
            config: Transport configuration.
        """
        if process.stdin is None or process.stdout is None:
            raise ValueError("process must be started with stdin and stdout pipes")
        return cls(config, input=process.stdout, output=process.stdin)

    @property
    def timeout(self) -> float:
        """Seconds to wait for a response line."""
        return self.config.timeout

    def send(self, request: dict[str, Any]) -> dict[str, Any]:
        """
        Write one request line and read one response line.

        Raises:
            TransportTimeoutError: If no line arrives within the timeout.
            MalformedResponseError: If the line is not a JSON object.
            TransportConnectionError: On a broken pipe or closed input.
            TransportError: On any other IO or unexpected failure.
        """
        drain = self._timed_out and self.config.drain_after_timeout
        self._timed_out = False

        line = oj.dumps(request) + b"\n"
        logger.debug(f"Sending {request.get('method')} id={request.get('id')}")

        try:
            if drain:
                discarded = self._reader.discard_pending()
                logger.debug(f"Discarded {discarded} stale bytes after timeout")
            self.output.write(line)
            self.output.flush()
            response_line = self._reader.readline(self.timeout)
        except BrokenPipeError as e:
            raise TransportConnectionError(f"Broken pipe: {e}", cause=e) from e
        except EOFError as e:
            raise TransportConnectionError(f"Stream closed: {e}", cause=e) from e
        except OSError as e:
            raise TransportError(f"IO error: {e}", cause=e) from e
        except Exception as e:
            raise TransportError(f"Stdio transport error: {e}", cause=e) from e

        if response_line is None:
            self._timed_out = True
            raise TransportTimeoutError(
                f"No response received within {self.timeout} seconds",
                timeout=self.timeout,
            )

        raw = response_line.strip()
        try:
            response = oj.loads(raw)
        except oj.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Invalid JSON response: {e}",
                cause=e,
                response_body=raw.decode("utf-8", errors="replace"),
            ) from e

        if not isinstance(response, dict):
            raise MalformedResponseError(
                "Invalid JSON response: expected an object",
                response_body=raw.decode("utf-8", errors="replace"),
            )

        logger.debug(f"Received response id={response.get('id')}")
        return response
