"""Pytest configuration and fixtures."""

import io
import os

import pytest

from mcpwire.protocol.client import MCPClient
from mcpwire.transport.base import Transport


class ScriptedTransport(Transport):
    """Transport double that records requests and replays canned responses."""

    def __init__(self):
        self.sent: list[dict] = []
        self.responses: list = []
        self.closed = False

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    def send(self, request: dict) -> dict:
        self.sent.append(request)
        if not self.responses:
            return {"jsonrpc": "2.0", "id": request["id"], "result": {}}
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> dict:
        return self.sent[-1]


@pytest.fixture
def scripted_transport():
    return ScriptedTransport()


@pytest.fixture
def client(scripted_transport):
    return MCPClient(scripted_transport)


@pytest.fixture
def pipe():
    """An OS pipe as (unbuffered read file, write fd)."""
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "rb", buffering=0)
    state = {"write_fd": write_fd}

    def close_writer():
        if state["write_fd"] is not None:
            os.close(state["write_fd"])
            state["write_fd"] = None

    yield reader, write_fd, close_writer

    close_writer()
    reader.close()


@pytest.fixture
def outbound():
    return io.BytesIO()
