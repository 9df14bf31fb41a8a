"""Tests for MCPClient request construction and response handling."""

import pytest

from mcpwire.methods import Method
from mcpwire.protocol import (
    ClientError,
    CompletionArgument,
    CompletionRef,
    ErrorKind,
    LogLevel,
    MCPClient,
    PROTOCOL_VERSION,
)
from mcpwire.transport import TransportConnectionError, TransportTimeoutError

# (client method, kwargs, expected wire method)
OPERATIONS = [
    ("initialize_session", {}, "initialize"),
    ("ping", {}, "ping"),
    ("list_tools", {}, "tools/list"),
    ("call_tool", {"name": "echo"}, "tools/call"),
    ("list_prompts", {}, "prompts/list"),
    ("get_prompt", {"name": "greeting"}, "prompts/get"),
    ("list_resources", {}, "resources/list"),
    ("read_resource", {"uri": "file:///notes.txt"}, "resources/read"),
    ("list_resource_templates", {}, "resources/templates/list"),
    ("subscribe_resource", {"uri": "file:///notes.txt"}, "resources/subscribe"),
    ("unsubscribe_resource", {"uri": "file:///notes.txt"}, "resources/unsubscribe"),
    ("set_logging_level", {"level": "info"}, "logging/setLevel"),
    (
        "complete",
        {
            "ref": {"type": "ref/prompt", "name": "greeting"},
            "argument": {"name": "lang", "value": "py"},
        },
        "completion/complete",
    ),
]

OPERATION_IDS = [op[0] for op in OPERATIONS]


def error_response(request_id, message="boom", code=-32603):
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }


class TestEnvelope:
    """Every operation builds a well-formed request."""

    @pytest.mark.parametrize("name,kwargs,method", OPERATIONS, ids=OPERATION_IDS)
    def test_method_and_version(self, client, scripted_transport, name, kwargs, method):
        getattr(client, name)(**kwargs)
        request = scripted_transport.last
        assert request["jsonrpc"] == "2.0"
        assert request["method"] == method
        assert "id" in request

    @pytest.mark.parametrize("name,kwargs,method", OPERATIONS, ids=OPERATION_IDS)
    def test_exactly_one_round_trip(self, client, scripted_transport, name, kwargs, method):
        getattr(client, name)(**kwargs)
        assert len(scripted_transport.sent) == 1

    def test_ping_omits_params(self, client, scripted_transport):
        client.ping()
        assert scripted_transport.last == {"jsonrpc": "2.0", "method": "ping", "id": 1}

    @pytest.mark.parametrize(
        "name",
        ["list_tools", "list_prompts", "list_resources", "list_resource_templates"],
    )
    def test_list_without_cursor_omits_params(self, client, scripted_transport, name):
        getattr(client, name)()
        assert "params" not in scripted_transport.last

    @pytest.mark.parametrize(
        "name",
        ["list_tools", "list_prompts", "list_resources", "list_resource_templates"],
    )
    def test_list_with_cursor(self, client, scripted_transport, name):
        getattr(client, name)(cursor="page-2")
        assert scripted_transport.last["params"] == {"cursor": "page-2"}

    def test_call_tool_with_arguments(self, client, scripted_transport):
        client.call_tool(name="echo", arguments={"message": "hi"})
        assert scripted_transport.last["params"] == {
            "name": "echo",
            "arguments": {"message": "hi"},
        }

    def test_call_tool_empty_arguments_omitted(self, client, scripted_transport):
        client.call_tool(name="echo", arguments={})
        assert scripted_transport.last["params"] == {"name": "echo"}

    def test_get_prompt_arguments(self, client, scripted_transport):
        client.get_prompt("greeting", {"lang": "en"})
        assert scripted_transport.last["params"] == {
            "name": "greeting",
            "arguments": {"lang": "en"},
        }
        client.get_prompt("greeting")
        assert scripted_transport.last["params"] == {"name": "greeting"}

    @pytest.mark.parametrize(
        "name", ["read_resource", "subscribe_resource", "unsubscribe_resource"]
    )
    def test_resource_uri(self, client, scripted_transport, name):
        getattr(client, name)(uri="file:///notes.txt")
        assert scripted_transport.last["params"] == {"uri": "file:///notes.txt"}

    def test_initialize_params(self, client, scripted_transport):
        client.initialize_session(
            capabilities={"roots": {}},
            client_info={"name": "tester", "version": "1.0"},
        )
        assert scripted_transport.last["params"] == {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"roots": {}},
            "clientInfo": {"name": "tester", "version": "1.0"},
        }

    def test_initialize_defaults_send_empty_mappings(self, client, scripted_transport):
        client.initialize_session(protocol_version="2024-11-05")
        params = scripted_transport.last["params"]
        assert params["protocolVersion"] == "2024-11-05"
        assert params["capabilities"] == {}
        assert params["clientInfo"] == {}

    def test_set_logging_level_accepts_enum(self, client, scripted_transport):
        client.set_logging_level(LogLevel.WARNING)
        assert scripted_transport.last["params"] == {"level": "warning"}

    def test_complete_accepts_typed_refs(self, client, scripted_transport):
        client.complete(
            ref=CompletionRef.resource("file:///{path}"),
            argument=CompletionArgument(name="path", value="no"),
        )
        assert scripted_transport.last["params"] == {
            "ref": {"type": "ref/resource", "uri": "file:///{path}"},
            "argument": {"name": "path", "value": "no"},
        }

    def test_request_accepts_method_enum(self, client, scripted_transport):
        client.request(Method.TOOLS_LIST)
        assert scripted_transport.last["method"] == "tools/list"


class TestRequestIds:
    """Auto-assigned ids come from a per-client counter."""

    def test_counter_starts_at_one(self, client, scripted_transport):
        client.ping()
        client.list_tools()
        client.ping()
        assert [r["id"] for r in scripted_transport.sent] == [1, 2, 3]

    @pytest.mark.parametrize("name,kwargs,method", OPERATIONS, ids=OPERATION_IDS)
    def test_explicit_id_bypasses_counter(self, client, scripted_transport, name, kwargs, method):
        getattr(client, name)(request_id="custom-7", **kwargs)
        client.ping()
        assert scripted_transport.sent[0]["id"] == "custom-7"
        assert scripted_transport.sent[1]["id"] == 1

    def test_explicit_integer_id(self, client, scripted_transport):
        client.ping(request_id=42)
        client.ping()
        assert [r["id"] for r in scripted_transport.sent] == [42, 1]

    def test_counter_advances_on_server_error(self, client, scripted_transport):
        scripted_transport.queue(error_response(1))
        with pytest.raises(ClientError):
            client.ping()
        client.ping()
        assert scripted_transport.last["id"] == 2

    def test_counter_advances_on_transport_error(self, client, scripted_transport):
        scripted_transport.queue(TransportTimeoutError("slow", timeout=1.0))
        with pytest.raises(TransportTimeoutError):
            client.ping()
        client.ping()
        assert scripted_transport.last["id"] == 2

    def test_clients_do_not_share_counters(self, scripted_transport):
        first = MCPClient(scripted_transport)
        second = MCPClient(scripted_transport)
        first.ping()
        first.ping()
        second.ping()
        assert [r["id"] for r in scripted_transport.sent] == [1, 2, 1]


class TestResults:
    """Responses are unwrapped or converted to ClientError."""

    @pytest.mark.parametrize("name,kwargs,method", OPERATIONS, ids=OPERATION_IDS)
    def test_result_returned_unmodified(self, client, scripted_transport, name, kwargs, method):
        result = {"tools": [{"name": "echo"}], "nextCursor": None, "extra": [1, 2]}
        scripted_transport.queue({"jsonrpc": "2.0", "id": 1, "result": result})
        assert getattr(client, name)(**kwargs) is result

    @pytest.mark.parametrize("name,kwargs,method", OPERATIONS, ids=OPERATION_IDS)
    def test_server_error_raises(self, client, scripted_transport, name, kwargs, method):
        scripted_transport.queue(error_response(1, message="server exploded"))
        with pytest.raises(ClientError) as exc_info:
            getattr(client, name)(**kwargs)
        assert "server exploded" in str(exc_info.value)
        assert exc_info.value.message == "server exploded"
        assert exc_info.value.operation == method

    @pytest.mark.parametrize("name,kwargs,method", OPERATIONS[1:], ids=OPERATION_IDS[1:])
    def test_non_initialize_errors_are_generic(self, client, scripted_transport, name, kwargs, method):
        scripted_transport.queue(error_response(1))
        with pytest.raises(ClientError) as exc_info:
            getattr(client, name)(**kwargs)
        assert exc_info.value.kind is ErrorKind.CLIENT_ERROR
        assert exc_info.value.error_type == "client_error"

    def test_error_wins_over_result(self, client, scripted_transport):
        scripted_transport.queue(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "result": {"ok": True},
                "error": {"code": -32000, "message": "both present"},
            }
        )
        with pytest.raises(ClientError, match="both present"):
            client.ping()

    def test_error_carries_code_and_data(self, client, scripted_transport):
        scripted_transport.queue(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "error": {"code": -32602, "message": "bad args", "data": {"field": "x"}},
            }
        )
        with pytest.raises(ClientError) as exc_info:
            client.call_tool("echo", {"message": "hi"})
        error = exc_info.value
        assert error.code == -32602
        assert error.data == {"field": "x"}
        assert error.subject == "echo"
        assert str(error) == "Failed to call tool 'echo': bad args"

    def test_missing_result_returns_none(self, client, scripted_transport):
        scripted_transport.queue({"jsonrpc": "2.0", "id": 1})
        assert client.ping() is None

    def test_transport_error_propagates_unwrapped(self, client, scripted_transport):
        original = TransportConnectionError("Connection failed: refused")
        scripted_transport.queue(original)
        with pytest.raises(TransportConnectionError) as exc_info:
            client.list_tools()
        assert exc_info.value is original


class TestSession:
    """initialize_session caches server identity on success only."""

    def test_state_empty_before_initialize(self, client):
        assert client.server_info is None
        assert client.capabilities is None
        assert not client.is_initialized

    def test_success_caches_server_info(self, client, scripted_transport):
        result = {
            "protocolVersion": PROTOCOL_VERSION,
            "serverInfo": {"name": "example", "version": "1.2.3"},
            "capabilities": {"tools": {"listChanged": True}, "prompts": {}},
        }
        scripted_transport.queue({"jsonrpc": "2.0", "id": 1, "result": result})

        returned = client.initialize_session()

        assert returned is result
        assert client.server_info == {"name": "example", "version": "1.2.3"}
        assert set(client.capabilities) == {"tools", "prompts"}
        assert client.is_initialized

    def test_failure_is_initialization_error(self, client, scripted_transport):
        scripted_transport.queue(error_response(1, message="unsupported version"))
        with pytest.raises(ClientError) as exc_info:
            client.initialize_session()
        assert exc_info.value.kind is ErrorKind.INITIALIZATION_ERROR
        assert str(exc_info.value) == "Failed to initialize: unsupported version"

    def test_failure_leaves_state_untouched(self, client, scripted_transport):
        scripted_transport.queue(error_response(1))
        with pytest.raises(ClientError):
            client.initialize_session()
        assert client.server_info is None
        assert client.capabilities is None
        assert not client.is_initialized

    @pytest.mark.parametrize("result", [{}, {"protocolVersion": PROTOCOL_VERSION}, None])
    def test_bare_success_marks_initialized(self, client, scripted_transport, result):
        scripted_transport.queue({"jsonrpc": "2.0", "id": 1, "result": result})
        client.initialize_session()
        assert client.is_initialized
        assert client.server_info is None

    def test_failed_reinitialize_keeps_previous_state(self, client, scripted_transport):
        scripted_transport.queue(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "result": {"serverInfo": {"name": "a", "version": "1"}, "capabilities": {}},
            },
            error_response(2),
        )
        client.initialize_session()
        with pytest.raises(ClientError):
            client.initialize_session()
        assert client.server_info == {"name": "a", "version": "1"}

    def test_close_closes_transport(self, client, scripted_transport):
        with client:
            client.ping()
        assert scripted_transport.closed
