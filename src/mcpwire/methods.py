"""MCP JSON-RPC method names."""

from enum import Enum


class Method(str, Enum):
    """
    Protocol method names sent in the ``method`` field of a request.

    Members compare equal to their string values, so they can be embedded
    in envelopes and serialized as plain strings.
    """

    INITIALIZE = "initialize"
    PING = "ping"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"
    PROMPTS_LIST = "prompts/list"
    PROMPTS_GET = "prompts/get"
    RESOURCES_LIST = "resources/list"
    RESOURCES_READ = "resources/read"
    RESOURCES_TEMPLATES_LIST = "resources/templates/list"
    RESOURCES_SUBSCRIBE = "resources/subscribe"
    RESOURCES_UNSUBSCRIBE = "resources/unsubscribe"
    LOGGING_SET_LEVEL = "logging/setLevel"
    COMPLETION_COMPLETE = "completion/complete"

    def __str__(self) -> str:
        return self.value
