"""Shared protocol value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

# Protocol revision announced by initialize_session unless overridden
PROTOCOL_VERSION = "2025-03-26"


class LogLevel(Enum):
    """
    MCP log levels following RFC 5424 severity levels.

    Ordered from least to most severe.
    """

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"

    @classmethod
    def from_string(cls, value: str) -> "LogLevel":
        """Parse log level from string value."""
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Invalid log level: {value}")


@dataclass
class CompletionRef:
    """
    Reference for completion context.

    Identifies the prompt (by name) or resource (by URI) whose argument
    is being completed.
    """

    type: Literal["ref/prompt", "ref/resource"]
    name: str
    """Name of the prompt or URI of the resource."""

    @classmethod
    def prompt(cls, name: str) -> "CompletionRef":
        return cls(type="ref/prompt", name=name)

    @classmethod
    def resource(cls, uri: str) -> "CompletionRef":
        return cls(type="ref/resource", name=uri)

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        key = "uri" if self.type == "ref/resource" else "name"
        return {"type": self.type, key: self.name}


@dataclass
class CompletionArgument:
    """Argument being completed."""

    name: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire format."""
        return {"name": self.name, "value": self.value}
