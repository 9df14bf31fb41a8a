"""Transport layer types and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS: Mapping[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def merge_headers(overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """
    Overlay caller headers onto the default pair.

    Keys are compared exactly as given, so ``content-type`` and
    ``Content-Type`` are two distinct entries.

    Args:
        overrides: Headers supplied by the caller. Values win on collision.

    Returns:
        A new dict with the effective headers.
    """
    headers = dict(DEFAULT_HEADERS)
    if overrides:
        headers.update(overrides)
    return headers


@dataclass(frozen=True)
class HTTPTransportConfig:
    """Configuration for the HTTP transport."""

    url: str
    """Endpoint that receives the POSTed envelopes."""

    timeout: float = DEFAULT_TIMEOUT
    """Seconds allowed for connecting and for each read/write."""

    headers: Mapping[str, str] = field(default_factory=dict)
    """Caller header overrides, merged onto DEFAULT_HEADERS."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.url:
            raise ValueError("url is required")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @property
    def effective_headers(self) -> dict[str, str]:
        """Headers actually sent with every request."""
        return merge_headers(self.headers)


@dataclass(frozen=True)
class StdioTransportConfig:
    """Configuration for the stdio transport."""

    timeout: float = DEFAULT_TIMEOUT
    """Seconds to wait for a response line."""

    drain_after_timeout: bool = False
    """Discard pending input before the next request once a call timed out."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
