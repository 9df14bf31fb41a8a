"""MCP server configuration loading."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mcpwire.lib import oj
from mcpwire.transport.base import Transport
from mcpwire.transport.http import HTTPTransport
from mcpwire.transport.stdio import StdioTransport
from mcpwire.transport.types import (
    DEFAULT_TIMEOUT,
    HTTPTransportConfig,
    StdioTransportConfig,
)

logger = logging.getLogger(__name__)

# Config file locations
MCP_CONFIG_FILENAME = "mcp.json"
GLOBAL_MCP_CONFIG = Path.home() / ".mcpwire" / MCP_CONFIG_FILENAME
LOCAL_MCP_CONFIG_DIR = ".mcpwire"

HTTP = "http"
STDIO = "stdio"


@dataclass
class MCPServerConfig:
    """Configuration for a single MCP server."""

    name: str
    transport: str = HTTP
    url: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    drain_after_timeout: bool = False

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "MCPServerConfig":
        """Create from config dict."""
        url = data.get("url", "")
        return cls(
            name=name,
            transport=data.get("transport", HTTP if url else STDIO),
            url=url,
            headers=data.get("headers", {}),
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
            drain_after_timeout=bool(data.get("drainAfterTimeout", False)),
        )

    def to_transport_config(self) -> HTTPTransportConfig | StdioTransportConfig:
        """
        Build the matching transport config.

        Raises:
            ValueError: On an unknown transport name or invalid values.
        """
        if self.transport == HTTP:
            return HTTPTransportConfig(url=self.url, timeout=self.timeout, headers=self.headers)
        if self.transport == STDIO:
            return StdioTransportConfig(
                timeout=self.timeout,
                drain_after_timeout=self.drain_after_timeout,
            )
        raise ValueError(f"Unknown transport for server '{self.name}': {self.transport}")


def create_transport(server: MCPServerConfig) -> Transport:
    """Instantiate the transport described by a server entry."""
    config = server.to_transport_config()
    if isinstance(config, HTTPTransportConfig):
        return HTTPTransport(config)
    return StdioTransport(config)


def _is_usable(data: object) -> bool:
    if not isinstance(data, dict):
        return False
    return bool(data.get("url")) or data.get("transport") == STDIO


def _load_file(path: Path, configs: dict[str, MCPServerConfig]) -> None:
    try:
        data = oj.loads(path.read_bytes())
    except (OSError, oj.JSONDecodeError) as e:
        logger.warning(f"Skipping unreadable MCP config {path}: {e}")
        return

    servers = data.get("mcpServers", {}) if isinstance(data, dict) else {}
    if not isinstance(servers, dict):
        logger.warning(f"Skipping MCP config {path}: mcpServers is not an object")
        return

    for name, server_data in servers.items():
        if not _is_usable(server_data):
            logger.warning(f"Skipping MCP server '{name}' in {path}: no url or stdio transport")
            continue
        try:
            configs[name] = MCPServerConfig.from_dict(name, server_data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping MCP server '{name}' in {path}: {e}")
    logger.debug(f"Loaded {len(servers)} server entries from {path}")


def load_mcp_config(
    working_dir: Path | None = None,
    global_config: Path | None = None,
) -> dict[str, MCPServerConfig]:
    """Load MCP server configs from global and local config files.

    Global config (~/.mcpwire/mcp.json) is loaded first.
    Local config ({working_dir}/.mcpwire/mcp.json) overrides global.

    Returns:
        Dict mapping server name to config.
    """
    configs: dict[str, MCPServerConfig] = {}

    global_path = global_config or GLOBAL_MCP_CONFIG
    if global_path.exists():
        _load_file(global_path, configs)

    if working_dir:
        local_config = working_dir / LOCAL_MCP_CONFIG_DIR / MCP_CONFIG_FILENAME
        if local_config.exists():
            _load_file(local_config, configs)

    return configs
