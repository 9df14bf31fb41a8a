"""Cursor-following helpers for MCP list operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator

if TYPE_CHECKING:
    from mcpwire.protocol.client import MCPClient

logger = logging.getLogger(__name__)

ListCall = Callable[..., Any]


@dataclass
class Page:
    """
    One page of a list operation.

    Cursors are opaque strings that clients must not parse or modify.
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    next_cursor: str | None = None

    @property
    def has_more(self) -> bool:
        """Check if more pages are available."""
        return self.next_cursor is not None


def iter_pages(list_call: ListCall, items_key: str) -> Iterator[Page]:
    """
    Iterate over pages until the server stops returning ``nextCursor``.

    Args:
        list_call: A bound list method such as ``client.list_tools``.
        items_key: Key in the result holding the items (e.g. "tools").

    Yields:
        Page for each round trip. Errors propagate from the client.
    """
    cursor: str | None = None

    while True:
        result = list_call(cursor=cursor) or {}
        page = Page(items=result.get(items_key, []), next_cursor=result.get("nextCursor"))
        logger.debug(f"Page result: {len(page.items)} {items_key}, has_more={page.has_more}")
        yield page

        if not page.has_more:
            return
        cursor = page.next_cursor


def list_all(list_call: ListCall, items_key: str, max_pages: int = 100) -> list[dict[str, Any]]:
    """
    Fetch every page and concatenate the items.

    Args:
        list_call: A bound list method such as ``client.list_tools``.
        items_key: Key in the result holding the items.
        max_pages: Safety limit on the number of round trips.
    """
    items: list[dict[str, Any]] = []

    for page_num, page in enumerate(iter_pages(list_call, items_key)):
        items.extend(page.items)
        if not page.has_more:
            return items
        if page_num + 1 >= max_pages:
            logger.warning(
                f"Reached max_pages limit ({max_pages}) for {items_key}, "
                f"there may be more results"
            )
            break

    return items


def list_all_tools(client: "MCPClient") -> list[dict[str, Any]]:
    return list_all(client.list_tools, "tools")


def list_all_prompts(client: "MCPClient") -> list[dict[str, Any]]:
    return list_all(client.list_prompts, "prompts")


def list_all_resources(client: "MCPClient") -> list[dict[str, Any]]:
    return list_all(client.list_resources, "resources")


def list_all_resource_templates(client: "MCPClient") -> list[dict[str, Any]]:
    return list_all(client.list_resource_templates, "resourceTemplates")
