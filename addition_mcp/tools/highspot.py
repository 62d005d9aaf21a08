"""
Highspot Search Tool

Searches the Highspot knowledge base.
Requires HIGHSPOT_USERNAME and HIGHSPOT_PASSWORD in the environment.
"""

import json
from typing import Any, List

from ..base import MCPTool, ToolParameter
from ..config import load_highspot_credentials, load_highspot_timeout
from ..highspot import search_items


def dump_results(results: Any) -> str:
    """Compact JSON dump of a search response."""
    return json.dumps(results, ensure_ascii=False, separators=(",", ":"))


async def run_search(query: str) -> Any:
    # Credentials are resolved per call so configuration changes apply immediately
    credentials = load_highspot_credentials()
    return await search_items(query, credentials, timeout=load_highspot_timeout())


class SearchHighspotTool(MCPTool):
    """Search the Highspot knowledge base."""

    @property
    def name(self) -> str:
        return "searchHighspot"

    @property
    def description(self) -> str:
        return (
            "Search the Highspot knowledge base. Returns the top 10 items "
            "by relevancy as raw JSON."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="query",
                type="string",
                description="Search query",
                required=True,
            )
        ]

    @property
    def category(self) -> str:
        return "search"

    async def execute(self, query: str) -> str:
        results = await run_search(query)
        return dump_results(results)
