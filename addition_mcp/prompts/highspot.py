"""
Highspot Search Prompt
"""

from typing import List

from ..base import MCPPrompt, TextContent, ToolParameter
from ..tools.highspot import dump_results, run_search


class SearchHighspotPrompt(MCPPrompt):
    """Search Highspot and introduce the raw results."""

    @property
    def name(self) -> str:
        return "search_highspot_prompt"

    @property
    def description(self) -> str:
        return "What would you like me to search for in the Highspot knowledge base?"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="query",
                type="string",
                description="Search query",
                required=True,
                min_length=1,
                min_length_message="Please provide a search query.",
            )
        ]

    async def execute(self, query: str) -> List[TextContent]:
        results = await run_search(query)
        return [
            TextContent(text=f"Here are the Highspot search results for '{query}':"),
            TextContent(text=dump_results(results)),
        ]
