#!/usr/bin/env python3
"""
MCP stdio Server

Exposes every registered tool and prompt to an MCP host over stdin/stdout.
Operations are looked up in the registry; every call is answered with a
normalized envelope, so failures reach the host as text instead of faults.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .base import OperationDefinition, input_schema, normalize, normalize_prompt
from .config import SERVER_DESCRIPTION, SERVER_NAME, SERVER_VERSION
from .registry import execute_prompt, execute_tool, get_registry

logger = logging.getLogger(__name__)

server = Server(SERVER_NAME, version=SERVER_VERSION, instructions=SERVER_DESCRIPTION)


def _to_text_content(blocks: List[Dict[str, str]]) -> List[types.TextContent]:
    return [types.TextContent(type="text", text=block["text"]) for block in blocks]


def _tool_schema(definition: OperationDefinition) -> types.Tool:
    return types.Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=input_schema(definition.parameters),
    )


def _prompt_schema(definition: OperationDefinition) -> types.Prompt:
    return types.Prompt(
        name=definition.name,
        description=definition.description,
        arguments=[
            types.PromptArgument(
                name=param.name,
                description=param.description,
                required=param.required,
            )
            for param in definition.parameters
        ],
    )


@server.list_tools()
async def list_tools() -> List[types.Tool]:
    """List registered tools."""
    return [_tool_schema(d) for d in get_registry().list_tools()]


# Input validation is done by the registry so every error uses the same envelope
@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
    """Handle tool calls."""
    outcome = await execute_tool(name, arguments or {})
    envelope = normalize(outcome)
    return _to_text_content(envelope["content"])


@server.list_prompts()
async def list_prompts() -> List[types.Prompt]:
    """List registered prompts."""
    return [_prompt_schema(d) for d in get_registry().list_prompts()]


@server.get_prompt()
async def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
    """Render a prompt into assistant messages."""
    definition = get_registry().get(name)
    outcome = await execute_prompt(name, arguments or {})
    envelope = normalize_prompt(outcome, definition.description if definition else None)
    return types.GetPromptResult(
        description=envelope["description"],
        messages=[
            types.PromptMessage(
                role=message["role"],
                content=types.TextContent(type="text", text=message["content"]["text"]),
            )
            for message in envelope["messages"]
        ],
    )


async def serve() -> None:
    """Run the MCP server on stdio until the host closes the pipes."""
    registry = get_registry()
    logger.info(f"{SERVER_NAME} MCP server starting with {len(registry)} operations")
    for name in registry.names():
        logger.info(f"  - {name}")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
