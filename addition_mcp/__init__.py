"""
Number Addition MCP Server

Exposes an addition-expression evaluator and a Highspot knowledge-base
search to MCP hosts. Tools and prompts are auto-discovered via registry.py.
"""

from .base import (
    MCPPrompt,
    MCPTool,
    OperationDefinition,
    TextContent,
    ToolParameter,
    normalize,
)
from .registry import OperationRegistry, get_registry

__version__ = "1.0.0"

__all__ = [
    "MCPPrompt",
    "MCPTool",
    "OperationDefinition",
    "OperationRegistry",
    "TextContent",
    "ToolParameter",
    "get_registry",
    "normalize",
]
