#!/usr/bin/env python3
"""
HTTP API

FastAPI application exposing the same registry as the stdio server.
Useful for inspecting and exercising operations without an MCP host.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .base import OperationDefinition, input_schema, normalize, normalize_prompt
from .config import SERVER_DESCRIPTION, SERVER_NAME, SERVER_VERSION
from .registry import (
    execute_prompt,
    execute_tool,
    get_all_prompts,
    get_all_tools,
    get_registry,
    list_operation_names,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    registry = get_registry()
    logger.info(f"HTTP API starting with {len(registry)} operations")
    for name in registry.names():
        logger.info(f"  - {name}")

    yield

    logger.info("HTTP API shutting down")


app = FastAPI(
    title=SERVER_NAME,
    description=SERVER_DESCRIPTION,
    version=SERVER_VERSION,
    lifespan=lifespan,
)


class OperationRequest(BaseModel):
    """Request body for tool execution and prompt rendering."""

    arguments: Any = {}


class ContentBlock(BaseModel):
    type: str = "text"
    text: str


class PromptMessage(BaseModel):
    role: str
    content: ContentBlock


class ToolResponse(BaseModel):
    """Normalized tool envelope."""

    content: List[ContentBlock]
    isError: bool = False


class PromptResponse(ToolResponse):
    """Normalized prompt envelope."""

    description: Optional[str] = None
    messages: List[PromptMessage] = []


def _describe(definition: OperationDefinition) -> Dict[str, Any]:
    return {
        "name": definition.name,
        "description": definition.description,
        "category": definition.category,
        "parameters": [
            {
                "name": p.name,
                "type": p.type,
                "description": p.description,
                "required": p.required,
                "default": p.default,
            }
            for p in definition.parameters
        ],
        "inputSchema": input_schema(definition.parameters),
    }


# ============== API Endpoints ==============


@app.get("/")
async def root():
    return {
        "service": SERVER_NAME,
        "version": SERVER_VERSION,
        "operations_count": len(list_operation_names()),
        "endpoints": {
            "list_tools": "/tools",
            "execute": "/tools/{tool_name}/execute",
            "list_prompts": "/prompts",
            "get_prompt": "/prompts/{prompt_name}/get",
            "health": "/health",
        },
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "operations_loaded": len(list_operation_names())}


@app.get("/tools")
async def list_tools():
    tools = get_all_tools()
    return {
        "total": len(tools),
        "tools": [_describe(tool) for tool in tools.values()],
    }


@app.get("/tools/{tool_name}")
async def get_tool_info(tool_name: str):
    tools = get_all_tools()
    if tool_name not in tools:
        raise HTTPException(status_code=404, detail=f"Tool not found: {tool_name}")
    return _describe(tools[tool_name])


@app.post("/tools/{tool_name}/execute", response_model=ToolResponse)
async def execute_tool_endpoint(tool_name: str, request: OperationRequest):
    outcome = await execute_tool(tool_name, request.arguments)
    return normalize(outcome)


@app.get("/prompts")
async def list_prompts():
    prompts = get_all_prompts()
    return {
        "total": len(prompts),
        "prompts": [_describe(prompt) for prompt in prompts.values()],
    }


@app.post("/prompts/{prompt_name}/get", response_model=PromptResponse)
async def get_prompt_endpoint(prompt_name: str, request: OperationRequest):
    definition = get_registry().get(prompt_name)
    outcome = await execute_prompt(prompt_name, request.arguments)
    return normalize_prompt(outcome, definition.description if definition else None)


def main(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Run the HTTP API."""
    import uvicorn

    logger.info(f"Starting HTTP API on {host}:{port}")
    uvicorn.run(app, host=host, port=port)
