"""
MCP Operation Registry

Single Source of Truth (SSOT) for tool and prompt lookup.
Operations are discovered from addition_mcp/tools/ and addition_mcp/prompts/
once at startup and are read-only afterwards.
"""

import importlib
import inspect
import logging
import pkgutil
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import (
    PROMPT,
    TOOL,
    Failure,
    MCPOperation,
    OperationDefinition,
    Outcome,
    DuplicateNameError,
    UnknownOperationError,
    run_operation,
)

logger = logging.getLogger(__name__)

OPERATION_PACKAGES = ("tools", "prompts")


class OperationRegistry:
    """Maps operation names to their definitions."""

    def __init__(self):
        self._operations: Dict[str, OperationDefinition] = {}

    def register(self, definition: OperationDefinition) -> None:
        """Add a definition. Names must be unique across tools and prompts."""
        if definition.name in self._operations:
            raise DuplicateNameError(
                f"Operation already registered: {definition.name}",
                tool_name=definition.name,
            )
        self._operations[definition.name] = definition
        logger.info(f"Registered {definition.kind}: {definition.name}")

    def register_operation(self, operation: MCPOperation) -> None:
        self.register(operation.to_definition())

    def resolve(self, name: str) -> OperationDefinition:
        definition = self._operations.get(name)
        if definition is None:
            raise UnknownOperationError(
                f"Unknown operation: '{name}'. Available: {self.names()}",
                tool_name=name,
            )
        return definition

    def get(self, name: str) -> Optional[OperationDefinition]:
        return self._operations.get(name)

    def names(self) -> List[str]:
        return list(self._operations.keys())

    def list_tools(self) -> List[OperationDefinition]:
        return [d for d in self._operations.values() if d.kind == TOOL]

    def list_prompts(self) -> List[OperationDefinition]:
        return [d for d in self._operations.values() if d.kind == PROMPT]

    async def invoke(self, name: str, arguments: Any = None, kind: str = None) -> Outcome:
        """
        Execute an operation by name.
        Returns a Failure (never raises) for unknown names, bad arguments
        and handler errors. When kind is given, only that kind resolves.
        """
        try:
            definition = self.resolve(name)
            if kind is not None and definition.kind != kind:
                raise UnknownOperationError(
                    f"Unknown {kind}: '{name}'",
                    tool_name=name,
                )
        except UnknownOperationError as e:
            logger.error(e.message)
            return Failure(message=e.message, error_type="not_found", error=e)

        return await run_operation(definition, arguments)

    def __contains__(self, name: str) -> bool:
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)


def discover_operations(registry: OperationRegistry) -> None:
    """
    Import every module under the operation packages and register
    the concrete MCPOperation subclasses defined there.
    """
    package_root = Path(__file__).parent

    for package in OPERATION_PACKAGES:
        package_path = package_root / package
        if not package_path.exists():
            logger.warning(f"Operation directory not found: {package_path}")
            continue

        for _, module_name, _ in pkgutil.iter_modules([str(package_path)]):
            if module_name.startswith("_"):
                continue

            full_module_name = f"{__package__}.{package}.{module_name}"
            module = importlib.import_module(full_module_name)
            logger.debug(f"Loaded operation module: {full_module_name}")

            for _, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, MCPOperation)
                    and obj.__module__ == module.__name__
                    and not inspect.isabstract(obj)
                    and not obj.__name__.startswith("_")
                ):
                    registry.register_operation(obj())


# Process-wide registry
_registry: Optional[OperationRegistry] = None


def get_registry() -> OperationRegistry:
    """Return the process registry, discovering operations on first use."""
    global _registry
    if _registry is None:
        registry = OperationRegistry()
        discover_operations(registry)
        logger.info(f"Operation discovery complete. Total operations: {len(registry)}")
        _registry = registry
    return _registry


def get_all_tools() -> Dict[str, OperationDefinition]:
    return {d.name: d for d in get_registry().list_tools()}


def get_all_prompts() -> Dict[str, OperationDefinition]:
    return {d.name: d for d in get_registry().list_prompts()}


def list_operation_names() -> List[str]:
    return get_registry().names()


async def execute_tool(name: str, arguments: Any = None) -> Outcome:
    """Execute a tool by name."""
    return await get_registry().invoke(name, arguments, kind=TOOL)


async def execute_prompt(name: str, arguments: Any = None) -> Outcome:
    """Render a prompt by name."""
    return await get_registry().invoke(name, arguments, kind=PROMPT)


def reset_registry() -> None:
    """Reset the registry (mainly for testing)."""
    global _registry
    _registry = None
