"""
MCP Operation Base Classes

Provides parameter declarations, operation descriptors, the error taxonomy,
argument validation and the single validate -> execute -> normalize pipeline
shared by every tool and prompt.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)

TOOL = "tool"
PROMPT = "prompt"

# JSON-schema type name -> accepted Python types
_JSON_TYPES = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "array": (list, tuple),
    "object": (dict,),
}


@dataclass
class ToolParameter:
    """Definition of an operation parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None
    min_length: Optional[int] = None
    min_length_message: Optional[str] = None


@dataclass
class TextContent:
    """A single text block of a response."""
    text: str
    type: str = "text"

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "text": self.text}


@dataclass
class OperationDefinition:
    """Complete definition of a registered tool or prompt."""
    name: str
    description: str
    kind: str = TOOL
    parameters: List[ToolParameter] = field(default_factory=list)
    handler: Optional[Callable] = None
    category: str = "general"


class MCPToolError(Exception):
    """Base exception for MCP operation errors."""
    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(MCPToolError):
    """Raised when operation arguments do not match the declared parameters."""
    def __init__(
        self,
        message: str,
        tool_name: str = None,
        field_errors: Dict[str, str] = None,
    ):
        self.field_errors = field_errors or {}
        super().__init__(message, tool_name=tool_name, details={"field_errors": self.field_errors})


class ExecutionError(MCPToolError):
    """Raised when operation execution fails."""
    pass


class InvalidExpressionError(MCPToolError):
    """Raised when an addition expression cannot be evaluated."""
    pass


class ConfigurationError(MCPToolError):
    """Raised when required configuration is missing."""
    pass


class RemoteError(MCPToolError):
    """Raised when a remote API answers with a non-success status."""
    def __init__(
        self,
        status_code: int,
        status_text: str,
        service: str = "Remote",
        tool_name: str = None,
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.service = service
        super().__init__(
            f"{service} API error: {status_code} {status_text}",
            tool_name=tool_name,
            details={"service": service, "status_code": status_code, "status_text": status_text},
        )


class UnknownOperationError(MCPToolError):
    """Raised when no operation is registered under the requested name."""
    pass


class DuplicateNameError(MCPToolError):
    """Raised when an operation name is registered twice."""
    pass


@dataclass
class Success:
    """Handler produced content."""
    content: List[TextContent]


@dataclass
class Failure:
    """Handler (or dispatch) failed; message is what the caller sees."""
    message: str
    error_type: str = "execution"
    error: Optional[Exception] = None


Outcome = Union[Success, Failure]


def _type_matches(value: Any, type_name: str) -> bool:
    expected = _JSON_TYPES.get(type_name)
    if expected is None:
        return True
    # bool is an int subclass but never a JSON number
    if isinstance(value, bool) and type_name != "boolean":
        return False
    return isinstance(value, expected)


def expected_shape(parameters: List[ToolParameter]) -> str:
    """Human-readable hint describing the arguments an operation takes."""
    parts = []
    for param in parameters:
        suffix = "" if param.required else ", optional"
        parts.append(f"{param.name} ({param.type}{suffix})")
    return ", ".join(parts) if parts else "no arguments"


def validate_arguments(
    parameters: List[ToolParameter],
    arguments: Mapping[str, Any],
    operation_name: str = None,
) -> Dict[str, Any]:
    """
    Validate arguments against declared parameters.
    Returns validated arguments with defaults filled in.
    Raises ValidationError carrying every field problem found.
    """
    validated = {}
    field_errors: Dict[str, str] = {}
    declared = {param.name for param in parameters}

    for name in arguments:
        if name not in declared:
            field_errors[name] = "Unexpected parameter"

    for param in parameters:
        value = arguments.get(param.name)

        if value is None:
            if param.required:
                field_errors[param.name] = "Missing required parameter"
                continue
            validated[param.name] = param.default
            continue

        if not _type_matches(value, param.type):
            field_errors[param.name] = (
                f"Expected {param.type}, got {type(value).__name__}"
            )
            continue

        if param.min_length is not None and len(value) < param.min_length:
            field_errors[param.name] = param.min_length_message or (
                f"Must be at least {param.min_length} characters"
            )
            continue

        validated[param.name] = value

    if field_errors:
        problems = "; ".join(f"{name}: {msg}" for name, msg in field_errors.items())
        raise ValidationError(
            f"Invalid arguments for '{operation_name}': {problems}. "
            f"Expected: {expected_shape(parameters)}",
            tool_name=operation_name,
            field_errors=field_errors,
        )

    return validated


def as_content(result: Any) -> List[TextContent]:
    """Coerce a handler result into an ordered list of text blocks."""
    if isinstance(result, TextContent):
        return [result]
    if isinstance(result, list) and all(isinstance(item, TextContent) for item in result):
        return list(result)
    if isinstance(result, str):
        return [TextContent(text=result)]
    return [TextContent(text=json.dumps(result, ensure_ascii=False, separators=(",", ":")))]


def bind_arguments(definition: OperationDefinition, arguments: Any) -> Mapping[str, Any]:
    """
    Turn raw caller input into a name -> value mapping.

    Prompts also accept a single bare value, bound to their only parameter.
    """
    if arguments is None:
        return {}
    if isinstance(arguments, Mapping):
        return arguments
    if definition.kind == PROMPT and len(definition.parameters) == 1:
        return {definition.parameters[0].name: arguments}
    raise ValidationError(
        f"Invalid arguments for '{definition.name}': expected an object of named arguments. "
        f"Expected: {expected_shape(definition.parameters)}",
        tool_name=definition.name,
        field_errors={"*": "Expected an object"},
    )


async def run_operation(definition: OperationDefinition, arguments: Any) -> Outcome:
    """
    Validate arguments, invoke the handler and wrap the result.
    Never raises: every error becomes a Failure.
    """
    name = definition.name
    try:
        bound = bind_arguments(definition, arguments)
        validated = validate_arguments(definition.parameters, bound, name)
        if definition.handler is None:
            raise ExecutionError(f"Operation has no handler: {name}", tool_name=name)
        result = await definition.handler(**validated)
        return Success(content=as_content(result))
    except ValidationError as e:
        logger.error(f"Validation error in {name}: {e.message}")
        return Failure(message=e.message, error_type="validation", error=e)
    except MCPToolError as e:
        logger.error(f"Execution error in {name}: {e.message}")
        return Failure(message=e.message, error_type="execution", error=e)
    except Exception as e:
        logger.exception(f"Unexpected error in {name}")
        return Failure(message=str(e), error_type="unexpected", error=e)


def normalize(outcome: Outcome) -> Dict[str, Any]:
    """Convert an Outcome into the response envelope sent to the host."""
    if isinstance(outcome, Success):
        return {
            "content": [block.to_dict() for block in outcome.content],
            "isError": False,
        }
    return {
        "content": [TextContent(text=outcome.message).to_dict()],
        "isError": True,
    }


def normalize_prompt(outcome: Outcome, description: str = None) -> Dict[str, Any]:
    """Envelope for prompts: the normalized content, also as assistant messages."""
    envelope = normalize(outcome)
    envelope["description"] = description
    envelope["messages"] = [
        {"role": "assistant", "content": block} for block in envelope["content"]
    ]
    return envelope


class MCPOperation(ABC):
    """
    Abstract base class for tools and prompts.

    Subclasses implement:
    - name: Operation identifier
    - description: What the operation does (for prompts, the template message)
    - parameters: List of ToolParameter definitions
    - execute(): The actual logic
    """

    kind: str = TOOL

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the operation."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the operation does."""
        pass

    @property
    def parameters(self) -> List[ToolParameter]:
        """List of parameters the operation accepts."""
        return []

    @property
    def category(self) -> str:
        """Category for grouping operations."""
        return "general"

    def validate(self, **kwargs) -> Dict[str, Any]:
        """Validate input parameters against the declared schema."""
        return validate_arguments(self.parameters, kwargs, self.name)

    @abstractmethod
    async def execute(self, **kwargs) -> Any:
        """
        Execute the operation with validated parameters.
        May return a string, a list of TextContent, or any JSON value.
        """
        pass

    async def run(self, arguments: Any = None) -> Outcome:
        """Public entry point: validate, execute and wrap."""
        return await run_operation(self.to_definition(), arguments)

    def to_definition(self) -> OperationDefinition:
        """Convert operation to an OperationDefinition for the registry."""
        return OperationDefinition(
            name=self.name,
            description=self.description,
            kind=self.kind,
            parameters=self.parameters,
            handler=self.execute,
            category=self.category,
        )


class MCPTool(MCPOperation):
    """Base class for directly invokable tools."""

    kind = TOOL


class MCPPrompt(MCPOperation):
    """Base class for templated, conversational prompts."""

    kind = PROMPT

    @property
    def category(self) -> str:
        return "prompt"


def input_schema(parameters: List[ToolParameter]) -> Dict[str, Any]:
    """Render parameters as a JSON schema object."""
    properties: Dict[str, Dict] = {}
    required: List[str] = []

    for param in parameters:
        prop: Dict[str, Any] = {
            "type": param.type,
            "description": param.description,
        }
        if param.min_length is not None:
            prop["minLength"] = param.min_length
        if param.default is not None:
            prop["default"] = param.default
        properties[param.name] = prop
        if param.required:
            required.append(param.name)

    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }
