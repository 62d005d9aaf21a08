"""
Tests for the operation registry, argument validation and the normalizer.
"""

from typing import List

import pytest

from addition_mcp.base import (
    PROMPT,
    DuplicateNameError,
    Failure,
    MCPTool,
    OperationDefinition,
    RemoteError,
    Success,
    TextContent,
    ToolParameter,
    UnknownOperationError,
    ValidationError,
    as_content,
    input_schema,
    normalize,
    normalize_prompt,
    validate_arguments,
)
from addition_mcp.registry import (
    OperationRegistry,
    execute_prompt,
    execute_tool,
    get_registry,
    reset_registry,
)


class EchoTool(MCPTool):
    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo a message"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter("message", "string", "Text to echo"),
            ToolParameter("times", "integer", "Repetitions", required=False, default=1),
        ]

    async def execute(self, message: str, times: int = 1) -> str:
        return message * times


class BrokenTool(MCPTool):
    @property
    def name(self) -> str:
        return "broken"

    @property
    def description(self) -> str:
        return "Always fails"

    async def execute(self) -> str:
        raise RuntimeError("boom")


@pytest.fixture
def registry() -> OperationRegistry:
    registry = OperationRegistry()
    registry.register_operation(EchoTool())
    registry.register_operation(BrokenTool())
    return registry


@pytest.fixture
def fresh_default_registry():
    reset_registry()
    yield get_registry()
    reset_registry()


class TestRegistration:
    def test_duplicate_name_rejected(self, registry):
        with pytest.raises(DuplicateNameError):
            registry.register_operation(EchoTool())

    def test_duplicate_across_kinds_rejected(self, registry):
        with pytest.raises(DuplicateNameError):
            registry.register(OperationDefinition(name="echo", description="", kind=PROMPT))

    def test_resolve_unknown(self, registry):
        with pytest.raises(UnknownOperationError):
            registry.resolve("missing")

    def test_listing(self, registry):
        assert registry.names() == ["echo", "broken"]
        assert [d.name for d in registry.list_tools()] == ["echo", "broken"]
        assert registry.list_prompts() == []
        assert "echo" in registry
        assert len(registry) == 2


class TestInvoke:
    @pytest.mark.asyncio
    async def test_success(self, registry):
        outcome = await registry.invoke("echo", {"message": "hi", "times": 2})
        assert outcome == Success(content=[TextContent(text="hihi")])

    @pytest.mark.asyncio
    async def test_default_filled(self, registry):
        outcome = await registry.invoke("echo", {"message": "hi"})
        assert outcome.content[0].text == "hi"

    @pytest.mark.asyncio
    async def test_unknown_operation_is_failure(self, registry):
        outcome = await registry.invoke("missing", {})
        assert isinstance(outcome, Failure)
        assert outcome.error_type == "not_found"
        assert isinstance(outcome.error, UnknownOperationError)
        assert "Unknown operation: 'missing'" in outcome.message

    @pytest.mark.asyncio
    async def test_kind_filter(self, registry):
        outcome = await registry.invoke("echo", {"message": "x"}, kind=PROMPT)
        assert isinstance(outcome.error, UnknownOperationError)

    @pytest.mark.asyncio
    async def test_validation_failure(self, registry):
        outcome = await registry.invoke("echo", {"times": "two", "extra": 1})
        assert isinstance(outcome, Failure)
        assert outcome.error_type == "validation"
        assert outcome.error.field_errors == {
            "extra": "Unexpected parameter",
            "message": "Missing required parameter",
            "times": "Expected integer, got str",
        }
        assert "Expected: message (string), times (integer, optional)" in outcome.message

    @pytest.mark.asyncio
    async def test_bare_value_rejected_for_tools(self, registry):
        outcome = await registry.invoke("echo", "hi")
        assert outcome.error_type == "validation"

    @pytest.mark.asyncio
    async def test_handler_exception_becomes_failure(self, registry):
        outcome = await registry.invoke("broken")
        assert outcome == Failure(message="boom", error_type="unexpected", error=outcome.error)
        assert isinstance(outcome.error, RuntimeError)


class TestValidateArguments:
    params = [
        ToolParameter("n", "number", "A number"),
        ToolParameter("flag", "boolean", "A flag", required=False),
        ToolParameter("name", "string", "A name", required=False, min_length=2,
                      min_length_message="Name too short."),
    ]

    def test_integer_accepted_as_number(self):
        assert validate_arguments(self.params, {"n": 3}) == {"n": 3, "flag": None, "name": None}

    def test_bool_is_not_a_number(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_arguments(self.params, {"n": True})
        assert "n" in exc_info.value.field_errors

    def test_min_length_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_arguments(self.params, {"n": 1, "name": "x"})
        assert exc_info.value.field_errors == {"name": "Name too short."}

    def test_none_counts_as_missing(self):
        with pytest.raises(ValidationError):
            validate_arguments(self.params, {"n": None})

    def test_input_schema(self):
        schema = input_schema(self.params)
        assert schema["required"] == ["n"]
        assert schema["properties"]["name"]["minLength"] == 2
        assert schema["properties"]["flag"] == {"type": "boolean", "description": "A flag"}


class TestRemoteError:
    def test_generic_prefix(self):
        error = RemoteError(502, "Bad Gateway")
        assert error.message == "Remote API error: 502 Bad Gateway"
        assert error.details == {"service": "Remote", "status_code": 502, "status_text": "Bad Gateway"}

    def test_service_prefix(self):
        error = RemoteError(404, "Not Found", service="Notion")
        assert str(error) == "Notion API error: 404 Not Found"
        assert error.service == "Notion"


class TestNormalize:
    def test_success_keeps_order(self):
        outcome = Success(content=[TextContent(text="first"), TextContent(text="second")])
        assert normalize(outcome) == {
            "content": [{"type": "text", "text": "first"}, {"type": "text", "text": "second"}],
            "isError": False,
        }

    def test_failure_is_single_block(self):
        envelope = normalize(Failure(message="bad input"))
        assert envelope == {"content": [{"type": "text", "text": "bad input"}], "isError": True}

    def test_prompt_envelope(self):
        envelope = normalize_prompt(Success(content=[TextContent(text="hello")]), "desc")
        assert envelope["description"] == "desc"
        assert envelope["messages"] == [
            {"role": "assistant", "content": {"type": "text", "text": "hello"}}
        ]

    def test_as_content_coercion(self):
        assert as_content("x") == [TextContent(text="x")]
        assert as_content({"a": [1, 2]}) == [TextContent(text='{"a":[1,2]}')]
        blocks = [TextContent(text="a"), TextContent(text="b")]
        assert as_content(blocks) == blocks


class TestDiscovery:
    def test_registers_every_operation(self, fresh_default_registry):
        tools = {d.name for d in fresh_default_registry.list_tools()}
        prompts = {d.name for d in fresh_default_registry.list_prompts()}
        assert tools == {"add", "mathAdditionExample", "searchHighspot"}
        assert prompts == {
            "requestExpressionForAddition",
            "guidedAdditionHelp",
            "math_addition_example_prompt",
            "search_highspot_prompt",
        }

    def test_registry_is_built_once(self, fresh_default_registry):
        assert get_registry() is fresh_default_registry

    @pytest.mark.asyncio
    async def test_execute_tool_rejects_prompt_names(self, fresh_default_registry):
        outcome = await execute_tool("guidedAdditionHelp", {})
        assert outcome.error_type == "not_found"

    @pytest.mark.asyncio
    async def test_execute_prompt(self, fresh_default_registry):
        outcome = await execute_prompt("math_addition_example_prompt", "1+2")
        assert outcome.content[0].text == "Okay, the sum of 1+2 is 3."
