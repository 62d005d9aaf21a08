"""
Addition Tools

Sum the numbers of a plus-delimited expression such as "7+9+2".
"""

from typing import List

from ..base import MCPTool, ToolParameter
from ..expression import evaluate, format_number


class AddTool(MCPTool):
    """Evaluate an addition expression."""

    @property
    def name(self) -> str:
        return "add"

    @property
    def description(self) -> str:
        return (
            "Add the numbers in an expression separated by plus signs "
            "(e.g., '7+9+2'). Returns the sum."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="expression",
                type="string",
                description="Addition expression, e.g. '5+10+15'",
                required=True,
            )
        ]

    @property
    def category(self) -> str:
        return "math"

    async def execute(self, expression: str) -> str:
        return format_number(evaluate(expression))


class MathAdditionExampleTool(AddTool):
    """Same behaviour as `add`, published under the example name."""

    @property
    def name(self) -> str:
        return "mathAdditionExample"

    @property
    def description(self) -> str:
        return (
            "Example addition tool: sums the numbers in an expression such as "
            "'12+3+5'. Behaves exactly like 'add'."
        )
