"""
Addition Prompts

Conversational wrappers around the addition evaluator. Each prompt's
description is the message the host shows before asking for input.
"""

from typing import List, Optional

from ..base import InvalidExpressionError, MCPPrompt, TextContent, ToolParameter
from ..expression import evaluate, format_number


def sum_sentence(expression: str) -> str:
    result = format_number(evaluate(expression))
    return f"Okay, the sum of {expression} is {result}."


class RequestExpressionForAdditionPrompt(MCPPrompt):
    """Ask for an expression and answer with its sum."""

    @property
    def name(self) -> str:
        return "requestExpressionForAddition"

    @property
    def description(self) -> str:
        return (
            "Sure, I can help with that! What is the addition expression you'd like "
            "me to calculate? (e.g., '12+3+5')"
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="expression",
                type="string",
                description="Addition expression, e.g. '12+3+5'",
                required=True,
                min_length=1,
                min_length_message="Please provide an expression.",
            )
        ]

    async def execute(self, expression: str) -> str:
        try:
            return sum_sentence(expression)
        except InvalidExpressionError as e:
            return (
                f"I encountered an issue: {e.message}. "
                f"Please try again with a valid expression."
            )


class GuidedAdditionHelpPrompt(MCPPrompt):
    """Explain the add tool and optionally try it on an expression."""

    @property
    def name(self) -> str:
        return "guidedAdditionHelp"

    @property
    def description(self) -> str:
        return (
            "The 'add' tool sums numbers (e.g., '@add expression=\"5+10+15\"').  "
            "Would you like me to calculate an expression for you now? "
            "If so, please provide it."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="expression",
                type="string",
                description=(
                    "Enter an addition expression if you'd like to try, "
                    "or leave blank for just help."
                ),
                required=False,
            )
        ]

    async def execute(self, expression: Optional[str] = None) -> List[TextContent]:
        if not expression or not expression.strip():
            return [TextContent(
                text="No problem. Remember to use '@add expression=\"your_expression\" "
                     "when you want to sum numbers."
            )]

        try:
            result = format_number(evaluate(expression))
        except InvalidExpressionError as e:
            return [
                TextContent(text=f"Error: {e.message}"),
                TextContent(text="Please ensure your expression is like '5+10+15'."),
            ]

        return [
            TextContent(text=f"Calculating '{expression}'... The result is {result}."),
            TextContent(text="You can use the '@add' tool directly for future calculations."),
        ]


class MathAdditionExamplePrompt(MCPPrompt):
    """Answer an addition expression conversationally."""

    @property
    def name(self) -> str:
        return "math_addition_example_prompt"

    @property
    def description(self) -> str:
        return "Add the numbers in an expression (e.g., '7+9+2') and explain the result."

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="expression",
                type="string",
                description="Addition expression, e.g. '7+9+2'",
                required=True,
            )
        ]

    async def execute(self, expression: str) -> str:
        return sum_sentence(expression)
