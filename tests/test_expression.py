"""
Unit tests for the addition expression evaluator.
"""

import math

import pytest

from addition_mcp.base import InvalidExpressionError
from addition_mcp.expression import (
    INVALID_EXPRESSION_MESSAGE,
    evaluate,
    format_number,
    parse_number,
    tokenize,
)


class TestEvaluate:
    """Valid expressions are summed left to right."""

    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("7+9+2", 18),
            ("2+3+4", 9),
            ("1+1", 2),
            (" 10 + 20 ", 30),
            ("1.5+2.25", 3.75),
            ("-5+3", -2),
            ("1e3+1", 1001),
        ],
    )
    def test_sums(self, expression, expected):
        assert evaluate(expression) == expected

    def test_float_semantics(self):
        assert evaluate("0.1+0.2") == 0.1 + 0.2

    def test_is_deterministic(self):
        assert evaluate("12+3+5") == evaluate("12+3+5") == 20

    def test_hex_literal_accepted(self):
        assert evaluate("0x10+1") == 17

    def test_octal_and_binary_literals_accepted(self):
        assert evaluate("0o10+0b11") == 11

    def test_oversized_hex_literal_is_infinite(self):
        assert evaluate("0x" + "f" * 300 + "+1") == math.inf

    def test_oversized_decimal_literal_is_infinite(self):
        assert evaluate("1e400+1") == math.inf


class TestInvalidExpressions:
    """Malformed input raises InvalidExpressionError with the fixed message."""

    @pytest.mark.parametrize(
        "expression",
        [
            "5", "", "5++3", "+5+3", "5+3+", "5+a+3", "5+ +3", "nan+1", "1_000+1", "abc",
            "inf+1", "infinity+1", "INF+1", "-inf+1", "\u0661\u0662+1", "\uff11+1", "-0x10+1",
        ],
    )
    def test_rejected(self, expression):
        with pytest.raises(InvalidExpressionError) as exc_info:
            evaluate(expression)
        assert exc_info.value.message == INVALID_EXPRESSION_MESSAGE
        assert str(exc_info.value) == INVALID_EXPRESSION_MESSAGE


class TestHelpers:
    def test_tokenize_trims(self):
        assert tokenize(" 1 +2+ 3") == ["1", "2", "3"]

    def test_tokenize_keeps_empty_parts(self):
        assert tokenize("1++2") == ["1", "", "2"]

    def test_parse_number_rejects_empty(self):
        with pytest.raises(ValueError):
            parse_number("")

    def test_parse_number_infinity(self):
        assert math.isinf(parse_number("Infinity"))
        assert parse_number("-Infinity") == -math.inf

    @pytest.mark.parametrize("token, expected", [("1.", 1.0), (".5", 0.5), ("+2E2", 200.0), ("0B101", 5.0)])
    def test_parse_number_literal_forms(self, token, expected):
        assert parse_number(token) == expected


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (9.0, "9"),
            (-2.0, "-2"),
            (-0.0, "0"),
            (3.75, "3.75"),
            (0.1 + 0.2, "0.30000000000000004"),
            (1e21, "1e+21"),
            (100.0, "100"),
            (1152921504606846976.0, "1152921504606847000"),
            (123456789012345680000.0, "123456789012345680000"),
            (1.5e22, "1.5e+22"),
            (0.000001, "0.000001"),
            (1e-7, "1e-7"),
            (1.23e-18, "1.23e-18"),
            (-2.5e-10, "-2.5e-10"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
        ],
    )
    def test_format(self, value, expected):
        assert format_number(value) == expected
