"""
Addition Expression Evaluator

Parses expressions such as "7+9+2" and returns their sum.
Pure and synchronous; used by the addition tools and prompts.
"""

import math
import re
from decimal import Decimal
from functools import reduce
from typing import List

from .base import InvalidExpressionError

DELIMITER = "+"

INVALID_EXPRESSION_MESSAGE = (
    "Invalid expression. Please provide a valid addition expression with numbers "
    'separated by plus signs (e.g., "7+9+2"). No trailing or consecutive plus signs allowed.'
)

_PREFIXED_INT = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")

# ASCII decimal literal: optional sign, then Infinity or digits with optional exponent
_DECIMAL = re.compile(r"[-+]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?)")

# Decimal point positions outside this range are printed in exponent notation
_MAX_POSITIONAL_EXPONENT = 21
_MIN_POSITIONAL_EXPONENT = -6


def parse_number(token: str) -> float:
    """
    Parse a trimmed token as a double.

    Accepts ASCII decimal literals (including "1e3", ".5" and "Infinity")
    and unsigned 0x/0o/0b integer literals. Literals too large for a
    double become infinity.
    """
    if _PREFIXED_INT.fullmatch(token):
        try:
            return float(int(token, 0))
        except OverflowError:
            return math.inf
    if _DECIMAL.fullmatch(token):
        return float(token)
    raise ValueError(f"not a number: {token!r}")


def tokenize(expression: str) -> List[str]:
    """Split on the delimiter and trim each part."""
    return [part.strip() for part in expression.split(DELIMITER)]


def evaluate(expression: str) -> float:
    """
    Sum a plus-delimited expression left to right.

    Raises InvalidExpressionError for fewer than two parts, empty parts,
    or parts that are not numbers.
    """
    parts = tokenize(expression)
    if len(parts) < 2:
        raise InvalidExpressionError(INVALID_EXPRESSION_MESSAGE)

    numbers = []
    for part in parts:
        try:
            numbers.append(parse_number(part))
        except ValueError:
            raise InvalidExpressionError(INVALID_EXPRESSION_MESSAGE) from None

    return reduce(lambda total, n: total + n, numbers, 0.0)


def format_number(value: float) -> str:
    """
    Render a sum for display, e.g. 9 not 9.0, Infinity not inf,
    1e-7 not 1e-07, 1152921504606847000 not 1152921504606846976.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # Shortest round-trip digits and the position of the decimal point
    normalized = Decimal(repr(abs(value))).normalize()
    _, digit_tuple, exponent = normalized.as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k

    if k <= n <= _MAX_POSITIONAL_EXPONENT:
        text = digits + "0" * (n - k)
    elif 0 < n <= _MAX_POSITIONAL_EXPONENT:
        text = f"{digits[:n]}.{digits[n:]}"
    elif _MIN_POSITIONAL_EXPONENT < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"

    return sign + text
