"""Checked u64 arithmetic for escrow and registry amounts."""

from optimistic_oracle_core.models.base import U64_MAX
from optimistic_oracle_core.oracle.exceptions import (
    ArithmeticOverflowError,
    InsufficientFundsError,
)


def is_u64(value: int) -> bool:
    """Return True if value fits an unsigned 64-bit integer."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def checked_add(a: int, b: int) -> int:
    """Add two u64 amounts, failing instead of wrapping.

    Raises:
        ArithmeticOverflowError: If an operand or the sum leaves the u64 range
    """
    if not (is_u64(a) and is_u64(b)):
        raise ArithmeticOverflowError(f"Operands out of u64 range: {a}, {b}")
    total = a + b
    if total > U64_MAX:
        raise ArithmeticOverflowError(f"u64 overflow adding {a} and {b}")
    return total


def checked_sub(a: int, b: int) -> int:
    """Subtract two u64 amounts, failing instead of wrapping.

    Raises:
        ArithmeticOverflowError: If an operand leaves the u64 range
        InsufficientFundsError: If the result would be negative
    """
    if not (is_u64(a) and is_u64(b)):
        raise ArithmeticOverflowError(f"Operands out of u64 range: {a}, {b}")
    if b > a:
        raise InsufficientFundsError(f"Cannot debit {b} from balance {a}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    """Multiply two u64 amounts, failing instead of wrapping."""
    if not (is_u64(a) and is_u64(b)):
        raise ArithmeticOverflowError(f"Operands out of u64 range: {a}, {b}")
    product = a * b
    if product > U64_MAX:
        raise ArithmeticOverflowError(f"u64 overflow multiplying {a} by {b}")
    return product
