"""
Core math modules

Точная рациональная арифметика на знаковом целом фиксированной ширины.
"""

# Arithmetic context
from src.core.math.context import (
    arithmetic_context,
    get_arithmetic_config,
    reset_arithmetic_config,
    set_arithmetic_config,
)

# Integer arithmetic
from src.core.math.integer_arithmetic import (
    CanonicalPair,
    CommonDenominator,
    IntegerOverflowError,
    checked_add,
    checked_mul,
    checked_neg,
    checked_pow,
    common_denominator,
    fit_to_width,
    gcd,
    lcm,
    reduce,
)

# Rational
from src.core.math.rational import Rational, RationalLike

__all__ = [
    # Context
    "arithmetic_context",
    "get_arithmetic_config",
    "reset_arithmetic_config",
    "set_arithmetic_config",
    # Integer arithmetic: Types
    "CanonicalPair",
    "CommonDenominator",
    # Integer arithmetic: Exceptions
    "IntegerOverflowError",
    # Integer arithmetic: Functions
    "checked_add",
    "checked_mul",
    "checked_neg",
    "checked_pow",
    "common_denominator",
    "fit_to_width",
    "gcd",
    "lcm",
    "reduce",
    # Rational
    "Rational",
    "RationalLike",
]
