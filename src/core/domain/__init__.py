"""
Domain models and value objects.

Contains configuration models for rational arithmetic.
"""

from src.core.domain.arithmetic_config import (
    INT_WIDTH_DEFAULT,
    INT_WIDTH_MAX,
    INT_WIDTH_MIN,
    ArithmeticConfig,
    CompareMode,
    OverflowPolicy,
)

__all__ = [
    # Constants
    "INT_WIDTH_DEFAULT",
    "INT_WIDTH_MIN",
    "INT_WIDTH_MAX",
    # Config model
    "ArithmeticConfig",
    "CompareMode",
    "OverflowPolicy",
]
