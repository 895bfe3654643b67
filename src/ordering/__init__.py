"""Ordering — последовательности с дробными ключами (fractional indexing).

Вставка между любыми двумя элементами без перенумерации остальных.
"""

from .rational_array import (
    KeySpaceExhaustedError,
    KeyedValue,
    RationalArray,
)

__all__ = [
    "RationalArray",
    "KeyedValue",
    "KeySpaceExhaustedError",
]
