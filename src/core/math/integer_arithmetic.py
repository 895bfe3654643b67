"""
Integer Arithmetic — Fixed-Width Integer Primitives

Модуль моделирует знаковое целое фиксированной ширины, на котором построен Rational:
- gcd / lcm / reduce / common_denominator
- Арифметика с контролем переполнения (add / mul / neg)
- Применение политики переполнения (raise / saturate / wrap)

Python int не ограничен по ширине, поэтому переполнение определяется явно:
значение вне [int_min, int_max] активной конфигурации обрабатывается политикой.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. gcd всегда неотрицателен
2. reduce возвращает каноническую пару: denominator >= 0, знак в numerator
3. reduce(0, 0) == (0, 0), reduce(n, 0) == (sign(n), 0)
4. Переполнение никогда не проходит молча при политике RAISE
"""

import logging
import math
from typing import NamedTuple

from src.core.domain.arithmetic_config import ArithmeticConfig, OverflowPolicy
from src.core.math.context import get_arithmetic_config

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class IntegerOverflowError(ArithmeticError):
    """
    Значение вышло за пределы знакового целого активной ширины.

    Возникает только при OverflowPolicy.RAISE.
    """

    pass


# =============================================================================
# ТИПЫ
# =============================================================================


class CanonicalPair(NamedTuple):
    """Каноническая пара (numerator, denominator)"""

    numerator: int
    denominator: int


class CommonDenominator(NamedTuple):
    """Два числителя, приведённые к общему знаменателю (lcm)"""

    lhs_numerator: int
    rhs_numerator: int
    denominator: int


# =============================================================================
# ПОЛИТИКА ПЕРЕПОЛНЕНИЯ
# =============================================================================


def fit_to_width(value: int, operation: str, config: ArithmeticConfig | None = None) -> int:
    """
    Приведение значения к диапазону знакового целого активной ширины.

    Args:
        value: Результат целочисленной операции (неограниченный int)
        operation: Имя операции (для диагностики)
        config: Конфигурация (default: активная)

    Returns:
        value, если оно представимо; иначе результат политики переполнения

    Raises:
        IntegerOverflowError: Если value вне диапазона и политика RAISE

    Examples:
        >>> fit_to_width(127, "add", ArithmeticConfig(int_width=8))
        127
        >>> fit_to_width(128, "add", ArithmeticConfig(int_width=8, overflow_policy="saturate"))
        127
        >>> fit_to_width(128, "add", ArithmeticConfig(int_width=8, overflow_policy="wrap"))
        -128
    """
    cfg = config or get_arithmetic_config()
    int_min = cfg.int_min
    int_max = cfg.int_max

    if int_min <= value <= int_max:
        return value

    if cfg.overflow_policy == OverflowPolicy.RAISE:
        raise IntegerOverflowError(
            f"{operation} overflows {cfg.int_width}-bit signed integer: {value} "
            f"not in [{int_min}, {int_max}]"
        )

    if cfg.overflow_policy == OverflowPolicy.SATURATE:
        result = int_max if value > int_max else int_min
    else:
        # WRAP: two's complement
        span = 1 << cfg.int_width
        result = (value - int_min) % span + int_min

    logger.debug(
        "%s overflow (%s, %d-bit): %d -> %d",
        operation,
        cfg.overflow_policy.value,
        cfg.int_width,
        value,
        result,
    )
    return result


def checked_add(a: int, b: int, config: ArithmeticConfig | None = None) -> int:
    """Сложение с контролем переполнения."""
    return fit_to_width(a + b, "add", config)


def checked_mul(a: int, b: int, config: ArithmeticConfig | None = None) -> int:
    """Умножение с контролем переполнения."""
    return fit_to_width(a * b, "mul", config)


def checked_neg(a: int, config: ArithmeticConfig | None = None) -> int:
    """
    Смена знака с контролем переполнения.

    -int_min не представимо в two's complement.
    """
    return fit_to_width(-a, "neg", config)


def checked_pow(base: int, exponent: int, config: ArithmeticConfig | None = None) -> int:
    """
    Возведение в неотрицательную степень (бинарное возведение).

    Каждое промежуточное умножение проходит checked_mul; квадрат основания
    не вычисляется после последнего нужного бита, поэтому промежуточные значения
    по модулю не превышают результат.

    Raises:
        ValueError: Если exponent < 0
        IntegerOverflowError: При переполнении и политике RAISE
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")

    result = 1
    while exponent:
        if exponent & 1:
            result = checked_mul(result, base, config)
        exponent >>= 1
        if exponent:
            base = checked_mul(base, base, config)
    return result


# =============================================================================
# GCD / LCM / REDUCE
# =============================================================================


def gcd(a: int, b: int) -> int:
    """
    Наибольший общий делитель.

    Всегда неотрицателен; gcd(0, 0) == 0.

    Examples:
        >>> gcd(6, 10)
        2
        >>> gcd(13, 10)
        1
        >>> gcd(-21, 91)
        7
    """
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    """
    Наименьшее общее кратное: |a * b| / gcd(a, b).

    lcm(x, 0) == 0.

    Examples:
        >>> lcm(6, 10)
        30
        >>> lcm(21, 91)
        273
    """
    divisor = gcd(a, b)
    if divisor == 0:
        return 0
    return abs(a // divisor * b)


def reduce(numerator: int, denominator: int) -> CanonicalPair:
    """
    Приведение пары к каноническому виду.

    Алгоритм:
    1. Деление на gcd(|numerator|, |denominator|); при gcd == 0 пара (0, 0) без изменений
    2. Нормализация знака: denominator >= 0, знак переносится в numerator

    Args:
        numerator: Числитель
        denominator: Знаменатель (0 допустим: бесконечность или NaN)

    Returns:
        CanonicalPair(numerator, denominator)

    Examples:
        >>> reduce(123, 72)
        CanonicalPair(numerator=41, denominator=24)
        >>> reduce(10, 0)
        CanonicalPair(numerator=1, denominator=0)
        >>> reduce(0, -10)
        CanonicalPair(numerator=0, denominator=1)
        >>> reduce(7, -3)
        CanonicalPair(numerator=-7, denominator=3)
    """
    divisor = gcd(numerator, denominator)
    if divisor == 0:
        return CanonicalPair(0, 0)

    numerator //= divisor
    denominator //= divisor

    if denominator < 0:
        numerator = checked_neg(numerator)
        denominator = checked_neg(denominator)

    return CanonicalPair(numerator, denominator)


def common_denominator(
    lhs_numerator: int,
    lhs_denominator: int,
    rhs_numerator: int,
    rhs_denominator: int,
) -> CommonDenominator:
    """
    Приведение двух дробей к общему знаменателю через lcm.

    Используется сложением/вычитанием вместо перекрёстного произведения
    знаменателей, чтобы промежуточные значения росли как можно медленнее.

    Args:
        lhs_numerator, lhs_denominator: Левая дробь (знаменатель != 0)
        rhs_numerator, rhs_denominator: Правая дробь (знаменатель != 0)

    Returns:
        CommonDenominator(lhs_numerator, rhs_numerator, denominator)

    Raises:
        ValueError: Если один из знаменателей равен 0
        IntegerOverflowError: При переполнении и политике RAISE

    Examples:
        >>> common_denominator(1, 2, 1, 3)
        CommonDenominator(lhs_numerator=3, rhs_numerator=2, denominator=6)
    """
    if lhs_denominator == 0 or rhs_denominator == 0:
        raise ValueError("common_denominator requires finite fractions (denominator != 0)")

    divisor = gcd(lhs_denominator, rhs_denominator)
    denominator = checked_mul(lhs_denominator // divisor, rhs_denominator)

    return CommonDenominator(
        lhs_numerator=checked_mul(lhs_numerator, denominator // lhs_denominator),
        rhs_numerator=checked_mul(rhs_numerator, denominator // rhs_denominator),
        denominator=denominator,
    )
