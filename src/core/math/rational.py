"""
Rational — Exact Fraction Value Type

Точная дробь numerator/denominator на знаковом целом фиксированной ширины.

Модуль обеспечивает:
- Каноническую форму после каждой конструкции (сокращение, знак в numerator)
- Sentinel-значения: ±infinity (n/0) и NaN (0/0) вместо исключений
- Арифметику (+ - * / ** negate) через канонизирующий конструктор
- Смешанные операции с int / float / Fraction / Decimal через продвижение в Rational
- Точное (EXACT) или быстрое (FAST) упорядочивающее сравнение

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. denominator != 0 → gcd(|numerator|, denominator) == 1 и denominator > 0
2. signum == sign(numerator) ∈ {-1, 0, 1}
3. denominator == 0: numerator ∈ {-1, 1} (±infinity) или numerator == 0 (NaN)
4. Деление на ноль не бросает исключение: x/0 = ±infinity, 0/0 = NaN
5. Равенство точное: NaN == NaN (в отличие от IEEE 754)

ФОРМУЛЫ:
    a/b + c/d = (a * (L/b) + c * (L/d)) / L,   L = lcm(b, d)
    a/b * c/d = (a * c) / (b * d)
    a/b / c/d = (a * d) / (b * c)
"""

import math
import numbers
import sys
from decimal import Decimal
from fractions import Fraction
from typing import Union

from src.core.domain.arithmetic_config import CompareMode
from src.core.math.context import get_arithmetic_config
from src.core.math.integer_arithmetic import (
    CommonDenominator,
    IntegerOverflowError,
    checked_add,
    checked_mul,
    checked_neg,
    checked_pow,
    common_denominator,
    fit_to_width,
    reduce,
)

# Типы, которые продвигаются в Rational в смешанных операциях
RationalLike = Union["Rational", int, float, Fraction, Decimal]


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# =============================================================================


def _ensure_int(value: numbers.Integral, name: str) -> int:
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value).__name__}")


def _decimal_ratio(value: float | Decimal) -> tuple[int, int]:
    """
    Разложение десятичного значения в точное отношение целых.

    Используется текстовое десятичное представление (repr для float),
    а не двоичное значение: 0.1 → 1/10, а не 3602879701896397/2**55.

    Examples:
        >>> _decimal_ratio(1.5)
        (15, 10)
        >>> _decimal_ratio(-0.25)
        (-25, 100)
        >>> _decimal_ratio(1e-05)
        (1, 100000)
    """
    if isinstance(value, float):
        if math.isnan(value):
            return (0, 0)
        if math.isinf(value):
            return (1 if value > 0 else -1, 0)
        value = Decimal(repr(value))
    elif not value.is_finite():
        if value.is_nan():
            return (0, 0)
        return (-1 if value.is_signed() else 1, 0)

    sign, digits, exponent = value.as_tuple()
    coefficient = int("".join(str(d) for d in digits)) if digits else 0

    if exponent >= 0:
        numerator = coefficient * 10**exponent
        denominator = 1
    else:
        numerator = coefficient
        denominator = 10**-exponent

    return (-numerator if sign else numerator, denominator)


# =============================================================================
# RATIONAL
# =============================================================================


class Rational:
    """
    Точная дробь с канонической формой и sentinel-значениями.

    Конструкция:
        Rational(3, 4)      → 3/4
        Rational(-6, -8)    → 3/4
        Rational(7)         → 7
        Rational(0.125)     → 1/8 (через десятичный текст)
        Rational(5, 0)      → infinity
        Rational(0, 0)      → NaN

    Value semantics: все операторы возвращают новый экземпляр. Единственная
    мутация по месту — negate().

    Хэш согласован с int и Fraction. Равенство с float идёт через десятичный
    текст, поэтому Rational(1, 10) == 0.1, но hash(Rational(1, 10)) != hash(0.1):
    двоичное значение 0.1 не равно 1/10. Float, точно представимые двоичной
    дробью (0.5, 0.25, 3.0), хэшируются согласованно. Rational и float с
    десятичным хвостом не следует смешивать в ключах dict / элементах set.
    """

    __slots__ = ("_numerator", "_denominator", "_signum")

    def __init__(
        self,
        numerator: RationalLike = 0,
        denominator: numbers.Integral | None = None,
    ) -> None:
        if isinstance(numerator, (float, Decimal)):
            if denominator is not None:
                raise ValueError(
                    f"{type(numerator).__name__} numerator cannot be combined with a denominator"
                )
            numerator, denominator = _decimal_ratio(numerator)
        elif isinstance(numerator, (Rational, Fraction)):
            if denominator is not None:
                raise ValueError(
                    f"{type(numerator).__name__} numerator cannot be combined with a denominator"
                )
            numerator, denominator = numerator.numerator, numerator.denominator
        elif denominator is None:
            denominator = 1

        self._assign(_ensure_int(numerator, "numerator"), _ensure_int(denominator, "denominator"))

    def _assign(self, numerator: int, denominator: int) -> None:
        numerator = fit_to_width(numerator, "numerator")
        denominator = fit_to_width(denominator, "denominator")
        self._numerator, self._denominator = reduce(numerator, denominator)
        self._signum = (self._numerator > 0) - (self._numerator < 0)

    # -------------------------------------------------------------------------
    # Именованные конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_integer_ratio(cls, numerator: int, denominator: int) -> "Rational":
        """Дробь numerator/denominator; denominator == 0 допустим (sentinel)."""
        return cls(numerator, denominator)

    @classmethod
    def from_integer(cls, value: int) -> "Rational":
        """Целое как value/1."""
        return cls(value, 1)

    @classmethod
    def from_decimal(cls, value: float | Decimal) -> "Rational":
        """
        Точная конструкция из float/Decimal через десятичный текст.

        Двоичная погрешность float не переносится: 0.1 → 1/10.
        Периодические дроби представлены их усечённым текстом:
        1/3 (float) → 3333333333333333/10000000000000000.

        Raises:
            IntegerOverflowError: Если 10**digits не помещается в ширину (RAISE)
        """
        return cls(*_decimal_ratio(value))

    @classmethod
    def zero(cls) -> "Rational":
        return cls(0, 1)

    @classmethod
    def one(cls) -> "Rational":
        return cls(1, 1)

    @classmethod
    def infinity(cls) -> "Rational":
        """Положительная бесконечность 1/0."""
        return cls(1, 0)

    @classmethod
    def nan(cls) -> "Rational":
        """Not a number 0/0."""
        return cls(0, 0)

    @staticmethod
    def max_value() -> int:
        """Максимальное целое активной ширины."""
        return get_arithmetic_config().int_max

    @staticmethod
    def min_value() -> int:
        """Минимальное целое активной ширины."""
        return get_arithmetic_config().int_min

    @classmethod
    def coerce(cls, value: object) -> "Rational | None":
        """
        Продвижение числового значения в Rational.

        Returns:
            Rational или None, если тип не поддерживается
        """
        if isinstance(value, Rational):
            return value
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1)
        if isinstance(value, (float, Decimal, Fraction)):
            return cls(value)
        return None

    @staticmethod
    def common_denominator(lhs: RationalLike, rhs: RationalLike) -> CommonDenominator:
        """
        Приведение двух конечных дробей к общему знаменателю (lcm).

        Examples:
            >>> Rational.common_denominator(Rational(1, 7), Rational(1, 13))
            CommonDenominator(lhs_numerator=13, rhs_numerator=7, denominator=91)
        """
        left = Rational._promote(lhs)
        right = Rational._promote(rhs)
        return common_denominator(
            left._numerator, left._denominator, right._numerator, right._denominator
        )

    @staticmethod
    def _promote(value: RationalLike) -> "Rational":
        result = Rational.coerce(value)
        if result is None:
            raise TypeError(f"Cannot convert {type(value).__name__} to Rational")
        return result

    @staticmethod
    def _comparand(value: object) -> "Rational | Fraction | None":
        """
        Продвижение операнда сравнения.

        Значение, не помещающееся в ширину целого (1e20, 1e-300, 2**70 при 64 bit),
        возвращается как Fraction на неограниченных int: сравнение не бросает
        IntegerOverflowError и остаётся точным.
        """
        try:
            return Rational.coerce(value)
        except IntegerOverflowError:
            if isinstance(value, (float, Decimal)):
                return Fraction(*_decimal_ratio(value))
            return Fraction(value)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def signum(self) -> int:
        """Знак значения: -1, 0 или 1 (NaN → 0)."""
        return self._signum

    @property
    def is_finite(self) -> bool:
        return self._denominator != 0

    @property
    def is_infinite(self) -> bool:
        return self._denominator == 0 and self._numerator != 0

    @property
    def is_nan(self) -> bool:
        return self._denominator == 0 and self._numerator == 0

    @property
    def is_whole_number(self) -> bool:
        """Конечное целое значение (denominator == 1 или numerator == 0)."""
        return self.is_finite and (self._denominator == 1 or self._numerator == 0)

    @property
    def reciprocal(self) -> "Rational":
        """
        Обратная дробь denominator/numerator.

        0 → infinity, ±infinity → 0, NaN → NaN.
        """
        return Rational(self._denominator, self._numerator)

    @property
    def magnitude(self) -> "Rational":
        """Абсолютное значение: self * signum (NaN остаётся NaN)."""
        return self * self._signum

    def to_float(self) -> float:
        """
        Значение во float: numerator / denominator.

        Нулевой знаменатель даёт float ±inf / nan, согласованные с is_infinite/is_nan.
        """
        if self._denominator == 0:
            if self._numerator == 0:
                return math.nan
            return math.inf if self._numerator > 0 else -math.inf
        return self._numerator / self._denominator

    # -------------------------------------------------------------------------
    # Мутация
    # -------------------------------------------------------------------------

    def negate(self) -> None:
        """
        Смена знака по месту.

        Единственная операция, изменяющая экземпляр. Каноническая форма сохраняется.
        """
        self._numerator = checked_neg(self._numerator)
        self._signum = -self._signum

    # -------------------------------------------------------------------------
    # Strideable
    # -------------------------------------------------------------------------

    def distance(self, other: RationalLike) -> "Rational":
        """Расстояние до other: other - self."""
        return Rational._promote(other) - self

    def advanced(self, by: RationalLike) -> "Rational":
        """Сдвиг на by: self + by."""
        return self + Rational._promote(by)

    # -------------------------------------------------------------------------
    # Арифметика (ядро)
    # -------------------------------------------------------------------------

    def _add(self, other: "Rational") -> "Rational":
        if self.is_nan or other.is_nan:
            return Rational.nan()

        if self.is_infinite or other.is_infinite:
            # infinity + (-infinity) не определено
            if self.is_infinite and other.is_infinite and self._signum != other._signum:
                return Rational.nan()
            return Rational(self._signum if self.is_infinite else other._signum, 0)

        scaled = common_denominator(
            self._numerator, self._denominator, other._numerator, other._denominator
        )
        return Rational(
            checked_add(scaled.lhs_numerator, scaled.rhs_numerator), scaled.denominator
        )

    def _mul(self, other: "Rational") -> "Rational":
        return Rational(
            checked_mul(self._numerator, other._numerator),
            checked_mul(self._denominator, other._denominator),
        )

    def _div(self, other: "Rational") -> "Rational":
        return Rational(
            checked_mul(self._numerator, other._denominator),
            checked_mul(self._denominator, other._numerator),
        )

    def _compare(self, other: "Rational | Fraction") -> int | None:
        """
        Трёхзначное сравнение: -1 / 0 / 1, None если значения не упорядочены (NaN).

        EXACT: перекрёстное умножение на неограниченных int (знаменатели > 0).
        FAST: сравнение float, бесконечности сравниваются так всегда.
        Fraction (операнд вне ширины целого) сравнивается всегда точно.
        """
        if isinstance(other, Fraction):
            if self.is_nan:
                return None
            if self.is_infinite:
                return self._signum
            left = self._numerator * other.denominator
            right = other.numerator * self._denominator
            return (left > right) - (left < right)

        if self.is_nan or other.is_nan:
            return None

        if (
            get_arithmetic_config().compare_mode == CompareMode.FAST
            or not self.is_finite
            or not other.is_finite
        ):
            left: float | int = self.to_float()
            right: float | int = other.to_float()
        else:
            left = self._numerator * other._denominator
            right = other._numerator * self._denominator

        return (left > right) - (left < right)

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return self._add(other)

    def __radd__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return other._add(self)

    def __sub__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return self._add(-other)

    def __rsub__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return other._add(-self)

    def __mul__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return self._mul(other)

    def __rmul__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return other._mul(self)

    def __truediv__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return self._div(other)

    def __rtruediv__(self, other: object) -> "Rational":
        other = Rational.coerce(other)
        if other is None:
            return NotImplemented
        return other._div(self)

    def __pow__(self, exponent: object) -> "Rational":
        """
        Возведение в степень.

        Целый показатель: точный результат, отрицательный через reciprocal.
        Нецелый показатель: float math.pow, результат через from_decimal
        (ошибка домена → NaN, переполнение float → infinity).
        """
        if isinstance(exponent, float) and exponent.is_integer():
            exponent = int(exponent)
        elif isinstance(exponent, Rational) and exponent.is_whole_number:
            exponent = int(exponent)

        if isinstance(exponent, numbers.Integral):
            power = int(exponent)
            base = self if power >= 0 else self.reciprocal
            # Степени взаимно простых чисел взаимно просты: сокращение не требуется
            return Rational(
                checked_pow(base._numerator, abs(power)),
                checked_pow(base._denominator, abs(power)),
            )

        promoted = Rational.coerce(exponent)
        if promoted is None:
            return NotImplemented

        try:
            value = math.pow(self.to_float(), promoted.to_float())
        except ValueError:
            return Rational.nan()
        except OverflowError:
            return Rational.infinity()
        return Rational.from_decimal(value)

    def __rpow__(self, base: object) -> "Rational":
        promoted = Rational.coerce(base)
        if promoted is None:
            return NotImplemented
        return promoted ** self

    def __neg__(self) -> "Rational":
        return Rational(checked_neg(self._numerator), self._denominator)

    def __pos__(self) -> "Rational":
        return Rational(self._numerator, self._denominator)

    def __abs__(self) -> "Rational":
        return self.magnitude

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        other = Rational._comparand(other)
        if other is None:
            return NotImplemented
        if isinstance(other, Fraction):
            return self.is_finite and Fraction(self._numerator, self._denominator) == other
        return self._numerator == other._numerator and self._denominator == other._denominator

    def __lt__(self, other: object) -> bool:
        other = Rational._comparand(other)
        if other is None:
            return NotImplemented
        order = self._compare(other)
        return order is not None and order < 0

    def __le__(self, other: object) -> bool:
        other = Rational._comparand(other)
        if other is None:
            return NotImplemented
        order = self._compare(other)
        return order is not None and order <= 0

    def __gt__(self, other: object) -> bool:
        other = Rational._comparand(other)
        if other is None:
            return NotImplemented
        order = self._compare(other)
        return order is not None and order > 0

    def __ge__(self, other: object) -> bool:
        other = Rational._comparand(other)
        if other is None:
            return NotImplemented
        order = self._compare(other)
        return order is not None and order >= 0

    def __hash__(self) -> int:
        # Совпадает с hash(int) и hash(Fraction) для равных конечных значений
        if self._denominator == 0:
            if self._numerator == 0:
                return sys.hash_info.nan
            return hash(self.to_float())
        return hash(Fraction(self._numerator, self._denominator))

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def __bool__(self) -> bool:
        return not (self._numerator == 0 and self._denominator != 0)

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        """Усечение к нулю. Поведение для sentinel как у float."""
        if self._denominator == 0:
            if self._numerator == 0:
                raise ValueError("cannot convert Rational NaN to integer")
            raise OverflowError("cannot convert Rational infinity to integer")
        quotient = abs(self._numerator) // self._denominator
        return quotient if self._numerator >= 0 else -quotient

    __trunc__ = __int__

    def __str__(self) -> str:
        if self.is_whole_number:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"
