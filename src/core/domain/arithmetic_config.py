"""
ArithmeticConfig — Модель конфигурации рациональной арифметики

Immutable Pydantic модель с параметрами, которые определяют поведение Rational:
- ширина знакового целого для numerator/denominator
- политика переполнения (raise / saturate / wrap)
- режим сравнения (exact / fast)

Словарные конфиги (например, из JSON файла) проходят через контракт
arithmetic_config (src/core/contracts/schema) перед построением модели.
"""

from enum import Enum
from typing import Any, Dict, Final

from pydantic import BaseModel, Field

from src.core.contracts import validate_arithmetic_config


# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Ширина знакового целого (бит)
INT_WIDTH_DEFAULT: Final[int] = 64

# Допустимый диапазон ширины
INT_WIDTH_MIN: Final[int] = 8
INT_WIDTH_MAX: Final[int] = 128


# =============================================================================
# ENUMS
# =============================================================================


class OverflowPolicy(str, Enum):
    """Политика при выходе значения за пределы [int_min, int_max]"""

    RAISE = "raise"
    SATURATE = "saturate"
    WRAP = "wrap"


class CompareMode(str, Enum):
    """
    Режим упорядочивающих сравнений (<, <=, >, >=).

    EXACT: перекрёстное умножение без потери точности.
    FAST: сравнение num/den во float (теряет точность на экстремальных значениях).
    """

    EXACT = "exact"
    FAST = "fast"


# =============================================================================
# CONFIG MODEL
# =============================================================================


class ArithmeticConfig(BaseModel):
    """
    Конфигурация рациональной арифметики.

    Immutable модель (frozen=True): активная конфигурация заменяется целиком,
    а не изменяется по месту.
    """

    int_width: int = Field(
        INT_WIDTH_DEFAULT,
        ge=INT_WIDTH_MIN,
        le=INT_WIDTH_MAX,
        description="Ширина знакового целого numerator/denominator (бит)",
    )
    overflow_policy: OverflowPolicy = Field(
        OverflowPolicy.RAISE, description="Поведение при целочисленном переполнении"
    )
    compare_mode: CompareMode = Field(
        CompareMode.EXACT, description="Режим упорядочивающих сравнений"
    )

    model_config = {"frozen": True}  # Immutable

    @property
    def int_max(self) -> int:
        """Максимальное представимое целое: 2**(w-1) - 1"""
        return (1 << (self.int_width - 1)) - 1

    @property
    def int_min(self) -> int:
        """Минимальное представимое целое: -2**(w-1)"""
        return -(1 << (self.int_width - 1))

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ArithmeticConfig":
        """
        Построение конфигурации из словаря с проверкой контракта.

        Args:
            data: Словарь конфигурации (например, загруженный из JSON)

        Returns:
            Валидированная конфигурация

        Raises:
            jsonschema.ValidationError: Если данные нарушают контракт
            pydantic.ValidationError: Если данные нарушают ограничения модели
        """
        validate_arithmetic_config(data)
        return cls.model_validate(data)
