"""
Arithmetic Context — активная конфигурация рациональной арифметики

Rational не хранит конфигурацию в каждом экземпляре: все операции читают
активную ArithmeticConfig из этого модуля.

Активная конфигурация хранится в ContextVar: arithmetic_context, открытый в
одном потоке или asyncio task, не виден в других.

Examples:
    >>> with arithmetic_context(int_width=32):
    ...     get_arithmetic_config().int_max
    2147483647
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Iterator

from src.core.domain.arithmetic_config import ArithmeticConfig

_ACTIVE_CONFIG: ContextVar[ArithmeticConfig] = ContextVar(
    "rationals_arithmetic_config",
    default=ArithmeticConfig(),
)


def get_arithmetic_config() -> ArithmeticConfig:
    """Текущая активная конфигурация."""
    return _ACTIVE_CONFIG.get()


def set_arithmetic_config(config: ArithmeticConfig) -> Token[ArithmeticConfig]:
    """
    Установка активной конфигурации в текущем контексте.

    Args:
        config: Новая конфигурация

    Returns:
        Token для reset_arithmetic_config

    Raises:
        TypeError: Если config не ArithmeticConfig
    """
    if not isinstance(config, ArithmeticConfig):
        raise TypeError(f"Expected ArithmeticConfig, got {type(config).__name__}")
    return _ACTIVE_CONFIG.set(config)


def reset_arithmetic_config(token: Token[ArithmeticConfig]) -> None:
    """Восстановление конфигурации, действовавшей до set_arithmetic_config."""
    _ACTIVE_CONFIG.reset(token)


@contextmanager
def arithmetic_context(
    config: ArithmeticConfig | None = None, **overrides: Any
) -> Iterator[ArithmeticConfig]:
    """
    Временная установка конфигурации.

    Без config берётся копия активной конфигурации с заменой полей из overrides.
    Предыдущая конфигурация восстанавливается при выходе, в том числе по exception.

    Args:
        config: Конфигурация целиком (optional)
        **overrides: Поля ArithmeticConfig для замены

    Yields:
        Установленная конфигурация
    """
    base = config or get_arithmetic_config()
    if overrides:
        # overrides проходят валидацию модели
        base = ArithmeticConfig.model_validate({**base.model_dump(), **overrides})

    token = set_arithmetic_config(base)
    try:
        yield base
    finally:
        reset_arithmetic_config(token)
