"""
Contract Validation Module

Модуль для валидации JSON контрактов (конфигурация арифметики).
"""

from .validators import (
    ArithmeticConfigValidator,
    SCHEMA_DIR,
    ContractValidator,
    SchemaLoader,
    get_schema_loader,
    validate_arithmetic_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ArithmeticConfigValidator",
    # Constants
    "SCHEMA_DIR",
    # Functions
    "get_schema_loader",
    "validate_arithmetic_config",
]
