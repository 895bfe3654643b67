"""
Arithmetic Config Contract

Проверка словарных конфигураций рациональной арифметики (например, из JSON
файла) по JSON Schema контракту до построения Pydantic модели ArithmeticConfig.

Контракт ловит то, что модель молча привела бы: строку "32" вместо int_width,
лишние ключи, неизвестные политики переполнения и режимы сравнения.

Схемы поставляются внутри пакета (schema/*.json рядом с этим модулем) и
загружаются при первом обращении, а не при импорте.

Схемы:
- arithmetic_config.json (int_width, overflow_policy, compare_mode)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator

# Каталог схем внутри пакета
SCHEMA_DIR: Path = Path(__file__).parent / "schema"

ARITHMETIC_CONFIG_SCHEMA = "arithmetic_config"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Кэширующий загрузчик JSON Schema (Draft 2020-12).

    По умолчанию читает схемы из SCHEMA_DIR; тесты и приложения могут передать
    собственный каталог.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = SCHEMA_DIR if schema_dir is None else schema_dir
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка и meta-валидация схемы.

        Args:
            schema_name: Имя схемы без расширения ('arithmetic_config')

        Returns:
            Схема как dict (повторные вызовы возвращают тот же объект)

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_default_loader: SchemaLoader | None = None


def get_schema_loader() -> SchemaLoader:
    """Загрузчик схем пакета, создаётся при первом обращении."""
    global _default_loader
    if _default_loader is None:
        _default_loader = SchemaLoader()
    return _default_loader


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор данных по одной схеме."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        """
        Args:
            schema_name: Имя схемы
            loader: Загрузчик схем (default: get_schema_loader())
        """
        self.schema_name = schema_name
        self.schema = (loader or get_schema_loader()).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое найденное нарушение контракта
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        """Все нарушения контракта (для сообщений о нескольких полях сразу)."""
        return self.validator.iter_errors(data)


class ArithmeticConfigValidator(ContractValidator):
    """Контракт словарной ArithmeticConfig."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__(ARITHMETIC_CONFIG_SCHEMA, loader)


def validate_arithmetic_config(data: Dict[str, Any]) -> None:
    """
    Проверка словаря конфигурации по контракту arithmetic_config.

    Args:
        data: Словарь с ключами int_width / overflow_policy / compare_mode

    Raises:
        jsonschema.ValidationError: Если данные нарушают контракт
    """
    ArithmeticConfigValidator().validate(data)
