"""RationalArray — упорядоченная последовательность с дробными ключами.

Каждый элемент хранится с ключом Rational из открытого интервала (0, 1).
Порядок элементов совпадает с порядком ключей; вставка между любыми двумя
соседями не требует перенумерации остальных элементов (fractional indexing).

Ключи никогда не пересчитываются: новый ключ — середина интервала между соседями.
Каждое последовательное append делит оставшийся интервал пополам, поэтому
знаменатель растёт как 2**N и ограничен шириной целого. При исчерпании
пространства ключей бросается KeySpaceExhaustedError.
"""

import logging
from dataclasses import dataclass
from typing import Final, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from src.core.math.integer_arithmetic import IntegerOverflowError
from src.core.math.rational import Rational, RationalLike

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeySpaceExhaustedError(IntegerOverflowError):
    """Новый ключ не помещается строго между соседями в активной ширине целого."""

    pass


@dataclass(frozen=True)
class KeyedValue(Generic[T]):
    """Элемент последовательности: ключ и значение."""

    key: Rational
    value: T


class RationalArray(Generic[T]):
    """Последовательность (key, value), упорядоченная по дробному ключу.

    Инварианты:
    - ключи попарно различны и строго возрастают в порядке элементов
    - каждый ключ лежит строго в (LOWER_BOUND, UPPER_BOUND)
    """

    LOWER_BOUND: Final[int] = 0
    UPPER_BOUND: Final[int] = 1

    def __init__(self, values: Iterable[T] = ()):
        """
        Args:
            values: начальные значения, добавляются через append по порядку
        """
        self._entries: List[KeyedValue[T]] = []
        self.extend(values)

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def keys(self) -> List[Rational]:
        """Текущие ключи в порядке элементов (копии: negate() не портит порядок)."""
        return [Rational(entry.key) for entry in self._entries]

    @property
    def indices(self) -> List[Rational]:
        return self.keys

    @property
    def values(self) -> List[T]:
        return [entry.value for entry in self._entries]

    def items(self) -> Iterator[Tuple[Rational, T]]:
        for entry in self._entries:
            yield Rational(entry.key), entry.value

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __contains__(self, item: object) -> bool:
        return any(entry.value == item for entry in self._entries)

    def __repr__(self) -> str:
        pairs = ", ".join(f"({entry.key}, {entry.value!r})" for entry in self._entries)
        return f"RationalArray([{pairs}])"

    # -------------------------------------------------------------------------
    # Изменение
    # -------------------------------------------------------------------------

    def append(self, value: T) -> Rational:
        """
        Добавление в конец.

        Ключ = (последний ключ или LOWER_BOUND + UPPER_BOUND) / 2, больше всех существующих.

        Returns:
            Присвоенный ключ

        Raises:
            KeySpaceExhaustedError: если ключ не помещается в ширину целого
        """
        lower = self._entries[-1].key if self._entries else Rational(self.LOWER_BOUND)
        key = self._midpoint(lower, Rational(self.UPPER_BOUND), "append")
        self._entries.append(KeyedValue(key, value))
        return Rational(key)

    def extend(self, values: Iterable[T]) -> None:
        for value in values:
            self.append(value)

    def insert(self, value: T, key: RationalLike) -> Rational:
        """
        Вставка перед первым элементом с ключом >= key.

        - Такого элемента нет: поведение как у append (key игнорируется)
        - Ключ совпал: новый ключ — середина между предыдущим ключом
          (или LOWER_BOUND) и совпавшим, вставка перед совпавшим
        - Иначе: вставка с ключом key как есть

        Args:
            value: значение
            key: желаемый ключ, строго внутри (0, 1)

        Returns:
            Фактически присвоенный ключ

        Raises:
            ValueError: если key не конечен или вне (LOWER_BOUND, UPPER_BOUND)
            KeySpaceExhaustedError: если ключ не помещается в ширину целого
        """
        key = self._validate_key(key)

        position = self._position_at_or_after(key)
        if position is None:
            return self.append(value)

        found = self._entries[position].key
        if found == key:
            lower = self._entries[position - 1].key if position > 0 else Rational(self.LOWER_BOUND)
            key = self._midpoint(lower, found, "insert")
        else:
            logger.debug("insert: key %s", key)

        self._entries.insert(position, KeyedValue(key, value))
        return Rational(key)

    def remove_at(self, key: RationalLike) -> Optional[T]:
        """
        Удаление первого элемента с ключом >= key.

        Если элемента с точно таким ключом нет, удаляется первый элемент
        с большим ключом.

        Returns:
            Удалённое значение или None, если подходящего элемента нет
        """
        position = self._position_at_or_after(Rational(key))
        if position is None:
            return None
        return self._entries.pop(position).value

    def remove(self, item: T) -> int:
        """
        Удаление всех элементов, равных item.

        Returns:
            Количество удалённых элементов
        """
        kept = [entry for entry in self._entries if not entry.value == item]
        removed = len(self._entries) - len(kept)
        self._entries = kept
        return removed

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _position_at_or_after(self, key: Rational) -> Optional[int]:
        for position, entry in enumerate(self._entries):
            if entry.key >= key:
                return position
        return None

    def _validate_key(self, key: RationalLike) -> Rational:
        promoted = Rational.coerce(key)
        if promoted is None:
            raise TypeError(f"key must be rational-like, got {type(key).__name__}")
        if not promoted.is_finite:
            raise ValueError(f"key must be finite, got {promoted}")
        if not (self.LOWER_BOUND < promoted < self.UPPER_BOUND):
            raise ValueError(
                f"key must lie in ({self.LOWER_BOUND}, {self.UPPER_BOUND}), got {promoted}"
            )
        # Собственная копия: вызывающий код может позже вызвать negate()
        return Rational(promoted)

    def _midpoint(self, lower: Rational, upper: Rational, operation: str) -> Rational:
        try:
            key = (lower + upper) / 2
        except IntegerOverflowError as e:
            logger.warning(
                "%s: key space exhausted between %s and %s (%s)", operation, lower, upper, e
            )
            raise KeySpaceExhaustedError(
                f"{operation}: no key between {lower} and {upper} fits the integer width"
            ) from e

        # saturate/wrap или FAST-сравнение могут дать ключ вне интервала
        if not (lower < key < upper):
            logger.warning(
                "%s: midpoint %s not strictly between %s and %s", operation, key, lower, upper
            )
            raise KeySpaceExhaustedError(
                f"{operation}: midpoint {key} is not strictly between {lower} and {upper}"
            )

        logger.debug("%s: key %s", operation, key)
        return key
