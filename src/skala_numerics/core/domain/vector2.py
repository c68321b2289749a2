"""
Vec2 — 2D Fixed-Point Vector

Value-тип из двух SignedFractional компонент (x, y).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакой неявной нормализации: допустима любая длина, включая ноль
2. Сравнение и hash покомпонентные и согласованные
3. Изменение на месте только через +=, -=, *=, /= и normalize()
4. normalize()/get_normalized() на нулевой длине → ZeroLengthVector;
   try_get_normalized() → None
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from skala_numerics.core.domain.conversions import (
    ZeroConstant,
    components_from_tuple,
    scalar_operand,
    to_signed_fractional,
)
from skala_numerics.core.math.fixed_point import SignedFractional
from skala_numerics.core.math.numerical_safeguards import ZeroLengthVector

logger = logging.getLogger(__name__)


@dataclass(unsafe_hash=True)
class Vec2:
    """
    2D вектор на fixed-point компонентах.

    Компоненты конвертируются в SignedFractional при создании (int или
    SignedFractional). Vec2() — нулевой вектор.

    Операторы:
        v + w, v - w, -v      — покомпонентно; w может быть Vec2 или (x, y)
        v * s, s * v, v / s   — s: SignedFractional или int
        +=, -=, *=, /=        — изменяют v на месте
    """

    x: SignedFractional = SignedFractional.ZERO
    y: SignedFractional = SignedFractional.ZERO

    ZERO = ZeroConstant()

    def __post_init__(self) -> None:
        self.x = to_signed_fractional(self.x)
        self.y = to_signed_fractional(self.y)

    @classmethod
    def new(cls, x: Any, y: Any) -> "Vec2":
        return cls(x, y)

    # -------------------------------------------------------------------------
    # Кортежи
    # -------------------------------------------------------------------------

    @classmethod
    def from_tuple(cls, values: tuple[Any, Any]) -> "Vec2":
        """
        Создание из кортежа (x, y).

        Raises:
            TypeError: values не кортеж
            ValueError: количество компонент != 2
        """
        x, y = components_from_tuple(values, 2)
        return cls(x, y)

    def to_tuple(self) -> tuple[SignedFractional, SignedFractional]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[SignedFractional]:
        return iter((self.x, self.y))

    def copy(self) -> "Vec2":
        return type(self)(self.x, self.y)

    # -------------------------------------------------------------------------
    # Длина и нормализация
    # -------------------------------------------------------------------------

    def len_pow2(self) -> SignedFractional:
        """
        Квадрат длины: x*x + y*y.

        Без корня; подходит для сравнения длин и проверки единичности.

        Examples:
            >>> Vec2(3, 4).len_pow2() == 25
            True
        """
        return self.x * self.x + self.y * self.y

    magnitude_pow2 = len_pow2

    def len(self) -> SignedFractional:
        """
        Длина вектора: sqrt(len_pow2()), floor от точного корня.

        Examples:
            >>> Vec2(3, 4).len() == 5
            True
        """
        return self.len_pow2().sqrt()

    magnitude = len

    def _nonzero_length(self) -> SignedFractional:
        length = self.len()
        if length.is_zero():
            raise ZeroLengthVector(f"Cannot normalize zero-length vector {self!r}")
        return length

    def normalize(self) -> None:
        """
        Нормализация на месте.

        Raises:
            ZeroLengthVector: длина вектора равна нулю
        """
        length = self._nonzero_length()
        x, y = self.x / length, self.y / length
        self.x, self.y = x, y

    def get_normalized(self) -> "Vec2":
        """
        Единичный вектор того же направления.

        Raises:
            ZeroLengthVector: длина вектора равна нулю

        Examples:
            >>> Vec2(6, 0).get_normalized() == Vec2(1, 0)
            True
        """
        length = self._nonzero_length()
        return type(self)(self.x / length, self.y / length)

    def try_get_normalized(self) -> Optional["Vec2"]:
        """
        Единичный вектор или None, если длина ровно ноль.

        Вариант для вырожденного входа (например, нормали контактов).
        """
        length = self.len()

        if length.is_zero():
            logger.debug("try_get_normalized: zero-length vector %r", self)
            return None

        return type(self)(self.x / length, self.y / length)

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def _vector_operand(self, other: object) -> Optional["Vec2"]:
        if isinstance(other, Vec2):
            return other
        if isinstance(other, tuple):
            return type(self).from_tuple(other)
        return None

    def __neg__(self) -> "Vec2":
        return type(self)(-self.x, -self.y)

    def __add__(self, other: object) -> "Vec2":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        return type(self)(self.x + rhs.x, self.y + rhs.y)

    __radd__ = __add__

    def __iadd__(self, other: object) -> "Vec2":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        x, y = self.x + rhs.x, self.y + rhs.y
        self.x, self.y = x, y
        return self

    def __sub__(self, other: object) -> "Vec2":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        return type(self)(self.x - rhs.x, self.y - rhs.y)

    def __rsub__(self, other: object) -> "Vec2":
        lhs = self._vector_operand(other)
        if lhs is None:
            return NotImplemented
        return type(self)(lhs.x - self.x, lhs.y - self.y)

    def __isub__(self, other: object) -> "Vec2":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        x, y = self.x - rhs.x, self.y - rhs.y
        self.x, self.y = x, y
        return self

    def __mul__(self, other: object) -> "Vec2":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        return type(self)(self.x * s, self.y * s)

    __rmul__ = __mul__

    def __imul__(self, other: object) -> "Vec2":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        x, y = self.x * s, self.y * s
        self.x, self.y = x, y
        return self

    def __truediv__(self, other: object) -> "Vec2":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        return type(self)(self.x / s, self.y / s)

    def __itruediv__(self, other: object) -> "Vec2":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        x, y = self.x / s, self.y / s
        self.x, self.y = x, y
        return self
