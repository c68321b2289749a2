"""
Vec3 — 3D Fixed-Point Vector

Value-тип из трёх SignedFractional компонент (x, y, z).
Набор операций совпадает с Vec2, обобщён на третью ось.

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
class Vec3:
    """
    3D вектор на fixed-point компонентах.

    Каждая компонента принимается независимо в любом виде, конвертируемом
    в SignedFractional: Vec3(1, True, SignedFractional(5)).
    Vec3() — нулевой вектор.

    Операторы:
        v + w, v - w, -v      — покомпонентно; w может быть Vec3 или (x, y, z)
        v * s, s * v, v / s   — s: SignedFractional или int
        +=, -=, *=, /=        — изменяют v на месте
    """

    x: SignedFractional = SignedFractional.ZERO
    y: SignedFractional = SignedFractional.ZERO
    z: SignedFractional = SignedFractional.ZERO

    ZERO = ZeroConstant()

    def __post_init__(self) -> None:
        self.x = to_signed_fractional(self.x)
        self.y = to_signed_fractional(self.y)
        self.z = to_signed_fractional(self.z)

    @classmethod
    def new(cls, x: Any, y: Any, z: Any) -> "Vec3":
        """
        Создание из трёх значений, конвертируемых в SignedFractional.

        Raises:
            TypeError: компонента не конвертируема (например, float)
            FixedPointOverflow: int вне диапазона формата

        Examples:
            >>> Vec3.new(1, 1, 5) == Vec3(1, 1, 5)
            True
        """
        return cls(x, y, z)

    # -------------------------------------------------------------------------
    # Кортежи
    # -------------------------------------------------------------------------

    @classmethod
    def from_tuple(cls, values: tuple[Any, Any, Any]) -> "Vec3":
        x, y, z = components_from_tuple(values, 3)
        return cls(x, y, z)

    def to_tuple(self) -> tuple[SignedFractional, SignedFractional, SignedFractional]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[SignedFractional]:
        return iter((self.x, self.y, self.z))

    def copy(self) -> "Vec3":
        return type(self)(self.x, self.y, self.z)

    # -------------------------------------------------------------------------
    # Длина и нормализация
    # -------------------------------------------------------------------------

    def len_pow2(self) -> SignedFractional:
        """
        Квадрат длины: x*x + y*y + z*z.

        Examples:
            >>> Vec3(1, 0, 0).len_pow2() == 1
            True
        """
        return self.x * self.x + self.y * self.y + self.z * self.z

    magnitude_pow2 = len_pow2

    def len(self) -> SignedFractional:
        """
        Длина вектора: sqrt(len_pow2()), floor от точного корня.

        Examples:
            >>> Vec3(2, 4, 4).len() == 6
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
        x, y, z = self.x / length, self.y / length, self.z / length
        self.x, self.y, self.z = x, y, z

    def get_normalized(self) -> "Vec3":
        """
        Единичный вектор того же направления.

        Raises:
            ZeroLengthVector: длина вектора равна нулю
        """
        length = self._nonzero_length()
        return type(self)(self.x / length, self.y / length, self.z / length)

    def try_get_normalized(self) -> Optional["Vec3"]:
        """Единичный вектор или None, если длина ровно ноль."""
        length = self.len()

        if length.is_zero():
            logger.debug("try_get_normalized: zero-length vector %r", self)
            return None

        return type(self)(self.x / length, self.y / length, self.z / length)

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def _vector_operand(self, other: object) -> Optional["Vec3"]:
        if isinstance(other, Vec3):
            return other
        if isinstance(other, tuple):
            return type(self).from_tuple(other)
        return None

    def __neg__(self) -> "Vec3":
        return type(self)(-self.x, -self.y, -self.z)

    def __add__(self, other: object) -> "Vec3":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        return type(self)(self.x + rhs.x, self.y + rhs.y, self.z + rhs.z)

    __radd__ = __add__

    def __iadd__(self, other: object) -> "Vec3":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        x, y, z = self.x + rhs.x, self.y + rhs.y, self.z + rhs.z
        self.x, self.y, self.z = x, y, z
        return self

    def __sub__(self, other: object) -> "Vec3":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        return type(self)(self.x - rhs.x, self.y - rhs.y, self.z - rhs.z)

    def __rsub__(self, other: object) -> "Vec3":
        lhs = self._vector_operand(other)
        if lhs is None:
            return NotImplemented
        return type(self)(lhs.x - self.x, lhs.y - self.y, lhs.z - self.z)

    def __isub__(self, other: object) -> "Vec3":
        rhs = self._vector_operand(other)
        if rhs is None:
            return NotImplemented
        x, y, z = self.x - rhs.x, self.y - rhs.y, self.z - rhs.z
        self.x, self.y, self.z = x, y, z
        return self

    def __mul__(self, other: object) -> "Vec3":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        return type(self)(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __imul__(self, other: object) -> "Vec3":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        x, y, z = self.x * s, self.y * s, self.z * s
        self.x, self.y, self.z = x, y, z
        return self

    def __truediv__(self, other: object) -> "Vec3":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        return type(self)(self.x / s, self.y / s, self.z / s)

    def __itruediv__(self, other: object) -> "Vec3":
        s = scalar_operand(other)
        if s is None:
            return NotImplemented
        x, y, z = self.x / s, self.y / s, self.z / s
        self.x, self.y, self.z = x, y, z
        return self
