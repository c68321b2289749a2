"""
Fixed-Point Scalar — Deterministic Signed Fractional Numbers

Модуль определяет знаковое fixed-point число: целое raw-значение,
интерпретируемое как raw / 2^F, где F фиксировано для каждого типа.

- FixedPointFormat: валидируемая (pydantic) конфигурация разбиения бит
- FixedPoint: базовый value-тип со всей арифметикой
- I32F32, I48F16: встроенные форматы
- SignedFractional: тип, на котором построены все векторы библиотеки

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакого неявного float: конверсия из float только через from_float()
2. Overflow любой операции → FixedPointOverflow (без wraparound)
3. Равенство и порядок точны, в том числе между форматами и с int
4. hash согласован с ==, в том числе с int (hash(I32F32(5)) == hash(5))
5. Экземпляры неизменяемы; a += b создаёт новое значение
"""

import threading
from fractions import Fraction
from typing import ClassVar, Final, Optional, Union

from pydantic import BaseModel, Field, model_validator

from skala_numerics.core.math.numerical_safeguards import (
    MAX_TOTAL_BITS,
    MIN_INT_BITS,
    check_raw_range,
    div_raw,
    float_to_raw,
    isqrt_raw,
    mul_raw,
    raw_bounds,
    raw_to_decimal_str,
    truncate_raw_to_int,
)

# =============================================================================
# FORMAT CONFIGURATION
# =============================================================================


class FixedPointFormat(BaseModel):
    """
    Разбиение бит fixed-point типа.

    Immutable модель (frozen=True), используется как ключ реестра типов.
    int_bits включает знаковый бит: I32F32 имеет диапазон [-2^31, 2^31).
    """

    int_bits: int = Field(..., ge=MIN_INT_BITS, description="Целые биты (включая знак)")
    frac_bits: int = Field(..., ge=0, description="Дробные биты F")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_total_width(self) -> "FixedPointFormat":
        """Полная ширина ограничена MAX_TOTAL_BITS."""
        if self.int_bits + self.frac_bits > MAX_TOTAL_BITS:
            raise ValueError(
                f"total width {self.int_bits + self.frac_bits} bits exceeds "
                f"{MAX_TOTAL_BITS}"
            )
        return self

    @property
    def total_bits(self) -> int:
        return self.int_bits + self.frac_bits

    @property
    def scale(self) -> int:
        """2^F — raw-значение единицы."""
        return 1 << self.frac_bits

    @property
    def min_raw(self) -> int:
        return raw_bounds(self.total_bits)[0]

    @property
    def max_raw(self) -> int:
        return raw_bounds(self.total_bits)[1]

    @property
    def name(self) -> str:
        return f"I{self.int_bits}F{self.frac_bits}"


# Текущий формат библиотеки (64 бита, 32 дробных)
I32F32_FORMAT: Final[FixedPointFormat] = FixedPointFormat(int_bits=32, frac_bits=32)

# Ранний формат (64 бита, 16 дробных): больший диапазон, меньшая точность
I48F16_FORMAT: Final[FixedPointFormat] = FixedPointFormat(int_bits=48, frac_bits=16)


# Реестр: один тип на формат
_TYPE_REGISTRY: dict[FixedPointFormat, type["FixedPoint"]] = {}
_REGISTRY_LOCK = threading.Lock()


# =============================================================================
# FIXED-POINT SCALAR
# =============================================================================


class FixedPoint:
    """
    Знаковое fixed-point число.

    Базовый класс; конкретный тип задаёт FORMAT (см. I32F32, I48F16,
    fixed_point_type). Операнды арифметики: тот же тип или int. Смешивание
    разных форматов и float в арифметике → TypeError; сравнение разных
    форматов точное.

    Округление mul/div: к -inf (floor), ошибка < DELTA.
    """

    __slots__ = ("_raw",)

    FORMAT: ClassVar[FixedPointFormat]

    ZERO: ClassVar["FixedPoint"]
    ONE: ClassVar["FixedPoint"]
    MIN: ClassVar["FixedPoint"]
    MAX: ClassVar["FixedPoint"]
    DELTA: ClassVar["FixedPoint"]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)

        fmt = getattr(cls, "FORMAT", None)
        if not isinstance(fmt, FixedPointFormat):
            raise TypeError(f"{cls.__name__} must define FORMAT: FixedPointFormat")

        cls.ZERO = cls.from_raw(0)
        cls.ONE = cls.from_raw(fmt.scale)
        cls.MIN = cls.from_raw(fmt.min_raw)
        cls.MAX = cls.from_raw(fmt.max_raw)
        cls.DELTA = cls.from_raw(1)

        _TYPE_REGISTRY.setdefault(fmt, cls)

    def __init__(self, value: Union["FixedPoint", int] = 0) -> None:
        """
        Конверсия без потерь из int или значения того же типа.

        Args:
            value: int (с проверкой диапазона) или FixedPoint того же типа

        Raises:
            TypeError: float, другой формат или неподдерживаемый тип
            FixedPointOverflow: int вне диапазона формата
        """
        cls = type(self)

        if isinstance(value, FixedPoint):
            if type(value) is not cls:
                raise TypeError(
                    f"cannot convert {type(value).__name__} to {cls.__name__} implicitly"
                )
            self._raw = value._raw
        elif isinstance(value, int):
            fmt = cls.FORMAT
            self._raw = check_raw_range(
                int(value) << fmt.frac_bits, fmt.min_raw, fmt.max_raw, "int conversion"
            )
        elif isinstance(value, float):
            raise TypeError(
                f"implicit float conversion to {cls.__name__} is not allowed; "
                f"use {cls.__name__}.from_float()"
            )
        else:
            raise TypeError(f"cannot convert {type(value).__name__} to {cls.__name__}")

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_raw(cls, raw: int) -> "FixedPoint":
        """
        Создание из raw-представления (value = raw / 2^F).

        Raises:
            FixedPointOverflow: raw вне диапазона формата
        """
        fmt = cls.FORMAT
        obj = object.__new__(cls)
        obj._raw = check_raw_range(raw, fmt.min_raw, fmt.max_raw, "from_raw")
        return obj

    @classmethod
    def from_float(cls, value: float) -> "FixedPoint":
        """
        Явная детерминированная конверсия из float.

        Результат — наибольшее представимое значение <= value.

        Raises:
            ValueError: NaN/Inf
            FixedPointOverflow: value вне диапазона формата
        """
        return cls.from_raw(float_to_raw(value, cls.FORMAT.frac_bits))

    # -------------------------------------------------------------------------
    # Raw-доступ и предикаты
    # -------------------------------------------------------------------------

    @property
    def raw(self) -> int:
        return self._raw

    def is_zero(self) -> bool:
        return self._raw == 0

    # -------------------------------------------------------------------------
    # Внутренние хелперы
    # -------------------------------------------------------------------------

    def _wrap(self, raw: int, operation: str) -> "FixedPoint":
        fmt = self.FORMAT
        obj = object.__new__(type(self))
        obj._raw = check_raw_range(raw, fmt.min_raw, fmt.max_raw, operation)
        return obj

    def _operand_raw(self, other: object) -> Optional[int]:
        """raw операнда арифметики или None, если тип не поддерживается."""
        if type(other) is type(self):
            return other._raw
        if isinstance(other, int):
            fmt = self.FORMAT
            return check_raw_range(
                other << fmt.frac_bits, fmt.min_raw, fmt.max_raw, "int conversion"
            )
        return None

    def _compare_raws(self, other: object) -> Optional[tuple[int, int]]:
        """
        Пара raw, приведённых к общему масштабу.

        int и другие форматы сравниваются точно, без проверки диапазона.
        """
        if type(other) is type(self):
            return self._raw, other._raw
        if isinstance(other, FixedPoint):
            own_frac = self.FORMAT.frac_bits
            other_frac = other.FORMAT.frac_bits
            frac = max(own_frac, other_frac)
            return self._raw << (frac - own_frac), other._raw << (frac - other_frac)
        if isinstance(other, int):
            return self._raw, other << self.FORMAT.frac_bits
        return None

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "FixedPoint":
        rhs = self._operand_raw(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(self._raw + rhs, "addition")

    __radd__ = __add__

    def __sub__(self, other: object) -> "FixedPoint":
        rhs = self._operand_raw(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(self._raw - rhs, "subtraction")

    def __rsub__(self, other: object) -> "FixedPoint":
        lhs = self._operand_raw(other)
        if lhs is None:
            return NotImplemented
        return self._wrap(lhs - self._raw, "subtraction")

    def __mul__(self, other: object) -> "FixedPoint":
        rhs = self._operand_raw(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(mul_raw(self._raw, rhs, self.FORMAT.frac_bits), "multiplication")

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "FixedPoint":
        rhs = self._operand_raw(other)
        if rhs is None:
            return NotImplemented
        return self._wrap(div_raw(self._raw, rhs, self.FORMAT.frac_bits), "division")

    def __rtruediv__(self, other: object) -> "FixedPoint":
        lhs = self._operand_raw(other)
        if lhs is None:
            return NotImplemented
        return self._wrap(div_raw(lhs, self._raw, self.FORMAT.frac_bits), "division")

    def __neg__(self) -> "FixedPoint":
        # -MIN не помещается в two's complement
        return self._wrap(-self._raw, "negation")

    def __pos__(self) -> "FixedPoint":
        return self

    def __abs__(self) -> "FixedPoint":
        return self._wrap(abs(self._raw), "abs")

    def sqrt(self) -> "FixedPoint":
        """
        Квадратный корень (floor от точного значения).

        Returns:
            Наибольшее представимое r с r*r <= self; для точных квадратов
            представимых значений результат точный.

        Raises:
            SqrtDomainViolation: если self < 0

        Examples:
            >>> I32F32(25).sqrt() == 5
            True
        """
        return self._wrap(isqrt_raw(self._raw, self.FORMAT.frac_bits), "sqrt")

    # -------------------------------------------------------------------------
    # Сравнение и хеширование
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        pair = self._compare_raws(other)
        if pair is None:
            return NotImplemented
        return pair[0] == pair[1]

    def __ne__(self, other: object) -> bool:
        pair = self._compare_raws(other)
        if pair is None:
            return NotImplemented
        return pair[0] != pair[1]

    def __lt__(self, other: object) -> bool:
        pair = self._compare_raws(other)
        if pair is None:
            return NotImplemented
        return pair[0] < pair[1]

    def __le__(self, other: object) -> bool:
        pair = self._compare_raws(other)
        if pair is None:
            return NotImplemented
        return pair[0] <= pair[1]

    def __gt__(self, other: object) -> bool:
        pair = self._compare_raws(other)
        if pair is None:
            return NotImplemented
        return pair[0] > pair[1]

    def __ge__(self, other: object) -> bool:
        pair = self._compare_raws(other)
        if pair is None:
            return NotImplemented
        return pair[0] >= pair[1]

    def __hash__(self) -> int:
        # Fraction хешируется как int, если значение целое
        return hash(Fraction(self._raw, self.FORMAT.scale))

    def __bool__(self) -> bool:
        return self._raw != 0

    # -------------------------------------------------------------------------
    # Конверсия наружу
    # -------------------------------------------------------------------------

    def __int__(self) -> int:
        return truncate_raw_to_int(self._raw, self.FORMAT.frac_bits)

    __trunc__ = __int__

    def __floor__(self) -> int:
        return self._raw >> self.FORMAT.frac_bits

    def __ceil__(self) -> int:
        return -((-self._raw) >> self.FORMAT.frac_bits)

    def __float__(self) -> float:
        # Только для отображения: результат float не участвует в арифметике
        return self._raw / self.FORMAT.scale

    def __str__(self) -> str:
        return raw_to_decimal_str(self._raw, self.FORMAT.frac_bits)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


# =============================================================================
# ВСТРОЕННЫЕ ФОРМАТЫ
# =============================================================================


class I32F32(FixedPoint):
    """64-битное fixed-point: 32 целых бита (включая знак), 32 дробных."""

    __slots__ = ()
    FORMAT = I32F32_FORMAT


class I48F16(FixedPoint):
    """64-битное fixed-point: 48 целых бит (включая знак), 16 дробных."""

    __slots__ = ()
    FORMAT = I48F16_FORMAT


def fixed_point_type(fmt: FixedPointFormat) -> type[FixedPoint]:
    """
    Fixed-point тип для произвольного формата.

    Для каждого формата создаётся ровно один тип, повторные вызовы
    возвращают его же (встроенные форматы → I32F32 / I48F16).
    Безопасна для вызова из нескольких потоков.

    Args:
        fmt: Валидный формат

    Returns:
        Подкласс FixedPoint с FORMAT == fmt

    Examples:
        >>> fixed_point_type(FixedPointFormat(int_bits=32, frac_bits=32)) is I32F32
        True
    """
    existing = _TYPE_REGISTRY.get(fmt)
    if existing is not None:
        return existing

    with _REGISTRY_LOCK:
        # Повторная проверка: другой поток мог создать тип, пока ждали lock
        existing = _TYPE_REGISTRY.get(fmt)
        if existing is not None:
            return existing
        return type(
            fmt.name,
            (FixedPoint,),
            {"__slots__": (), "FORMAT": fmt, "__module__": __name__},
        )


# Тип, на котором построены Vec2 и Vec3. Выбор встраивающей системы.
SignedFractional = I32F32
