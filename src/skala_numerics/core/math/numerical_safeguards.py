"""
Numerical Safeguards — Raw Fixed-Point Primitives

Модуль содержит целочисленные примитивы, на которых построен fixed-point тип:
- Проверка диапазона raw-значения (overflow → исключение, без wraparound)
- Умножение и деление raw-значений с масштабированием на 2^F
- Целочисленный квадратный корень по raw-представлению
- Детерминированная конверсия float → raw
- Исключения для фатальных нарушений domain

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Overflow никогда не происходит молча (FixedPointOverflow)
2. Умножение и деление округляют к -inf (floor), всегда одинаково
3. Корень из отрицательного значения запрещён (SqrtDomainViolation)
4. Все операции целочисленные, детерминированы и воспроизводимы

ПОЛИТИКА ОКРУГЛЕНИЯ:
    mul: (a * b) >> F         — арифметический сдвиг, floor
    div: (a << F) // b        — целочисленное деление Python, floor
    sqrt: isqrt(a << F)       — floor от точного корня

    Ошибка mul/div/sqrt: 0 <= exact - result < 2^-F (один DELTA).
"""

import math
from fractions import Fraction
from typing import Final

# =============================================================================
# ОГРАНИЧЕНИЯ ФОРМАТА
# =============================================================================

# Максимальная ширина raw-представления (бит, включая знаковый)
MAX_TOTAL_BITS: Final[int] = 128

# Минимум целых бит: знаковый бит + хотя бы один бит, чтобы ONE был представим
MIN_INT_BITS: Final[int] = 2


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixedPointOverflow(OverflowError):
    """
    Результат fixed-point операции вне диапазона формата.

    Молчаливый wraparound испортил бы геометрию непредсказуемо,
    поэтому любая операция с выходом за диапазон прерывается.
    """

    pass


class SqrtDomainViolation(ValueError):
    """
    Квадратный корень из отрицательного fixed-point значения.

    Для векторной геометрии это всегда логическая ошибка вызывающего кода.
    """

    pass


class ZeroLengthVector(ZeroDivisionError):
    """
    Нормализация вектора нулевой длины.

    Направление не определено. Для недоверенного входа используйте
    try_get_normalized(), который возвращает None вместо исключения.
    """

    pass


# =============================================================================
# ПРОВЕРКА ДИАПАЗОНА
# =============================================================================


def raw_bounds(total_bits: int) -> tuple[int, int]:
    """
    Диапазон знакового raw-значения заданной ширины (two's complement).

    Args:
        total_bits: Полная ширина в битах

    Returns:
        (min_raw, max_raw)

    Examples:
        >>> raw_bounds(8)
        (-128, 127)
    """
    if total_bits < 1:
        raise ValueError(f"total_bits must be positive, got {total_bits}")

    half = 1 << (total_bits - 1)
    return -half, half - 1


def check_raw_range(raw: int, min_raw: int, max_raw: int, operation: str) -> int:
    """
    Проверка, что raw-результат помещается в формат.

    Args:
        raw: Результат операции (неограниченный Python int)
        min_raw: Минимальное допустимое raw-значение
        max_raw: Максимальное допустимое raw-значение
        operation: Имя операции (для сообщения об ошибке)

    Returns:
        raw без изменений

    Raises:
        FixedPointOverflow: Если raw вне [min_raw, max_raw]
    """
    if raw < min_raw or raw > max_raw:
        raise FixedPointOverflow(
            f"Fixed-point overflow in {operation}: raw={raw} outside "
            f"[{min_raw}, {max_raw}]"
        )
    return raw


# =============================================================================
# МАСШТАБИРОВАННАЯ АРИФМЕТИКА
# =============================================================================


def mul_raw(a: int, b: int, frac_bits: int) -> int:
    """
    Произведение двух raw-значений с масштабированием на 2^F.

    Полное произведение считается без потерь, затем арифметический сдвиг
    вправо округляет к -inf.

    Args:
        a: Первый множитель (raw)
        b: Второй множитель (raw)
        frac_bits: Количество дробных бит F

    Returns:
        floor(a * b / 2^F)

    Examples:
        >>> mul_raw(3 << 16, 4 << 16, 16) == 12 << 16
        True
        >>> mul_raw(-1, 1, 16)  # -2^-32 → floor → -2^-16
        -1
    """
    return (a * b) >> frac_bits


def div_raw(a: int, b: int, frac_bits: int) -> int:
    """
    Частное двух raw-значений с масштабированием на 2^F.

    Делимое сдвигается влево на F до деления, результат округляется к -inf.

    Args:
        a: Делимое (raw)
        b: Делитель (raw)
        frac_bits: Количество дробных бит F

    Returns:
        floor(a * 2^F / b)

    Raises:
        ZeroDivisionError: Если b == 0

    Examples:
        >>> div_raw(6 << 16, 2 << 16, 16) == 3 << 16
        True
    """
    if b == 0:
        raise ZeroDivisionError("Fixed-point division by zero")
    return (a << frac_bits) // b


def isqrt_raw(raw: int, frac_bits: int) -> int:
    """
    Квадратный корень fixed-point значения по его raw-представлению.

    sqrt(raw / 2^F) * 2^F = sqrt(raw * 2^F), поэтому достаточно взять
    точный целочисленный корень от raw << F. math.isqrt возвращает
    floor, т.е. наибольшее r с r*r <= raw * 2^F.

    Args:
        raw: Подкоренное значение (raw), должно быть >= 0
        frac_bits: Количество дробных бит F

    Returns:
        floor(sqrt(raw * 2^F))

    Raises:
        SqrtDomainViolation: Если raw < 0

    Examples:
        >>> isqrt_raw(25 << 16, 16) == 5 << 16
        True
    """
    if raw < 0:
        raise SqrtDomainViolation(
            f"Square root of negative fixed-point value (raw={raw})"
        )
    return math.isqrt(raw << frac_bits)


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return math.isfinite(value)


def float_to_raw(value: float, frac_bits: int) -> int:
    """
    Детерминированная конверсия float → raw.

    Умножение на 2^F точное для binary float, после чего floor даёт
    наибольшее представимое значение <= value.

    Args:
        value: Исходное значение
        frac_bits: Количество дробных бит F

    Returns:
        floor(value * 2^F)

    Raises:
        ValueError: Если value NaN/Inf

    Examples:
        >>> float_to_raw(0.5, 16)
        32768
        >>> float_to_raw(-0.5, 1)
        -1
    """
    if not is_valid_float(value):
        raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")

    # Точно: ldexp переполняется на больших конечных float
    return math.floor(Fraction(value) * (1 << frac_bits))


def truncate_raw_to_int(raw: int, frac_bits: int) -> int:
    """
    Целая часть raw-значения с округлением к нулю (семантика int()).

    Args:
        raw: Значение (raw)
        frac_bits: Количество дробных бит F

    Returns:
        Целая часть со знаком
    """
    if raw < 0:
        return -((-raw) >> frac_bits)
    return raw >> frac_bits


def raw_to_decimal_str(raw: int, frac_bits: int) -> str:
    """
    Точное десятичное представление fixed-point значения.

    Дробь frac / 2^F == frac * 5^F / 10^F, поэтому F десятичных знаков
    всегда достаточно для точной записи.

    Args:
        raw: Значение (raw)
        frac_bits: Количество дробных бит F

    Returns:
        Строка вида '-1.25' (без хвостовых нулей)

    Examples:
        >>> raw_to_decimal_str(-5, 2)
        '-1.25'
        >>> raw_to_decimal_str(12, 2)
        '3'
    """
    sign = "-" if raw < 0 else ""
    magnitude = -raw if raw < 0 else raw

    int_part = magnitude >> frac_bits
    frac_part = magnitude & ((1 << frac_bits) - 1)

    if frac_part == 0:
        return f"{sign}{int_part}"

    digits = str(frac_part * 5**frac_bits).rjust(frac_bits, "0").rstrip("0")
    return f"{sign}{int_part}.{digits}"
