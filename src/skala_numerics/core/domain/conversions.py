"""
Construction / Conversion Helpers

Общие хелперы конструирования для Vec2 и Vec3:
- Обобщённая конверсия "convertible to SignedFractional" (int, bool, тот же тип)
- Коэрсия операндов операторов (None → NotImplemented)
- Разбор кортежей компонент с проверкой арности
- Дескриптор ZERO, выдающий новый нулевой вектор при каждом доступе
"""

from typing import Any, Optional, Sequence

from skala_numerics.core.math.fixed_point import SignedFractional


def to_signed_fractional(value: Any) -> SignedFractional:
    """
    Конверсия значения в скалярный тип векторов.

    Args:
        value: int, bool или SignedFractional

    Returns:
        Значение SignedFractional

    Raises:
        TypeError: float, другой fixed-point формат, прочие типы
        FixedPointOverflow: int вне диапазона формата

    Examples:
        >>> to_signed_fractional(5) == 5
        True
    """
    if type(value) is SignedFractional:
        return value
    return SignedFractional(value)


def scalar_operand(value: object) -> Optional[SignedFractional]:
    """
    Скалярный операнд векторного оператора.

    Args:
        value: Правый операнд * или /

    Returns:
        SignedFractional или None для неподдерживаемых типов
        (оператор вернёт NotImplemented)
    """
    if type(value) is SignedFractional:
        return value
    if isinstance(value, int):
        return SignedFractional(value)
    return None


def components_from_tuple(values: Sequence[Any], arity: int) -> tuple[SignedFractional, ...]:
    """
    Разбор кортежа компонент вектора.

    Args:
        values: Кортеж (или список) компонент
        arity: Ожидаемое количество компонент (2 или 3)

    Returns:
        Кортеж значений SignedFractional

    Raises:
        TypeError: values не кортеж/список или компонента не конвертируема
        ValueError: неверное количество компонент
    """
    if not isinstance(values, (tuple, list)):
        raise TypeError(
            f"expected a tuple of {arity} components, got {type(values).__name__}"
        )

    if len(values) != arity:
        raise ValueError(f"expected {arity} components, got {len(values)}")

    return tuple(to_signed_fractional(v) for v in values)


class ZeroConstant:
    """
    Константа ZERO векторного класса.

    Каждый доступ возвращает новый нулевой вектор: += или normalize()
    над результатом не меняют константу.
    """

    def __get__(self, instance: object, owner: type) -> Any:
        return owner()
