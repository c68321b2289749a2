"""
Тесты для Vec3

Проверяет:
1. Обобщённый конструктор (независимые типы компонент)
2. Конверсию в кортеж и обратно
3. Арифметику и compound-операторы
4. Длину и нормализацию
"""

import logging

import pytest

from skala_numerics.core.domain.vector2 import Vec2
from skala_numerics.core.domain.vector3 import Vec3
from skala_numerics.core.math.fixed_point import I48F16, SignedFractional
from skala_numerics.core.math.numerical_safeguards import (
    FixedPointOverflow,
    ZeroLengthVector,
)


def sf(value: int) -> SignedFractional:
    return SignedFractional(value)


class TestVec3Construction:
    """Конструирование и value-семантика"""

    def test_sanity_equality(self) -> None:
        x = Vec3(2, 3, 6)
        y = Vec3(5, 7, 9)

        assert x == x
        assert x != y

    def test_independently_typed_inputs(self) -> None:
        """Каждая компонента конвертируется независимо"""
        v = Vec3.new(1, True, sf(5))
        assert v == Vec3(sf(1), sf(1), sf(5))
        assert all(type(c) is SignedFractional for c in v)

    def test_unconvertible_component_rejected(self) -> None:
        with pytest.raises(TypeError):
            Vec3(1, 2, 3.0)
        with pytest.raises(TypeError):
            Vec3(1, 2, I48F16(3))

    def test_out_of_range_component(self) -> None:
        with pytest.raises(FixedPointOverflow):
            Vec3(0, 0, 2**31)

    def test_zero(self) -> None:
        assert Vec3() == Vec3.ZERO == Vec3(0, 0, 0)
        z = Vec3.ZERO
        z *= 0
        z += (sf(1), sf(2), sf(3))
        assert Vec3.ZERO == Vec3(0, 0, 0)

    def test_hash(self) -> None:
        assert hash(Vec3(1, 2, 3)) == hash(Vec3(1, 2, 3))
        assert {Vec3(1, 2, 3): "a"}[Vec3(1, 2, 3)] == "a"

    def test_not_equal_to_vec2(self) -> None:
        assert Vec3(1, 2, 0) != Vec2(1, 2)


class TestVec3Tuples:
    """Конверсия в кортеж и обратно"""

    def test_from_tuple(self) -> None:
        x = Vec3.from_tuple((sf(5), sf(7), sf(9)))
        assert x == Vec3(5, 7, 9)

    def test_into_tuple(self) -> None:
        assert Vec3(5, 7, 9).to_tuple() == (sf(5), sf(7), sf(9))

    def test_round_trip(self) -> None:
        for v in (Vec3(1, -2, 3), Vec3.ZERO, Vec3(SignedFractional.DELTA, 0, SignedFractional.MIN)):
            assert Vec3.from_tuple(v.to_tuple()) == v
            assert Vec3.from_tuple(tuple(v)) == v

    def test_wrong_arity(self) -> None:
        with pytest.raises(ValueError, match="expected 3 components"):
            Vec3.from_tuple((1, 2))


class TestVec3Arithmetic:
    """Операторы"""

    def test_addition(self) -> None:
        assert Vec3(2, 3, 9) + Vec3(5, 7, 9) == Vec3(7, 10, 18)

    def test_subtraction_and_negation(self) -> None:
        v = Vec3(2, -3, 9)
        assert v - v == Vec3.ZERO
        assert v + (-v) == Vec3.ZERO
        assert -v == Vec3(-2, 3, -9)

    def test_tuple_operands(self) -> None:
        v = Vec3(1, 2, 3)
        assert v + (sf(1), sf(1), sf(1)) == Vec3(2, 3, 4)
        assert v - (sf(1), sf(1), sf(1)) == Vec3(0, 1, 2)
        assert (sf(1), sf(1), sf(1)) - v == Vec3(0, -1, -2)

    def test_scalar_multiplication(self) -> None:
        assert Vec3(3, 4, 5) * sf(2) == Vec3(6, 8, 10)
        assert 2 * Vec3(3, 4, 5) == Vec3(6, 8, 10)

    def test_scalar_division(self) -> None:
        assert Vec3(6, 8, 10) / sf(2) == Vec3(3, 4, 5)

    def test_mul_div_inverse_for_even_components(self) -> None:
        for v in (Vec3(6, 8, 10), Vec3(-2, 0, 4)):
            assert (v * 2) / 2 == v
            assert (v / 2) * 2 == v

    def test_compound_in_place(self) -> None:
        v = Vec3(1, 2, 3)
        alias = v

        v += Vec3(1, 1, 1)
        v -= (sf(0), sf(1), sf(2))
        v *= sf(3)
        v /= 2

        assert alias is v
        assert v == Vec3(3, 3, 3)

    def test_float_scalar_rejected(self) -> None:
        with pytest.raises(TypeError):
            Vec3(1, 1, 1) / 0.5


class TestVec3Length:
    """Длина и нормализация"""

    def test_magnitude(self) -> None:
        x = Vec3(3, 4, 12)
        y = Vec3(2, 4, 4)

        assert x.len_pow2() == 169
        assert x.len() == 13
        assert y.len() == 6
        assert y.magnitude() == 6

    def test_unit_axis(self) -> None:
        assert Vec3(1, 0, 0).len_pow2() == 1

    def test_get_normalized_exact(self) -> None:
        assert Vec3(10, 0, 0).get_normalized() == Vec3(1, 0, 0)
        assert Vec3(0, 0, -7).try_get_normalized() == Vec3(0, 0, -1)

    def test_normalized_length_close_to_one(self) -> None:
        """Ошибка длины после нормализации в пределах нескольких DELTA"""
        n = Vec3(4, 4, 4).get_normalized()
        assert abs(n.len() - 1) <= SignedFractional.DELTA * 8

    def test_normalize_in_place(self) -> None:
        x = Vec3(20, 0, 0)
        assert x.len() == 20

        x.normalize()
        assert x.len() == 1
        assert x == Vec3(1, 0, 0)

    def test_zero_vector(self) -> None:
        assert Vec3.ZERO.try_get_normalized() is None
        with pytest.raises(ZeroLengthVector):
            Vec3.ZERO.normalize()
        with pytest.raises(ZeroLengthVector, match="zero-length"):
            Vec3.ZERO.get_normalized()

    def test_try_get_normalized_logs_degenerate(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="skala_numerics.core.domain.vector3"):
            Vec3.ZERO.try_get_normalized()

        assert any("zero-length" in r.getMessage() for r in caplog.records)


class TaggedVec3(Vec3):
    pass


class TestVec3Subclass:
    """Операторы и конструкторы сохраняют тип подкласса"""

    def test_operators_preserve_subclass(self) -> None:
        v = TaggedVec3(2, 4, 6)
        results = [
            v + v,
            v + (sf(1), sf(1), sf(1)),
            (sf(1), sf(1), sf(1)) - v,
            v - Vec3(1, 1, 1),
            -v,
            v * sf(3),
            3 * v,
            v / 2,
        ]
        assert all(type(r) is TaggedVec3 for r in results)
        assert (v / 2).to_tuple() == (sf(1), sf(2), sf(3))

    def test_copy_and_normalization_preserve_subclass(self) -> None:
        v = TaggedVec3(0, 0, 9)
        assert type(v.copy()) is TaggedVec3
        assert type(v.get_normalized()) is TaggedVec3
        assert type(v.try_get_normalized()) is TaggedVec3
        assert type(TaggedVec3.from_tuple((1, 2, 3))) is TaggedVec3
