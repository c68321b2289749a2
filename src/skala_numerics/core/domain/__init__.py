"""
Domain value types.

Contains the fixed-point vector types Vec2 and Vec3 and their construction helpers.
"""

from skala_numerics.core.domain.conversions import (
    ZeroConstant,
    components_from_tuple,
    scalar_operand,
    to_signed_fractional,
)
from skala_numerics.core.domain.vector2 import Vec2
from skala_numerics.core.domain.vector3 import Vec3

__all__ = [
    # Conversions
    "ZeroConstant",
    "components_from_tuple",
    "scalar_operand",
    "to_signed_fractional",
    # Vectors
    "Vec2",
    "Vec3",
]
