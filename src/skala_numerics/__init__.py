"""
skala-numerics — deterministic fixed-point vector math.

Small library of numeric types for a real-time game engine: a fixed-point
scalar (SignedFractional) and the Vec2/Vec3 value types built on it.
"""

from skala_numerics.core.domain import Vec2, Vec3
from skala_numerics.core.math import (
    I32F32,
    I48F16,
    FixedPoint,
    FixedPointFormat,
    FixedPointOverflow,
    SignedFractional,
    SqrtDomainViolation,
    ZeroLengthVector,
    fixed_point_type,
)

__version__ = "0.1.0"

__all__ = [
    "FixedPoint",
    "FixedPointFormat",
    "I32F32",
    "I48F16",
    "SignedFractional",
    "fixed_point_type",
    "Vec2",
    "Vec3",
    "FixedPointOverflow",
    "SqrtDomainViolation",
    "ZeroLengthVector",
    "__version__",
]
