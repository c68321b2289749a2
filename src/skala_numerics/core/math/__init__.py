"""
Core math modules для skala-numerics

Fixed-point скаляр и целочисленные примитивы с гарантией детерминизма.
"""

# Numerical Safeguards
from skala_numerics.core.math.numerical_safeguards import (
    # Format limits
    MAX_TOTAL_BITS,
    MIN_INT_BITS,
    # Exceptions
    FixedPointOverflow,
    SqrtDomainViolation,
    ZeroLengthVector,
    # Raw primitives
    check_raw_range,
    div_raw,
    float_to_raw,
    isqrt_raw,
    mul_raw,
    raw_bounds,
)

# Fixed-Point Scalar
from skala_numerics.core.math.fixed_point import (
    I32F32_FORMAT,
    I48F16_FORMAT,
    FixedPoint,
    FixedPointFormat,
    I32F32,
    I48F16,
    SignedFractional,
    fixed_point_type,
)

__all__ = [
    # Numerical Safeguards — Format limits
    "MAX_TOTAL_BITS",
    "MIN_INT_BITS",
    # Numerical Safeguards — Exceptions
    "FixedPointOverflow",
    "SqrtDomainViolation",
    "ZeroLengthVector",
    # Numerical Safeguards — Raw primitives
    "check_raw_range",
    "div_raw",
    "float_to_raw",
    "isqrt_raw",
    "mul_raw",
    "raw_bounds",
    # Fixed-Point — Formats
    "I32F32_FORMAT",
    "I48F16_FORMAT",
    "FixedPointFormat",
    # Fixed-Point — Types
    "FixedPoint",
    "I32F32",
    "I48F16",
    "SignedFractional",
    "fixed_point_type",
]
