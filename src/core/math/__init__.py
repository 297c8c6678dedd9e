"""
Core math modules

Поэлементная арифметика и primitive casts для компонент векторов.
"""

# Scalar Arithmetic
from src.core.math.scalar_arithmetic import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    # Exceptions
    ElementCapabilityError,
    # Capabilities
    is_floating,
    is_integral,
    is_primitive,
    require_floating,
    require_primitive,
    # Operations
    divide,
    ieee_float_semantics,
    is_close,
    sqrt,
    sum_in_order,
)

# Primitive Casts
from src.core.math.primitive_casts import (
    PrimitiveWidth,
    cast_scalar,
)

__all__ = [
    # Scalar Arithmetic — Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Scalar Arithmetic — Exceptions
    "ElementCapabilityError",
    # Scalar Arithmetic — Capabilities
    "is_floating",
    "is_integral",
    "is_primitive",
    "require_floating",
    "require_primitive",
    # Scalar Arithmetic — Operations
    "divide",
    "ieee_float_semantics",
    "is_close",
    "sqrt",
    "sum_in_order",
    # Primitive Casts
    "PrimitiveWidth",
    "cast_scalar",
]
