"""
Domain value objects.

Contains the fixed-arity vector types Vec2, Vec3, Vec4.
"""

from src.core.domain.vector import (
    XY,
    XYZ,
    XYZW,
    Vec2,
    Vec3,
    Vec4,
    VectorBase,
    VectorComparisonConfig,
    vec2,
    vec3,
    vec4,
)

__all__ = [
    # Vector types
    "VectorBase",
    "Vec2",
    "Vec3",
    "Vec4",
    # Labeled tuples
    "XY",
    "XYZ",
    "XYZW",
    # Config
    "VectorComparisonConfig",
    # Factories
    "vec2",
    "vec3",
    "vec4",
]
