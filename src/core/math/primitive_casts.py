"""
Primitive Casts — приведение компонент к фиксированной ширине

Модуль реализует total cast одного значения в каждую поддерживаемую
ширину: u8/u16/u32/u64/usize, i8/i16/i32/i64/isize, f32/f64.
Целевые значения — numpy scalars соответствующего dtype.

ПРАВИЛА ПРИВЕДЕНИЯ:
1. int → int: wrap по модулю 2^bits (two's complement для signed)
2. float → int: truncation к нулю, saturation на границах, NaN → 0
3. int/float → float: ближайшее представимое значение, overflow → ±inf

Cast никогда не падает на числовом значении: любой int/float
отображается в target width.
"""

import logging
import math
from enum import Enum
from typing import Any, Final

import numpy as np

from src.core.math.scalar_arithmetic import (
    ElementCapabilityError,
    is_floating,
    is_integral,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class PrimitiveWidth(str, Enum):
    """Поддерживаемые ширины primitive типов"""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    USIZE = "usize"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    ISIZE = "isize"
    F32 = "f32"
    F64 = "f64"

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype этой ширины"""
        return np.dtype(_WIDTH_DTYPES[self])

    @property
    def is_integer(self) -> bool:
        return self.dtype.kind in "iu"


_WIDTH_DTYPES: dict[PrimitiveWidth, type] = {
    PrimitiveWidth.U8: np.uint8,
    PrimitiveWidth.U16: np.uint16,
    PrimitiveWidth.U32: np.uint32,
    PrimitiveWidth.U64: np.uint64,
    PrimitiveWidth.USIZE: np.uintp,
    PrimitiveWidth.I8: np.int8,
    PrimitiveWidth.I16: np.int16,
    PrimitiveWidth.I32: np.int32,
    PrimitiveWidth.I64: np.int64,
    PrimitiveWidth.ISIZE: np.intp,
    PrimitiveWidth.F32: np.float32,
    PrimitiveWidth.F64: np.float64,
}

# Границы 64-битных целых numpy (через них Python int идёт в float)
_INT64_MIN: Final[int] = -(2**63)
_INT64_MAX: Final[int] = 2**63 - 1
_UINT64_MAX: Final[int] = 2**64 - 1


# =============================================================================
# CAST
# =============================================================================


def _wrap_integer(value: int, dtype: np.dtype) -> int:
    """Wrap целого по модулю 2^bits в диапазон dtype"""
    bits = dtype.itemsize * 8
    wrapped = value % (1 << bits)
    if dtype.kind == "i" and wrapped >= 1 << (bits - 1):
        wrapped -= 1 << bits
    return wrapped


def _saturate_float(value: float, dtype: np.dtype) -> int:
    """Truncation float к нулю с saturation на границах dtype, NaN → 0"""
    value = float(value)
    if math.isnan(value):
        return 0
    info = np.iinfo(dtype)
    if value >= info.max:
        return int(info.max)
    if value <= info.min:
        return int(info.min)
    return int(value)


def cast_scalar(value: Any, width: PrimitiveWidth) -> Any:
    """
    Total cast одного primitive значения в заданную ширину.

    Args:
        value: int / float или numpy integer / floating scalar
        width: Целевая ширина

    Returns:
        numpy scalar целевого dtype

    Raises:
        ElementCapabilityError: Если value не primitive number

    Examples:
        >>> cast_scalar(300, PrimitiveWidth.U8)
        np.uint8(44)
        >>> cast_scalar(-1.5, PrimitiveWidth.I32)
        np.int32(-1)
        >>> cast_scalar(float("nan"), PrimitiveWidth.U16)
        np.uint16(0)
    """
    width = PrimitiveWidth(width)
    dtype = width.dtype

    if width.is_integer:
        if is_integral(value):
            result = _wrap_integer(int(value), dtype)
            if result != value:
                logger.debug("Integer cast wrapped %r to %s %d", value, width.value, result)
        elif is_floating(value):
            result = _saturate_float(value, dtype)
            if result != value:
                logger.debug("Float cast truncated %r to %s %d", value, width.value, result)
        else:
            raise ElementCapabilityError(
                f"cannot cast {type(value).__name__} ({value!r}) to {width.value}"
            )
        return dtype.type(result)

    if not (is_integral(value) or is_floating(value)):
        raise ElementCapabilityError(
            f"cannot cast {type(value).__name__} ({value!r}) to {width.value}"
        )

    source = value
    if isinstance(value, int) and not isinstance(value, bool):
        # Python int → 64-bit numpy целое, чтобы округление в f32 было однократным
        if _INT64_MIN <= value <= _INT64_MAX:
            source = np.int64(value)
        elif 0 <= value <= _UINT64_MAX:
            source = np.uint64(value)

    try:
        with np.errstate(over="ignore"):
            return dtype.type(source)
    except OverflowError:
        # int вне диапазона float64 → ±inf
        logger.debug("Integer %r overflows %s, saturating to inf", value, width.value)
        return dtype.type(math.inf if value > 0 else -math.inf)
