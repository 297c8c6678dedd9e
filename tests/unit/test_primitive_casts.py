"""
Тесты для модуля Primitive Casts

Проверяет:
1. Все поддерживаемые ширины и их dtype
2. int → int: wrap по модулю 2^bits
3. float → int: truncation, saturation, NaN → 0
4. → float: округление к ближайшему, overflow → inf
5. Отказ для не-primitive значений
"""

import math

import numpy as np
import pytest

from src.core.math.primitive_casts import PrimitiveWidth, cast_scalar
from src.core.math.scalar_arithmetic import ElementCapabilityError


# =============================================================================
# WIDTH TESTS
# =============================================================================


class TestPrimitiveWidth:
    """Тесты для PrimitiveWidth"""

    def test_twelve_widths(self) -> None:
        assert len(PrimitiveWidth) == 12

    def test_lookup_by_value(self) -> None:
        assert PrimitiveWidth("u8") is PrimitiveWidth.U8
        assert PrimitiveWidth("f64") is PrimitiveWidth.F64

    def test_pointer_sized_widths(self) -> None:
        """usize / isize соответствуют uintp / intp платформы"""
        assert PrimitiveWidth.USIZE.dtype == np.dtype(np.uintp)
        assert PrimitiveWidth.ISIZE.dtype == np.dtype(np.intp)

    def test_integer_flag(self) -> None:
        assert PrimitiveWidth.I8.is_integer
        assert PrimitiveWidth.U64.is_integer
        assert not PrimitiveWidth.F32.is_integer

    @pytest.mark.parametrize("width", list(PrimitiveWidth))
    def test_cast_returns_target_dtype(self, width: PrimitiveWidth) -> None:
        """Каждая ширина даёт numpy scalar своего dtype"""
        result = cast_scalar(7, width)
        assert result == 7
        assert result.dtype == width.dtype


# =============================================================================
# INTEGER → INTEGER
# =============================================================================


class TestIntegerToInteger:
    """int → int: wrap по модулю 2^bits"""

    def test_in_range_unchanged(self) -> None:
        assert cast_scalar(100, PrimitiveWidth.I8) == 100
        assert cast_scalar(-100, PrimitiveWidth.I64) == -100

    def test_unsigned_wrap(self) -> None:
        assert cast_scalar(300, PrimitiveWidth.U8) == 44
        assert cast_scalar(-1, PrimitiveWidth.U8) == 255
        assert cast_scalar(-1, PrimitiveWidth.U16) == 65535
        assert cast_scalar(2**32 + 5, PrimitiveWidth.U32) == 5

    def test_signed_wrap(self) -> None:
        """two's complement для signed"""
        assert cast_scalar(128, PrimitiveWidth.I8) == -128
        assert cast_scalar(255, PrimitiveWidth.I8) == -1
        assert cast_scalar(2**15, PrimitiveWidth.I16) == -(2**15)

    def test_numpy_source(self) -> None:
        result = cast_scalar(np.int64(-2), PrimitiveWidth.U32)
        assert result == 2**32 - 2
        assert isinstance(result, np.uint32)


# =============================================================================
# FLOAT → INTEGER
# =============================================================================


class TestFloatToInteger:
    """float → int: truncation к нулю, saturation, NaN → 0"""

    def test_truncation(self) -> None:
        assert cast_scalar(3.9, PrimitiveWidth.I32) == 3
        assert cast_scalar(-3.9, PrimitiveWidth.I32) == -3
        assert cast_scalar(np.float32(2.5), PrimitiveWidth.U8) == 2

    def test_saturation(self) -> None:
        assert cast_scalar(1e10, PrimitiveWidth.I32) == 2**31 - 1
        assert cast_scalar(-1e10, PrimitiveWidth.I32) == -(2**31)
        assert cast_scalar(300.0, PrimitiveWidth.U8) == 255
        assert cast_scalar(-5.0, PrimitiveWidth.U8) == 0

    def test_infinity_saturates(self) -> None:
        assert cast_scalar(math.inf, PrimitiveWidth.I64) == 2**63 - 1
        assert cast_scalar(-math.inf, PrimitiveWidth.I64) == -(2**63)

    def test_nan_becomes_zero(self) -> None:
        assert cast_scalar(math.nan, PrimitiveWidth.U16) == 0
        assert cast_scalar(math.nan, PrimitiveWidth.I8) == 0


# =============================================================================
# → FLOAT
# =============================================================================


class TestToFloat:
    """→ float: ближайшее представимое значение"""

    def test_exact_integers(self) -> None:
        assert cast_scalar(4, PrimitiveWidth.F32) == 4.0
        assert cast_scalar(4, PrimitiveWidth.F64) == 4.0

    def test_rounds_to_nearest(self) -> None:
        """2^24 + 1 не представимо в float32"""
        assert cast_scalar(2**24 + 1, PrimitiveWidth.F32) == 2.0**24

    def test_python_int_rounds_once(self) -> None:
        """
        int → f32 округляется один раз, без промежуточного float64.

        2^60 + 2^36 + 1 чуть выше середины между соседними float32:
        через float64 получился бы tie → 2^60, напрямую → 2^60 + 2^37.
        """
        value = 2**60 + 2**36 + 1
        expected = np.float32(2.0**60 + 2.0**37)

        assert cast_scalar(value, PrimitiveWidth.F32) == expected
        assert cast_scalar(-value, PrimitiveWidth.F32) == -expected
        assert cast_scalar(value, PrimitiveWidth.F32) == cast_scalar(
            np.int64(value), PrimitiveWidth.F32
        )

    def test_python_int_above_int64_rounds_once(self) -> None:
        """Значения в диапазоне u64 тоже округляются напрямую"""
        value = 2**63 + 2**39 + 1
        result = cast_scalar(value, PrimitiveWidth.F32)
        assert result == np.float32(2.0**63 + 2.0**40)
        assert result == cast_scalar(np.uint64(value), PrimitiveWidth.F32)

    def test_narrowing_overflow_gives_inf(self) -> None:
        assert math.isinf(cast_scalar(1e300, PrimitiveWidth.F32))

    def test_huge_integer_gives_inf(self) -> None:
        assert cast_scalar(10**400, PrimitiveWidth.F64) == math.inf
        assert cast_scalar(-(10**400), PrimitiveWidth.F64) == -math.inf

    def test_nan_preserved(self) -> None:
        assert math.isnan(cast_scalar(math.nan, PrimitiveWidth.F32))


# =============================================================================
# INVALID INPUT
# =============================================================================


class TestInvalidInput:
    """Не-primitive значения отклоняются"""

    def test_string_rejected(self) -> None:
        with pytest.raises(ElementCapabilityError, match="cannot cast str"):
            cast_scalar("1", PrimitiveWidth.I32)

        with pytest.raises(ElementCapabilityError):
            cast_scalar("1", PrimitiveWidth.F64)

    def test_bool_rejected(self) -> None:
        with pytest.raises(ElementCapabilityError):
            cast_scalar(True, PrimitiveWidth.U8)

    def test_unknown_width_rejected(self) -> None:
        with pytest.raises(ValueError):
            cast_scalar(1, "u128")
