"""
Vector — векторы фиксированной арности (2, 3, 4)

Immutable Pydantic модели Vec2 / Vec3 / Vec4, generic по типу элемента.
Вся логика реализована один раз в VectorBase; арность определяется
набором полей подкласса (x, y[, z[, w]]).

Слои:
- Container & Transform: map, zipmap, as_array, as_tuple
- Arithmetic: + - * / (вектор-вектор и вектор-скаляр), унарный -, in-place формы
- Primitive Conversion: as_u8 ... as_f64, cast
- Geometry: dot, mag_sq, mag, norm, proj, cross (только Vec3)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Арность фиксирована; операции между разными арностями → TypeError
2. map/zipmap вычисляют все компоненты до создания результата
3. Порядок вычисления компонент и суммирования в dot: 0..N-1
4. a ⊕= b означает a = a ⊕ b (замена значения целиком, без мутации)
5. norm/proj не защищены от нулевого знаменателя: float → NaN/inf,
   integer → ZeroDivisionError
"""

import logging
import operator
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, NamedTuple, TypeVar

from pydantic import BaseModel

from src.core.math.primitive_casts import PrimitiveWidth, cast_scalar
from src.core.math.scalar_arithmetic import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    divide,
    ieee_float_semantics,
    is_close,
    require_floating,
    require_primitive,
    sqrt,
    sum_in_order,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")


# =============================================================================
# LABELED TUPLES
# =============================================================================


class XY(NamedTuple):
    x: Any
    y: Any


class XYZ(NamedTuple):
    x: Any
    y: Any
    z: Any


class XYZW(NamedTuple):
    x: Any
    y: Any
    z: Any
    w: Any


_LABELED_TUPLES: dict[int, type] = {2: XY, 3: XYZ, 4: XYZW}


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class VectorComparisonConfig:
    """Конфигурация приближённых сравнений векторов.

    Используется в is_close / is_unit. Точное сравнение (==)
    от конфигурации не зависит.
    """

    rel_tol: float = EPS_FLOAT_COMPARE_REL
    abs_tol: float = EPS_FLOAT_COMPARE_ABS


_DEFAULT_COMPARISON = VectorComparisonConfig()


# =============================================================================
# VECTOR BASE
# =============================================================================


class VectorBase(BaseModel, Generic[T]):
    """
    Общая реализация вектора фиксированной арности.

    Подклассы объявляют только поля компонент. Все операции
    возвращают новый экземпляр; компоненты изменить нельзя (frozen=True).

    Конструирование:
        Vec3(1, 2, 3)            # позиционно, все N компонент
        Vec3(x=1, y=2, z=3)      # по именам
        Vec3[float](1, 2, 3)     # с pydantic-валидацией типа элемента
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    # numpy scalar * vector должен уходить в __rmul__, а не в broadcast
    __array_ufunc__ = None

    def __init__(self, *components: T, **named: T) -> None:
        if components:
            names = self.component_names()
            if named or len(components) != len(names):
                raise TypeError(
                    f"{type(self).__name__} expects exactly {len(names)} components, "
                    f"got {len(components)} positional and {len(named)} named"
                )
            named = dict(zip(names, components))
        if not self.component_names():
            raise TypeError("VectorBase has no components; use Vec2, Vec3 or Vec4")
        super().__init__(**named)

    # -------------------------------------------------------------------------
    # Арность и конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def component_names(cls) -> tuple[str, ...]:
        """Имена компонент в порядке индекса"""
        return tuple(cls.model_fields)

    @classmethod
    def arity(cls) -> int:
        return len(cls.model_fields)

    @classmethod
    def _vector_class(cls) -> type:
        # Vec3[float] → Vec3: результат map может иметь другой тип элемента
        return cls.__pydantic_generic_metadata__["origin"] or cls

    @classmethod
    def from_array(cls, values: Iterable[T]) -> "VectorBase[T]":
        """
        Создание вектора из последовательности ровно N значений.

        Raises:
            TypeError: Если длина последовательности != арности
        """
        items = tuple(values)
        if len(items) != cls.arity():
            raise TypeError(
                f"{cls.__name__} expects exactly {cls.arity()} values, got {len(items)}"
            )
        return cls(*items)

    @classmethod
    def zero(cls, element_type: Callable[[int], T] = int) -> "VectorBase[T]":
        """
        Нулевой вектор: все компоненты равны element_type(0).

        Args:
            element_type: Тип элемента с определённым нулём
                (int, float, numpy.float32, Fraction, ...)
        """
        return cls(*(element_type(0) for _ in range(cls.arity())))

    # -------------------------------------------------------------------------
    # Container & Transform
    # -------------------------------------------------------------------------

    def as_array(self) -> tuple:
        """Компоненты как tuple фиксированной длины N"""
        return tuple(getattr(self, name) for name in self.component_names())

    def as_tuple(self) -> NamedTuple:
        """Компоненты как именованный tuple (XY / XYZ / XYZW)"""
        return _LABELED_TUPLES[self.arity()](*self.as_array())

    def map(self, operator_: Callable[[T], U]) -> "VectorBase[U]":
        """
        Применение унарной функции к каждой компоненте.

        Компоненты обрабатываются по возрастанию индекса. Результат
        создаётся только после вычисления всех N значений: если
        operator_ падает на любой компоненте, вектор не создаётся.
        Float overflow / invalid внутри operator_ дают ±inf / NaN без warning.

        Args:
            operator_: Функция T → U

        Returns:
            Новый вектор той же арности над типом U
        """
        with ieee_float_semantics():
            results = tuple(operator_(component) for component in self.as_array())
        return self._vector_class()(*results)

    def zipmap(
        self, other: "VectorBase[U]", operator_: Callable[[T, U], V]
    ) -> "VectorBase[V]":
        """
        Применение бинарной функции к парам компонент с одинаковым индексом.

        Args:
            other: Вектор той же арности
            operator_: Функция (T, U) → V

        Returns:
            Новый вектор той же арности над типом V

        Raises:
            TypeError: Если other не вектор той же арности
        """
        self._require_peer(other, "zipmap")
        with ieee_float_semantics():
            results = tuple(
                operator_(a, b) for a, b in zip(self.as_array(), other.as_array())
            )
        return self._vector_class()(*results)

    def _is_peer(self, other: Any) -> bool:
        return isinstance(other, VectorBase) and other.arity() == self.arity()

    def _require_peer(self, other: Any, operation: str) -> None:
        if not self._is_peer(other):
            raise TypeError(
                f"{operation} requires a vector of arity {self.arity()}, "
                f"got {type(other).__name__}"
            )

    # -------------------------------------------------------------------------
    # Sequence protocol, equality, hash
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return self.arity()

    def __getitem__(self, index: int) -> T:
        return self.as_array()[index]

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.as_array())

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, VectorBase):
            return NotImplemented
        if other.arity() != self.arity():
            return False
        # по возрастанию индекса, до первого несовпадения
        return all(a == b for a, b in zip(self.as_array(), other.as_array()))

    def __hash__(self) -> int:
        return hash(self.as_array())

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Any) -> "VectorBase[T]":
        if not self._is_peer(other):
            return NotImplemented
        return self.zipmap(other, operator.add)

    def __sub__(self, other: Any) -> "VectorBase[T]":
        if not self._is_peer(other):
            return NotImplemented
        return self.zipmap(other, operator.sub)

    def __mul__(self, other: Any) -> "VectorBase[T]":
        if isinstance(other, VectorBase):
            if not self._is_peer(other):
                return NotImplemented
            return self.zipmap(other, operator.mul)
        return self.map(lambda component: component * other)

    def __rmul__(self, other: Any) -> "VectorBase[T]":
        if isinstance(other, VectorBase):
            return NotImplemented
        return self.map(lambda component: other * component)

    def __truediv__(self, other: Any) -> "VectorBase[T]":
        """
        Деление: вектор / вектор поэлементно или вектор / скаляр.

        Integer: округление к нулю, деление на 0 → ZeroDivisionError.
        Float: IEEE-754, деление на 0 → ±inf / NaN без exception.
        """
        if isinstance(other, VectorBase):
            if not self._is_peer(other):
                return NotImplemented
            return self.zipmap(other, divide)
        return self.map(lambda component: divide(component, other))

    def __neg__(self) -> "VectorBase[T]":
        return self.map(operator.neg)

    # a ⊕= b → a = a ⊕ b; сам экземпляр не мутирует
    def __iadd__(self, other: Any) -> "VectorBase[T]":
        return self.__add__(other)

    def __isub__(self, other: Any) -> "VectorBase[T]":
        return self.__sub__(other)

    def __imul__(self, other: Any) -> "VectorBase[T]":
        return self.__mul__(other)

    def __itruediv__(self, other: Any) -> "VectorBase[T]":
        return self.__truediv__(other)

    # -------------------------------------------------------------------------
    # Primitive Conversion
    # -------------------------------------------------------------------------

    def cast(self, width: PrimitiveWidth | str) -> "VectorBase[Any]":
        """
        Поэлементный primitive cast в заданную ширину.

        Правила: int → int wrap, float → int truncation + saturation
        (NaN → 0), → float ближайшее значение. Cast total.

        Raises:
            ElementCapabilityError: Если компоненты не int/float
        """
        width = PrimitiveWidth(width)
        require_primitive(self.as_array(), f"as_{width.value}")
        return self.map(lambda component: cast_scalar(component, width))

    def as_u8(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.U8)

    def as_u16(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.U16)

    def as_u32(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.U32)

    def as_u64(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.U64)

    def as_usize(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.USIZE)

    def as_i8(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.I8)

    def as_i16(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.I16)

    def as_i32(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.I32)

    def as_i64(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.I64)

    def as_isize(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.ISIZE)

    def as_f32(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.F32)

    def as_f64(self) -> "VectorBase[Any]":
        return self.cast(PrimitiveWidth.F64)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def dot(self, other: "VectorBase[T]") -> T:
        """
        Скалярное произведение: Σ a[i]·b[i].

        Суммирование строго по возрастанию индекса, поэтому результат
        для float воспроизводим побитово.

        Raises:
            TypeError: Если other не вектор той же арности
        """
        self._require_peer(other, "dot")
        return sum_in_order(self * other)

    def mag_sq(self) -> T:
        """Квадрат длины: dot(self, self)"""
        return self.dot(self)

    def mag(self) -> T:
        """
        Длина вектора: sqrt(mag_sq).

        Определена только для floating компонент; ширина float сохраняется.

        Raises:
            ElementCapabilityError: Если компоненты не floating
        """
        require_floating(self.as_array(), "mag")
        return sqrt(self.mag_sq())

    def norm(self) -> "VectorBase[T]":
        """
        Единичный вектор того же направления: self / mag.

        Нулевой вектор не проверяется: 0 / 0 даёт NaN в каждой
        компоненте, exception не возникает. Обработку выполняет
        вызывающий код.

        Raises:
            ElementCapabilityError: Если компоненты не floating
        """
        require_floating(self.as_array(), "norm")
        magnitude = self.mag()
        if magnitude == 0:
            logger.debug("Normalizing zero-length %r, components become NaN", self)
        return self / magnitude

    def proj(self, onto: "VectorBase[T]") -> "VectorBase[T]":
        """
        Проекция self на вектор onto: onto * (dot(self, onto) / dot(onto, onto)).

        Вырожденный onto (dot(onto, onto) == 0) не проверяется:
        float → NaN компоненты, integer → ZeroDivisionError.
        """
        self._require_peer(onto, "proj")
        denominator = onto.dot(onto)
        if denominator == 0:
            logger.debug("Projecting onto degenerate vector %r", onto)
        return onto * divide(self.dot(onto), denominator)

    def is_close(
        self, other: "VectorBase[T]", config: VectorComparisonConfig | None = None
    ) -> bool:
        """Поэлементное сравнение с толерантностью (см. VectorComparisonConfig)"""
        self._require_peer(other, "is_close")
        cfg = config or _DEFAULT_COMPARISON
        return all(
            is_close(a, b, rel_tol=cfg.rel_tol, abs_tol=cfg.abs_tol)
            for a, b in zip(self.as_array(), other.as_array())
        )

    def is_unit(self, config: VectorComparisonConfig | None = None) -> bool:
        """Длина равна 1 с точностью до толерантности (только floating)"""
        cfg = config or _DEFAULT_COMPARISON
        return is_close(self.mag(), 1.0, rel_tol=cfg.rel_tol, abs_tol=cfg.abs_tol)


# =============================================================================
# ARITY 2 / 3 / 4
# =============================================================================


class Vec2(VectorBase[T], Generic[T]):
    """Вектор из 2 компонент (x, y)"""

    x: T
    y: T


class Vec3(VectorBase[T], Generic[T]):
    """Вектор из 3 компонент (x, y, z)"""

    x: T
    y: T
    z: T

    def cross(self, other: "Vec3[T]") -> "Vec3[T]":
        """
        Векторное произведение (только для арности 3).

        (a.y·b.z − a.z·b.y, a.z·b.x − a.x·b.z, a.x·b.y − a.y·b.x)

        Raises:
            TypeError: Если other не Vec3
        """
        self._require_peer(other, "cross")
        ax, ay, az = self.as_array()
        bx, by, bz = other.as_array()
        with ieee_float_semantics():
            components = (
                ay * bz - az * by,
                az * bx - ax * bz,
                ax * by - ay * bx,
            )
        return self._vector_class()(*components)


class Vec4(VectorBase[T], Generic[T]):
    """Вектор из 4 компонент (x, y, z, w)"""

    x: T
    y: T
    z: T
    w: T


# =============================================================================
# FACTORIES
# =============================================================================


def vec2(x: T, y: T) -> Vec2[T]:
    return Vec2(x, y)


def vec3(x: T, y: T, z: T) -> Vec3[T]:
    return Vec3(x, y, z)


def vec4(x: T, y: T, z: T, w: T) -> Vec4[T]:
    return Vec4(x, y, z, w)
