"""
Scalar Arithmetic — поэлементная арифметика компонент вектора

Модуль описывает, что вектор может делать со своими компонентами:
- Capability-проверки элементов (integral / floating / primitive)
- Деление с политикой ошибок типа элемента
- Квадратный корень с сохранением ширины float
- Суммирование строго по возрастанию индекса
- Сравнение float с толерантностью

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Целочисленное деление на ноль → ZeroDivisionError (никогда не мусорное значение)
2. Деление float на ноль → IEEE-754 (±inf / NaN), без exception и без guard
3. Целочисленное деление округляет к нулю (7 / -2 == -3)
4. Порядок суммирования фиксирован: ((p0 + p1) + p2) + ...
5. Float overflow / invalid внутри арифметики → ±inf / NaN без RuntimeWarning
"""

import math
from functools import reduce
from operator import add
from typing import Any, Final, Iterable

import numpy as np

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для is_close
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Абсолютная толерантность для is_close (важна около нуля)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ElementCapabilityError(TypeError):
    """
    Операция требует capability, которой нет у типа элемента.

    Примеры: mag/norm для целочисленного вектора,
    primitive cast для вектора строк.
    """
    pass


# =============================================================================
# CAPABILITY-ПРОВЕРКИ
# =============================================================================


def is_integral(value: Any) -> bool:
    """
    Целое фиксированной или произвольной ширины (int, numpy.integer).

    bool не считается числом: у него нет арифметики ширины.
    """
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, np.integer))


def is_floating(value: Any) -> bool:
    """float или numpy.floating (float16/32/64)."""
    return isinstance(value, (float, np.floating))


def is_primitive(value: Any) -> bool:
    """Значение, поддерживающее primitive cast в любую ширину."""
    return is_integral(value) or is_floating(value)


def require_floating(values: Iterable[Any], operation: str) -> None:
    """
    Проверка, что все компоненты — floating.

    Args:
        values: Компоненты вектора
        operation: Имя операции (для сообщения об ошибке)

    Raises:
        ElementCapabilityError: Если хотя бы одна компонента не floating
    """
    for value in values:
        if not is_floating(value):
            raise ElementCapabilityError(
                f"{operation} requires floating-point components, "
                f"got {type(value).__name__} ({value!r})"
            )


def require_primitive(values: Iterable[Any], operation: str) -> None:
    """
    Проверка, что все компоненты — primitive numbers.

    Raises:
        ElementCapabilityError: Если хотя бы одна компонента не int/float
    """
    for value in values:
        if not is_primitive(value):
            raise ElementCapabilityError(
                f"{operation} requires primitive numeric components, "
                f"got {type(value).__name__} ({value!r})"
            )


# =============================================================================
# IEEE-754 СЕМАНТИКА
# =============================================================================


def ieee_float_semantics() -> np.errstate:
    """
    Контекст, в котором float-арифметика numpy следует IEEE-754 молча.

    Overflow → ±inf, invalid (inf - inf, 0 * inf) → NaN, деление на ноль
    → ±inf / NaN, без RuntimeWarning (и без exception под `-W error`).
    Целочисленная арифметика Python не затрагивается.

    Examples:
        >>> with ieee_float_semantics():
        ...     np.float32(1e20) * np.float32(1e20)
        np.float32(inf)
    """
    return np.errstate(over="ignore", invalid="ignore", divide="ignore", under="ignore")


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def divide(numerator: Any, denominator: Any) -> Any:
    """
    Деление одной пары компонент по правилам типа элемента.

    Политика ошибок:
    - integral / integral: деление с округлением к нулю;
      знаменатель 0 → ZeroDivisionError
    - если хотя бы один операнд floating: IEEE-754 деление,
      x / 0.0 даёт ±inf, 0.0 / 0.0 даёт NaN, без exception
    - иначе (Fraction, Decimal, ...): обычный оператор `/`
      со своей политикой ошибок

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        Частное того же типа, что и операнды

    Raises:
        ZeroDivisionError: Целочисленное деление на ноль

    Examples:
        >>> divide(7, 2)
        3
        >>> divide(-7, 2)
        -3
        >>> divide(1.0, 0.0)
        np.float64(inf)
    """
    if is_integral(numerator) and is_integral(denominator):
        if denominator == 0:
            raise ZeroDivisionError(
                f"integer division by zero: {numerator!r} / {denominator!r}"
            )
        quotient = numerator // denominator
        # floor → truncation при разных знаках и ненулевом остатке
        if numerator % denominator != 0 and (numerator < 0) != (denominator < 0):
            quotient += 1
        return quotient

    if is_floating(numerator) or is_floating(denominator):
        with ieee_float_semantics():
            return np.true_divide(numerator, denominator)

    return numerator / denominator


# =============================================================================
# КОРЕНЬ И СУММИРОВАНИЕ
# =============================================================================


def sqrt(value: Any) -> Any:
    """
    Квадратный корень floating-значения.

    Ширина сохраняется: float32 → float32, float64 → float64.
    NaN и отрицательные значения дают NaN без exception.

    Raises:
        ElementCapabilityError: Если value не floating
    """
    require_floating((value,), "sqrt")
    with ieee_float_semantics():
        return np.sqrt(value)


def sum_in_order(values: Iterable[Any]) -> Any:
    """
    Сумма значений строго по возрастанию индекса.

    Левая свёртка, начиная с первого значения: ((v0 + v1) + v2) + ...
    Для float порядок фиксирует округление, поэтому результат
    воспроизводим побитово.
    Overflow float даёт ±inf, inf + -inf даёт NaN, без warning.

    Raises:
        ValueError: Если values пуст
    """
    items = tuple(values)
    if not items:
        raise ValueError("sum_in_order requires at least one value")
    with ieee_float_semantics():
        return reduce(add, items)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_close(
    a: Any,
    b: Any,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение двух компонент с учётом машинной точности.

    Алгоритм (math.isclose):
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    NaN не близок ничему, включая NaN.

    Examples:
        >>> is_close(1.0, 1.0 + 1e-10)
        True
        >>> is_close(1.0, 1.1)
        False
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
