"""
Calculation Errors — таксономия ошибок операций

Три детерминированных вида ошибок, ни один не подлежит retry:
- UNSUPPORTED_OPERATOR: символ не отображается на Operator
- DIVISION_BY_ZERO: делитель точно равен нулю
- NUMERIC_OVERFLOW: точный результат вне диапазона decimal

Ошибки передаются вызывающему коду как есть (без clamp и fallback).
Решение о повторе или отображении пользователю принимает внешний код.
"""

from enum import Enum
from typing import ClassVar


class CalculationErrorKind(str, Enum):
    """Вид ошибки вычисления (тег для result-модели)"""

    UNSUPPORTED_OPERATOR = "unsupported_operator"
    DIVISION_BY_ZERO = "division_by_zero"
    NUMERIC_OVERFLOW = "numeric_overflow"


class CalculationError(Exception):
    """Базовый класс ошибок вычисления."""

    kind: ClassVar[CalculationErrorKind]


class UnsupportedOperatorError(CalculationError, NotImplementedError):
    """
    Символ оператора не поддерживается.

    Наследует NotImplementedError: это "не реализовано", а не некорректный ввод.
    """

    kind = CalculationErrorKind.UNSUPPORTED_OPERATOR

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Operator symbol {symbol!r} is not supported")


class DivisionByZeroError(CalculationError, ZeroDivisionError):
    """Деление на точный ноль (проверяется до деления)."""

    kind = CalculationErrorKind.DIVISION_BY_ZERO


class NumericOverflowError(CalculationError, OverflowError):
    """Точный результат вне представимого диапазона decimal."""

    kind = CalculationErrorKind.NUMERIC_OVERFLOW


ERROR_TYPES: dict[CalculationErrorKind, type[CalculationError]] = {
    CalculationErrorKind.UNSUPPORTED_OPERATOR: UnsupportedOperatorError,
    CalculationErrorKind.DIVISION_BY_ZERO: DivisionByZeroError,
    CalculationErrorKind.NUMERIC_OVERFLOW: NumericOverflowError,
}
