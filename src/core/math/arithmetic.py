"""
Checked Arithmetic — сложение, вычитание, умножение, деление с контролем диапазона

Модуль реализует четыре арифметических примитива над Decimal:
- Точное вычисление в широком контексте (EXACT_CONTEXT)
- Проверка точного результата на выход за [MIN, MAX]
- Округление результата в представимую форму (fit_decimal)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на точный ноль → DivisionByZeroError (приоритет над overflow)
2. Точный результат вне [MIN, MAX] → NumericOverflowError
3. Никакого clamp: ошибки всегда пропагируют к вызывающему
4. Операнды должны быть представимы (см. validate_decimal)
"""

from decimal import Decimal

from src.core.exceptions import DivisionByZeroError, NumericOverflowError
from src.core.math.decimal_safeguards import (
    DEFAULT_ARITHMETIC_CONFIG,
    EXACT_CONTEXT,
    ArithmeticConfig,
    fit_decimal,
    is_in_decimal_range,
)


def _finish(exact: Decimal, operation: str, config: ArithmeticConfig) -> Decimal:
    """Range check точного результата и округление."""
    if not is_in_decimal_range(exact, config):
        raise NumericOverflowError(
            f"{operation} result {exact} is outside "
            f"[{config.min_value}, {config.max_value}]"
        )
    return fit_decimal(exact, config)


def checked_add(
    a: Decimal,
    b: Decimal,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> Decimal:
    """
    Сложение a + b.

    Raises:
        NumericOverflowError: если точная сумма вне диапазона

    Examples:
        >>> checked_add(Decimal("1"), Decimal("2"))
        Decimal('3')
    """
    return _finish(EXACT_CONTEXT.add(a, b), "add", config)


def checked_subtract(
    a: Decimal,
    b: Decimal,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> Decimal:
    """
    Вычитание a - b.

    Raises:
        NumericOverflowError: если точная разность вне диапазона
    """
    return _finish(EXACT_CONTEXT.subtract(a, b), "subtract", config)


def checked_multiply(
    a: Decimal,
    b: Decimal,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> Decimal:
    """
    Умножение a * b.

    Произведение двух представимых операндов имеет не более 58 значащих
    цифр, поэтому EXACT_CONTEXT вычисляет его без округления.

    Raises:
        NumericOverflowError: если точное произведение вне диапазона
    """
    return _finish(EXACT_CONTEXT.multiply(a, b), "multiply", config)


def checked_divide(
    a: Decimal,
    b: Decimal,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> Decimal:
    """
    Деление a / b.

    Частное может быть бесконечной дробью, поэтому диапазон проверяется
    до деления: |a / b| > MAX ⇔ |a| > MAX * |b| (точное умножение).

    Raises:
        DivisionByZeroError: если b == 0 (независимо от a)
        NumericOverflowError: если точное частное вне диапазона

    Examples:
        >>> checked_divide(Decimal("1"), Decimal("4"))
        Decimal('0.25')
        >>> checked_divide(Decimal("1"), Decimal("3"))
        Decimal('0.3333333333333333333333333333')
    """
    if b.is_zero():
        raise DivisionByZeroError(f"Division of {a} by zero")

    if a.copy_abs() > EXACT_CONTEXT.multiply(config.max_value, b.copy_abs()):
        raise NumericOverflowError(
            f"divide result {a} / {b} is outside "
            f"[{config.min_value}, {config.max_value}]"
        )

    # Запас цифр сверх max_precision для корректного финального округления
    quotient = EXACT_CONTEXT.divide(a, b)
    return fit_decimal(quotient, config)
