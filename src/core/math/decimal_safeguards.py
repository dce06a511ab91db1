"""
Decimal Safeguards — представимый диапазон и округление decimal

Модуль задаёт профиль 96-битного decimal (28-29 значащих цифр) поверх
стандартного decimal.Decimal:
- Границы диапазона MIN/MAX и максимальный scale
- Проверка finite (NaN/Infinity недопустимы)
- Коэрсия входных значений в Decimal без binary float ошибок
- Округление точного результата в представимую форму

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Binary float никогда не участвует в вычислениях (float → repr → Decimal)
2. Представимое значение: |x| <= MAX, scale <= 28, коэффициент <= MAX
3. Округление по умолчанию banker's rounding (ROUND_HALF_EVEN); режим из ArithmeticConfig проверяется
4. Все операции детерминированы и не зависят от глобального decimal context
"""

from dataclasses import dataclass
from decimal import (
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
    InvalidOperation,
)
from typing import Final, Union

# =============================================================================
# ПАРАМЕТРЫ ДИАПАЗОНА (96-bit decimal)
# =============================================================================

# Максимальное значение: 2^96 - 1 (мантисса 96 бит, scale 0)
DECIMAL_MAX_VALUE: Final[Decimal] = Decimal(2**96 - 1)

# Минимальное значение симметрично максимуму
DECIMAL_MIN_VALUE: Final[Decimal] = DECIMAL_MAX_VALUE.copy_negate()

# Максимальное количество цифр после запятой
DECIMAL_MAX_SCALE: Final[int] = 28

# Количество значащих цифр в MAX (29)
DECIMAL_MAX_PRECISION: Final[int] = len(str(2**96 - 1))

# Контекст для точных промежуточных вычислений.
# Операнды представимы (<= 29 цифр, scale <= 28), поэтому сумма и
# произведение укладываются в prec без округления.
EXACT_CONTEXT: Final[Context] = Context(
    prec=200,
    rounding=ROUND_HALF_EVEN,
    Emax=999_999,
    Emin=-999_999,
)

# Режимы округления модуля decimal
DECIMAL_ROUNDING_MODES: Final[frozenset[str]] = frozenset(
    {
        ROUND_05UP,
        ROUND_CEILING,
        ROUND_DOWN,
        ROUND_FLOOR,
        ROUND_HALF_DOWN,
        ROUND_HALF_EVEN,
        ROUND_HALF_UP,
        ROUND_UP,
    }
)

DecimalInput = Union[Decimal, int, str, float]


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class ArithmeticConfig:
    """
    Конфигурация представимого диапазона decimal.

    По умолчанию соответствует 96-битному decimal:
    - max_value: 79228162514264337593543950335
    - max_scale: 28
    - rounding: ROUND_HALF_EVEN
    """

    max_value: Decimal = DECIMAL_MAX_VALUE
    max_scale: int = DECIMAL_MAX_SCALE
    rounding: str = ROUND_HALF_EVEN

    def __post_init__(self) -> None:
        if not isinstance(self.max_value, Decimal) or not self.max_value.is_finite():
            raise ValueError(f"max_value must be a finite Decimal, got {self.max_value!r}")
        if self.max_value <= 0 or self.max_value != self.max_value.to_integral_value():
            raise ValueError(f"max_value must be a positive integer, got {self.max_value}")
        if self.max_scale < 0:
            raise ValueError(f"max_scale must be non-negative, got {self.max_scale}")
        if self.rounding not in DECIMAL_ROUNDING_MODES:
            raise ValueError(f"rounding must be a decimal ROUND_* mode, got {self.rounding!r}")

    @property
    def min_value(self) -> Decimal:
        return self.max_value.copy_negate()

    @property
    def max_precision(self) -> int:
        """Количество значащих цифр в max_value."""
        return len(str(int(self.max_value)))


DEFAULT_ARITHMETIC_CONFIG: Final[ArithmeticConfig] = ArithmeticConfig()


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_decimal(value: Decimal) -> bool:
    """
    Проверка, является ли Decimal конечным (не NaN, не Infinity).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite
    """
    return value.is_finite()


def is_in_decimal_range(
    value: Decimal,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> bool:
    """
    Проверка попадания точного значения в [MIN, MAX].

    Examples:
        >>> is_in_decimal_range(DECIMAL_MAX_VALUE)
        True
        >>> is_in_decimal_range(Decimal("1E+29"))
        False
    """
    return is_valid_decimal(value) and config.min_value <= value <= config.max_value


def to_decimal(value: DecimalInput) -> Decimal:
    """
    Коэрсия входного значения в Decimal.

    float конвертируется через repr, чтобы 5.4 стал Decimal('5.4'),
    а не Decimal('5.4000000000000003552713678800500929355621337890625').

    Args:
        value: Decimal, int, str или float

    Returns:
        Decimal

    Raises:
        ValueError: Если строку невозможно разобрать как число
        TypeError: Для прочих типов (включая bool)
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a valid decimal operand")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Invalid decimal literal: {value!r}") from None
    raise TypeError(f"Unsupported operand type: {type(value).__name__}")


def validate_decimal(
    value: Decimal,
    name: str,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> None:
    """
    Валидация, что значение finite и в представимом диапазоне.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        config: Профиль диапазона

    Raises:
        ValueError: Если value NaN/Infinity или вне [MIN, MAX]
    """
    if not is_valid_decimal(value):
        raise ValueError(f"{name} must be a finite decimal (not NaN/Infinity), got {value}")

    if not is_in_decimal_range(value, config):
        raise ValueError(
            f"{name} must be within [{config.min_value}, {config.max_value}], got {value}"
        )


# =============================================================================
# ОКРУГЛЕНИЕ В ПРЕДСТАВИМУЮ ФОРМУ
# =============================================================================


def _coefficient(value: Decimal) -> int:
    return int("".join(str(d) for d in value.as_tuple().digits))


def fit_decimal(
    value: Decimal,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> Decimal:
    """
    Округление точного значения в представимую форму.

    Шаги:
    1. Если scale > max_scale → quantize до max_scale цифр после запятой
    2. Округление до max_precision значащих цифр
    3. Если коэффициент всё ещё > max_value → на одну цифру меньше

    Значение должно быть уже проверено на диапазон (|value| <= max_value).

    Examples:
        >>> fit_decimal(Decimal(1) / Decimal(3))
        Decimal('0.3333333333333333333333333333')
        >>> fit_decimal(Decimal("1.5"))
        Decimal('1.5')
    """
    result = value
    if result.as_tuple().exponent < -config.max_scale:
        result = result.quantize(
            Decimal(1).scaleb(-config.max_scale),
            rounding=config.rounding,
            context=EXACT_CONTEXT,
        )

    # Значения с max_precision цифрами могут не уместиться в коэффициент
    for precision in (config.max_precision, max(config.max_precision - 1, 1)):
        context = Context(prec=precision, rounding=config.rounding, Emax=999_999, Emin=-999_999)
        rounded = context.plus(result)
        if _coefficient(rounded) <= config.max_value:
            return rounded

    raise ValueError(f"Value {value} cannot be fitted into decimal range")
