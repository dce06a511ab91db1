"""
Core math modules

Decimal-примитивы с гарантией точности и контролем диапазона.
"""

# Decimal Safeguards
from src.core.math.decimal_safeguards import (
    # Range constants
    DECIMAL_MAX_PRECISION,
    DECIMAL_MAX_SCALE,
    DECIMAL_ROUNDING_MODES,
    DECIMAL_MAX_VALUE,
    DECIMAL_MIN_VALUE,
    DEFAULT_ARITHMETIC_CONFIG,
    EXACT_CONTEXT,
    # Config
    ArithmeticConfig,
    DecimalInput,
    # Checks & coercion
    fit_decimal,
    is_in_decimal_range,
    is_valid_decimal,
    to_decimal,
    validate_decimal,
)

# Checked Arithmetic
from src.core.math.arithmetic import (
    checked_add,
    checked_divide,
    checked_multiply,
    checked_subtract,
)

__all__ = [
    # Decimal Safeguards — Range constants
    "DECIMAL_MAX_PRECISION",
    "DECIMAL_MAX_SCALE",
    "DECIMAL_ROUNDING_MODES",
    "DECIMAL_MAX_VALUE",
    "DECIMAL_MIN_VALUE",
    "DEFAULT_ARITHMETIC_CONFIG",
    "EXACT_CONTEXT",
    # Decimal Safeguards — Config
    "ArithmeticConfig",
    "DecimalInput",
    # Decimal Safeguards — Checks & coercion
    "fit_decimal",
    "is_in_decimal_range",
    "is_valid_decimal",
    "to_decimal",
    "validate_decimal",
    # Checked Arithmetic
    "checked_add",
    "checked_divide",
    "checked_multiply",
    "checked_subtract",
]
