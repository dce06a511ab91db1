"""
Operation — Модель арифметической операции

Immutable Pydantic модель: оператор + два decimal операнда.
- Фабрика create_operation: символ ('+', '-', '*', '/') → Operator
- calculate(): точная decimal арифметика с контролем overflow/деления на ноль
- Value equality: равны операторы и численно равны операнды

Result-модель (CalculationResult) позволяет обрабатывать ошибки без
exception: try_calculate() и evaluate() возвращают либо значение, либо
тег ошибки (CalculationErrorKind).
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Final, Mapping, Optional

import structlog
from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.exceptions import (
    ERROR_TYPES,
    CalculationError,
    CalculationErrorKind,
    UnsupportedOperatorError,
)
from src.core.math.arithmetic import (
    checked_add,
    checked_divide,
    checked_multiply,
    checked_subtract,
)
from src.core.math.decimal_safeguards import (
    DEFAULT_ARITHMETIC_CONFIG,
    ArithmeticConfig,
    DecimalInput,
    fit_decimal,
    to_decimal,
    validate_decimal,
)

# Поверх stdlib logger: без configure_logging() debug события не выводятся
logger = structlog.wrap_logger(
    logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
)


# =============================================================================
# ENUMS
# =============================================================================


class Operator(str, Enum):
    """Оператор (значение enum = символ)"""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    @property
    def symbol(self) -> str:
        return self.value


# Явное тотальное отображение символов; всё остальное → UnsupportedOperatorError
SYMBOL_TO_OPERATOR: Final[Mapping[str, Operator]] = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
}


# =============================================================================
# OPERATION MODEL
# =============================================================================


class Operation(BaseModel):
    """
    Арифметическая операция над двумя decimal операндами.

    Immutable модель (frozen=True): поля не меняются после создания.
    Операнды ограничены диапазоном 96-битного decimal; более 28 цифр
    после запятой округляются (ROUND_HALF_EVEN).
    """

    operator: Operator = Field(..., description="Оператор (+, -, *, /)")
    operand1: Decimal = Field(..., description="Левый операнд")
    operand2: Decimal = Field(..., description="Правый операнд")

    model_config = {"frozen": True}  # Immutable

    def __init__(
        self,
        operator: Operator,
        operand1: DecimalInput,
        operand2: DecimalInput,
        **data: Any,
    ) -> None:
        super().__init__(operator=operator, operand1=operand1, operand2=operand2, **data)

    @field_validator("operand1", "operand2", mode="before")
    @classmethod
    def coerce_operand(cls, v: Any) -> Any:
        """float → Decimal через repr (без binary float хвоста)."""
        if isinstance(v, bool):
            raise ValueError("bool is not a valid decimal operand")
        if isinstance(v, float):
            return to_decimal(v)
        return v

    @field_validator("operand1", "operand2")
    @classmethod
    def validate_operand_range(cls, v: Decimal, info) -> Decimal:
        """Операнд должен быть finite и в [MIN, MAX]."""
        validate_decimal(v, info.field_name)
        return fit_decimal(v)

    # -------------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, symbol: str, operand1: DecimalInput, operand2: DecimalInput) -> "Operation":
        """
        Создание операции по символу оператора.

        Args:
            symbol: '+', '-', '*' или '/'
            operand1: Левый операнд
            operand2: Правый операнд

        Returns:
            Operation

        Raises:
            UnsupportedOperatorError: Если символ не поддерживается
        """
        operator = SYMBOL_TO_OPERATOR.get(symbol) if isinstance(symbol, str) else None
        if operator is None:
            raise UnsupportedOperatorError(symbol)
        return cls(operator, operand1, operand2)

    # -------------------------------------------------------------------------
    # Compute
    # -------------------------------------------------------------------------

    def calculate(self, config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG) -> Decimal:
        """
        Вычисление результата операции.

        Чистая функция полей: повторный вызов даёт тот же результат.

        Args:
            config: Профиль диапазона decimal (default: 96-bit)

        Returns:
            Результат, округлённый в представимую форму

        Raises:
            DivisionByZeroError: DIVIDE и operand2 == 0
            NumericOverflowError: Точный результат вне [MIN, MAX]
        """
        if self.operator is Operator.ADD:
            return checked_add(self.operand1, self.operand2, config)
        if self.operator is Operator.SUBTRACT:
            return checked_subtract(self.operand1, self.operand2, config)
        if self.operator is Operator.MULTIPLY:
            return checked_multiply(self.operand1, self.operand2, config)
        if self.operator is Operator.DIVIDE:
            return checked_divide(self.operand1, self.operand2, config)

        # Operator: закрытый enum, сюда попасть нельзя
        raise RuntimeError(f"Unhandled operator: {self.operator!r}")

    def try_calculate(
        self, config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG
    ) -> "CalculationResult":
        """
        Вычисление без exception: ошибка возвращается как тег в результате.

        Returns:
            CalculationResult (ok=True с value, либо ok=False с failure)
        """
        try:
            value = self.calculate(config)
        except CalculationError as exc:
            logger.debug(
                "operation_failed",
                operator=self.operator.value,
                kind=exc.kind.value,
                error=str(exc),
            )
            return CalculationResult.failed(self.operator.symbol, exc, operation=self)

        logger.debug(
            "operation_calculated",
            operator=self.operator.value,
            operand1=str(self.operand1),
            operand2=str(self.operand2),
            value=str(value),
        )
        return CalculationResult(
            ok=True, symbol=self.operator.symbol, operation=self, value=value
        )

    # -------------------------------------------------------------------------
    # Contracts
    # -------------------------------------------------------------------------

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "Operation":
        """
        Создание операции из JSON payload (контракт operation.json).

        Raises:
            jsonschema.ValidationError: Если payload не соответствует схеме
        """
        from src.core.contracts import validate_operation

        validate_operation(dict(data))
        return cls.model_validate(data)

    # -------------------------------------------------------------------------
    # Value equality
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Operation):
            return NotImplemented
        return (
            self.operator is other.operator
            and self.operand1 == other.operand1
            and self.operand2 == other.operand2
        )

    def __hash__(self) -> int:
        # Decimal('1.0') и Decimal('1') имеют одинаковый hash
        return hash((self.operator, self.operand1, self.operand2))


# =============================================================================
# RESULT MODEL
# =============================================================================


class CalculationFailure(BaseModel):
    """Ошибка вычисления: тег + сообщение"""

    kind: CalculationErrorKind
    message: str

    model_config = {"frozen": True}


class CalculationResult(BaseModel):
    """
    Результат вычисления: либо value, либо failure.

    Инвариант: ok ⇔ value is not None ⇔ failure is None.
    operation равен None, если фабрика отвергла символ.
    """

    ok: bool
    symbol: str = Field(..., description="Исходный символ оператора")
    operation: Optional[Operation] = None
    value: Optional[Decimal] = None
    failure: Optional[CalculationFailure] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_outcome(self) -> "CalculationResult":
        if self.ok and (self.value is None or self.failure is not None):
            raise ValueError("successful result requires value and no failure")
        if not self.ok and (self.value is not None or self.failure is None):
            raise ValueError("failed result requires failure and no value")
        return self

    @classmethod
    def failed(
        cls,
        symbol: str,
        error: CalculationError,
        operation: Optional[Operation] = None,
    ) -> "CalculationResult":
        return cls(
            ok=False,
            symbol=symbol,
            operation=operation,
            failure=CalculationFailure(kind=error.kind, message=str(error)),
        )

    def unwrap(self) -> Decimal:
        """
        Значение результата либо исходная ошибка.

        Raises:
            UnsupportedOperatorError, DivisionByZeroError, NumericOverflowError
        """
        if self.ok:
            return self.value  # type: ignore[return-value]

        kind = self.failure.kind  # type: ignore[union-attr]
        if kind is CalculationErrorKind.UNSUPPORTED_OPERATOR:
            raise UnsupportedOperatorError(self.symbol)
        raise ERROR_TYPES[kind](self.failure.message)  # type: ignore[union-attr]


# =============================================================================
# MODULE-LEVEL API
# =============================================================================


def create_operation(symbol: str, operand1: DecimalInput, operand2: DecimalInput) -> Operation:
    """
    Фабрика операции по символу (см. Operation.create).

    Raises:
        UnsupportedOperatorError: Если символ не поддерживается
    """
    return Operation.create(symbol, operand1, operand2)


def evaluate(
    symbol: str,
    operand1: DecimalInput,
    operand2: DecimalInput,
    config: ArithmeticConfig = DEFAULT_ARITHMETIC_CONFIG,
) -> CalculationResult:
    """
    Фабрика + вычисление одним вызовом, без exception для трёх видов ошибок.

    Предназначено для внешнего кода (например, CLI), который сопоставляет
    результат по тегу вместо перехвата исключений.

    Returns:
        CalculationResult
    """
    try:
        operation = Operation.create(symbol, operand1, operand2)
    except UnsupportedOperatorError as exc:
        logger.debug("operation_failed", symbol=str(symbol), kind=exc.kind.value)
        return CalculationResult.failed(str(symbol), exc)

    return operation.try_calculate(config)
