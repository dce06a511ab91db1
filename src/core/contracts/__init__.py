"""
Contract Validation Module

Модуль для валидации JSON контрактов операций и результатов.
"""

from .validators import (
    CalculationResultValidator,
    ContractValidator,
    OperationValidator,
    SchemaLoader,
    validate_calculation_result,
    validate_operation,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "OperationValidator",
    "CalculationResultValidator",
    # Functions
    "validate_operation",
    "validate_calculation_result",
]
