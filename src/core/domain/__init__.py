"""
Domain models and value objects.

Contains the Operation value object, its Operator tag and the result model.
"""

from src.core.domain.operation import (
    SYMBOL_TO_OPERATOR,
    CalculationFailure,
    CalculationResult,
    Operation,
    Operator,
    create_operation,
    evaluate,
)

__all__ = [
    # Operation model
    "Operation",
    "Operator",
    "SYMBOL_TO_OPERATOR",
    "create_operation",
    # Result model
    "CalculationFailure",
    "CalculationResult",
    "evaluate",
]
