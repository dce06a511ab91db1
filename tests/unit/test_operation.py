"""
Тесты для модели Operation

Проверяет:
1. Фабрику create_operation (символ → Operator)
2. Точную decimal арифметику calculate()
3. Деление на ноль и overflow на границах диапазона
4. Value equality / inequality / hash
5. Immutability (frozen=True) и валидацию операндов
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.domain import Operation, Operator, create_operation
from src.core.exceptions import (
    CalculationError,
    DivisionByZeroError,
    NumericOverflowError,
    UnsupportedOperatorError,
)
from src.core.math import DECIMAL_MAX_VALUE, DECIMAL_MIN_VALUE

MAX = DECIMAL_MAX_VALUE
MIN = DECIMAL_MIN_VALUE
ZERO = Decimal(0)
ONE = Decimal(1)

OPERAND_PAIRS = [
    (Decimal("1"), Decimal("2")),
    (Decimal("-3"), Decimal("4")),
    (Decimal("5.4"), Decimal("-6")),
    (Decimal("-2"), Decimal("-4.93")),
]


# =============================================================================
# ФАБРИКА
# =============================================================================


class TestCreateOperation:
    """Тесты фабрики create_operation"""

    @pytest.mark.parametrize(
        "symbol,expected",
        [
            ("+", Operation(Operator.ADD, ONE, ONE)),
            ("-", Operation(Operator.SUBTRACT, ONE, ONE)),
            ("*", Operation(Operator.MULTIPLY, ONE, ONE)),
            ("/", Operation(Operator.DIVIDE, ONE, ONE)),
        ],
    )
    def test_creates_expected_operation(self, symbol: str, expected: Operation) -> None:
        """Каждый поддерживаемый символ создаёт соответствующую операцию"""
        assert create_operation(symbol, ONE, ONE) == expected

    def test_classmethod_matches_module_function(self) -> None:
        """Operation.create и create_operation эквивалентны"""
        assert Operation.create("*", 2, 3) == create_operation("*", 2, 3)

    def test_invalid_symbol_raises(self) -> None:
        """Неизвестный символ → UnsupportedOperatorError"""
        with pytest.raises(UnsupportedOperatorError) as exc_info:
            create_operation("d", ZERO, ZERO)

        assert exc_info.value.symbol == "d"
        assert "'d'" in str(exc_info.value)

    def test_invalid_symbol_is_not_implemented(self) -> None:
        """UnsupportedOperatorError совместим с NotImplementedError"""
        with pytest.raises(NotImplementedError):
            create_operation("d", ZERO, ZERO)

    @pytest.mark.parametrize("symbol", ["", "++", "x", "%", "^", " +"])
    def test_other_symbols_rejected(self, symbol: str) -> None:
        """Пустые, многосимвольные и прочие символы отвергаются"""
        with pytest.raises(UnsupportedOperatorError):
            create_operation(symbol, ONE, ONE)

    @pytest.mark.parametrize("symbol", [None, ["+"], ("+",), 43])
    def test_non_string_symbols_rejected(self, symbol: object) -> None:
        """Не-строки (включая unhashable) отвергаются как неподдерживаемые"""
        with pytest.raises(UnsupportedOperatorError) as exc_info:
            create_operation(symbol, ONE, ONE)  # type: ignore[arg-type]

        assert exc_info.value.symbol == symbol

    def test_symbol_roundtrip(self) -> None:
        """Operator.symbol возвращает исходный символ"""
        for symbol in "+-*/":
            assert create_operation(symbol, ONE, ONE).operator.symbol == symbol


# =============================================================================
# ВЫЧИСЛЕНИЕ
# =============================================================================


class TestCalculate:
    """Тесты calculate(): точная decimal арифметика"""

    @pytest.mark.parametrize("num1,num2", OPERAND_PAIRS)
    def test_addition(self, num1: Decimal, num2: Decimal) -> None:
        assert Operation(Operator.ADD, num1, num2).calculate() == num1 + num2

    @pytest.mark.parametrize("num1,num2", OPERAND_PAIRS)
    def test_subtraction(self, num1: Decimal, num2: Decimal) -> None:
        assert Operation(Operator.SUBTRACT, num1, num2).calculate() == num1 - num2

    @pytest.mark.parametrize("num1,num2", OPERAND_PAIRS)
    def test_multiplication(self, num1: Decimal, num2: Decimal) -> None:
        assert Operation(Operator.MULTIPLY, num1, num2).calculate() == num1 * num2

    @pytest.mark.parametrize(
        "num1,num2,expected",
        [
            (Decimal("1"), Decimal("4"), Decimal("0.25")),
            (Decimal("-7"), Decimal("2"), Decimal("-3.5")),
            (Decimal("1"), Decimal("3"), Decimal("0." + "3" * 28)),
            (Decimal("2"), Decimal("3"), Decimal("0." + "6" * 27 + "7")),
            (Decimal("10"), Decimal("3"), Decimal("3." + "3" * 28)),
        ],
    )
    def test_division(self, num1: Decimal, num2: Decimal, expected: Decimal) -> None:
        """Деление округляется до 28 цифр после запятой (ROUND_HALF_EVEN)"""
        assert Operation(Operator.DIVIDE, num1, num2).calculate() == expected

    def test_factory_result(self) -> None:
        """create_operation('+', 1, 2).calculate() == 3"""
        assert create_operation("+", 1, 2).calculate() == Decimal(3)

    def test_no_binary_float_error(self) -> None:
        """0.1 + 0.2 == 0.3 точно"""
        result = Operation(Operator.ADD, Decimal("0.1"), Decimal("0.2")).calculate()
        assert result == Decimal("0.3")

    def test_result_is_decimal(self) -> None:
        result = Operation(Operator.MULTIPLY, 2, 3).calculate()
        assert isinstance(result, Decimal)

    def test_idempotent(self) -> None:
        """Повторный вызов даёт тот же результат"""
        operation = Operation(Operator.DIVIDE, Decimal("10"), Decimal("3"))
        first = operation.calculate()
        second = operation.calculate()
        assert first == second
        assert str(first) == str(second)


# =============================================================================
# ГРАНИЦЫ ДИАПАЗОНА
# =============================================================================


class TestRangeBoundaries:
    """Результаты на границе диапазона без overflow"""

    def test_add_zero_to_max(self) -> None:
        assert Operation(Operator.ADD, MAX, ZERO).calculate() == MAX

    def test_add_minus_one_to_max(self) -> None:
        assert Operation(Operator.ADD, MAX, -ONE).calculate() == Decimal(2**96 - 2)

    def test_multiply_max_by_one(self) -> None:
        assert Operation(Operator.MULTIPLY, MAX, ONE).calculate() == MAX

    def test_divide_min_by_minus_one(self) -> None:
        assert Operation(Operator.DIVIDE, MIN, -ONE).calculate() == MAX

    def test_divide_max_by_one(self) -> None:
        assert Operation(Operator.DIVIDE, MAX, ONE).calculate() == MAX

    def test_multiply_max_by_tenth_exact(self) -> None:
        """29 значащих цифр с коэффициентом <= MAX сохраняются точно"""
        result = Operation(Operator.MULTIPLY, MAX, Decimal("0.1")).calculate()
        assert result == Decimal("7922816251426433759354395033.5")

    def test_multiply_rounds_half_even(self) -> None:
        """30 значащих цифр → округление до 29 (banker's rounding)"""
        # Точное значение: 71305346262837903834189555301.5
        result = Operation(Operator.MULTIPLY, MAX, Decimal("0.9")).calculate()
        assert result == Decimal("71305346262837903834189555302")

    def test_tiny_product_rounds_to_zero(self) -> None:
        """Результат меньше 1e-28 округляется до нуля"""
        tiny = Decimal("0.0000000000000001")
        assert Operation(Operator.MULTIPLY, tiny, tiny).calculate() == ZERO


# =============================================================================
# ОШИБКИ ВЫЧИСЛЕНИЯ
# =============================================================================


class TestDivisionByZero:
    """Деление на ноль"""

    def test_divide_max_by_zero(self) -> None:
        operation = Operation(Operator.DIVIDE, MAX, ZERO)
        with pytest.raises(DivisionByZeroError):
            operation.calculate()

    def test_is_zero_division_error(self) -> None:
        """DivisionByZeroError совместим с ZeroDivisionError"""
        with pytest.raises(ZeroDivisionError):
            Operation(Operator.DIVIDE, ONE, ZERO).calculate()

    def test_scaled_zero_divisor(self) -> None:
        """0.000 — тоже ноль"""
        with pytest.raises(DivisionByZeroError):
            Operation(Operator.DIVIDE, ONE, Decimal("0.000")).calculate()

    def test_zero_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            Operation(Operator.DIVIDE, ZERO, ZERO).calculate()

    def test_zero_divisor_only_matters_for_divide(self) -> None:
        assert Operation(Operator.MULTIPLY, MAX, ZERO).calculate() == ZERO


class TestOverflow:
    """Overflow при выходе точного результата за [MIN, MAX]"""

    @pytest.mark.parametrize(
        "operator,num1,num2",
        [
            (Operator.ADD, MAX, ONE),
            (Operator.ADD, MIN, -ONE),
            (Operator.SUBTRACT, MAX, -ONE),
            (Operator.SUBTRACT, MIN, ONE),
            (Operator.MULTIPLY, MAX, MAX),
            (Operator.MULTIPLY, MIN, MAX),
            (Operator.DIVIDE, MAX, Decimal("0.5")),
            (Operator.DIVIDE, MIN, Decimal("0.5")),
        ],
    )
    def test_overflow(self, operator: Operator, num1: Decimal, num2: Decimal) -> None:
        with pytest.raises(NumericOverflowError):
            Operation(operator, num1, num2).calculate()

    def test_fractional_excess_overflows(self) -> None:
        """Точный результат MAX + 0.4 вне диапазона"""
        with pytest.raises(NumericOverflowError):
            Operation(Operator.ADD, MAX, Decimal("0.4")).calculate()

    def test_is_overflow_error(self) -> None:
        """NumericOverflowError совместим с OverflowError"""
        with pytest.raises(OverflowError):
            Operation(Operator.ADD, MAX, ONE).calculate()

    def test_errors_share_base_class(self) -> None:
        with pytest.raises(CalculationError):
            Operation(Operator.MULTIPLY, MAX, MAX).calculate()


# =============================================================================
# EQUALITY
# =============================================================================


EQUALITY_CASES = [
    (Operation(Operator.ADD, ZERO, ZERO), Operation(Operator.ADD, ZERO, ZERO), True),
    (Operation(Operator.ADD, ONE, ZERO), Operation(Operator.ADD, ZERO, ZERO), False),
    (Operation(Operator.SUBTRACT, ZERO, ONE), Operation(Operator.SUBTRACT, ZERO, ZERO), False),
    (Operation(Operator.MULTIPLY, ZERO, ZERO), Operation(Operator.MULTIPLY, ONE, ZERO), False),
    (Operation(Operator.DIVIDE, ZERO, ZERO), Operation(Operator.DIVIDE, ZERO, ONE), False),
    (Operation(Operator.DIVIDE, ZERO, ZERO), Operation(Operator.ADD, ZERO, ZERO), False),
    (Operation(Operator.SUBTRACT, ZERO, ZERO), Operation(Operator.MULTIPLY, ZERO, ZERO), False),
]


class TestEquality:
    """Value equality"""

    @pytest.mark.parametrize("operation1,operation2,expected", EQUALITY_CASES)
    def test_equal_to(self, operation1: Operation, operation2: Operation, expected: bool) -> None:
        assert (operation1 == operation2) is expected

    @pytest.mark.parametrize("operation1,operation2,expected", EQUALITY_CASES)
    def test_not_equal_to(
        self, operation1: Operation, operation2: Operation, expected: bool
    ) -> None:
        """!= — точное отрицание =="""
        assert (operation1 != operation2) is (not expected)

    def test_numeric_equality_of_operands(self) -> None:
        """Decimal('1.0') == Decimal('1') → операции равны, hash совпадает"""
        a = Operation(Operator.ADD, Decimal("1.0"), Decimal("2.00"))
        b = Operation(Operator.ADD, 1, 2)
        assert a == b
        assert hash(a) == hash(b)

    def test_equality_laws(self) -> None:
        """Рефлексивность, симметричность, транзитивность"""
        a = Operation(Operator.MULTIPLY, Decimal("2.50"), 4)
        b = Operation(Operator.MULTIPLY, Decimal("2.5"), 4)
        c = Operation(Operator.MULTIPLY, 2.5, Decimal("4.0"))
        assert a == a
        assert (a == b) and (b == a)
        assert a == b and b == c and a == c

    def test_usable_in_set_and_dict(self) -> None:
        operations = {
            Operation(Operator.ADD, 1, 2),
            Operation(Operator.ADD, Decimal("1"), Decimal("2")),
            Operation(Operator.SUBTRACT, 1, 2),
        }
        assert len(operations) == 2

        lookup = {Operation(Operator.DIVIDE, 1, 3): "third"}
        assert lookup[Operation(Operator.DIVIDE, Decimal("1"), Decimal("3"))] == "third"

    def test_comparison_with_other_types(self) -> None:
        operation = Operation(Operator.ADD, 0, 0)
        assert operation != "0 + 0"
        assert operation != None  # noqa: E711
        assert not (operation == (Operator.ADD, 0, 0))


# =============================================================================
# IMMUTABILITY И ВАЛИДАЦИЯ
# =============================================================================


class TestOperationModel:
    """Конструирование, immutability и валидация операндов"""

    def test_keyword_construction(self) -> None:
        operation = Operation(operator=Operator.SUBTRACT, operand1=5, operand2=3)
        assert operation == Operation(Operator.SUBTRACT, 5, 3)

    def test_operator_coerced_from_symbol(self) -> None:
        assert Operation("+", 1, 1).operator is Operator.ADD

    def test_invalid_operator_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Operation("x", 1, 1)

    def test_frozen(self) -> None:
        """Операция должна быть immutable (frozen=True)"""
        operation = Operation(Operator.ADD, 1, 2)
        with pytest.raises(ValidationError):
            operation.operand1 = Decimal(5)

    def test_float_operand_exact(self) -> None:
        """float конвертируется через repr: 5.4 → Decimal('5.4')"""
        operation = Operation(Operator.ADD, 5.4, -6)
        assert operation.operand1 == Decimal("5.4")
        assert operation.calculate() == Decimal("-0.6")

    def test_string_operand(self) -> None:
        assert Operation(Operator.ADD, "-4.93", "2").operand1 == Decimal("-4.93")

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), float("inf")])
    def test_non_finite_rejected(self, value) -> None:
        with pytest.raises(ValidationError):
            Operation(Operator.ADD, value, 1)

    @pytest.mark.parametrize("value", [Decimal(2**96), Decimal(-(2**96)), Decimal("1E+30")])
    def test_out_of_range_rejected(self, value: Decimal) -> None:
        with pytest.raises(ValidationError):
            Operation(Operator.ADD, 1, value)

    def test_bool_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Operation(Operator.ADD, True, 1)

    def test_excess_scale_rounded(self) -> None:
        """Более 28 цифр после запятой → округление до 28"""
        operation = Operation(Operator.ADD, Decimal("0.00000000000000000000000000015"), 0)
        assert operation.operand1 == Decimal("2E-28")

    def test_range_edges_accepted(self) -> None:
        operation = Operation(Operator.SUBTRACT, MAX, MIN)
        assert operation.operand1 == MAX
        assert operation.operand2 == MIN
