import math

import numpy as np
import pytest

from symbolic_diff import (
    parse, evaluate, UnboundVariable, DivisionByZero, DomainError, EvalError, ErrorKind
)


def test_scalar_results_are_python_numbers():
    result = parse("x * 2").evaluate({"x": 1.5})
    assert isinstance(result, float)
    assert result == 3.0

    complex_result = parse("x * 2", "complex").evaluate({"x": 1 + 1j})
    assert isinstance(complex_result, complex)
    assert complex_result == 2 + 2j


def test_unbound_variable_names_the_variable():
    with pytest.raises(UnboundVariable) as excinfo:
        parse("x + y").evaluate({"x": 1})
    assert excinfo.value.name == "y"
    assert excinfo.value.kind is ErrorKind.UNBOUND_VARIABLE
    assert isinstance(excinfo.value, EvalError)


def test_extra_bindings_are_ignored():
    assert evaluate(parse("x + 1"), {"x": 1, "unused": 7}) == 2.0


def test_division_by_zero_from_binding():
    with pytest.raises(DivisionByZero):
        parse("1 / (x - 1)").evaluate({"x": 1})


@pytest.mark.parametrize("value", [0.0, -1.0])
def test_ln_of_non_positive_in_real_domain(value):
    with pytest.raises(DomainError):
        parse("ln(x)").evaluate({"x": value})


def test_ln_of_negative_in_complex_domain():
    result = parse("ln(x)", "complex").evaluate({"x": -1})
    assert result == pytest.approx(1j * math.pi)


def test_fractional_power_of_negative_base():
    with pytest.raises(DomainError):
        parse("x ^ 0.5").evaluate({"x": -4})
    assert parse("x ^ 0.5", "complex").evaluate({"x": -4}) == pytest.approx(2j)
    assert parse("x ^ 3").evaluate({"x": -2}) == -8.0


def test_complex_binding_rejected_in_real_domain():
    with pytest.raises(DomainError):
        parse("x + 1").evaluate({"x": 1 + 2j})


def test_imaginary_unit_in_complex_domain():
    expr = parse("x * i", "complex")
    assert expr.evaluate({"x": 2 + 3j}) == -3 + 2j
    assert expr.variables() == {"x"}


def test_evaluation_is_deterministic():
    expr = parse("sin(x) * exp(y) / (1 + x ^ 2)")
    bindings = {"x": 0.3, "y": -1.2}
    assert expr.evaluate(bindings) == expr.evaluate(bindings)


def test_vectorized_bindings():
    expr = parse("x ^ 2 + y")
    result = expr.evaluate({"x": np.array([1.0, 2.0, 3.0]), "y": 1.0})
    np.testing.assert_allclose(result, [2.0, 5.0, 10.0])


def test_constant_expression_broadcasts_to_samples():
    result = parse("2 + 3").evaluate({"x": np.arange(3)})
    np.testing.assert_allclose(result, [5.0, 5.0, 5.0])


def test_vectorized_division_by_zero():
    with pytest.raises(DivisionByZero):
        parse("1 / x").evaluate({"x": np.array([1.0, 0.0, 2.0])})


def test_two_dimensional_bindings_rejected():
    with pytest.raises(ValueError):
        parse("x + 1").evaluate({"x": np.ones((2, 2))})
