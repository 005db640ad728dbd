import math

import pytest

from symbolic_diff import parse, differentiate, render, ConstantNode, Differentiator, VariableNode
from symbolic_diff.expression_tree.utils import get_all_nodes


def test_power_rule():
    derivative = differentiate(parse("y ^ 3"), "y")
    assert render(derivative) == "(3.0 * (y ^ 2.0))"
    assert derivative.evaluate({"y": 3}) == pytest.approx(27.0)


def test_power_rule_at_zero_base():
    assert differentiate(parse("y ^ 3"), "y").evaluate({"y": 0}) == 0.0


def test_sine():
    derivative = differentiate(parse("sin(y)"), "y")
    assert render(derivative) == "cos(y)"
    assert derivative.evaluate({"y": math.pi}) == pytest.approx(-1.0)


def test_cosine():
    derivative = differentiate(parse("cos(y)"), "y")
    assert render(derivative) == "((0 - 1.0) * sin(y))"
    assert derivative.evaluate({"y": math.pi / 2}) == pytest.approx(-1.0)


def test_natural_log():
    derivative = differentiate(parse("ln(y)"), "y")
    assert render(derivative) == "(1.0 / y)"
    assert derivative.evaluate({"y": 2}) == pytest.approx(0.5)


def test_exponential_chain_rule():
    derivative = differentiate(parse("exp(2 * x)"), "x")
    assert render(derivative) == "(exp((2.0 * x)) * 2.0)"
    assert derivative.evaluate({"x": 0}) == pytest.approx(2.0)


def test_product_rule():
    derivative = parse("x * sin(x)").diff("x")
    assert derivative.evaluate({"x": 1.0}) == pytest.approx(math.sin(1.0) + math.cos(1.0))


def test_quotient_rule():
    derivative = parse("x / (x + 1)").diff("x")
    assert derivative.evaluate({"x": 1.0}) == pytest.approx(0.25)


def test_subtraction_folds_to_negative_constant():
    derivative = parse("3 - x").diff("x")
    assert derivative.root == ConstantNode(-1.0)


def test_generalized_power_rule():
    derivative = parse("x ^ x").diff("x")
    assert derivative.evaluate({"x": 2.0}) == pytest.approx(4.0 * (math.log(2.0) + 1.0))


def test_constant_base_power():
    derivative = parse("2 ^ x").diff("x")
    assert derivative.evaluate({"x": 3.0}) == pytest.approx(8.0 * math.log(2.0))


def test_constant_has_zero_derivative():
    derivative = parse("42").diff("x")
    assert derivative.root == ConstantNode(0.0)
    assert derivative.evaluate() == 0.0


def test_absent_variable_gives_literal_zero():
    derivative = parse("sin(y) * y ^ 2").diff("x")
    assert derivative.root == ConstantNode(0.0)


def test_ln_of_zero_constant_differentiates_to_zero():
    assert parse("ln(0)").diff("x").root == ConstantNode(0.0)


def test_second_derivative():
    derivative = parse("x ^ 3").diff("x", order=2)
    assert render(derivative) == "(3.0 * (2.0 * x))"
    assert derivative.evaluate({"x": 2.0}) == pytest.approx(12.0)


def test_order_zero_is_a_copy():
    expr = parse("x * y")
    same = expr.diff("x", order=0)
    assert same == expr
    assert same.root is not expr.root


def test_negative_order_rejected():
    with pytest.raises(ValueError):
        parse("x").diff("x", order=-1)


def test_unsimplified_derivative_is_larger_but_equal():
    expr = parse("x * x + 3 * x", simplify=False)
    raw = expr.diff("x", simplify=False)
    simplified = expr.diff("x")
    assert raw.size() > simplified.size()
    assert raw.evaluate({"x": 5.0}) == pytest.approx(simplified.evaluate({"x": 5.0}))
    assert simplified.evaluate({"x": 5.0}) == pytest.approx(13.0)


def test_derivative_shares_no_nodes_with_input():
    expr = parse("sin(x) * x ^ 2 + exp(x) / x")
    derivative = expr.diff("x")
    original_ids = {id(node) for node in get_all_nodes(expr.root)}
    derivative_ids = {id(node) for node in get_all_nodes(derivative.root)}
    assert original_ids.isdisjoint(derivative_ids)


def test_complex_domain_derivative():
    derivative = parse("x ^ 2", "complex").diff("x")
    assert render(derivative) == "(2.0 * x)"
    assert derivative.evaluate({"x": 1 + 1j}) == 2 + 2j


def test_imaginary_unit_is_constant_under_differentiation():
    derivative = parse("i * x", "complex").diff("x")
    assert derivative.root == VariableNode("i")
    assert derivative.evaluate() == 1j


def test_differentiator_on_nodes():
    node = parse("x ^ 4").root
    result = Differentiator().differentiate(node, "x", order=3)
    assert result.evaluate({"x": [1.0]})[0] == pytest.approx(24.0)
