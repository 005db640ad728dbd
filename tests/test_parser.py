import pytest

from symbolic_diff import (
    parse, render, InvalidCharacter, MalformedExpression, DivisionByZero,
    ParseError, ErrorKind, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode, OpType
)
from symbolic_diff.expression_tree import ExpressionParser, parse_expression


@pytest.mark.parametrize("text, bindings, expected", [
    ("y + 4", {"y": 6}, 10.0),
    ("3 * y / 6", {"y": 12}, 6.0),
    ("y ^ 3", {"y": 4}, 64.0),
    ("2 + 3 * 4", {}, 14.0),
    ("(2 + 3) * 4", {}, 20.0),
    ("10 - 4 - 3", {}, 3.0),
    ("100 / 10 / 5", {}, 2.0),
    ("2 * 3 ^ 2", {}, 18.0),
    ("  x\t+ 1 ", {"x": 1}, 2.0),
    ("foo * bar", {"foo": 3, "bar": 5}, 15.0),
    (".5 + 1.25", {}, 1.75),
])
def test_precedence_and_associativity(text, bindings, expected):
    assert parse(text).evaluate(bindings) == pytest.approx(expected)


def test_power_is_right_associative_by_default():
    assert parse("2 ^ 3 ^ 2").evaluate() == 512.0


def test_power_left_associative_option():
    assert parse("2 ^ 3 ^ 2", right_associative_power=False).evaluate() == 64.0


def test_literal_arithmetic_is_folded():
    expr = parse("5 + 7")
    assert isinstance(expr.root, ConstantNode)
    assert expr.evaluate() == 12.0
    assert render(expr) == "12.0"


def test_raw_parse_keeps_structure():
    expr = parse("5 + 7", simplify=False)
    assert render(expr) == "(5.0 + 7.0)"
    assert parse("x * 1", simplify=False).to_string() == "(x * 1.0)"
    assert parse("x * 1").to_string() == "x"


def test_functions():
    expr = parse("sin(x + (y))")
    assert isinstance(expr.root, UnaryOpNode)
    assert expr.root.op_type == OpType.SIN
    assert expr.evaluate({"x": 1, "y": 2}) == pytest.approx(0.1411200080598672)
    assert parse("ln(exp(2))").evaluate() == pytest.approx(2.0)
    assert parse("cos (0)").evaluate() == pytest.approx(1.0)


def test_tree_shape():
    root = parse("a + b * c").root
    assert isinstance(root, BinaryOpNode)
    assert root.op_type == OpType.ADD
    assert root.left == VariableNode("a")
    assert root.right.operator == "*"


def test_i_is_an_ordinary_variable_in_the_real_domain():
    assert parse("i + 1").evaluate({"i": 2}) == 3.0


def test_invalid_character_reports_position():
    with pytest.raises(InvalidCharacter) as excinfo:
        parse("2 $ 3")
    assert excinfo.value.character == "$"
    assert excinfo.value.position == 2
    assert excinfo.value.kind is ErrorKind.INVALID_CHARACTER


def test_non_ascii_letters_are_rejected():
    with pytest.raises(InvalidCharacter):
        parse("x + é")


@pytest.mark.parametrize("text", [
    "(2 +",
    "",
    "   ",
    ")",
    "()",
    "2 3",
    "2 * (3 4)",
    "sin x",
    "sin()",
    "sin",
    "1.2.3",
    "* 2",
    "2 +",
    "(x",
    "x)",
    ".",
    "2i",
    "1 2 +",
    "x y *",
    "(1 2 +)",
    "2 (3) +",
    "2 (3)",
    "(2) 3",
    "x sin(y)",
    "sin(x y +)",
    "2 + * 3",
    "(2 +)",
    "2 ^",
    "1" + "0" * 400,
])
def test_malformed_expressions(text):
    with pytest.raises(MalformedExpression) as excinfo:
        parse(text)
    assert isinstance(excinfo.value, ParseError)
    assert excinfo.value.kind is ErrorKind.MALFORMED_EXPRESSION


def test_literal_division_by_zero_fails_at_parse_time():
    with pytest.raises(DivisionByZero):
        parse("2 / 0")


def test_division_by_zero_with_variable_is_deferred():
    expr = parse("3 * y / 0")
    with pytest.raises(DivisionByZero):
        expr.evaluate({"y": 1})


def test_complex_literals():
    assert parse("3 + 2i", "complex").evaluate() == 3 + 2j
    assert parse("i * i", "complex").evaluate() == -1
    assert parse("2i * x", "complex").evaluate({"x": 1j}) == -2


def test_imaginary_literal_folds_to_constant():
    root = parse("3 + 2i", "complex").root
    assert isinstance(root, ConstantNode)
    assert root.value == 3 + 2j


def test_parser_object_and_helper():
    parser = ExpressionParser(simplify=False)
    node = parser.parse("x ^ 1")
    assert node.to_string() == "(x ^ 1.0)"
    assert parse_expression("x ^ 1").to_string() == "x"
