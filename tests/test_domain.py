import pytest

from symbolic_diff import REAL, COMPLEX, get_domain, detect_domain, InvalidBinding, ConstantNode
from symbolic_diff.expression_tree.core.domain import parse_real, parse_complex, looks_complex


@pytest.mark.parametrize("text, expected", [
    ("3+2i", 3 + 2j),
    ("3-2i", 3 - 2j),
    ("2i", 2j),
    ("i", 1j),
    ("-i", -1j),
    ("+i", 1j),
    ("-3.5-0.5i", -3.5 - 0.5j),
    ("4", 4 + 0j),
    ("1.5 + 2i", 1.5 + 2j),
    ("2+i", 2 + 1j),
])
def test_parse_complex(text, expected):
    assert parse_complex(text) == expected


@pytest.mark.parametrize("text", ["3+2j", "abc", "", "i2", "1+2i+3"])
def test_parse_complex_rejects(text):
    with pytest.raises(InvalidBinding):
        parse_complex(text)


def test_parse_real():
    assert parse_real("2.5") == 2.5
    assert parse_real("-3") == -3.0
    with pytest.raises(InvalidBinding):
        parse_real("abc")


@pytest.mark.parametrize("text, expected", [
    ("2+3i", True),
    ("x=i", True),
    ("i", True),
    ("3 - 2i", True),
    ("x * i", True),
    ("sin(x)", False),
    ("pi", False),
    ("x + 1", False),
    ("x=2", False),
])
def test_looks_complex(text, expected):
    assert looks_complex(text) is expected


def test_detect_domain():
    assert detect_domain("x + 1", "x=2") is REAL
    assert detect_domain("x", "x=1+2i") is COMPLEX


def test_get_domain():
    assert get_domain(None) is REAL
    assert get_domain("complex") is COMPLEX
    assert get_domain("Real") is REAL
    assert get_domain(COMPLEX) is COMPLEX
    with pytest.raises(ValueError):
        get_domain("quaternion")


def test_format_value():
    assert REAL.format_value(12.0) == "12.0"
    assert COMPLEX.format_value(3 - 2j) == "3.0-2.0i"
    assert COMPLEX.format_value(2j) == "0.0+2.0i"
    assert COMPLEX.format_value(5 + 0j) == "5.0"


@pytest.mark.parametrize("value, expected", [
    (12.0, "12.0"),
    (0.5, "0.5"),
    (-2.5, "(0 - 2.5)"),
    (2j, "2.0i"),
    (-2j, "(0 - 2.0i)"),
    (3 - 2j, "(3.0 - 2.0i)"),
    (complex(-3, 1), "((0 - 3.0) + 1.0i)"),
])
def test_constant_rendering(value, expected):
    assert ConstantNode(value).to_string() == expected


def test_zero_and_one():
    assert REAL.zero == 0.0 and isinstance(REAL.zero, float)
    assert COMPLEX.one == 1 + 0j and isinstance(COMPLEX.one, complex)
    assert COMPLEX.is_zero(0j)
    assert not REAL.is_one(1.0000001)
