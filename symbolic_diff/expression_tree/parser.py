"""Operator-precedence (shunting-yard) parser for infix expressions.

Grammar accepted: numbers (`12`, `3.5`, `.5`), variables (runs of letters), the
functions `sin`, `cos`, `exp` and `ln` applied to a parenthesized argument, the
binary operators `+ - * / ^` and parentheses. In the complex domain a number
directly followed by a standalone `i` is an imaginary literal (`2i`), and `i` on
its own is the imaginary unit.
"""

import math
from typing import List, Optional, Union

from .core.node import Node
from .core.operators import BINARY_OP_MAP, UNARY_OP_MAP, get_precedence, is_operator, is_function
from .core.domain import NumericDomain, get_domain
from .core.factory import NodeFactory
from .utils.simplifier import ExpressionSimplifier
from ..errors import InvalidCharacter, MalformedExpression
from ..logging_system import log_debug

_OPEN_PAREN = '('


def _is_digit(char: str) -> bool:
  return '0' <= char <= '9'


def _is_letter(char: str) -> bool:
  return char.isascii() and char.isalpha()


class ExpressionParser:
  """Two-stack parser: a value stack and an operator stack, plus a stack of
  pending function names with one entry per open parenthesis.
  """

  def __init__(self, domain: Union[str, NumericDomain, None] = None, simplify: bool = True,
               right_associative_power: bool = True):
    self.domain = get_domain(domain)
    self.simplify = simplify
    self.right_associative_power = right_associative_power
    self.factory = ExpressionSimplifier(self.domain) if simplify else NodeFactory(self.domain)

  def parse(self, text: str) -> Node:
    values: List[Node] = []
    operators: List[tuple] = []  # (symbol, position, value stack height)
    functions: List[Optional[str]] = []
    # true after an operator or an opening parenthesis, and at the start
    expect_operand = True

    length = len(text)
    pos = 0
    while pos < length:
      char = text[pos]

      if char.isspace():
        pos += 1

      elif _is_digit(char) or char == '.':
        self._require_operand_slot(expect_operand, pos)
        pos = self._read_number(text, pos, values)
        expect_operand = False

      elif _is_letter(char):
        start = pos
        while pos < length and _is_letter(text[pos]):
          pos += 1
        token = text[start:pos]
        self._require_operand_slot(expect_operand, start)
        if is_function(token):
          pos = self._skip_whitespace(text, pos)
          if pos >= length or text[pos] != '(':
            raise MalformedExpression(f"Function '{token}' must be followed by '('", start)
          operators.append((_OPEN_PAREN, pos, len(values)))
          functions.append(token)
          pos += 1
        else:
          values.append(self.factory.variable(token))
          expect_operand = False

      elif char == '(':
        self._require_operand_slot(expect_operand, pos)
        operators.append((_OPEN_PAREN, pos, len(values)))
        functions.append(None)
        pos += 1

      elif char == ')':
        if expect_operand and operators and operators[-1][0] != _OPEN_PAREN:
          raise MalformedExpression(f"Operator '{operators[-1][0]}' is missing an operand", operators[-1][1])
        while operators and operators[-1][0] != _OPEN_PAREN:
          self._apply_operator(values, operators)
        if not operators:
          raise MalformedExpression("Unmatched ')'", pos)
        _, opened_at, height = operators.pop()
        if len(values) != height + 1:
          raise MalformedExpression("Parentheses must contain exactly one expression", opened_at)
        function = functions.pop()
        if function is not None:
          self._apply_function(values, function, pos)
        pos += 1
        expect_operand = False

      elif is_operator(char):
        if expect_operand:
          raise MalformedExpression(f"Operator '{char}' is missing an operand", pos)
        while operators and self._should_pop(operators[-1][0], char):
          self._apply_operator(values, operators)
        operators.append((char, pos, len(values)))
        pos += 1
        expect_operand = True

      else:
        raise InvalidCharacter(char, pos)

    if expect_operand and operators and operators[-1][0] != _OPEN_PAREN:
      raise MalformedExpression(f"Operator '{operators[-1][0]}' is missing an operand", operators[-1][1])

    while operators:
      if operators[-1][0] == _OPEN_PAREN:
        raise MalformedExpression("Unmatched '('", operators[-1][1])
      self._apply_operator(values, operators)

    if len(values) != 1:
      if not values:
        raise MalformedExpression("Empty expression")
      raise MalformedExpression(f"Expected a single expression, found {len(values)} operands without operators")

    log_debug(f"Parsed '{text}' as {values[0].to_string()}")
    return values[0]

  def _should_pop(self, stacked: str, incoming: str) -> bool:
    stacked_precedence = get_precedence(stacked)
    incoming_precedence = get_precedence(incoming)
    if incoming == '^' and self.right_associative_power:
      return stacked_precedence > incoming_precedence
    return stacked_precedence >= incoming_precedence

  def _read_number(self, text: str, pos: int, values: List[Node]) -> int:
    start = pos
    seen_point = False
    while pos < len(text) and (_is_digit(text[pos]) or (text[pos] == '.' and not seen_point)):
      seen_point = seen_point or text[pos] == '.'
      pos += 1
    literal = text[start:pos]
    if literal == '.':
      raise MalformedExpression("Lone decimal point", start)
    value = float(literal)
    if not math.isfinite(value):
      raise MalformedExpression("Numeric literal out of range", start)

    # imaginary literal: digits followed by an 'i' that does not start a longer word
    if (self.domain.imaginary_unit is not None and pos < len(text) and text[pos] == 'i'
        and not (pos + 1 < len(text) and _is_letter(text[pos + 1]))):
      values.append(self.factory.constant(value * self.domain.imaginary_unit))
      return pos + 1

    values.append(self.factory.constant(value))
    return pos

  @staticmethod
  def _require_operand_slot(expect_operand: bool, pos: int):
    if not expect_operand:
      raise MalformedExpression("Missing operator between operands", pos)

  @staticmethod
  def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
      pos += 1
    return pos

  def _apply_operator(self, values: List[Node], operators: List[tuple]):
    symbol, position, _ = operators.pop()
    if len(values) < 2:
      raise MalformedExpression(f"Operator '{symbol}' is missing an operand", position)
    right = values.pop()
    left = values.pop()
    values.append(self.factory.binary(BINARY_OP_MAP[symbol], left, right))

  def _apply_function(self, values: List[Node], function: str, position: int):
    if not values:
      raise MalformedExpression(f"Function '{function}' is missing its argument", position)
    values.append(self.factory.unary(UNARY_OP_MAP[function], values.pop()))


def parse_expression(text: str, domain: Union[str, NumericDomain, None] = None, **kwargs) -> Node:
  return ExpressionParser(domain, **kwargs).parse(text)
