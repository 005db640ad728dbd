"""Error taxonomy for parsing, evaluation and binding input."""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
  INVALID_CHARACTER = 'invalid_character'
  MALFORMED_EXPRESSION = 'malformed_expression'
  UNBOUND_VARIABLE = 'unbound_variable'
  DIVISION_BY_ZERO = 'division_by_zero'
  DOMAIN_ERROR = 'domain_error'
  DUPLICATE_BINDING = 'duplicate_binding'
  INVALID_BINDING = 'invalid_binding'


class SymbolicDiffError(Exception):
  """Base class for every error raised by the engine"""

  kind: ErrorKind


class ParseError(SymbolicDiffError):
  pass


class InvalidCharacter(ParseError):
  kind = ErrorKind.INVALID_CHARACTER

  def __init__(self, character: str, position: int):
    super().__init__(f"Invalid character '{character}' at position {position}")
    self.character = character
    self.position = position


class MalformedExpression(ParseError):
  kind = ErrorKind.MALFORMED_EXPRESSION

  def __init__(self, message: str, position: Optional[int] = None):
    if position is not None:
      message = f"{message} (at position {position})"
    super().__init__(message)
    self.position = position


class EvalError(SymbolicDiffError):
  pass


class UnboundVariable(EvalError):
  kind = ErrorKind.UNBOUND_VARIABLE

  def __init__(self, name: str):
    super().__init__(f"Variable '{name}' not found")
    self.name = name


class DivisionByZero(EvalError):
  kind = ErrorKind.DIVISION_BY_ZERO

  def __init__(self, message: str = "Division by zero"):
    super().__init__(message)


class DomainError(EvalError):
  kind = ErrorKind.DOMAIN_ERROR


class BindingError(SymbolicDiffError):
  pass


class DuplicateBinding(BindingError):
  kind = ErrorKind.DUPLICATE_BINDING

  def __init__(self, name: str):
    super().__init__(f"Variable '{name}' is bound more than once")
    self.name = name


class InvalidBinding(BindingError):
  kind = ErrorKind.INVALID_BINDING
