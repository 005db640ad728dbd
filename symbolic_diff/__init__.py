"""Symbolic Differentiation Package

Parse infix expressions, evaluate them over the real or complex numbers and
build their exact symbolic derivatives.
"""

from .expression_tree import (
  Expression, Node, VariableNode, ConstantNode,
  BinaryOpNode, UnaryOpNode, NodeType, OpType,
  NumericDomain, REAL, COMPLEX, get_domain, detect_domain,
  ExpressionParser, Differentiator, ExpressionSimplifier, SymPySimplifier
)
from .engine import parse, evaluate, differentiate, render
from .errors import (
  ErrorKind, SymbolicDiffError, ParseError, InvalidCharacter, MalformedExpression,
  EvalError, UnboundVariable, DivisionByZero, DomainError,
  BindingError, DuplicateBinding, InvalidBinding
)
from .logging_system import LogLevel, configure_logging, get_logger, set_log_level

__version__ = "0.1.0"
__all__ = [
  "Expression", "Node", "VariableNode", "ConstantNode",
  "BinaryOpNode", "UnaryOpNode", "NodeType", "OpType",
  "NumericDomain", "REAL", "COMPLEX", "get_domain", "detect_domain",
  "ExpressionParser", "Differentiator", "ExpressionSimplifier", "SymPySimplifier",
  "parse", "evaluate", "differentiate", "render",
  "ErrorKind", "SymbolicDiffError", "ParseError", "InvalidCharacter", "MalformedExpression",
  "EvalError", "UnboundVariable", "DivisionByZero", "DomainError",
  "BindingError", "DuplicateBinding", "InvalidBinding",
  "LogLevel", "configure_logging", "get_logger", "set_log_level"
]
