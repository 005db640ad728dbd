"""Expression Tree Module

Expression trees, their parser and their structural derivatives.
"""

from .expression import Expression
from .core.node import (
    Node,
    VariableNode,
    ConstantNode,
    BinaryOpNode,
    UnaryOpNode
)
from .core.operators import (
    NodeType,
    OpType,
    BINARY_OP_MAP,
    UNARY_OP_MAP,
    PRECEDENCE
)
from .core.domain import NumericDomain, REAL, COMPLEX, get_domain, detect_domain
from .core.factory import NodeFactory
from .parser import ExpressionParser, parse_expression
from .differentiator import Differentiator
from .utils import ExpressionSimplifier, SymPySimplifier, ExpressionValidator

__all__ = [
    "Expression",
    "Node", "VariableNode", "ConstantNode", "BinaryOpNode", "UnaryOpNode",
    "NodeType", "OpType", "BINARY_OP_MAP", "UNARY_OP_MAP", "PRECEDENCE",
    "NumericDomain", "REAL", "COMPLEX", "get_domain", "detect_domain",
    "NodeFactory", "ExpressionParser", "parse_expression", "Differentiator",
    "ExpressionSimplifier", "SymPySimplifier", "ExpressionValidator"
]
