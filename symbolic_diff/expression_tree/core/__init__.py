"""Core expression tree components."""

from .node import Node, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode
from .operators import (
    NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP, PRECEDENCE,
    get_precedence, evaluate_binary_op, evaluate_unary_op,
    evaluate_binary_op_fast, evaluate_unary_op_fast
)
from .domain import NumericDomain, RealDomain, ComplexDomain, REAL, COMPLEX, get_domain, detect_domain
from .factory import NodeFactory

__all__ = [
    'Node', 'VariableNode', 'ConstantNode', 'BinaryOpNode', 'UnaryOpNode',
    'NodeType', 'OpType', 'BINARY_OP_MAP', 'UNARY_OP_MAP', 'PRECEDENCE',
    'get_precedence', 'evaluate_binary_op', 'evaluate_unary_op',
    'evaluate_binary_op_fast', 'evaluate_unary_op_fast',
    'NumericDomain', 'RealDomain', 'ComplexDomain', 'REAL', 'COMPLEX', 'get_domain', 'detect_domain',
    'NodeFactory'
]
