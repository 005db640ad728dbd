from typing import Union
from .node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .operators import NodeType, OpType
from .domain import NumericDomain, get_domain


class NodeFactory:
  """Builds nodes exactly as requested, with constants coerced into the domain.

  Subclasses hook `binary` to rewrite operator nodes at construction time.
  """

  def __init__(self, domain: Union[str, NumericDomain, None] = None):
    self.domain = get_domain(domain)

  def constant(self, value) -> ConstantNode:
    return ConstantNode(self.domain.coerce(value))

  def variable(self, name: str) -> VariableNode:
    return VariableNode(name)

  def binary(self, op_type: OpType, left: Node, right: Node) -> Node:
    return BinaryOpNode(op_type, left, right)

  def unary(self, op_type: OpType, operand: Node) -> Node:
    return UnaryOpNode(op_type, operand)

  def is_constant(self, node: Node) -> bool:
    return node.node_type == NodeType.CONSTANT

  def is_zero(self, node: Node) -> bool:
    return self.is_constant(node) and self.domain.is_zero(node.value)

  def is_one(self, node: Node) -> bool:
    return self.is_constant(node) and self.domain.is_one(node.value)

  def add(self, left: Node, right: Node) -> Node:
    return self.binary(OpType.ADD, left, right)

  def sub(self, left: Node, right: Node) -> Node:
    return self.binary(OpType.SUB, left, right)

  def mul(self, left: Node, right: Node) -> Node:
    return self.binary(OpType.MUL, left, right)

  def div(self, left: Node, right: Node) -> Node:
    return self.binary(OpType.DIV, left, right)

  def pow(self, base: Node, exponent: Node) -> Node:
    return self.binary(OpType.POW, base, exponent)

  def sin(self, operand: Node) -> Node:
    return self.unary(OpType.SIN, operand)

  def cos(self, operand: Node) -> Node:
    return self.unary(OpType.COS, operand)

  def exp(self, operand: Node) -> Node:
    return self.unary(OpType.EXP, operand)

  def ln(self, operand: Node) -> Node:
    return self.unary(OpType.LN, operand)
