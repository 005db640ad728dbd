import numpy as np
from ..core.node import Node, BinaryOpNode
from ..core.operators import OpType
from ..core.factory import NodeFactory
from ...errors import DomainError
from ...logging_system import log_debug, log_warning


class ExpressionSimplifier(NodeFactory):
  """Node factory that rewrites operator nodes as they are built.

  Identity and annihilator literals are eliminated and operations on two constants
  are folded through the evaluator. Constant tests are tag tests and zero/one tests
  use exact equality, so only literal 0 and 1 are matched.
  """

  def binary(self, op_type: OpType, left: Node, right: Node) -> Node:
    op_type = OpType(op_type)

    if op_type == OpType.ADD:
      if self.is_zero(right):
        return left  # x + 0 = x
      if self.is_zero(left):
        return right  # 0 + x = x

    elif op_type == OpType.SUB:
      if self.is_zero(right):
        return left  # x - 0 = x

    elif op_type == OpType.MUL:
      if self.is_one(right):
        return left  # x * 1 = x
      if self.is_one(left):
        return right  # 1 * x = x
      if self.is_zero(right) or self.is_zero(left):
        return self.constant(0)  # x * 0 = 0 * x = 0

    elif op_type == OpType.DIV:
      if self.is_one(right):
        return left  # x / 1 = x
      if self.is_zero(left):
        return self.constant(0)  # 0 / x = 0

    elif op_type == OpType.POW:
      if self.is_one(right):
        return left  # x ^ 1 = x
      if self.is_zero(right):
        return self.constant(1)  # x ^ 0 = 1

    node = BinaryOpNode(op_type, left, right)
    if self.is_constant(left) and self.is_constant(right):
      return self._fold(node)
    return node

  def _fold(self, node: BinaryOpNode) -> Node:
    # DivisionByZero propagates: a literal zero divisor fails at construction time
    try:
      value = node.evaluate({}, self.domain)[0]
    except DomainError:
      log_debug(f"Leaving {node.to_string()} unfolded: outside the {self.domain.name} domain")
      return node
    # inf and nan have no literal form
    if not np.isfinite(value):
      log_warning(f"Leaving {node.to_string()} unfolded: result is not finite")
      return node
    return self.constant(value)
