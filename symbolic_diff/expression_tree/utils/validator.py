from ..core.node import Node, ConstantNode, BinaryOpNode, UnaryOpNode, VariableNode, RESERVED_CHARACTERS
from ..core.operators import BINARY_OPS, UNARY_OPS
from ..core.domain import NumericDomain, REAL
from ...errors import MalformedExpression


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, domain: NumericDomain = REAL) -> bool:
    try:
      ExpressionValidator.validate(node, domain)
    except MalformedExpression:
      return False
    return True

  @staticmethod
  def validate(node: Node, domain: NumericDomain = REAL):
    """Raise MalformedExpression if the tree breaks a structural invariant"""
    stack = [node]
    while stack:
      current = stack.pop()

      if isinstance(current, ConstantNode):
        if not domain.contains(current.value):
          raise MalformedExpression(f"Constant {current.value!r} does not belong to the {domain.name} domain")

      elif isinstance(current, VariableNode):
        if not current.name or any(char in RESERVED_CHARACTERS for char in current.name):
          raise MalformedExpression(f"Invalid variable name: '{current.name}'")

      elif isinstance(current, BinaryOpNode):
        if current.op_type not in BINARY_OPS:
          raise MalformedExpression(f"'{current.operator}' is not a binary operator")
        if not isinstance(current.left, Node) or not isinstance(current.right, Node):
          raise MalformedExpression(f"Binary operator '{current.operator}' is missing an operand")
        stack.append(current.left)
        stack.append(current.right)

      elif isinstance(current, UnaryOpNode):
        if current.op_type not in UNARY_OPS:
          raise MalformedExpression(f"'{current.operator}' is not a function")
        if not isinstance(current.operand, Node):
          raise MalformedExpression(f"Function '{current.operator}' is missing its argument")
        stack.append(current.operand)

      else:
        raise MalformedExpression(f"Unknown node type: {type(current).__name__}")

