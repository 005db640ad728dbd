from typing import Union
from .core.node import Node
from .core.domain import NumericDomain, get_domain
from .core.factory import NodeFactory
from .utils.simplifier import ExpressionSimplifier
from .utils.tree_utils import calculate_tree_depth
from ..logging_system import LogLevel, log_debug, log_info


class Differentiator:
  """Structural differentiation with constructor-time simplification.

  The rules live on the node classes (`Node.derivative`); this class chooses the
  factory they build through and handles repeated differentiation.
  """

  def __init__(self, domain: Union[str, NumericDomain, None] = None, simplify: bool = True):
    self.domain = get_domain(domain)
    self.simplify = simplify
    self.factory = ExpressionSimplifier(self.domain) if simplify else NodeFactory(self.domain)

  def differentiate(self, node: Node, variable: str, order: int = 1) -> Node:
    if order < 0:
      raise ValueError(f"Derivative order must be non-negative, got {order}")

    result = node.copy()
    for step in range(order):
      result = result.derivative(variable, self.factory)
      log_debug(f"d^{step + 1}/d{variable}^{step + 1}: {result.size()} nodes, "
                f"depth {calculate_tree_depth(result)}")
      log_info(f"d^{step + 1}/d{variable}^{step + 1} = {result.to_string()}", LogLevel.DETAILED)
    return result
