import numpy as np
import sympy as sp
from typing import Optional, Dict, Set, Union
from .core.node import Node
from .core.domain import NumericDomain, Scalar, get_domain
from .utils.validator import ExpressionValidator
from .utils.tree_utils import calculate_tree_depth, get_variables


class Expression:
  """An expression tree together with the numeric domain it lives in.

  Copies are deep: two Expressions never share nodes.
  """

  __slots__ = ('root', 'domain', '_string_cache')

  def __init__(self, root: Node, domain: Union[str, NumericDomain, None] = None):
    self.domain = get_domain(domain)
    ExpressionValidator.validate(root, self.domain)
    self.root = root
    self._string_cache: Optional[str] = None

  def evaluate(self, bindings: Optional[Dict[str, object]] = None) -> Union[Scalar, np.ndarray]:
    """Evaluate under `bindings`.

    Scalar bindings give a float (real) or complex (complex domain). Array bindings
    are broadcast together and give an array of results, one per sample.
    """
    bindings = {} if bindings is None else bindings
    shapes = [np.shape(value) for value in bindings.values() if np.ndim(value) > 0]
    result = self.root.evaluate(bindings, self.domain)
    if not shapes:
      return self.domain.to_scalar(result)
    return np.broadcast_to(result, np.broadcast_shapes(*shapes, result.shape)).copy()

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def copy(self) -> 'Expression':
    return Expression(self.root.copy(), self.domain)

  def __copy__(self) -> 'Expression':
    return self.copy()

  def __deepcopy__(self, memo) -> 'Expression':
    return self.copy()

  def diff(self, variable: str, order: int = 1, simplify: bool = True) -> 'Expression':
    from .differentiator import Differentiator
    differentiator = Differentiator(self.domain, simplify=simplify)
    return Expression(differentiator.differentiate(self.root, variable, order), self.domain)

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> Set[str]:
    """Free variables; the imaginary unit is not one in the complex domain"""
    names = get_variables(self.root)
    if self.domain.imaginary_unit is not None:
      names.discard('i')
    return names

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy(imaginary=self.domain.imaginary_unit is not None)

  def __hash__(self) -> int:
    return hash((self.domain.name, hash(self.root)))

  def __eq__(self, other) -> bool:
    if not isinstance(other, Expression):
      return False
    return self.domain is other.domain and self.root == other.root

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r}, domain={self.domain.name!r})"

  @classmethod
  def from_string(cls, expr_str: str, domain: Union[str, NumericDomain, None] = None,
                  **parser_options) -> 'Expression':
    from .parser import ExpressionParser
    parser = ExpressionParser(domain, **parser_options)
    return cls(parser.parse(expr_str), parser.domain)
