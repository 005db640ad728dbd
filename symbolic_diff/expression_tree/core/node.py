import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Dict, Union, TYPE_CHECKING
from .operators import (
  NodeType, OpType, BINARY_OP_MAP, UNARY_OP_MAP, OP_SYMBOLS, BINARY_OPS, UNARY_OPS,
  evaluate_binary_op, evaluate_unary_op
)
from .domain import NumericDomain, REAL, COMPLEX
from ...errors import UnboundVariable, DivisionByZero

if TYPE_CHECKING:
  from .factory import NodeFactory

Bindings = Dict[str, object]

# characters a variable name may never contain
RESERVED_CHARACTERS = frozenset('+-*/^() \t\n')


def _to_op_type(operator: Union[str, OpType], allowed: frozenset, symbol_map: Dict[str, OpType]) -> OpType:
  if isinstance(operator, str):
    if operator not in symbol_map:
      raise ValueError(f"Unknown operator: {operator}")
    return symbol_map[operator]
  op_type = OpType(operator)
  if op_type not in allowed:
    raise ValueError(f"Operator {op_type.name} is not valid here")
  return op_type


class Node(ABC):
  """Base node class with structural hash and size caching.

  Nodes are never mutated after construction: every transformation (simplify,
  differentiate, copy) builds a new subtree.
  """

  __slots__ = ('_hash_cache', '_size_cache')

  node_type: NodeType

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  @abstractmethod
  def evaluate(self, bindings: Bindings, domain: NumericDomain = REAL) -> np.ndarray:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def derivative(self, var: str, factory: 'NodeFactory') -> 'Node':
    """Structural derivative, built through `factory`"""
    pass

  @abstractmethod
  def to_sympy(self, imaginary: bool = False) -> sp.Expr:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = self._compute_size()
    return self._size_cache

  @abstractmethod
  def _compute_size(self) -> int:
    pass

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  def __eq__(self, other) -> bool:
    if not isinstance(other, Node) or other.node_type != self.node_type:
      return False
    return hash(self) == hash(other) and self._same_structure(other)

  @abstractmethod
  def _same_structure(self, other: 'Node') -> bool:
    pass

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()})"

  def __str__(self) -> str:
    return self.to_string()


class ConstantNode(Node):
  __slots__ = ('value',)

  node_type = NodeType.CONSTANT

  def __init__(self, value: Union[float, complex]):
    super().__init__()
    if isinstance(value, (complex, np.complexfloating)):
      self.value = complex(value)
    else:
      self.value = float(value)

  def evaluate(self, bindings: Bindings, domain: NumericDomain = REAL) -> np.ndarray:
    return np.array([domain.coerce(self.value)], dtype=domain.dtype)

  def to_string(self) -> str:
    if isinstance(self.value, complex):
      return COMPLEX.render_constant(self.value)
    return REAL.render_constant(self.value)

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def derivative(self, var: str, factory: 'NodeFactory') -> Node:
    return factory.constant(0)

  def to_sympy(self, imaginary: bool = False) -> sp.Expr:
    if isinstance(self.value, complex):
      return sp.Float(self.value.real) + sp.Float(self.value.imag) * sp.I
    return sp.Float(self.value)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((NodeType.CONSTANT, self.value))

  def _same_structure(self, other: 'ConstantNode') -> bool:
    return self.value == other.value


class VariableNode(Node):
  __slots__ = ('name',)

  node_type = NodeType.VARIABLE

  def __init__(self, name: str):
    super().__init__()
    if not name or any(char in RESERVED_CHARACTERS for char in name):
      raise ValueError(f"Invalid variable name: '{name}'")
    self.name = name

  def evaluate(self, bindings: Bindings, domain: NumericDomain = REAL) -> np.ndarray:
    if domain.imaginary_unit is not None and self.name == 'i':
      return np.array([domain.imaginary_unit], dtype=domain.dtype)
    if self.name not in bindings:
      raise UnboundVariable(self.name)
    return domain.as_array(bindings[self.name])

  def to_string(self) -> str:
    return self.name

  def copy(self) -> 'VariableNode':
    return VariableNode(self.name)

  def derivative(self, var: str, factory: 'NodeFactory') -> Node:
    return factory.constant(1 if self.name == var else 0)

  def to_sympy(self, imaginary: bool = False) -> sp.Expr:
    if imaginary and self.name == 'i':
      return sp.I
    return sp.Symbol(self.name)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self.name))

  def _same_structure(self, other: 'VariableNode') -> bool:
    return self.name == other.name


class BinaryOpNode(Node):
  __slots__ = ('op_type', 'operator', 'left', 'right')

  node_type = NodeType.BINARY_OP

  def __init__(self, operator: Union[str, OpType], left: Node, right: Node):
    super().__init__()
    if not isinstance(left, Node) or not isinstance(right, Node):
      raise TypeError("Binary operation requires two child nodes")
    self.op_type = _to_op_type(operator, BINARY_OPS, BINARY_OP_MAP)
    self.operator = OP_SYMBOLS[self.op_type]
    self.left = left
    self.right = right

  def evaluate(self, bindings: Bindings, domain: NumericDomain = REAL) -> np.ndarray:
    left_val = self.left.evaluate(bindings, domain)
    right_val = self.right.evaluate(bindings, domain)
    if self.op_type == OpType.DIV and np.any(right_val == 0):
      raise DivisionByZero()
    if self.op_type == OpType.POW:
      domain.check_power_operands(left_val, right_val)
    return evaluate_binary_op(left_val, right_val, self.op_type)

  def to_string(self) -> str:
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def copy(self) -> 'BinaryOpNode':
    return BinaryOpNode(self.op_type, self.left.copy(), self.right.copy())

  def derivative(self, var: str, factory: 'NodeFactory') -> Node:
    left, right = self.left, self.right
    d_left = left.derivative(var, factory)
    d_right = right.derivative(var, factory)

    if self.op_type == OpType.ADD:
      return factory.add(d_left, d_right)

    if self.op_type == OpType.SUB:
      return factory.sub(d_left, d_right)

    if self.op_type == OpType.MUL:
      return factory.add(factory.mul(d_left, right.copy()),
                         factory.mul(left.copy(), d_right))

    if self.op_type == OpType.DIV:
      numerator = factory.sub(factory.mul(d_left, right.copy()),
                              factory.mul(left.copy(), d_right))
      return factory.div(numerator, factory.pow(right.copy(), factory.constant(2)))

    # power: d(exp) == 0 means the exponent does not depend on var
    if factory.is_zero(d_right):
      reduced = factory.pow(left.copy(), factory.sub(right.copy(), factory.constant(1)))
      return factory.mul(factory.mul(right.copy(), reduced), d_left)

    log_term = factory.mul(d_right, factory.ln(left.copy()))
    base_term = factory.mul(right.copy(), factory.div(d_left, left.copy()))
    return factory.mul(factory.pow(left.copy(), right.copy()),
                       factory.add(log_term, base_term))

  def to_sympy(self, imaginary: bool = False) -> sp.Expr:
    left = self.left.to_sympy(imaginary)
    right = self.right.to_sympy(imaginary)
    if self.op_type == OpType.ADD:
      return sp.Add(left, right)
    elif self.op_type == OpType.SUB:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.op_type == OpType.MUL:
      return sp.Mul(left, right)
    elif self.op_type == OpType.DIV:
      return sp.Mul(left, sp.Pow(right, -1))
    return sp.Pow(left, right)

  def _compute_size(self) -> int:
    return 1 + self.left.size() + self.right.size()

  def _compute_hash(self) -> int:
    return hash((NodeType.BINARY_OP, self.op_type, hash(self.left), hash(self.right)))

  def _same_structure(self, other: 'BinaryOpNode') -> bool:
    return self.op_type == other.op_type and self.left == other.left and self.right == other.right


class UnaryOpNode(Node):
  __slots__ = ('op_type', 'operator', 'operand')

  node_type = NodeType.UNARY_FUNC

  def __init__(self, operator: Union[str, OpType], operand: Node):
    super().__init__()
    if not isinstance(operand, Node):
      raise TypeError("Function application requires a child node")
    self.op_type = _to_op_type(operator, UNARY_OPS, UNARY_OP_MAP)
    self.operator = OP_SYMBOLS[self.op_type]
    self.operand = operand

  def evaluate(self, bindings: Bindings, domain: NumericDomain = REAL) -> np.ndarray:
    operand_val = self.operand.evaluate(bindings, domain)
    if self.op_type == OpType.LN:
      domain.check_ln_argument(operand_val)
    return evaluate_unary_op(operand_val, self.op_type)

  def to_string(self) -> str:
    return f"{self.operator}({self.operand.to_string()})"

  def copy(self) -> 'UnaryOpNode':
    return UnaryOpNode(self.op_type, self.operand.copy())

  def derivative(self, var: str, factory: 'NodeFactory') -> Node:
    arg = self.operand
    d_arg = arg.derivative(var, factory)
    # argument independent of var; also keeps ln(0) from folding 1/0
    if factory.is_zero(d_arg):
      return factory.constant(0)

    if self.op_type == OpType.SIN:
      return factory.mul(factory.cos(arg.copy()), d_arg)
    if self.op_type == OpType.COS:
      negated = factory.mul(factory.constant(-1), factory.sin(arg.copy()))
      return factory.mul(negated, d_arg)
    if self.op_type == OpType.EXP:
      return factory.mul(factory.exp(arg.copy()), d_arg)
    # ln
    return factory.mul(factory.div(factory.constant(1), arg.copy()), d_arg)

  def to_sympy(self, imaginary: bool = False) -> sp.Expr:
    operand_sympy = self.operand.to_sympy(imaginary)
    if self.op_type == OpType.SIN:
      return sp.sin(operand_sympy)
    elif self.op_type == OpType.COS:
      return sp.cos(operand_sympy)
    elif self.op_type == OpType.EXP:
      return sp.exp(operand_sympy)
    return sp.log(operand_sympy)

  def _compute_size(self) -> int:
    return 1 + self.operand.size()

  def _compute_hash(self) -> int:
    return hash((NodeType.UNARY_FUNC, self.op_type, hash(self.operand)))

  def _same_structure(self, other: 'UnaryOpNode') -> bool:
    return self.op_type == other.op_type and self.operand == other.operand
