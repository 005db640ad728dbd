import numpy as np
import numba
from enum import IntEnum

class NodeType(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  BINARY_OP = 2
  UNARY_FUNC = 3

class OpType(IntEnum):
  # Binary ops
  ADD = 0
  SUB = 1
  MUL = 2
  DIV = 3
  POW = 4
  # Unary functions
  SIN = 5
  COS = 6
  EXP = 7
  LN = 8

# Mapping dictionaries
BINARY_OP_MAP = {'+': OpType.ADD, '-': OpType.SUB, '*': OpType.MUL, '/': OpType.DIV, '^': OpType.POW}
UNARY_OP_MAP = {'sin': OpType.SIN, 'cos': OpType.COS, 'exp': OpType.EXP, 'ln': OpType.LN}

OP_SYMBOLS = {op_type: symbol for symbol, op_type in BINARY_OP_MAP.items()}
OP_SYMBOLS.update({op_type: name for name, op_type in UNARY_OP_MAP.items()})

BINARY_OPS = frozenset(BINARY_OP_MAP.values())
UNARY_OPS = frozenset(UNARY_OP_MAP.values())

# 0 marks "not an operator"
PRECEDENCE = {'^': 4, '*': 3, '/': 3, '+': 2, '-': 2}


def get_precedence(symbol: str) -> int:
  return PRECEDENCE.get(symbol, 0)


def is_operator(char: str) -> bool:
  return char in BINARY_OP_MAP


def is_function(token: str) -> bool:
  return token in UNARY_OP_MAP


@numba.njit(cache=True)
def evaluate_binary_op_fast(left_val, right_val, op_type):
  if op_type == OpType.ADD:
    return left_val + right_val
  elif op_type == OpType.SUB:
    return left_val - right_val
  elif op_type == OpType.MUL:
    return left_val * right_val
  elif op_type == OpType.DIV:
    return left_val / right_val
  elif op_type == OpType.POW:
    return np.power(left_val, right_val)
  return np.zeros_like(left_val)

@numba.njit(cache=True)
def evaluate_unary_op_fast(operand_val, op_type):
  if op_type == OpType.SIN:
    return np.sin(operand_val)
  elif op_type == OpType.COS:
    return np.cos(operand_val)
  elif op_type == OpType.EXP:
    return np.exp(operand_val)
  elif op_type == OpType.LN:
    return np.log(operand_val)
  return np.zeros_like(operand_val)


def evaluate_binary_op(left_val: np.ndarray, right_val: np.ndarray, op_type: OpType) -> np.ndarray:
  """Broadcast both operands to a common contiguous shape and run the compiled kernel"""
  left_val, right_val = (np.ascontiguousarray(arr) for arr in np.broadcast_arrays(left_val, right_val))
  return evaluate_binary_op_fast(left_val, right_val, op_type)


def evaluate_unary_op(operand_val: np.ndarray, op_type: OpType) -> np.ndarray:
  return evaluate_unary_op_fast(np.ascontiguousarray(operand_val), op_type)
