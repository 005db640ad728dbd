"""Utilities for expression trees."""

from .simplifier import ExpressionSimplifier
from .sympy_utils import SymPySimplifier
from .validator import ExpressionValidator
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_operator,
    get_constants, get_variables, contains_variable
)

__all__ = [
    'ExpressionSimplifier', 'SymPySimplifier', 'ExpressionValidator',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_operator',
    'get_constants', 'get_variables', 'contains_variable'
]
