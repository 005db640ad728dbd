"""
Tree Utility Functions

Traversal and query helpers for expression trees. Traversals are iterative so
that very deep derivative trees do not hit the recursion limit.
"""

from typing import List, Set, Union

from ..core.node import Node, BinaryOpNode, UnaryOpNode, ConstantNode, VariableNode
from ..core.operators import OpType, BINARY_OP_MAP, UNARY_OP_MAP


def _children(node: Node) -> List[Node]:
    if isinstance(node, BinaryOpNode):
        return [node.left, node.right]
    if isinstance(node, UnaryOpNode):
        return [node.operand]
    return []


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first' (pre-order)

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    all_nodes = [node]
    index = 0
    while index < len(all_nodes):
        all_nodes.extend(_children(all_nodes[index]))
        index += 1
    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    nodes = []
    stack = [node]
    while stack:
        current = stack.pop()
        nodes.append(current)
        # right pushed first so the left subtree is visited first
        stack.extend(reversed(_children(current)))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    max_depth = 0
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        max_depth = max(max_depth, depth)
        for child in _children(current):
            stack.append((child, depth + 1))
    return max_depth


def find_nodes_by_operator(node: Node, operator: Union[str, OpType]) -> List[Node]:
    """Find operator and function nodes by symbol ('+', 'sin') or OpType"""
    if isinstance(operator, str):
        operator = BINARY_OP_MAP.get(operator, UNARY_OP_MAP.get(operator))
        if operator is None:
            return []
    return [n for n in get_all_nodes(node)
            if isinstance(n, (BinaryOpNode, UnaryOpNode)) and n.op_type == operator]


def get_constants(node: Node) -> List[ConstantNode]:
    return [n for n in get_all_nodes(node, 'depth_first') if isinstance(n, ConstantNode)]


def get_variables(node: Node) -> Set[str]:
    """Names of all variables appearing in the tree"""
    return {n.name for n in get_all_nodes(node) if isinstance(n, VariableNode)}


def contains_variable(node: Node, name: str) -> bool:
    return name in get_variables(node)
