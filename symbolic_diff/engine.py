"""Function-style entry points: parse, evaluate, differentiate, render.

Each call is independent; nothing is cached between calls.
"""

from typing import Dict, Optional, Union

import numpy as np

from .expression_tree import Expression, NumericDomain
from .expression_tree.core.domain import Scalar


def parse(text: str, domain: Union[str, NumericDomain, None] = None,
          simplify: bool = True, right_associative_power: bool = True) -> Expression:
    """Parse infix `text` into an Expression.

    Raises InvalidCharacter or MalformedExpression (both ParseError), or
    DivisionByZero when a literal division by zero is folded.
    """
    return Expression.from_string(text, domain, simplify=simplify,
                                  right_associative_power=right_associative_power)


def evaluate(expression: Expression,
             bindings: Optional[Dict[str, object]] = None) -> Union[Scalar, np.ndarray]:
    """Evaluate `expression`; raises UnboundVariable, DivisionByZero or DomainError"""
    return expression.evaluate(bindings)


def differentiate(expression: Expression, variable: str, order: int = 1) -> Expression:
    return expression.diff(variable, order=order)


def render(expression: Expression) -> str:
    """Fully parenthesized text that parses back to an equivalent tree"""
    return expression.to_string()
