import sympy as sp
from typing import Callable, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
  from ..expression import Expression


class SymPySimplifier:
  """Bridges to SymPy: canonical forms, LaTeX and derivative cross-checks"""

  def __init__(self):
    self.strategies: Dict[str, Callable[[sp.Expr], sp.Expr]] = {
      'simplify': sp.simplify,
      'expand': sp.expand,
      'factor': sp.factor,
      'trigsimp': sp.trigsimp,
      'logcombine': sp.logcombine,
    }

  def simplify_expression(self, expression: 'Expression') -> Dict[str, Any]:
    """
    Try every strategy and keep the least complex result.

    Returns:
        Dict with the chosen sympy form, the strategy that produced it
        ('none' if nothing beat the input) and the complexity before and after
    """
    original = expression.to_sympy()
    best, best_strategy = original, 'none'
    best_score = before = self.complexity(original)

    for name, strategy in self.strategies.items():
      candidate = strategy(original)
      score = self.complexity(candidate)
      if score < best_score:
        best, best_strategy, best_score = candidate, name, score

    return {
      'simplified': best,
      'strategy_used': best_strategy,
      'complexity_reduction': before - best_score,
      'original_complexity': before,
      'simplified_complexity': best_score
    }

  @staticmethod
  def complexity(expr: sp.Expr) -> int:
    """Free symbols plus function applications plus operation count"""
    return len(expr.free_symbols) + len(expr.atoms(sp.Function)) + expr.count_ops()

  def latex_representation(self, expression: 'Expression') -> str:
    return sp.latex(expression.to_sympy())

  def reference_derivative(self, expression: 'Expression', variable: str) -> sp.Expr:
    return sp.diff(expression.to_sympy(), sp.Symbol(variable))

  def agrees_with_sympy(self, expression: 'Expression', variable: str,
                        point: Dict[str, complex], tolerance: float = 1e-9) -> bool:
    """Numerically compare our derivative with SymPy's at `point`"""
    substitutions = {sp.Symbol(name): value for name, value in point.items()}
    ours = complex(sp.N(expression.diff(variable).to_sympy().subs(substitutions)))
    reference = complex(sp.N(self.reference_derivative(expression, variable).subs(substitutions)))
    return abs(ours - reference) <= tolerance * max(1.0, abs(reference))
