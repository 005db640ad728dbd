#!/usr/bin/env python3
"""
Command line front end

    symbolic-diff "y ^ 3" --diff y
    symbolic-diff "y + 4" --eval y=6
    symbolic-diff "sin(y)" --diff y --eval y=3.14159
    symbolic-diff "x * i" --eval x=2+3i

The numeric domain is chosen from the raw arguments: any standalone `i` selects
the complex domain for the whole invocation.
"""

import re
import sys
import argparse
from typing import Dict, List, Optional

from .engine import parse, evaluate, differentiate, render
from .errors import SymbolicDiffError, DuplicateBinding, InvalidBinding
from .expression_tree import NumericDomain, SymPySimplifier, detect_domain
from .logging_system import LogLevel, configure_logging, log_critical, log_milestone, log_info

_NAME_RE = re.compile(r'^[A-Za-z]+$')


def parse_bindings(pairs: List[str], domain: NumericDomain) -> Dict[str, object]:
    """Turn `name=value` strings into a binding mapping"""
    bindings: Dict[str, object] = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        name = name.strip()
        if not sep or not _NAME_RE.match(name):
            raise InvalidBinding(f"Expected NAME=VALUE, got '{pair}'")
        if name in bindings:
            raise DuplicateBinding(name)
        bindings[name] = domain.parse_literal(value)
    return bindings


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='symbolic-diff',
        description='Evaluate or symbolically differentiate an infix expression.')
    parser.add_argument('expression', help='infix expression, e.g. "x ^ 2 + sin(x)"')
    parser.add_argument('--eval', dest='bindings', nargs='*', metavar='NAME=VALUE',
                        help='evaluate with the given variable bindings')
    parser.add_argument('--diff', dest='variable', metavar='NAME',
                        help='differentiate with respect to NAME')
    parser.add_argument('--order', type=int, default=1,
                        help='derivative order (default: 1)')
    parser.add_argument('--latex', action='store_true',
                        help='print the resulting expression as LaTeX')
    parser.add_argument('--left-assoc-power', action='store_true',
                        help="bind '^' left to right (default is right to left)")
    parser.add_argument('--log-level', default='minimal',
                        choices=[level.name.lower() for level in LogLevel],
                        help='logging verbosity on stderr (default: minimal)')
    return parser


def run(args: argparse.Namespace, domain: NumericDomain) -> str:
    expression = parse(args.expression, domain,
                       right_associative_power=not args.left_assoc_power)
    log_milestone(f"Parsed {render(expression)} in the {domain.name} domain")

    if args.variable is not None:
        expression = differentiate(expression, args.variable, order=args.order)
        log_milestone(f"Differentiated with respect to {args.variable}")

    if args.bindings is None:
        if args.latex:
            return SymPySimplifier().latex_representation(expression)
        return render(expression)

    bindings = parse_bindings(args.bindings, domain)
    log_info(f"Bindings: {bindings}")
    return domain.format_value(evaluate(expression, bindings))


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.bindings is None and args.variable is None:
        parser.error('one of --eval or --diff is required')

    configure_logging(LogLevel.from_name(args.log_level))
    domain = detect_domain(*argv)

    try:
        output = run(args, domain)
    except SymbolicDiffError as e:
        log_critical(f"{type(e).__name__}: {e}")
        return 1
    except ValueError as e:
        log_critical(str(e))
        return 1

    print(output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
