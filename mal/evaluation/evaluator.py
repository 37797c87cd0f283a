"""Core evaluator for the mal interpreter.

`evaluate(expr, env)` returns `(value, env)`. The environment in the result
is what a top-level caller should use for the next form: it differs from
the one passed in only when a `def!` ran in a position whose bindings are
allowed to escape. Nested call sites discard it.
"""

from __future__ import annotations

from mal import SExpression, LispValue
from mal.evaluation.apply import apply
from mal.evaluation.special_forms import SPECIAL_FORMS
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.values import Kind, HashMap, List, Vector, kind_of


def evaluate(expr: SExpression, env: Environment) -> tuple[LispValue, Environment]:
    match kind_of(expr):
        case Kind.SYMBOL:
            return env.lookup(expr), env

        case Kind.VECTOR:
            # Each element sees the original env; nothing an element binds escapes.
            return Vector(evaluate(e, env)[0] for e in expr), env

        case Kind.MAP:
            # Keys are data, only values are evaluated.
            return HashMap((k, evaluate(v, env)[0]) for k, v in expr.items()), env

        case Kind.LIST:
            if not expr:
                return expr, env
            return _evaluate_list(expr, env)

    # --- Atoms, reader wrappers and functions return as-is ---
    return expr, env


def _evaluate_list(expr: List, env: Environment) -> tuple[LispValue, Environment]:
    head, *tail_args = expr

    # --- Special forms handling ---
    if isinstance(head, Symbol) and head in SPECIAL_FORMS:
        return SPECIAL_FORMS[head](tail_args, env, evaluate)

    # --- Function application ---
    fn, head_env = evaluate(head, env)
    args = [evaluate(arg, head_env)[0] for arg in tail_args]
    return apply(fn, args), head_env
