from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import MalArityError, MalInvalidSymbol
from mal.types.environment import Environment
from mal.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> tuple[LispValue, Environment]:
    """
    (def! name value)
    The only form whose binding outlives the call: the new environment is
    handed back to the caller.
    """
    if len(tail) != 2:
        raise MalArityError("def! requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise MalInvalidSymbol(f"def! expects a symbol name, got {name}")
    value, _ = evaluate_fn(val_expr, env)
    return value, env.define(name, value)
