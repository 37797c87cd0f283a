from mal import EvaluatorFn
from mal import SExpression, LispValue
from mal.errors import MalArityError, MalBindingArityError, MalInvalidSymbol, MalSyntaxError
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.values import List, Vector


def let_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> tuple[LispValue, Environment]:
    """
    (let* (name1 expr1 name2 expr2 ...) body)
    Each expr sees the names bound before it. The bindings live in a child
    scope and never reach the caller: the original environment is returned.
    """
    if len(tail) != 2:
        raise MalArityError("let* requires a binding list and a body")

    bindings, body = tail
    if not isinstance(bindings, (List, Vector)):
        raise MalSyntaxError(f"let* bindings must be a list or vector, got {bindings}")
    if len(bindings) % 2:
        raise MalBindingArityError(
            f"let* bindings must pair every name with a value, got {len(bindings)} forms"
        )

    scope = env.child()
    for name, val_expr in zip(bindings[0::2], bindings[1::2]):
        if not isinstance(name, Symbol):
            raise MalInvalidSymbol(f"let* binding name must be a symbol, got {name}")
        value, _ = evaluate_fn(val_expr, scope)
        scope = scope.define(name, value)

    result, _ = evaluate_fn(body, scope)
    return result, env
