"""Application engine for mal.

Every callable value is a `Function` exposing `apply(args)`; this module is
the one place the evaluator hands evaluated arguments to it.
"""

from mal import LispValue
from mal.errors import MalInvariantError, MalNotCallable
from mal.printer import to_literal
from mal.types.function import Function


def apply(head: Function | object, args: list[LispValue]) -> LispValue:
    """Apply `head` to already-evaluated `args`.

    - Raises MalNotCallable if `head` is not a Function.
    - A function that returns None has broken the value contract; that is
      reported as MalInvariantError rather than passed on as a value.
    """
    if not isinstance(head, Function):
        raise MalNotCallable(f"Cannot apply non-function {to_literal(head)}")
    result = head.apply(args)
    if result is None:
        raise MalInvariantError(f"{head} returned no result")
    return result
