"""Built-in functions for the mal runtime environment.

This module defines core arithmetic, comparison, sequence helpers, type
predicates, and the registration entry point that seeds the root
environment.
"""
from __future__ import annotations

import operator
from functools import reduce, wraps
from typing import Callable

from mal import LispValue
from mal.errors import MalArithmeticError, MalArityError, MalTypeError
from mal.printer import to_literal
from mal.types.environment import Environment
from mal.types.function import Builtin
from mal.types.nil import Nil
from mal.types.symbol import Keyword, Symbol
from mal.types.values import HashMap, List, Vector, is_number, values_equal


# -------------------------------
# Helpers
# -------------------------------
def _numbers(name: str, args: list[LispValue]) -> list[int | float]:
    for a in args:
        if not is_number(a):
            raise MalTypeError(f"All arguments to {name} must be numbers, got {to_literal(a)}")
    return args


def _checked(fn: Callable[[list[LispValue]], LispValue]):
    """Report float overflow (e.g. mixing a float with a huge int) as a mal error."""
    @wraps(fn)
    def wrapper(args: list[LispValue]) -> LispValue:
        try:
            return fn(args)
        except OverflowError as e:
            raise MalArithmeticError(f"Numeric overflow: {e}") from e
    return wrapper


def _divide(a: int | float, b: int | float) -> int | float:
    if b == 0:
        raise MalArithmeticError("Division by zero")
    if isinstance(a, int) and isinstance(b, int) and a % b == 0:
        return a // b
    return a / b


# -------------------------------
# Arithmetic
# -------------------------------
@_checked
def add(args: list[LispValue]) -> LispValue:
    return sum(_numbers("+", args), 0)


@_checked
def sub(args: list[LispValue]) -> LispValue:
    if not args:
        raise MalArityError("- requires at least 1 argument")
    nums = _numbers("-", args)
    if len(nums) == 1:
        return -nums[0]
    return reduce(operator.sub, nums)


@_checked
def mul(args: list[LispValue]) -> LispValue:
    return reduce(operator.mul, _numbers("*", args), 1)


@_checked
def div(args: list[LispValue]) -> LispValue:
    if not args:
        raise MalArityError("/ requires at least 1 argument")
    nums = _numbers("/", args)
    if len(nums) == 1:
        return _divide(1, nums[0])
    return reduce(_divide, nums)


# -------------------------------
# Comparison
# -------------------------------
def equals(args: list[LispValue]) -> bool:
    return all(values_equal(a, b) for a, b in zip(args, args[1:]))


def _chain(name: str, op: Callable[[LispValue, LispValue], bool]):
    def compare(args: list[LispValue]) -> bool:
        nums = _numbers(name, args)
        return all(op(a, b) for a, b in zip(nums, nums[1:]))
    return compare


# -------------------------------
# Sequences
# -------------------------------
def list_builtin(args: list[LispValue]) -> List:
    return List(args)


def vector_builtin(args: list[LispValue]) -> Vector:
    return Vector(args)


def hash_map(args: list[LispValue]) -> HashMap:
    return HashMap.from_flat(args)


def _one(name: str, args: list[LispValue]) -> LispValue:
    if len(args) != 1:
        raise MalArityError(f"{name} requires exactly 1 argument")
    return args[0]


def count(args: list[LispValue]) -> int:
    seq = _one("count", args)
    if seq is Nil:
        return 0
    if not isinstance(seq, (List, Vector, HashMap, str)):
        raise MalTypeError(f"count expects a sequence, got {to_literal(seq)}")
    return len(seq)


def is_empty(args: list[LispValue]) -> bool:
    return count(args) == 0


def _predicate(name: str, test: Callable[[LispValue], bool]):
    return lambda args: bool(test(_one(name, args)))


# -------------------------------
# Registration
# -------------------------------
BUILTINS: dict[str, Callable[[list[LispValue]], LispValue]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "=": equals,
    "<": _chain("<", operator.lt),
    "<=": _chain("<=", operator.le),
    ">": _chain(">", operator.gt),
    ">=": _chain(">=", operator.ge),
    "list": list_builtin,
    "vector": vector_builtin,
    "hash-map": hash_map,
    "count": count,
    "empty?": is_empty,
    "list?": _predicate("list?", lambda v: isinstance(v, List)),
    "vector?": _predicate("vector?", lambda v: isinstance(v, Vector)),
    "map?": _predicate("map?", lambda v: isinstance(v, HashMap)),
    "nil?": _predicate("nil?", lambda v: v is Nil),
    "symbol?": _predicate("symbol?", lambda v: isinstance(v, Symbol)),
    "keyword?": _predicate("keyword?", lambda v: isinstance(v, Keyword)),
    "number?": _predicate("number?", is_number),
    "string?": _predicate("string?", lambda v: isinstance(v, str)),
}


def register(env: Environment) -> Environment:
    """Return `env` extended with every builtin. `env` itself is left untouched."""
    return env.update({Symbol(name): Builtin(name, fn) for name, fn in BUILTINS.items()})
