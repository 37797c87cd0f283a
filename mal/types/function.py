"""Callable values for mal."""

from __future__ import annotations

from typing import Callable

from mal import LispValue


class Function:
    """A first-class function value.

    Everything the evaluator can apply derives from this class and implements
    `apply`, which takes the already-evaluated arguments in order and returns
    a single value.
    """

    __slots__ = ("name",)

    def __init__(self, name: str | None = None):
        self.name: str | None = name

    def apply(self, args: list[LispValue]) -> LispValue:
        raise NotImplementedError(f"{type(self).__name__} does not implement apply")

    def __str__(self) -> str:
        if self.name is None:
            return "#<function>"
        return f"#<function {self.name}>"

    def __repr__(self) -> str:
        return str(self)


class Builtin(Function):
    """A function implemented in Python: `fn(args) -> value`."""

    __slots__ = ("fn",)

    def __init__(self, name: str, fn: Callable[[list[LispValue]], LispValue]):
        super().__init__(name)
        self.fn = fn

    def apply(self, args: list[LispValue]) -> LispValue:
        return self.fn(list(args))

    def __str__(self) -> str:
        return f"#<builtin {self.name}>"
