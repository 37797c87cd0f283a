"""Runtime environment for mal.

An Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. Environments are persistent: binding a
name never changes an existing Environment, it returns a new one that shares
the parent and every unrelated binding. Anyone still holding the old node
keeps seeing the old bindings.
"""

from __future__ import annotations

from io import StringIO
from types import MappingProxyType
from typing import Mapping, Optional

from mal import LispValue
from mal.errors import MalInvalidSymbol, MalUnboundSymbol
from mal.types.symbol import Symbol


class Environment:
    """Immutable frame mapping Symbols to values, chained to an optional parent."""

    __slots__ = ("vars", "outer")

    def __init__(
        self,
        bindings: Mapping[Symbol, LispValue] | None = None,
        outer: Optional[Environment] = None,
    ):
        frame: dict[Symbol, LispValue] = {}
        for k, v in (bindings or {}).items():
            if not isinstance(k, Symbol):
                raise MalInvalidSymbol(f"Cannot define {k} as a symbol")
            frame[k] = v
        self.vars: Mapping[Symbol, LispValue] = MappingProxyType(frame)
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> Environment:
        """Return a new Environment with `name` bound to `value` in this frame.

        The new node has the same parent. Raises MalInvalidSymbol if `name`
        is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise MalInvalidSymbol(f"Cannot define {name} as a symbol")
        return Environment({**self.vars, name: value}, self.outer)

    def update(self, mapping: Mapping[Symbol, LispValue]) -> Environment:
        """Bulk version of `define`: one new node holding all of `mapping`."""
        return Environment({**self.vars, **mapping}, self.outer)

    def child(self) -> Environment:
        """Return an empty scope whose parent is this Environment."""
        return Environment(outer=self)

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name` here or in an enclosing scope.

        Raises MalUnboundSymbol if not found.
        """
        env = self.find(name)
        if env is None:
            raise MalUnboundSymbol(str(name))
        return env.vars[name]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, Symbol) and self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
