"""The closed set of mal value kinds.

Forms produced by the reader and values produced by the evaluator share
one representation:

    - nil               -> Nil (NilType singleton)
    - true / false      -> bool
    - numbers           -> int / float
    - strings           -> str
    - symbols           -> Symbol
    - keywords          -> Keyword
    - characters        -> Char
    - (a b c)           -> List   (immutable tuple subclass)
    - [a b c]           -> Vector (immutable tuple subclass)
    - {k v}             -> HashMap (immutable, insertion ordered)
    - 'x `x ~x ~@x @x ^x -> Quote, Quasiquote, Unquote, SpliceUnquote, Deref, WithMeta
    - functions         -> Function (see mal.types.function)

`kind_of` maps any value onto the `Kind` enum and rejects everything else,
so a new kind has to be added here before any dispatch point can see it.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Iterable, Iterator

from mal import LispValue
from mal.errors import MalArityError, MalTypeError
from mal.types.function import Function
from mal.types.nil import NilType
from mal.types.symbol import Keyword, Symbol


class Kind(Enum):
    NIL = "nil"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SYMBOL = "symbol"
    KEYWORD = "keyword"
    CHAR = "char"
    LIST = "list"
    VECTOR = "vector"
    MAP = "map"
    QUOTE = "quote"
    QUASIQUOTE = "quasiquote"
    UNQUOTE = "unquote"
    SPLICE_UNQUOTE = "splice-unquote"
    DEREF = "deref"
    WITH_META = "with-meta"
    FUNCTION = "function"


class Char:
    """A single character."""

    __slots__ = ("value",)

    def __init__(self, value: str):
        if len(value) != 1:
            raise MalTypeError(f"A char holds exactly one character, got {value!r}")
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Char) and self.value == other.value

    def __hash__(self) -> int:
        return hash(("char", self.value))

    def __repr__(self):
        return f"Char({self.value!r})"

    def __str__(self):
        return self.value


class _Sequence(tuple):
    """Shared behaviour of List and Vector: immutable, equal only to the same kind."""

    __slots__ = ()

    def __new__(cls, items: Iterable[LispValue] = ()):
        return super().__new__(cls, items)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and values_equal(self, other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash(equality_key(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    def __str__(self) -> str:
        from mal.printer import to_literal
        return to_literal(self)


class List(_Sequence):
    __slots__ = ()


class Vector(_Sequence):
    __slots__ = ()


class HashMap(Mapping):
    """Immutable map keyed by structural equality.

    Keys keep the position of their first insertion; a repeated key replaces
    the value only.
    """

    __slots__ = ("_entries",)

    def __init__(self, pairs: Iterable[tuple[LispValue, LispValue]] = ()):
        entries: dict[object, tuple[LispValue, LispValue]] = {}
        for key, value in pairs:
            ek = equality_key(key)
            if ek in entries:
                entries[ek] = (entries[ek][0], value)
            else:
                entries[ek] = (key, value)
        self._entries = entries

    @classmethod
    def from_flat(cls, items: Iterable[LispValue]) -> HashMap:
        """Build from alternating key/value items: k1 v1 k2 v2 ..."""
        items = list(items)
        if len(items) % 2:
            raise MalArityError(
                f"A map needs an even number of forms, got {len(items)}"
            )
        return cls(zip(items[0::2], items[1::2]))

    def flatten(self) -> Iterator[LispValue]:
        for key, value in self._entries.values():
            yield key
            yield value

    def assoc(self, key: LispValue, value: LispValue) -> HashMap:
        return HashMap([*self.items(), (key, value)])

    def __getitem__(self, key: LispValue) -> LispValue:
        try:
            return self._entries[equality_key(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return equality_key(key) in self._entries

    def __iter__(self) -> Iterator[LispValue]:
        return (key for key, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def items(self):
        return list(self._entries.values())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, HashMap) and values_equal(self, other)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __hash__(self) -> int:
        return hash(equality_key(self))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self._entries.values())
        return f"HashMap({{{inner}}})"

    def __str__(self) -> str:
        from mal.printer import to_literal
        return to_literal(self)


class Wrapper:
    """Reader marker wrapping exactly one form, e.g. 'x -> Quote(x).

    The evaluator treats wrappers as opaque values; they print as
    `(name form)`.
    """

    __slots__ = ("form",)
    kind: Kind
    name: str

    def __init__(self, form: LispValue):
        self.form = form

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and values_equal(self.form, other.form)

    def __hash__(self) -> int:
        return hash(equality_key(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.form!r})"

    def __str__(self) -> str:
        from mal.printer import to_literal
        return to_literal(self)


class Quote(Wrapper):
    __slots__ = ()
    kind = Kind.QUOTE
    name = "quote"


class Quasiquote(Wrapper):
    __slots__ = ()
    kind = Kind.QUASIQUOTE
    name = "quasiquote"


class Unquote(Wrapper):
    __slots__ = ()
    kind = Kind.UNQUOTE
    name = "unquote"


class SpliceUnquote(Wrapper):
    __slots__ = ()
    kind = Kind.SPLICE_UNQUOTE
    name = "splice-unquote"


class Deref(Wrapper):
    __slots__ = ()
    kind = Kind.DEREF
    name = "deref"


class WithMeta(Wrapper):
    __slots__ = ()
    kind = Kind.WITH_META
    name = "with-meta"


def is_number(value: LispValue) -> bool:
    """True for int and float values; bool is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def kind_of(value: LispValue) -> Kind:
    match value:
        case NilType():
            return Kind.NIL
        case bool():
            return Kind.BOOL
        case int() | float():
            return Kind.NUMBER
        case str():
            return Kind.STRING
        case Symbol():
            return Kind.SYMBOL
        case Keyword():
            return Kind.KEYWORD
        case Char():
            return Kind.CHAR
        case List():
            return Kind.LIST
        case Vector():
            return Kind.VECTOR
        case HashMap():
            return Kind.MAP
        case Wrapper():
            return value.kind
        case Function():
            return Kind.FUNCTION
    raise MalTypeError(f"Not a mal value: {value!r} ({type(value).__name__})")


def equality_key(value: LispValue) -> object:
    """Hashable key such that two values are structurally equal iff their keys are equal."""
    kind = kind_of(value)
    match kind:
        case Kind.NIL:
            return (kind,)
        case Kind.LIST | Kind.VECTOR:
            return (kind, tuple(equality_key(v) for v in value))
        case Kind.MAP:
            return (kind, frozenset(
                (equality_key(k), equality_key(v)) for k, v in value.items()
            ))
        case Kind.SYMBOL | Kind.KEYWORD:
            return (kind, value.id)
        case Kind.CHAR:
            return (kind, value.value)
        case Kind.FUNCTION:
            return (kind, id(value))
        case _ if isinstance(value, Wrapper):
            return (kind, equality_key(value.form))
        case _:
            # bool, number, string
            return (kind, value)


def values_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality across kinds: true != 1 and (1 2) != [1 2], but 1 == 1.0."""
    return equality_key(a) == equality_key(b)
