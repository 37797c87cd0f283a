"""Literal printer for mal values.

`to_literal` is the left inverse of the reader: for every value the reader
can produce, reading the printed text back gives a value that prints the
same way.
"""

from __future__ import annotations

import math

from mal import LispValue
from mal.errors import MalArithmeticError
from mal.types.values import Kind, kind_of

# Escapes applied to strings when printing readably. The reader undoes them.
STRING_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}

CHAR_NAMES: dict[str, str] = {
    " ": "space",
    "\n": "newline",
    "\t": "tab",
    "\r": "return",
}

# Characters that would end or split a token; written as \uXXXX
_TOKEN_BREAKING = set("[]{}()'\"`,;")


def char_literal(c: str) -> str:
    if c in CHAR_NAMES:
        return "\\" + CHAR_NAMES[c]
    if c in _TOKEN_BREAKING or c.isspace() or not c.isprintable():
        return f"\\u{ord(c):04x}"
    return "\\" + c


def escape_string(s: str) -> str:
    return "".join(STRING_ESCAPES.get(c, c) for c in s)


def number_literal(n: int | float) -> str:
    if isinstance(n, int):
        try:
            return str(n)
        except ValueError as e:
            # past sys.get_int_max_str_digits() str() refuses to convert
            raise MalArithmeticError(f"Integer too large to print: {e}") from e
    if math.isnan(n):
        return "##NaN"
    if math.isinf(n):
        return "##Inf" if n > 0 else "##-Inf"
    # repr is locale independent and round-trips through float()
    return repr(n)


def _join(items, readably: bool) -> str:
    return " ".join(to_literal(v, readably) for v in items)


def to_literal(value: LispValue, readably: bool = True) -> str:
    """Return the canonical text for `value`.

    With `readably=False` strings and chars are written raw, which is what
    `str()` of a string-holding collection shows to a user.
    """
    match kind_of(value):
        case Kind.NIL:
            return "nil"
        case Kind.BOOL:
            return "true" if value else "false"
        case Kind.NUMBER:
            return number_literal(value)
        case Kind.STRING:
            return f'"{escape_string(value)}"' if readably else value
        case Kind.SYMBOL:
            return value.id
        case Kind.KEYWORD:
            return f":{value.id}"
        case Kind.CHAR:
            if not readably:
                return value.value
            return char_literal(value.value)
        case Kind.LIST:
            return f"({_join(value, readably)})"
        case Kind.VECTOR:
            return f"[{_join(value, readably)}]"
        case Kind.MAP:
            return "{" + _join(value.flatten(), readably) + "}"
        case Kind.FUNCTION:
            return str(value)
        case _:
            # reader wrappers: 'x -> (quote x), ~@x -> (splice-unquote x), ...
            return f"({value.name} {to_literal(value.form, readably)})"
