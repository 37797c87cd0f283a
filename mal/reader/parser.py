"""
  Lisp Reader, Lexer and Parser

- The lexer produces the full token list up front; the parser walks it by index.
- Emits mal values directly (see mal.types.values):

    - nil -> Nil
    - true/false -> bool
    - integers -> int, decimals -> float (##Inf, ##-Inf, ##NaN for non-finite)
    - strings -> str (escapes processed)
    - :name -> Keyword
    - \\c, \\newline, \\u00e9 -> Char
    - (...) -> List, [...] -> Vector, {...} -> HashMap
    - ' ` ~ ~@ @ ^ -> Quote, Quasiquote, Unquote, SpliceUnquote, Deref, WithMeta
    - anything else -> Symbol
"""

from __future__ import annotations

import math
import re
import sys
from typing import Iterator, Optional

from mal import SExpression
from mal.errors import MalSyntaxError, MalUnexpectedEndOfInput
from mal.reader.reader_macros import reader_macros
from mal.types.nil import Nil
from mal.types.symbol import Keyword, Symbol
from mal.types.values import Char, HashMap, List, Vector


TOKEN_RE = re.compile(
    r"[\s,]*("
    r"(?P<splice>~@)"  # ~@ before ~
    r"|(?P<special>[\[\]{}()'`~^@])"  # brackets and prefix characters
    r'|(?P<string>"(?:\\.|[^\\"])*"?)'  # double-quoted string, possibly unterminated
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r'|(?P<atom>[^\s\[\]{}(\'"`,;)]*)'  # fallback: numbers, symbols, keywords
    r")",
    re.DOTALL,
)

STRING_RE = re.compile(r'"(?:\\.|[^\\"])*"', re.DOTALL)
INT_RE = re.compile(r"[+-]?[0-9]+")
FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][+-]?[0-9]+)?")
HEX_RE = re.compile(r"[0-9a-fA-F]{4,6}")

SPECIAL_FLOATS: dict[str, float] = {
    "##Inf": math.inf,
    "##-Inf": -math.inf,
    "##NaN": math.nan,
}

NAMED_CHARS: dict[str, str] = {
    "space": " ",
    "newline": "\n",
    "tab": "\t",
    "return": "\r",
}

STRING_UNESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

CLOSING = ")]}"


def tokenize(source: str) -> list[str]:
    """Split `source` into tokens. Comments and whitespace are dropped."""
    tokens: list[str] = []
    for m in TOKEN_RE.finditer(source):
        if m.group("comment") is not None:
            continue
        token = m.group(1)
        if token and not token.isspace():
            tokens.append(token)
    return tokens


def _unescape(body: str) -> str:
    out: list[str] = []
    chars = iter(body)
    for c in chars:
        if c == "\\":
            nxt = next(chars)  # a well-formed string never ends in a lone backslash
            out.append(STRING_UNESCAPES.get(nxt, nxt))
        else:
            out.append(c)
    return "".join(out)


def _read_char(name: str) -> Char:
    if len(name) == 1:
        return Char(name)
    if name in NAMED_CHARS:
        return Char(NAMED_CHARS[name])
    if name.startswith("u") and HEX_RE.fullmatch(name[1:]):
        code = int(name[1:], 16)
        if code <= sys.maxunicode:
            return Char(chr(code))
    raise MalSyntaxError(f"Unknown character literal: \\{name}")


def read_atom(token: str) -> SExpression:
    """Classify a non-structural token."""
    # Numbers
    if INT_RE.fullmatch(token):
        try:
            return int(token)
        except ValueError as e:
            # int() refuses text beyond sys.get_int_max_str_digits()
            raise MalSyntaxError(f"Integer literal too long: {len(token)} digits") from e
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if token in SPECIAL_FLOATS:
        return SPECIAL_FLOATS[token]

    if token == "true":
        return True
    if token == "false":
        return False
    if token == "nil":
        return Nil

    if token.startswith(":"):
        return Keyword(token[1:])

    if token.startswith("\\") and len(token) > 1:
        return _read_char(token[1:])

    if token.startswith('"'):
        if not STRING_RE.fullmatch(token):
            raise MalUnexpectedEndOfInput(f"Unterminated string: {token}")
        return _unescape(token[1:-1])
    if '"' in token:
        raise MalSyntaxError(f"Unexpected '\"' in {token}")

    return Symbol(token.strip())


class TokenStream:
    """Cursor over a token list: `peek` is the current token, `advance` moves past it."""

    def __init__(self, tokens: list[str]):
        self.tokens = list(tokens)
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Optional[str]:
        token = self.peek()
        if token is not None:
            self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def read_form(self) -> SExpression:
        """Read exactly one form starting at the current token."""
        token = self.peek()
        if token is None:
            raise MalUnexpectedEndOfInput("Unexpected end of input")

        # ------------------------
        # Dispatch reader macros first
        # ------------------------
        if reader_macros.is_macro(token):
            self.advance()  # consume the macro token
            return reader_macros.dispatch(token, self)

        match token[0]:
            case "(":
                return List(self._read_sequence(")"))
            case "[":
                return Vector(self._read_sequence("]"))
            case "{":
                items = self._read_sequence("}")
                if len(items) % 2:
                    raise MalSyntaxError(
                        f"Map literal needs an even number of forms, got {len(items)}"
                    )
                return HashMap.from_flat(items)
            case ")" | "]" | "}":
                raise MalSyntaxError(f"Unexpected '{token}'")

        self.advance()
        return read_atom(token)

    def _read_sequence(self, closing: str) -> list[SExpression]:
        self.advance()  # consume the opening bracket
        items: list[SExpression] = []
        while True:
            token = self.peek()
            if token is None:
                raise MalUnexpectedEndOfInput(f"Expected '{closing}', got end of input")
            if token[0] in CLOSING:
                if token[0] != closing:
                    raise MalSyntaxError(f"Expected '{closing}', got '{token}'")
                self.advance()
                return items
            items.append(self.read_form())

    def read_all(self) -> Iterator[SExpression]:
        while not self.at_end():
            yield self.read_form()


def read_str(source: str) -> SExpression:
    """Read the first form in `source`."""
    return TokenStream(tokenize(source)).read_form()


def read_all(source: str) -> Iterator[SExpression]:
    """Read every top-level form in `source`, in order."""
    return TokenStream(tokenize(source)).read_all()
