from __future__ import annotations

from typing import TYPE_CHECKING

from mal import SExpression
from mal.errors import MalSyntaxError
from mal.types.values import (
    Deref,
    Quasiquote,
    Quote,
    SpliceUnquote,
    Unquote,
    WithMeta,
    Wrapper,
)

if TYPE_CHECKING:
    from mal.reader.parser import TokenStream


class ReaderMacros:
    """
    Registry of prefix reader macros.
    Maps a prefix token (like ', `, ~@) to the wrapper kind that consumes
    the next parsed form.
    """

    def __init__(self):
        self.macros: dict[str, type[Wrapper]] = {}

    def define(self, token: str, wrapper: type[Wrapper]) -> None:
        """Register a reader macro for a given prefix token."""
        self.macros[token] = wrapper

    def is_macro(self, token: str) -> bool:
        return token in self.macros

    def dispatch(self, token: str, stream: TokenStream) -> SExpression:
        """Wrap the form that follows `token` (already consumed) on the stream."""
        if token not in self.macros:
            raise MalSyntaxError(f"No reader macro defined for {token!r}")
        return self.macros[token](stream.read_form())


# -------------------------
# Single global instance
# -------------------------
reader_macros: ReaderMacros = ReaderMacros()

QUOTE_FORMS: dict[str, type[Wrapper]] = {
    "'": Quote,
    "`": Quasiquote,
    "~": Unquote,
    "~@": SpliceUnquote,
    "@": Deref,
    "^": WithMeta,
}

for key, wrapper in QUOTE_FORMS.items():
    reader_macros.define(key, wrapper)
