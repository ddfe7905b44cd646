"""Symbol collection over a token stream, for editor highlighting."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pseudolex.tokens import Token, TokenType


@dataclass(frozen=True, slots=True)
class SymbolSets:
    """Identifier names grouped by role."""

    declared: frozenset[str]
    funcs: frozenset[str]
    procs: frozenset[str]


def collect_symbols(tokens: Iterable[Token]) -> SymbolSets:
    """Gather declared variables, function names and procedure names in one pass.

    Tokens without a ``name`` field are skipped.
    """
    declared: set[str] = set()
    funcs: set[str] = set()
    procs: set[str] = set()

    for tok in tokens:
        name = getattr(tok, "name", None)
        if name is None:
            continue
        if tok.kind in (TokenType.DECLARE, TokenType.DECLARE_ARRAY):
            declared.add(name)
        elif tok.kind == TokenType.FUNCTION_START:
            funcs.add(name)
        elif tok.kind == TokenType.PROCEDURE_START:
            procs.add(name)

    return SymbolSets(frozenset(declared), frozenset(funcs), frozenset(procs))
