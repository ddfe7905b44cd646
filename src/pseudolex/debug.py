"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from pseudolex.symbols import SymbolSets
from pseudolex.tokens import Token, token_to_dict


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one human-readable line per token to *file*."""
    for tok in tokens:
        file.write(format_token(tok) + "\n")


def dump_symbols(symbols: SymbolSets, *, file: TextIO = sys.stderr) -> None:
    for label, names in (
        ("declared", symbols.declared),
        ("funcs", symbols.funcs),
        ("procs", symbols.procs),
    ):
        file.write(f"{label}: {', '.join(sorted(names))}\n")


def format_token(tok: Token) -> str:
    """Render *tok* as ``<line>: <KIND> field=value ...``."""
    parts = [f"{tok.line:>4}: {tok.kind.name}"]
    for key, value in token_to_dict(tok).items():
        if key in ("type", "line"):
            continue
        if key == "dimensions":
            value = ",".join(f"{d['lower']}:{d['upper']}" for d in value)
            parts.append(f"{key}=[{value}]")
        else:
            parts.append(f"{key}={value!r}")
    return " ".join(parts)
