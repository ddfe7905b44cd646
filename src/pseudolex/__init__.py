"""Line-oriented lexer for teaching pseudocode."""

from __future__ import annotations

from pseudolex.errors import PseudocodeSyntaxError
from pseudolex.lexer import iter_tokens, tokenize
from pseudolex.symbols import SymbolSets, collect_symbols

__version__ = "0.1.0"

__all__ = [
    "PseudocodeSyntaxError",
    "SymbolSets",
    "collect_symbols",
    "iter_tokens",
    "tokenize",
]
