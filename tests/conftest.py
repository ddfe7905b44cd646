"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from pseudolex.lexer import tokenize
from pseudolex.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the token list."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def lex_one():
    """Return a helper that tokenizes a single statement and returns its token."""

    def _lex_one(source: str) -> Token:
        tokens = tokenize(source)
        assert len(tokens) == 1, f"Expected 1 token, got {len(tokens)}: {tokens}"
        return tokens[0]

    return _lex_one


def assert_kinds(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lines(tokens: list[Token], expected: list[int]) -> None:
    """Assert that the token line numbers match the expected list."""
    actual = [t.line for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
