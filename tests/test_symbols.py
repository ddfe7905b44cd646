"""Test symbol collection and parameter-list splitting."""

import pytest

from pseudolex.errors import PseudocodeSyntaxError
from pseudolex.lexer import parse_parameters
from pseudolex.symbols import SymbolSets, collect_symbols
from pseudolex.tokens import Declare, Output, Parameter, WhileEnd


class TestCollectSymbols:
    def test_one_of_each(self, lex):
        tokens = lex(
            "DECLARE x : INTEGER\n"
            "FUNCTION f(n : INTEGER) RETURNS INTEGER\n"
            "ENDFUNCTION\n"
            "PROCEDURE p()\n"
            "ENDPROCEDURE"
        )
        symbols = collect_symbols(tokens)
        assert symbols.declared == {"x"}
        assert symbols.funcs == {"f"}
        assert symbols.procs == {"p"}

    def test_duplicate_declaration_counted_once(self, lex):
        symbols = collect_symbols(lex("DECLARE x : INTEGER\nDECLARE x : REAL"))
        assert symbols.declared == {"x"}
        assert len(symbols.declared) == 1

    def test_arrays_are_declared(self, lex):
        symbols = collect_symbols(lex("DECLARE scores : ARRAY[1:10] OF INTEGER"))
        assert symbols.declared == {"scores"}

    def test_assignments_not_collected(self, lex):
        symbols = collect_symbols(lex("total ← 0\nINPUT name\nFOR i ← 1 TO 2\nNEXT i"))
        assert symbols == SymbolSets(frozenset(), frozenset(), frozenset())

    def test_unnamed_tokens_skipped(self):
        symbols = collect_symbols([WhileEnd(1), Output("x", 2), Declare("y", "REAL", 3)])
        assert symbols.declared == {"y"}

    def test_empty(self):
        assert collect_symbols([]) == SymbolSets(frozenset(), frozenset(), frozenset())

    def test_accepts_generator(self, lex):
        tokens = lex("DECLARE a : INTEGER\nPROCEDURE show()")
        symbols = collect_symbols(t for t in tokens)
        assert symbols.declared == {"a"}
        assert symbols.procs == {"show"}


class TestParseParameters:
    def test_empty(self):
        assert parse_parameters("", 1) == ()

    def test_default_passing_is_byval(self):
        assert parse_parameters("n : INTEGER", 1) == (Parameter("n", "INTEGER", "BYVAL"),)

    def test_mixed_passing(self):
        assert parse_parameters("BYVAL a:INTEGER, BYREF b : REAL", 4) == (
            Parameter("a", "INTEGER", "BYVAL"),
            Parameter("b", "REAL", "BYREF"),
        )

    def test_from_token(self, lex_one):
        tok = lex_one("PROCEDURE Swap(BYREF x : INTEGER, BYREF y : INTEGER)")
        params = parse_parameters(tok.params, tok.line)
        assert [p.name for p in params] == ["x", "y"]
        assert {p.passing for p in params} == {"BYREF"}

    def test_missing_type_fails(self):
        with pytest.raises(PseudocodeSyntaxError, match="Invalid parameter definition") as exc_info:
            parse_parameters("a : INTEGER, b", 7)
        assert exc_info.value.line == 7
