"""Pseudocode lexer: classifies each source line into one statement token."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from pseudolex.errors import PseudocodeSyntaxError
from pseudolex.tokens import (
    ASSIGN_OPERATORS,
    Assign,
    Declare,
    DeclareArray,
    Dimension,
    ForLoopEnd,
    ForLoopStart,
    FunctionEnd,
    FunctionStart,
    Input,
    Output,
    Parameter,
    ProcedureEnd,
    ProcedureStart,
    RepeatEnd,
    RepeatStart,
    Return,
    Token,
    WhileEnd,
    WhileStart,
)

logger = logging.getLogger(__name__)

# Identifiers are ASCII-only; whitespace between parts may be any Unicode space.
_IDENT = r"([A-Za-z0-9_]+)"
_ASSIGN_OP = "|".join(map(re.escape, ASSIGN_OPERATORS))

_FOR_RE = re.compile(rf"FOR\s+{_IDENT}\s*(?:{_ASSIGN_OP})\s*(.+)\s+TO\s+(.+)")
_NEXT_RE = re.compile(rf"NEXT\s+{_IDENT}")
_ARRAY_WORD_RE = re.compile(r"(?<![A-Za-z0-9_])ARRAY(?![A-Za-z0-9_])")
_DECLARE_ARRAY_RE = re.compile(
    rf"DECLARE\s+{_IDENT}\s*:\s*ARRAY\s*\[([^\]]+)\]\s*OF\s+{_IDENT}"
)
_BOUND_RE = re.compile(r"\s*([+-]?[0-9]+)\s*:\s*([+-]?[0-9]+)\s*")
_DECLARE_RE = re.compile(rf"DECLARE\s+{_IDENT}\s*:\s*{_IDENT}")
_ASSIGN_SPLIT_RE = re.compile(_ASSIGN_OP)
_FUNCTION_RE = re.compile(rf"FUNCTION\s+{_IDENT}\s*\(([^)]*)\)\s*RETURNS\s+{_IDENT}")
_PROCEDURE_RE = re.compile(rf"PROCEDURE\s+{_IDENT}\s*\(([^)]*)\)")


# ------------------------------------------------------------------
# Line preprocessing
# ------------------------------------------------------------------


def source_lines(source: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, content)`` for each non-blank, comment-stripped line.

    A comment starts at the first ``//`` on the line, even inside a quoted
    string. Line numbers are 1-based positions in *source*, unaffected by
    the lines dropped before them.
    """
    for number, raw in enumerate(source.split("\n"), start=1):
        comment = raw.find("//")
        if comment != -1:
            raw = raw[:comment].rstrip()
        content = raw.strip()
        if not content:
            logger.debug("skipping blank line %d", number)
            continue
        yield number, content


# ------------------------------------------------------------------
# Statement parsers
# ------------------------------------------------------------------


def _remainder(text: str, keyword: str) -> str:
    return text[len(keyword) :].strip()


def _parse_for(text: str, line: int) -> Token:
    m = _FOR_RE.match(text)
    if m is None:
        raise PseudocodeSyntaxError(f"Invalid FOR loop on line {line}", line, text)
    variable, from_, to = m.groups()
    return ForLoopStart(variable, from_.strip(), to.strip(), line)


def _parse_next(text: str, line: int) -> Token:
    m = _NEXT_RE.match(text)
    if m is None:
        raise PseudocodeSyntaxError(f"Invalid NEXT statement on line {line}", line, text)
    return ForLoopEnd(m.group(1), line)


def _parse_declare_array(text: str, line: int) -> Token:
    m = _DECLARE_ARRAY_RE.match(text)
    if m is None:
        raise PseudocodeSyntaxError(f"Invalid array declaration on line {line}", line, text)
    name, bounds, element_type = m.groups()
    dimensions = []
    for pair in bounds.split(","):
        bm = _BOUND_RE.fullmatch(pair)
        if bm is None:
            raise PseudocodeSyntaxError(
                f"Invalid array bound {pair.strip()!r} on line {line}", line, text
            )
        try:
            dimensions.append(Dimension(int(bm.group(1)), int(bm.group(2))))
        except ValueError as exc:
            # int() refuses digit strings past sys.get_int_max_str_digits().
            raise PseudocodeSyntaxError(
                f"Invalid array bound {pair.strip()[:20]!r} on line {line}", line, text
            ) from exc
    return DeclareArray(name, tuple(dimensions), element_type, line)


def _parse_declare(text: str, line: int) -> Token:
    m = _DECLARE_RE.match(text)
    if m is None:
        raise PseudocodeSyntaxError(f"Invalid DECLARE statement on line {line}", line, text)
    return Declare(m.group(1), m.group(2), line)


def _split_assignment(text: str) -> list[str]:
    return [part.strip() for part in _ASSIGN_SPLIT_RE.split(text)]


def _is_assignment(text: str) -> bool:
    parts = _split_assignment(text)
    return len(parts) == 2 and all(parts)


def _parse_assign(text: str, line: int) -> Token:
    left, right = _split_assignment(text)
    return Assign(left, right, line)


def _parse_function(text: str, line: int) -> Token:
    m = _FUNCTION_RE.match(text)
    if m is None:
        raise PseudocodeSyntaxError(f"Invalid FUNCTION declaration on line {line}", line, text)
    name, params, return_type = m.groups()
    return FunctionStart(name, params.strip(), return_type, line)


def _parse_procedure(text: str, line: int) -> Token:
    m = _PROCEDURE_RE.match(text)
    if m is None:
        raise PseudocodeSyntaxError(f"Invalid PROCEDURE declaration on line {line}", line, text)
    name, params = m.groups()
    return ProcedureStart(name, params.strip(), line)


# ------------------------------------------------------------------
# Rule table
# ------------------------------------------------------------------

_Predicate = Callable[[str], bool]
_Parser = Callable[[str, int], Token]


def _starts(keyword: str) -> _Predicate:
    return lambda text: text.startswith(keyword)


def _exact(keyword: str) -> _Predicate:
    return lambda text: text == keyword


def _is_array_declaration(text: str) -> bool:
    return text.startswith("DECLARE") and _ARRAY_WORD_RE.search(text) is not None


# Evaluated in order, first match wins. A keyword rule whose parser rejects
# the line raises instead of falling through; only the assignment predicate
# declines lines that merely contain an operator.
_RULES: tuple[tuple[str, _Predicate, _Parser], ...] = (
    ("for", _starts("FOR"), _parse_for),
    ("next", _starts("NEXT"), _parse_next),
    ("while", _starts("WHILE"), lambda t, n: WhileStart(_remainder(t, "WHILE"), n)),
    ("endwhile", _exact("ENDWHILE"), lambda t, n: WhileEnd(n)),
    ("repeat", _exact("REPEAT"), lambda t, n: RepeatStart(n)),
    ("until", _starts("UNTIL"), lambda t, n: RepeatEnd(_remainder(t, "UNTIL"), n)),
    ("declare_array", _is_array_declaration, _parse_declare_array),
    ("declare", _starts("DECLARE"), _parse_declare),
    ("assign", _is_assignment, _parse_assign),
    ("output", _starts("OUTPUT"), lambda t, n: Output(_remainder(t, "OUTPUT"), n)),
    ("input", _starts("INPUT"), lambda t, n: Input(_remainder(t, "INPUT"), n)),
    ("function", _starts("FUNCTION"), _parse_function),
    ("endfunction", _exact("ENDFUNCTION"), lambda t, n: FunctionEnd(n)),
    ("procedure", _starts("PROCEDURE"), _parse_procedure),
    ("endprocedure", _exact("ENDPROCEDURE"), lambda t, n: ProcedureEnd(n)),
    ("return", _starts("RETURN"), lambda t, n: Return(_remainder(t, "RETURN"), n)),
)


def classify(text: str, line: int) -> Token:
    """Classify one trimmed, comment-free line into a token."""
    for name, matches, parse in _RULES:
        if matches(text):
            logger.debug("line %d matched rule %s", line, name)
            return parse(text, line)
    raise PseudocodeSyntaxError(f'Unknown statement on line {line}: "{text}"', line, text)


def iter_tokens(source: str) -> Iterator[Token]:
    """Yield tokens in line order, raising at the first line that fails."""
    for line, text in source_lines(source):
        yield classify(text, line)


def tokenize(source: str) -> list[Token]:
    """Tokenize the full source. Either every line classifies or nothing is returned."""
    return list(iter_tokens(source))


def parse_parameters(params: str, line: int) -> tuple[Parameter, ...]:
    """Split a raw ``name : TYPE, BYREF other : TYPE`` parameter list."""
    if not params.strip():
        return ()

    result = []
    for part in params.split(","):
        definition = part.strip()
        passing = "BYVAL"
        for mode in ("BYREF", "BYVAL"):
            if definition.startswith(mode):
                passing = mode
                definition = _remainder(definition, mode)
                break

        name, colon, datatype = definition.partition(":")
        if not colon:
            raise PseudocodeSyntaxError(
                f'Invalid parameter definition "{part.strip()}" on line {line}', line, params
            )
        result.append(Parameter(name.strip(), datatype.strip(), passing))
    return tuple(result)
