"""Token kinds, statement token data structures, and their wire form."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, ClassVar


class TokenType(Enum):
    # Loops
    FOR_LOOP_START = auto()  # FOR i ← 1 TO 10
    FOR_LOOP_END = auto()  # NEXT i
    WHILE_START = auto()  # WHILE cond
    WHILE_END = auto()  # ENDWHILE
    REPEAT_START = auto()  # REPEAT
    REPEAT_END = auto()  # UNTIL cond

    # Declarations
    DECLARE_ARRAY = auto()  # DECLARE a : ARRAY[1:5] OF INTEGER
    DECLARE = auto()  # DECLARE x : INTEGER

    # Simple statements
    ASSIGN = auto()  # x ← expr
    OUTPUT = auto()  # OUTPUT expr
    INPUT = auto()  # INPUT x

    # Subroutines
    FUNCTION_START = auto()  # FUNCTION f(...) RETURNS T
    FUNCTION_END = auto()  # ENDFUNCTION
    PROCEDURE_START = auto()  # PROCEDURE p(...)
    PROCEDURE_END = auto()  # ENDPROCEDURE
    RETURN = auto()  # RETURN expr


# Reserved words offered by editor completion.
KEYWORDS = (
    "BEGIN",
    "END",
    "IF",
    "ELSE",
    "ENDIF",
    "WHILE",
    "ENDWHILE",
    "REPEAT",
    "UNTIL",
    "FOR",
    "NEXT",
    "CASE",
    "FUNCTION",
    "PROCEDURE",
    "RETURN",
    "DECLARE",
    "CONSTANT",
    "INPUT",
    "OUTPUT",
)

# Assignment operators, longest first so "<--" wins over "<-".
ASSIGN_OPERATORS = ("←", "<--", "<-")


@dataclass(frozen=True, slots=True)
class Dimension:
    """Inclusive lower:upper bounds of one array dimension."""

    lower: int
    upper: int


@dataclass(frozen=True, slots=True)
class Parameter:
    """One entry of a FUNCTION/PROCEDURE parameter list."""

    name: str
    datatype: str
    passing: str  # BYVAL or BYREF


@dataclass(frozen=True, slots=True)
class ForLoopStart:
    kind: ClassVar[TokenType] = TokenType.FOR_LOOP_START

    variable: str
    from_: str
    to: str
    line: int


@dataclass(frozen=True, slots=True)
class ForLoopEnd:
    kind: ClassVar[TokenType] = TokenType.FOR_LOOP_END

    variable: str
    line: int


@dataclass(frozen=True, slots=True)
class WhileStart:
    kind: ClassVar[TokenType] = TokenType.WHILE_START

    condition: str
    line: int


@dataclass(frozen=True, slots=True)
class WhileEnd:
    kind: ClassVar[TokenType] = TokenType.WHILE_END

    line: int


@dataclass(frozen=True, slots=True)
class RepeatStart:
    kind: ClassVar[TokenType] = TokenType.REPEAT_START

    line: int


@dataclass(frozen=True, slots=True)
class RepeatEnd:
    kind: ClassVar[TokenType] = TokenType.REPEAT_END

    condition: str
    line: int


@dataclass(frozen=True, slots=True)
class DeclareArray:
    """Array declaration with one Dimension per comma-separated bound pair."""

    kind: ClassVar[TokenType] = TokenType.DECLARE_ARRAY

    name: str
    dimensions: tuple[Dimension, ...]
    element_type: str
    line: int


@dataclass(frozen=True, slots=True)
class Declare:
    kind: ClassVar[TokenType] = TokenType.DECLARE

    name: str
    datatype: str
    line: int


@dataclass(frozen=True, slots=True)
class Assign:
    """Assignment; both sides are raw expression text."""

    kind: ClassVar[TokenType] = TokenType.ASSIGN

    left: str
    right: str
    line: int


@dataclass(frozen=True, slots=True)
class Output:
    kind: ClassVar[TokenType] = TokenType.OUTPUT

    value: str
    line: int


@dataclass(frozen=True, slots=True)
class Input:
    kind: ClassVar[TokenType] = TokenType.INPUT

    variable: str
    line: int


@dataclass(frozen=True, slots=True)
class FunctionStart:
    """Function header; params is the raw text between the parentheses."""

    kind: ClassVar[TokenType] = TokenType.FUNCTION_START

    name: str
    params: str
    return_type: str
    line: int


@dataclass(frozen=True, slots=True)
class FunctionEnd:
    kind: ClassVar[TokenType] = TokenType.FUNCTION_END

    line: int


@dataclass(frozen=True, slots=True)
class ProcedureStart:
    """Procedure header; params is the raw text between the parentheses."""

    kind: ClassVar[TokenType] = TokenType.PROCEDURE_START

    name: str
    params: str
    line: int


@dataclass(frozen=True, slots=True)
class ProcedureEnd:
    kind: ClassVar[TokenType] = TokenType.PROCEDURE_END

    line: int


@dataclass(frozen=True, slots=True)
class Return:
    kind: ClassVar[TokenType] = TokenType.RETURN

    value: str
    line: int


Token = (
    ForLoopStart
    | ForLoopEnd
    | WhileStart
    | WhileEnd
    | RepeatStart
    | RepeatEnd
    | DeclareArray
    | Declare
    | Assign
    | Output
    | Input
    | FunctionStart
    | FunctionEnd
    | ProcedureStart
    | ProcedureEnd
    | Return
)


# Python field name -> wire key, where they differ.
_WIRE_KEYS = {
    "from_": "from",
    "element_type": "elementType",
    "return_type": "returnType",
}


def token_to_dict(token: Token) -> dict[str, Any]:
    """Return the JSON-ready form of *token*: a ``type`` tag plus its fields."""
    result: dict[str, Any] = {"type": token.kind.name}
    for f in fields(token):
        value = getattr(token, f.name)
        if f.name == "dimensions":
            value = [{"lower": d.lower, "upper": d.upper} for d in value]
        result[_WIRE_KEYS.get(f.name, f.name)] = value
    return result
