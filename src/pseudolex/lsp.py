"""Minimal LSP server for pseudocode: diagnostics and completion."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from pseudolex.errors import PseudocodeSyntaxError
from pseudolex.lexer import iter_tokens, parse_parameters, tokenize
from pseudolex.symbols import collect_symbols
from pseudolex.tokens import KEYWORDS, FunctionStart, ProcedureStart, Token

server = LanguageServer("pseudolex-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _line_length(source: str, line: int) -> int:
    lines = source.split("\n")
    if 0 < line <= len(lines):
        return len(lines[line - 1].rstrip("\r"))
    return 0


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize the document and publish at most one diagnostic."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    try:
        tokenize(source)
    except PseudocodeSyntaxError as exc:
        line = exc.line - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=0),
                    end=Position(line=line, character=_line_length(source, exc.line)),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="pseudolex",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


def _valid_prefix(source: str) -> list[Token]:
    """Tokens of every line before the first syntax error."""
    tokens: list[Token] = []
    try:
        for tok in iter_tokens(source):
            tokens.append(tok)
    except PseudocodeSyntaxError:
        # Completion still works while the user is mid-edit.
        pass
    return tokens


def _parameter_names(tokens: list[Token]) -> set[str]:
    names: set[str] = set()
    for tok in tokens:
        if isinstance(tok, (FunctionStart, ProcedureStart)):
            try:
                params = parse_parameters(tok.params, tok.line)
            except PseudocodeSyntaxError:
                continue
            names.update(p.name for p in params if p.name)
    return names


def completion_items(source: str) -> list[CompletionItem]:
    """Keywords, then declared names, parameters, functions and procedures."""
    tokens = _valid_prefix(source)
    symbols = collect_symbols(tokens)

    items = [
        CompletionItem(label=k, kind=CompletionItemKind.Keyword, insert_text=k)
        for k in KEYWORDS
    ]
    for name in sorted(symbols.declared | _parameter_names(tokens)):
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Variable, insert_text=name))
    for name in sorted(symbols.funcs | symbols.procs):
        items.append(
            CompletionItem(label=name, kind=CompletionItemKind.Function, insert_text=f"{name}()")
        )
    return items


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_COMPLETION)
def completions(ls: LanguageServer, params: CompletionParams) -> CompletionList:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(doc.source))


def main() -> None:
    server.start_io()
