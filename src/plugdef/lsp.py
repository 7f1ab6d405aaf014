"""Minimal LSP server for plugdef — lex diagnostics only.

The comment marker comes from the plugdef.toml beside each document, as in the
CLI. Diagnostic columns are reported in UTF-16 code units, the LSP default
position encoding.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
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

from plugdef import __version__
from plugdef.cli import load_config
from plugdef.lexer import DEFAULT_COMMENT_MARKER, tokenize
from plugdef.tokens import LineIndex, Position as SourcePosition, TokenType

logger = logging.getLogger(__name__)

server = LanguageServer(
    "plugdef-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _comment_marker(doc_path: str | None) -> str:
    """Return the comment marker configured for the document's directory."""
    if not doc_path:
        return DEFAULT_COMMENT_MARKER
    try:
        config = load_config(None, Path(doc_path).parent)
    except argparse.ArgumentTypeError as exc:
        logger.warning("ignoring config for %s: %s", doc_path, exc)
        return DEFAULT_COMMENT_MARKER
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_marker = cfg_lexer.get("comment_marker")
        if isinstance(cfg_marker, str) and cfg_marker and not set(cfg_marker) & {"\n", "\r"}:
            return cfg_marker
    return DEFAULT_COMMENT_MARKER


def _utf16_position(source: str, pos: SourcePosition) -> Position:
    """Convert a 1-based code point position to a 0-based UTF-16 LSP position."""
    line_start = pos.offset - (pos.column - 1)
    units = sum(2 if ord(ch) > 0xFFFF else 1 for ch in source[line_start : pos.offset])
    return Position(line=pos.line - 1, character=units)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish one diagnostic per unscannable character."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    index = LineIndex(source)
    diagnostics: list[Diagnostic] = []

    for tok in tokenize(source, comment_marker=_comment_marker(doc.path)):
        if tok.kind != TokenType.ERROR:
            continue
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=_utf16_position(source, index.position(tok.start)),
                    end=_utf16_position(source, index.position(tok.end)),
                ),
                message=f"unexpected character {tok.text!r}",
                severity=DiagnosticSeverity.Error,
                source="plugdef",
            )
        )

    logger.debug("%s: %d diagnostics", uri, len(diagnostics))
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
