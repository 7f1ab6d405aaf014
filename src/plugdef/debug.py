"""Token stream dumps: human-readable listing and JSON-ready records."""

from __future__ import annotations

import sys
from typing import Any, TextIO

from plugdef.strings import literal_value
from plugdef.tokens import LineIndex, Token


def dump_tokens(tokens: list[Token], source: str, *, file: TextIO = sys.stderr) -> None:
    """Print one ``line:col  KIND  'text'`` line per token to *file*."""
    index = LineIndex(source)
    for tok in tokens:
        pos = index.position(tok.start)
        loc = f"{pos.line}:{pos.column}"
        file.write(f"{loc:<8} {tok.kind.name:<15} {tok.text!r}\n")


def tokens_to_json(tokens: list[Token], source: str) -> list[dict[str, Any]]:
    """Return one JSON-serializable dict per token."""
    index = LineIndex(source)
    records: list[dict[str, Any]] = []
    for tok in tokens:
        pos = index.position(tok.start)
        record: dict[str, Any] = {
            "kind": tok.kind.name,
            "text": tok.text,
            "start": tok.start,
            "end": tok.end,
            "line": pos.line,
            "column": pos.column,
        }
        if tok.kind.is_literal:
            record["value"] = literal_value(tok)
        records.append(record)
    return records
