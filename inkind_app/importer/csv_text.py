"""
Minimal CSV tokenizer for spreadsheet exports posted as raw text.

The stdlib ``csv`` module rejects or reinterprets several malformed inputs we
receive from spreadsheet exports; this tokenizer never raises and keeps a
predictable, documented policy instead:

* a leading byte-order mark is dropped;
* ``"`` opens/closes a quoted field and ``""`` inside quotes is a literal quote;
* ``,`` ends a field and ``\\n`` ends a row;
* ``\\r`` is discarded everywhere, so CRLF and LF files parse identically;
* a final row without a trailing newline is still emitted;
* rows are returned as-is, with no column-count checks.
"""

from __future__ import annotations

BOM = "\ufeff"


def parse_csv_text(text: str | None) -> list[list[str]]:
    """Split ``text`` into rows of raw (untrimmed) string fields."""

    source = text or ""
    if source.startswith(BOM):
        source = source[1:]

    rows: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    index = 0
    length = len(source)

    while index < length:
        char = source[index]

        if char == "\r":
            index += 1
            continue

        if in_quotes:
            if char == '"':
                if index + 1 < length and source[index + 1] == '"':
                    field.append('"')
                    index += 2
                    continue
                in_quotes = False
            else:
                field.append(char)
            index += 1
            continue

        if char == '"':
            in_quotes = True
        elif char == ",":
            row.append("".join(field))
            field = []
        elif char == "\n":
            row.append("".join(field))
            rows.append(row)
            row = []
            field = []
        else:
            field.append(char)
        index += 1

    if field or row:
        row.append("".join(field))
        rows.append(row)

    return rows
