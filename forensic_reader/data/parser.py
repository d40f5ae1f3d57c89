"""
Delimited-text parsing: line splitting, quoted-field scanning, header/record zip.
"""
from __future__ import annotations

import re
from enum import Enum

from forensic_reader.data.schemas import ParsedTable, Record

DELIMITER = ","
QUOTE = '"'

_LINE_BREAK_RE = re.compile(r"\r?\n")

# Whitespace trimmed around lines and fields: Unicode space separators, line
# terminators and the byte-order mark. Unlike str.strip(), \x1c-\x1f and \x85
# are kept as data.
TRIM_CHARS = (
    " \t\n\v\f\r\u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class ScanState(Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

def split_lines(content: str) -> list[str]:
    """Split on line breaks, dropping empty and whitespace-only lines.

    Blank lines inside a quoted value are dropped too, so a value can never
    span lines.
    """
    return [line for line in _LINE_BREAK_RE.split(content) if line.strip(TRIM_CHARS)]


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------

def tokenize_line(line: str) -> list[str]:
    """Scan one line into trimmed field values.

    A quote switches into the quoted state, where commas are literal and a
    doubled quote yields one literal quote. A lone quote switches back.
    """
    fields: list[str] = []
    current: list[str] = []
    state = ScanState.UNQUOTED
    i = 0
    while i < len(line):
        ch = line[i]
        if state is ScanState.QUOTED:
            if ch == QUOTE:
                if line.startswith(QUOTE, i + 1):
                    current.append(QUOTE)
                    i += 1
                else:
                    state = ScanState.UNQUOTED
            else:
                current.append(ch)
        elif ch == QUOTE:
            state = ScanState.QUOTED
        elif ch == DELIMITER:
            fields.append("".join(current).strip(TRIM_CHARS))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current).strip(TRIM_CHARS))
    return fields


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

def build_record(header: list[str], values: list[str]) -> Record:
    """Zip values against the header positionally.

    Missing values become "", surplus values are dropped, and a repeated
    header name keeps its last positional value.
    """
    record: Record = {}
    for pos, col in enumerate(header):
        record[col] = values[pos] if pos < len(values) else ""
    return record


def parse_text(content: str) -> ParsedTable:
    """Parse raw delimited text into distinct columns and records."""
    lines = split_lines(content)
    if not lines:
        return ParsedTable()

    header = tokenize_line(lines[0])
    columns = tuple(dict.fromkeys(header))
    records = tuple(build_record(header, tokenize_line(line)) for line in lines[1:])
    return ParsedTable(columns=columns, records=records)
