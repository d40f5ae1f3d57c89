"""
Index-name canonicalization from source file names.
"""
from __future__ import annotations

import re
from typing import Mapping

from forensic_reader.config import KNOWN_INDEXES

_EXTENSION_RE = re.compile(r"\.csv\Z", re.IGNORECASE)
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def strip_file_name(file_name: str) -> str:
    """Drop a trailing .csv (any case), then every non-alphanumeric character."""
    base = _EXTENSION_RE.sub("", file_name)
    return _NON_ALNUM_RE.sub("", base)


def normalize_index_name(file_name: str, aliases: Mapping[str, str] = KNOWN_INDEXES) -> str:
    """Map a file name to its canonical index name.

    Known artifact types get their canonical casing ("dns_cache.CSV" →
    "DNSCache"); anything else keeps the stripped base name as written.
    """
    base = strip_file_name(file_name)
    return aliases.get(base.lower(), base)
