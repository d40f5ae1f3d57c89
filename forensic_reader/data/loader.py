"""
File discovery, decoding, and bulk ingestion into an IndexStore.

The store only ever sees decoded text; everything byte-level lives here.
"""
from __future__ import annotations

import gzip
from pathlib import Path
from typing import Iterable

from forensic_reader.config import INBOX_FOLDER, TEXT_ENCODING
from forensic_reader.data.store import IndexStore

GZIP_SUFFIX = ".gz"


class UndecodableContentError(ValueError):
    """Raised when file bytes are not text in the configured encoding."""

    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"{file_name}: {reason}")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def discover_files(folder: Path = INBOX_FOLDER) -> list[Path]:
    """Every non-hidden file below folder, sorted by relative path."""
    if not folder.exists():
        return []
    matches = [
        p for p in folder.rglob("*")
        if p.is_file() and not any(part.startswith(".") for part in p.relative_to(folder).parts)
    ]
    matches.sort(key=lambda p: p.relative_to(folder).as_posix())
    return matches


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def decode_content(raw: bytes, file_name: str, encoding: str = TEXT_ENCODING) -> tuple[str, str]:
    """Return (file_name, text), un-gzipping "*.gz" payloads first.

    The returned name has any .gz suffix removed so "DNSCache.csv.gz" indexes
    the same as "DNSCache.csv".
    """
    if file_name.lower().endswith(GZIP_SUFFIX):
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError) as exc:
            raise UndecodableContentError(file_name, f"bad gzip data ({exc})") from exc
        file_name = file_name[: -len(GZIP_SUFFIX)]

    if b"\x00" in raw:
        raise UndecodableContentError(file_name, "binary content (NUL bytes)")
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise UndecodableContentError(file_name, f"not {encoding} text ({exc.reason})") from exc
    return file_name, text


def read_text_file(path: Path, encoding: str = TEXT_ENCODING) -> tuple[str, str]:
    """Read and decode one file from disk. Returns (file_name, text)."""
    return decode_content(path.read_bytes(), path.name, encoding)


# ---------------------------------------------------------------------------
# Bulk loading
# ---------------------------------------------------------------------------

def _expand(paths: Iterable[Path]) -> list[Path]:
    files: list[Path] = []
    for p in paths:
        if p.is_dir():
            files.extend(discover_files(p))
        else:
            files.append(p)
    return files


def load_paths(store: IndexStore, paths: Iterable[Path]) -> list[str]:
    """Ingest files and directories (recursively). Returns ingested index names.

    Undecodable files are reported and skipped; the rest still load.
    """
    files = _expand(paths)
    loaded: list[str] = []
    for n, f in enumerate(files, 1):
        try:
            file_name, text = read_text_file(f)
        except (UndecodableContentError, OSError) as exc:
            print(f"  Warning: skipping {f.name}: {exc}")
            continue

        store.ingest(file_name, text)
        name = store.index_name_for(file_name)
        loaded.append(name)
        print(f"  [{n}/{len(files)}] {f.name} → {name} ({store.indexes[name].row_count:,} rows)")

    if files:
        print(f"  Total: {len(loaded)} of {len(files)} files → {len(store.indexes)} indexes, {store.row_count():,} rows")
    return loaded


def load_inbox(store: IndexStore, inbox: Path = INBOX_FOLDER) -> IndexStore:
    """Load everything under the inbox folder into store."""
    print(f"Loading artifact exports from {inbox}...")
    if not load_paths(store, [inbox]):
        print("  No readable files found — starting with no indexes")
    return store
