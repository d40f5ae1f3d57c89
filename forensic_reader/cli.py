#!/usr/bin/env python3
"""
Forensic Reader CLI — load artifact exports, search them, profile fields, export results.

USAGE:
  python -m forensic_reader.cli indexes ./exports                     # List loaded indexes
  python -m forensic_reader.cli search ./exports -q administrator     # Free-text search
  python -m forensic_reader.cli search ./exports -q "index=localusers bob" --page 2
  python -m forensic_reader.cli fields ./exports --index LocalUsers    # Top values per field
  python -m forensic_reader.cli export ./exports -q "index=dnscache" --output hits.xlsx

  python -m forensic_reader.cli serve                                  # Start API server
  python -m forensic_reader.cli serve --port 8000

Paths may be files or folders (searched recursively). With no paths the inbox
folder is used ($FORENSIC_DATA_DIR/inbox).
"""
from __future__ import annotations

import argparse
import os
from datetime import datetime
from pathlib import Path

from forensic_reader.config import INBOX_FOLDER, EXPORTS_FOLDER, EXPORT_FILE_PREFIX
from forensic_reader.data.export import export_csv
from forensic_reader.data.loader import load_paths
from forensic_reader.data.store import IndexStore

_VALUE_WIDTH = 60


def _load(args) -> IndexStore:
    """Build a store from the paths on the command line."""
    store = IndexStore()
    paths = [Path(p) for p in args.paths] or [INBOX_FOLDER]
    print(f"Loading {', '.join(str(p) for p in paths)}...")
    load_paths(store, paths)
    query = getattr(args, "query", None)
    if query:
        store.set_query(query)
    return store


def _clip(text: str, width: int = _VALUE_WIDTH) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


def cmd_indexes(args):
    """List loaded indexes with row and column counts."""
    store = _load(args)
    if not store.indexes:
        print("\n  No indexes loaded.\n")
        return

    print(f"\nINDEXES ({len(store.indexes)}):\n")
    print(f"{'#':<4}{'Index':<28}{'Rows':>10}{'Cols':>7}  Source")
    for i, idx in enumerate(store.indexes.values(), 1):
        print(f"{i:<4}{idx.name[:26]:<28}{idx.row_count:>10,}{len(idx.columns):>7}  {idx.file_name}")
    print()


def cmd_search(args):
    """Print one page of results for a query."""
    store = _load(args)
    if args.page is not None:
        store.set_page(args.page)

    results = store.search_results()
    summary = store.result_summary(results)
    total_pages = store.total_pages(results)
    page = min(max(store.current_page, 1), total_pages)

    label = store.query.strip() or "(all records)"
    print(f"\nQuery: {label}")
    print(f"  {summary['results']:,} results from {summary['indexes']} "
          f"{'index' if summary['indexes'] == 1 else 'indexes'}  |  Page {page} of {total_pages}\n")

    if not results:
        print("  No results found\n")
        return

    start = (page - 1) * store.page_size
    for n, r in enumerate(store.page_results(results, page), start + 1):
        values = ", ".join(f"{k}={_clip(v)}" for k, v in r.row.items() if v)
        print(f"{n:<6}[{r.index}] {values}")
    print()


def cmd_fields(args):
    """Print top values per field for one index or all of them."""
    store = _load(args)
    names = store.active_indexes()
    if args.index:
        match = next((n for n in names if n.lower() == args.index.lower()), None)
        if match is None:
            print(f"  Index not found: '{args.index}'")
            return
        names = [match]

    for name in names:
        print(f"\n{name} ({store.indexes[name].row_count:,} rows)")
        print("-" * 70)
        for info in store.fields_for_index(name):
            print(f"  {info.name}")
            if not info.top_values:
                print("      (no values)")
            for fv in info.top_values[: args.top]:
                print(f"      {fv.count:>8,}  {_clip(fv.value)}")
    print()


def cmd_export(args):
    """Write every result of a query to .csv or .xlsx."""
    store = _load(args)
    results = store.search_results()

    if args.output:
        out = Path(args.output)
    else:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        out = EXPORTS_FOLDER / f"{EXPORT_FILE_PREFIX}-{stamp}.csv"

    if out.suffix.lower() == ".xlsx":
        from forensic_reader.excel.writer import export_workbook
        export_workbook(results, out, store)
    else:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(export_csv(results, store.indexes), encoding="utf-8")

    print(f"\n  Exported {len(results):,} results to: {out}\n")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Forensic Reader API on port {args.port}...")
    uvicorn.run("forensic_reader.main:app", host=args.host, port=args.port, reload=args.reload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Forensic Reader — offline search over forensic artifact CSV exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # indexes subcommand
    indexes_parser = subparsers.add_parser("indexes", help="List loaded indexes")
    indexes_parser.add_argument("paths", nargs="*", help="Files or folders to load")
    indexes_parser.set_defaults(func=cmd_indexes)

    # search subcommand
    search_parser = subparsers.add_parser("search", help="Search loaded indexes")
    search_parser.add_argument("paths", nargs="*", help="Files or folders to load")
    search_parser.add_argument("-q", "--query", default="", help='Query, e.g. "index=localusers bob"')
    search_parser.add_argument("--page", type=int, help="Page number (1-based)")
    search_parser.set_defaults(func=cmd_search)

    # fields subcommand
    fields_parser = subparsers.add_parser("fields", help="Top values per field")
    fields_parser.add_argument("paths", nargs="*", help="Files or folders to load")
    fields_parser.add_argument("--index", help="Only this index (case-insensitive)")
    fields_parser.add_argument("--top", type=int, default=10, help="Values per field (max 10)")
    fields_parser.set_defaults(func=cmd_fields)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Export query results to .csv or .xlsx")
    export_parser.add_argument("paths", nargs="*", help="Files or folders to load")
    export_parser.add_argument("-q", "--query", default="", help="Query to export")
    export_parser.add_argument("--output", help="Output file (.csv or .xlsx)")
    export_parser.set_defaults(func=cmd_export)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    args.func(args)


if __name__ == "__main__":
    main()
