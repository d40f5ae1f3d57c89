from __future__ import annotations

from forensic_reader.data.export import escape_value, export_columns, export_csv, results_frame
from forensic_reader.data.parser import parse_text
from forensic_reader.data.store import IndexStore


def test_escape_only_when_needed() -> None:
    assert escape_value("plain") == "plain"
    assert escape_value("a,b") == '"a,b"'
    assert escape_value('say "hi"') == '"say ""hi"""'
    assert escape_value("line1\nline2") == '"line1\nline2"'
    assert escape_value("") == ""
    assert escape_value(None) == ""


def test_single_index_export_uses_its_columns(loaded_store: IndexStore) -> None:
    loaded_store.set_query("index=localusers")
    text = export_csv(loaded_store.search_results(), loaded_store.indexes)

    assert text.split("\n") == [
        "_index,Name,Admin",
        "LocalUsers,bob,true",
        "LocalUsers,alice,false",
        "LocalUsers,bob,true",
    ]


def test_mixed_indexes_export_union_of_columns(loaded_store: IndexStore) -> None:
    results = loaded_store.search_results()

    assert export_columns(results) == ["Name", "Admin", "Entry", "RecordName", "Data"]
    lines = export_csv(results, loaded_store.indexes).split("\n")
    assert lines[0] == "_index,Name,Admin,Entry,RecordName,Data"
    assert lines[1] == "LocalUsers,bob,true,,,"
    assert lines[-1] == 'DNSCache,,,intranet,"intranet.corp, local",10.1.1.1'


def test_no_results_still_writes_header(store: IndexStore) -> None:
    assert export_csv([]) == "_index"
    assert list(results_frame([]).columns) == ["_index"]


def test_results_frame_layout(loaded_store: IndexStore) -> None:
    loaded_store.set_query("alice")
    df = results_frame(loaded_store.search_results(), loaded_store.indexes)

    assert list(df.columns) == ["_index", "Name", "Admin"]
    assert df.to_dict("records") == [{"_index": "LocalUsers", "Name": "alice", "Admin": "false"}]


def test_parse_export_parse_round_trip(store: IndexStore) -> None:
    source = "\n".join(
        [
            "Path,Args,Note",
            'C:\\Windows\\cmd.exe,"/c ""echo, hi""",ok',
            'C:\\Tools\\x.exe,,"quoted ""word"""',
        ]
    )
    store.ingest("Process.csv", source)
    original = store.indexes["Process"]

    exported = export_csv(store.search_results(), store.indexes)
    reparsed = parse_text(exported)

    assert reparsed.columns == ("_index",) + original.columns
    assert [{k: v for k, v in r.items() if k != "_index"} for r in reparsed.records] == list(original.records)
    assert {r["_index"] for r in reparsed.records} == {"Process"}
