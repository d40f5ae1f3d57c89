from __future__ import annotations

from pathlib import Path

import pytest
from openpyxl import load_workbook

from forensic_reader.cli import main


@pytest.fixture
def exports(tmp_path: Path) -> Path:
    folder = tmp_path / "exports"
    (folder / "host1").mkdir(parents=True)
    (folder / "host1" / "LocalUsers.csv").write_text(
        "Name,Admin\nbob,true\nalice,false\nbob,true\n", encoding="utf-8"
    )
    (folder / "dns_cache.csv").write_text("Entry,Data\nevil.example,10.0.0.66\n", encoding="utf-8")
    return folder


def test_indexes_lists_loaded_files(exports: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["indexes", str(exports)])

    out = capsys.readouterr().out
    assert "INDEXES (2)" in out
    assert "LocalUsers" in out
    assert "DNSCache" in out


def test_search_prints_matching_records(exports: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["search", str(exports), "-q", "index=localusers bob"])

    out = capsys.readouterr().out
    assert "2 results from 1 index" in out
    assert "Page 1 of 1" in out
    assert out.count("[LocalUsers] Name=bob, Admin=true") == 2


def test_search_reports_no_results(exports: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["search", str(exports), "-q", "index=nothing"])

    assert "No results found" in capsys.readouterr().out


def test_fields_for_one_index(exports: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["fields", str(exports), "--index", "localusers"])

    out = capsys.readouterr().out
    assert "LocalUsers (3 rows)" in out
    assert "DNSCache" not in out.split("LocalUsers (3 rows)")[1]


def test_export_csv_and_xlsx(exports: Path, tmp_path: Path) -> None:
    csv_out = tmp_path / "hits.csv"
    xlsx_out = tmp_path / "hits.xlsx"

    main(["export", str(exports), "-q", "evil", "--output", str(csv_out)])
    main(["export", str(exports), "-q", "evil", "--output", str(xlsx_out)])

    assert csv_out.read_text(encoding="utf-8") == "_index,Entry,Data\nDNSCache,evil.example,10.0.0.66"
    ws = load_workbook(xlsx_out)["Results"]
    assert [c.value for c in ws[5]] == ["DNSCache", "evil.example", "10.0.0.66"]


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    main([])

    assert "usage:" in capsys.readouterr().out
