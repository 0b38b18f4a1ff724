"""Tests for CSV and JSONL exports."""

import csv
import io
import json
from datetime import date, datetime, timezone

from waitlyst.storage import WaitlistEntry
from waitlyst.storage.exporter import (
    CSV_HEADERS,
    entries_to_jsonl,
    export_filename,
    export_to_csv,
    export_to_jsonl,
    format_joined,
    write_csv_export,
)

CREATED = datetime(2026, 4, 10, 12, 0, tzinfo=timezone.utc)


def make_entries():
    return [
        WaitlistEntry(
            id="a", email="a@x.com", referral_code="AAAA2222",
            referral_count=1, position=1, created_at=CREATED,
        ),
        WaitlistEntry(
            id="b", email="b@x.com", referral_code="BBBB3333",
            referred_by="AAAA2222", position=2, created_at=CREATED,
        ),
    ]


def test_header_only_for_empty_waitlist():
    assert export_to_csv([]) == "Position,Email,Referral Code,Referrals,Referred By,Joined"


def test_one_line_per_entry_plus_header():
    entries = make_entries()

    text = export_to_csv(entries)
    lines = text.split("\n")

    assert len(lines) == len(entries) + 1
    assert lines[0].split(",") == CSV_HEADERS
    assert not text.endswith("\n")


def test_rows_follow_documented_field_order():
    rows = list(csv.reader(io.StringIO(export_to_csv(make_entries(), "%Y-%m-%d"))))
    joined = CREATED.astimezone().strftime("%Y-%m-%d")

    assert rows[1] == ["1", "a@x.com", "AAAA2222", "1", "", joined]
    assert rows[2] == ["2", "b@x.com", "BBBB3333", "0", "AAAA2222", joined]


def test_format_joined_uses_local_date():
    assert format_joined(CREATED, "%m/%d/%Y") == CREATED.astimezone().strftime("%m/%d/%Y")


def test_export_filename_embeds_date():
    assert export_filename(date(2026, 6, 1)) == "waitlyst-export-2026-06-01.csv"
    assert export_filename(date(2026, 6, 1), extension="jsonl") == "waitlyst-export-2026-06-01.jsonl"


def test_write_csv_export(tmp_path):
    path = write_csv_export(make_entries(), tmp_path / "out", today=date(2026, 6, 1))

    assert path == tmp_path / "out" / "waitlyst-export-2026-06-01.csv"
    assert len(path.read_text(encoding="utf-8").splitlines()) == 3


def test_export_to_jsonl(tmp_path):
    path = tmp_path / "entries.jsonl"

    export_to_jsonl(make_entries(), path)

    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [r["email"] for r in records] == ["a@x.com", "b@x.com"]
    assert records[1]["referredBy"] == "AAAA2222"


def test_export_to_jsonl_skips_empty(tmp_path):
    path = tmp_path / "entries.jsonl"
    export_to_jsonl([], path)
    assert not path.exists()


def test_line_break_in_referred_by_stays_one_record():
    entries = make_entries()
    entries[1].referred_by = "BAD\nCODE"

    records = list(csv.reader(io.StringIO(export_to_csv(entries))))

    assert len(records) == len(entries) + 1
    assert records[2][4] == "BAD\nCODE"


def test_entries_to_jsonl():
    text = entries_to_jsonl(make_entries())

    lines = text.splitlines()
    assert len(lines) == 2
    assert json.loads(lines[0])["referralCode"] == "AAAA2222"
    assert entries_to_jsonl([]) == ""


def test_export_to_jsonl_reports_whether_file_was_written(tmp_path):
    assert export_to_jsonl(make_entries(), tmp_path / "a.jsonl") is True
    assert export_to_jsonl([], tmp_path / "b.jsonl") is False
