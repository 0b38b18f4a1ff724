"""Export utilities for waitlist entries."""

import csv
import io
import json
from datetime import date, datetime
from pathlib import Path

from waitlyst.logging_config import get_logger
from waitlyst.settings import settings
from waitlyst.storage.models import WaitlistEntry

logger = get_logger(__name__)

CSV_HEADERS = [
    "Position",
    "Email",
    "Referral Code",
    "Referrals",
    "Referred By",
    "Joined",
]


def format_joined(created_at: datetime, date_format: str | None = None) -> str:
    """Render a signup timestamp as a local calendar date."""
    return created_at.astimezone().strftime(date_format or settings.export_date_format)


def export_to_csv(entries: list[WaitlistEntry], date_format: str | None = None) -> str:
    """Export entries to CSV text.

    One header record plus one record per entry, newline separated, with no
    trailing newline. A field holding a line break is quoted and spans
    several physical lines, so count records with ``csv.reader`` rather than
    by splitting on newlines.

    Args:
        entries: Entries in storage order
        date_format: strftime format for the Joined column (defaults to settings)

    Returns:
        CSV document
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)

    for entry in entries:
        writer.writerow(
            [
                entry.position,
                entry.email,
                entry.referral_code,
                entry.referral_count,
                entry.referred_by or "",
                format_joined(entry.created_at, date_format),
            ]
        )

    logger.info("csv_export_completed", count=len(entries))
    return buffer.getvalue().rstrip("\n")


def export_filename(today: date | None = None, extension: str = "csv") -> str:
    """Dated export file name, e.g. ``waitlyst-export-2026-06-01.csv``."""
    today = today or date.today()
    return f"{settings.app_name}-export-{today.isoformat()}.{extension}"


def write_csv_export(
    entries: list[WaitlistEntry],
    output_dir: Path | None = None,
    today: date | None = None,
) -> Path:
    """Write the CSV export to a dated file.

    Args:
        entries: Entries to export
        output_dir: Target directory (defaults to settings.exports_dir)
        today: Date embedded in the file name (defaults to today)

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir or settings.exports_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / export_filename(today)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        f.write(export_to_csv(entries))
        f.write("\n")

    logger.info("csv_export_written", path=str(output_path), count=len(entries))
    return output_path


def entries_to_jsonl(entries: list[WaitlistEntry]) -> str:
    """Render entries as JSONL text (one camelCase JSON object per line)."""
    return "".join(
        json.dumps(entry.model_dump(mode="json", by_alias=True), ensure_ascii=False) + "\n"
        for entry in entries
    )


def export_to_jsonl(entries: list[WaitlistEntry], output_path: Path) -> bool:
    """Export entries to JSONL format (one JSON object per line).

    Args:
        entries: Entries to export
        output_path: Output file path

    Returns:
        True if a file was written, False when there was nothing to export
    """
    if not entries:
        logger.warning("no_entries_to_export")
        return False

    with open(output_path, "w", encoding="utf-8") as jsonlfile:
        jsonlfile.write(entries_to_jsonl(entries))

    logger.info("jsonl_export_completed", path=str(output_path), count=len(entries))
    return True
