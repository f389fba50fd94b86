import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from . import config
from .models import Record


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime(config.TIMESTAMP_FORMAT) if value else config.NOT_AVAILABLE


def _fmt(value) -> str:
    return config.NOT_AVAILABLE if value is None else str(value)


def record_to_row(record: Record) -> List[str]:
    """One CSV row in REPORT_COLUMNS order."""
    return [
        record.kind.value,
        record.file_name,
        record.folder_name,
        str(record.full_path),
        _fmt_time(record.created),
        _fmt_time(record.modified),
        _fmt(record.size_bytes),
        _fmt(record.digest),
        _fmt(record.has_mark_of_the_web),
        _fmt(record.download_url),
    ]


class ReportWriter:
    def write(self, records: Iterable[Record], output_csv: Union[str, Path]) -> int:
        """
        Writes the inventory CSV and returns the number of data rows.

        Rows are sorted by path so two reports of the same tree diff cleanly;
        the scan itself makes no ordering promise.
        """
        output_csv = Path(output_csv)
        output_csv.parent.mkdir(parents=True, exist_ok=True)

        rows = sorted(records, key=lambda r: str(r.full_path))

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(config.REPORT_COLUMNS)
            for record in rows:
                writer.writerow(record_to_row(record))

        logging.info(f"Report written: {output_csv} ({len(rows)} rows)")
        return len(rows)
