import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from . import config
from .models import Record
from .reporting import ReportWriter
from .scanning.filesystem import resolve_root
from .scanning.provenance import get_provenance_reader
from .scanning.scheduler import InventoryScanner


class FileInventoryApp:
    def __init__(self,
                 max_workers: Optional[int] = None,
                 provenance_mode: str = "auto",
                 show_progress: bool = False):
        self.scanner = InventoryScanner(
            max_workers=max_workers,
            provenance_reader=get_provenance_reader(provenance_mode),
            show_progress=show_progress,
        )
        self.writer = ReportWriter()

    def run(self,
            root: Union[str, Path],
            output_csv: Union[str, Path],
            cancel_event: Optional[threading.Event] = None) -> List[Record]:
        """
        1. Validate root (fatal on failure)
        2. Scan & enrich
        3. Write the CSV report
        """
        src_root = resolve_root(root)
        records = self.scanner.scan(src_root, cancel_event=cancel_event)
        self.writer.write(records, output_csv)
        self._log_summary(records)
        return records

    def _log_summary(self, records: List[Record]):
        files = [r for r in records if r.is_file]
        unhashed = sum(1 for r in files if r.digest == config.NOT_AVAILABLE)
        marked = sum(1 for r in files if r.has_mark_of_the_web)
        logging.info(
            f"Inventory: {len(files)} files, {len(records) - len(files)} folders, "
            f"{unhashed} unhashable, {marked} with Mark of the Web"
        )
