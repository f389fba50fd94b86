import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from .. import config
from ..exceptions import ConfigurationError
from ..models import Entry, Record
from .descriptor import build_record
from .filesystem import iter_entries, resolve_root
from .hasher import FileHasher
from .provenance import ProvenanceReader, get_provenance_reader


class ResultAccumulator:
    """Append-only record bag shared by all workers. Order is whatever finishes first."""

    def __init__(self, progress: Optional[tqdm] = None):
        self._lock = threading.Lock()
        self._records: List[Record] = []
        self._progress = progress

    def add(self, record: Record) -> None:
        with self._lock:
            self._records.append(record)
            if self._progress is not None:
                self._progress.update(1)

    def snapshot(self) -> List[Record]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class InventoryScanner:
    def __init__(self,
                 max_workers: Optional[int] = None,
                 hasher: Optional[FileHasher] = None,
                 provenance_reader: Optional[ProvenanceReader] = None,
                 show_progress: bool = False):
        if max_workers is None:
            max_workers = config.default_worker_count()
        if max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {max_workers}")

        self.max_workers = max_workers
        self.hasher = hasher or FileHasher()
        self.provenance = provenance_reader or get_provenance_reader()
        self.show_progress = show_progress

    def scan(self, root: Path, cancel_event: Optional[threading.Event] = None) -> List[Record]:
        """
        Walks root and enriches every entry on a pool of max_workers threads.

        Traversal runs on the calling thread and feeds the pool; it blocks
        once max_workers * INFLIGHT_PER_WORKER entries are waiting so huge
        trees don't pile up in memory. Returns one Record per discovered
        entry, in no particular order.

        Raises InvalidRootError, before any traversal, when root is missing,
        not a directory or cannot be listed.

        Setting cancel_event stops submission; queued entries are dropped,
        entries already being processed finish, and the partial result is
        returned.
        """
        root = resolve_root(root)
        logging.info(f"Scanning {root} with {self.max_workers} worker(s)")

        slots = threading.BoundedSemaphore(self.max_workers * config.INFLIGHT_PER_WORKER)
        submitted = 0

        with tqdm(desc="Scanning", unit=" entries", disable=not self.show_progress) as progress:
            accumulator = ResultAccumulator(progress)

            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                for entry in iter_entries(root):
                    if cancel_event is not None and cancel_event.is_set():
                        break
                    slots.acquire()
                    future = executor.submit(self._process_entry, entry, accumulator, cancel_event)
                    future.add_done_callback(lambda _: slots.release())
                    submitted += 1

        records = accumulator.snapshot()
        if cancel_event is not None and cancel_event.is_set():
            logging.warning(f"Scan cancelled: {len(records)} of {submitted} submitted entries processed")
        else:
            logging.info(f"Scan complete. {len(records)} entries processed.")
        return records

    def _process_entry(self,
                       entry: Entry,
                       accumulator: ResultAccumulator,
                       cancel_event: Optional[threading.Event]) -> None:
        """Builds and stores the record for one entry. Never raises."""
        if cancel_event is not None and cancel_event.is_set():
            return

        digest = None
        try:
            if entry.is_file and not entry.special:
                digest = self.hasher.compute_hash(entry.path)
                provenance = self.provenance.read(entry.path)
                record = build_record(entry, digest, provenance)
            else:
                record = build_record(entry)
        except Exception as e:
            logging.warning(f"Failed to enrich {entry.path}: {e}")
            # Whatever was computed before the failure is kept
            record = build_record(entry, digest)

        accumulator.add(record)
