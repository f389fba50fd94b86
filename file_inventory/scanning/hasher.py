import hashlib
import logging
from pathlib import Path

from .. import config


class FileHasher:
    def compute_hash(self, path: Path) -> str:
        """
        Computes the MD5 fingerprint of the file contents as lowercase hex.

        MD5 is only used as a content identity check here, never for security.
        Any I/O failure (permission denied, locked, deleted mid-scan, path too
        long) yields config.NOT_AVAILABLE instead of raising, so a single
        unreadable file can't abort the scan.
        """
        if path.is_dir():
            return config.NOT_AVAILABLE

        try:
            return self._full_md5(path)
        except OSError as e:
            logging.debug(f"Cannot hash {path}: {e}")
            return config.NOT_AVAILABLE

    def _full_md5(self, path: Path) -> str:
        """Reads entire file. High I/O cost."""
        h = hashlib.md5(usedforsecurity=False)
        with open(path, 'rb') as f:
            while chunk := f.read(config.HASH_CHUNK_SIZE):
                h.update(chunk)
        return h.hexdigest()
