import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Union

from ..exceptions import InvalidRootError
from ..models import Entry, EntryKind


def resolve_root(path: Union[str, Path]) -> Path:
    """Returns the absolute root path, or raises InvalidRootError before any traversal."""
    try:
        root = Path(path).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise InvalidRootError(f"Cannot resolve scan root {path}: {e}") from e

    if not root.is_dir():
        raise InvalidRootError(f"Scan root {root} is not a directory")

    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise InvalidRootError(f"Cannot list scan root {root}: {e}") from e
    return root


class DiskWalker:
    """
    Lists every file and folder below a root directory.

    Traversal is best-effort: a directory that can't be listed is dropped
    along with its subtree and the walk carries on with its siblings.
    Hidden and system entries are included. Links to directories are
    listed as folders but not followed; broken links, FIFOs, sockets and
    devices are listed as special files that nobody opens.
    """

    def __init__(self, root: Path):
        self.root = root

    def __iter__(self) -> Iterator[Entry]:
        return self._iter_entries()

    def _iter_entries(self) -> Iterator[Entry]:
        """Depth-first walker using os.scandir for speed."""
        stack = [self.root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    dir_entries = list(it)
            except OSError as e:
                logging.debug(f"Skipping unlistable directory {current}: {e}")
                continue

            # Sort for stable traversal order
            dir_entries.sort(key=lambda e: e.name.lower())

            dirs = []
            for de in dir_entries:
                entry = self._describe(de, current)
                if entry is None:
                    continue
                if entry.kind is EntryKind.FOLDER and not entry.special:
                    dirs.append(entry.path)
                yield entry

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

    def _describe(self, de: os.DirEntry, parent: Path) -> Optional[Entry]:
        try:
            special = False
            if de.is_dir(follow_symlinks=False):
                kind = EntryKind.FOLDER
            elif de.is_symlink() and de.is_dir():
                kind = EntryKind.FOLDER
                special = True
            elif de.is_file():
                kind = EntryKind.FILE
            else:
                kind = EntryKind.FILE
                special = True
            # Regular files (and links to them) report their target; the rest lstat
            st = de.stat(follow_symlinks=kind is EntryKind.FILE and not special)
        except OSError as e:
            # Vanished between listing and stat
            logging.debug(f"Skipping {de.path}: {e}")
            return None

        return Entry(
            path=Path(de.path),
            kind=kind,
            name=de.name,
            parent_name=parent.name,
            created=_to_datetime(_creation_timestamp(st), de.path),
            modified=_to_datetime(st.st_mtime, de.path),
            size_bytes=st.st_size if kind is EntryKind.FILE else None,
            special=special,
        )


def _creation_timestamp(st: os.stat_result) -> float:
    # st_birthtime exists on Windows (3.12+), macOS and BSD. Elsewhere
    # st_ctime is the closest thing available (inode change time on Linux).
    ts = getattr(st, "st_birthtime", None)
    if ts is None:
        ts = st.st_ctime
    return ts


def _to_datetime(ts: float, path: str) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(ts)
    except (OSError, ValueError, OverflowError) as e:
        # Far-future or pre-epoch stamps the platform can't represent
        logging.debug(f"Unrepresentable timestamp {ts} on {path}: {e}")
        return None


def iter_entries(root: Path) -> Iterator[Entry]:
    """Lazily yields an Entry for every file and folder under root (root excluded)."""
    return iter(DiskWalker(root))
