from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional

from . import config


class EntryKind(str, Enum):
    FILE = "File"
    FOLDER = "Folder"


@dataclass(frozen=True)
class Entry:
    """
    A filesystem node discovered during traversal.
    Snapshot taken when the directory was listed; never mutated afterwards.
    """
    path: Path              # absolute
    kind: EntryKind
    name: str
    parent_name: str
    created: Optional[datetime]     # None when the timestamp is out of range
    modified: Optional[datetime]
    size_bytes: Optional[int] = None   # None for folders
    # Links, FIFOs, sockets, devices: recorded but never opened or descended
    special: bool = False

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(frozen=True)
class ProvenanceInfo:
    """Result of inspecting a file's download marker."""
    has_marker: bool = False
    source_url: str = config.UNKNOWN_URL

    ABSENT: ClassVar["ProvenanceInfo"]


ProvenanceInfo.ABSENT = ProvenanceInfo()


@dataclass(frozen=True)
class Record:
    """
    One row of the inventory. Identity is full_path.

    Folder records carry None / N/A in the size, digest and provenance fields.
    """
    kind: EntryKind
    file_name: str
    folder_name: str
    full_path: Path
    created: Optional[datetime]
    modified: Optional[datetime]
    size_bytes: Optional[int]
    digest: str
    has_mark_of_the_web: Optional[bool]
    download_url: str

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE
