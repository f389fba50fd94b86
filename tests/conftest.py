import pytest
from pathlib import Path
from typing import Dict

from file_inventory.models import ProvenanceInfo
from file_inventory.scanning.provenance import ProvenanceReader


class StaticProvenanceReader(ProvenanceReader):
    """Answers from a name -> ProvenanceInfo map instead of touching streams."""

    def __init__(self, by_name: Dict[str, ProvenanceInfo]):
        self.by_name = by_name

    def read(self, path: Path) -> ProvenanceInfo:
        return self.by_name.get(path.name, ProvenanceInfo.ABSENT)


@pytest.fixture
def sample_tree(tmp_path):
    """
    root/a.txt       10 bytes
    root/sub/        folder
    root/sub/b.txt   empty, downloaded from http://x.test
    """
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_bytes(b"0123456789")
    sub = root / "sub"
    sub.mkdir()
    (sub / "b.txt").write_bytes(b"")
    return root


@pytest.fixture
def sample_reader():
    return StaticProvenanceReader({
        "b.txt": ProvenanceInfo(has_marker=True, source_url="http://x.test"),
    })


@pytest.fixture
def wide_tree(tmp_path):
    """Three levels of folders with a handful of files each, plus a hidden file."""
    root = tmp_path / "wide"
    root.mkdir()
    (root / ".hidden").write_text("dot")
    for i in range(4):
        d = root / f"dir{i}"
        d.mkdir()
        for j in range(5):
            (d / f"f{j}.bin").write_bytes(bytes([i, j]) * (j + 1))
        nested = d / "nested"
        nested.mkdir()
        (nested / "deep.txt").write_text(f"deep {i}")
    return root
