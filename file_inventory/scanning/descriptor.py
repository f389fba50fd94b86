from typing import Optional

from .. import config
from ..models import Entry, ProvenanceInfo, Record


def build_record(entry: Entry,
                 digest: Optional[str] = None,
                 provenance: Optional[ProvenanceInfo] = None) -> Record:
    """
    Flattens an Entry and its enrichment results into a Record.

    Never raises: folders ignore digest/provenance entirely, and missing
    inputs on files fall back to their sentinels.
    """
    if not entry.is_file:
        return Record(
            kind=entry.kind,
            file_name=entry.name,
            folder_name=entry.parent_name,
            full_path=entry.path,
            created=entry.created,
            modified=entry.modified,
            size_bytes=None,
            digest=config.NOT_AVAILABLE,
            has_mark_of_the_web=None,
            download_url=config.NOT_AVAILABLE,
        )

    provenance = provenance or ProvenanceInfo.ABSENT
    return Record(
        kind=entry.kind,
        file_name=entry.name,
        folder_name=entry.parent_name,
        full_path=entry.path,
        created=entry.created,
        modified=entry.modified,
        size_bytes=entry.size_bytes,
        digest=digest or config.NOT_AVAILABLE,
        has_mark_of_the_web=provenance.has_marker,
        download_url=provenance.source_url if provenance.has_marker else config.NOT_AVAILABLE,
    )
