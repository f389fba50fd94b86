"""
Mark of the Web lookup.

Browsers and mail clients on Windows tag downloaded files with an alternate
data stream named ``Zone.Identifier``::

    [ZoneTransfer]
    ZoneId=3
    ReferrerUrl=https://example.com/
    HostUrl=https://example.com/file.zip

The stream is addressed as ``<file>:Zone.Identifier``. Samba shares and WSL
copies expose the same data as a sibling file with that literal name, so the
stream reader also works there when forced with mode "zone".
"""
import codecs
import logging
import os
from pathlib import Path

from .. import config
from ..exceptions import ConfigurationError
from ..models import ProvenanceInfo


def parse_zone_identifier(text: str) -> ProvenanceInfo:
    """
    Parses a Zone.Identifier payload. The stream existing at all means the
    file carries a marker; the URL comes from the first ReferrerUrl/HostUrl
    line, split on '=' and taking the second token as-is.
    """
    for line in text.splitlines():
        if not config.URL_FIELD_PATTERN.search(line):
            continue
        # Naive split: a URL with its own '=' gets cut at that point
        parts = line.split("=")
        if len(parts) > 1:
            return ProvenanceInfo(has_marker=True, source_url=parts[1].strip())
        break
    return ProvenanceInfo(has_marker=True, source_url=config.UNKNOWN_URL)


def _decode(payload: bytes) -> str:
    if payload.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return payload.decode("utf-16", errors="replace")
    return payload.decode("utf-8-sig", errors="replace")


class ProvenanceReader:
    """Looks up download provenance for a single file."""

    def read(self, path: Path) -> ProvenanceInfo:
        raise NotImplementedError


class ZoneIdentifierReader(ProvenanceReader):
    def __init__(self, stream_name: str = config.ZONE_STREAM_NAME):
        self.stream_name = stream_name

    def stream_path(self, path: Path) -> str:
        return f"{path}:{self.stream_name}"

    def read(self, path: Path) -> ProvenanceInfo:
        try:
            with open(self.stream_path(path), "rb") as f:
                payload = f.read()
        except OSError as e:
            # Absent stream is the common case; unreadable is treated the same
            if not isinstance(e, FileNotFoundError):
                logging.debug(f"Cannot read {self.stream_name} for {path}: {e}")
            return ProvenanceInfo.ABSENT

        return parse_zone_identifier(_decode(payload))


class NullProvenanceReader(ProvenanceReader):
    """For platforms without alternate data streams: never finds a marker."""

    def read(self, path: Path) -> ProvenanceInfo:
        return ProvenanceInfo.ABSENT


def get_provenance_reader(mode: str = "auto") -> ProvenanceReader:
    if mode not in config.PROVENANCE_MODES:
        raise ConfigurationError(
            f"Unknown provenance mode {mode!r} (expected one of {', '.join(config.PROVENANCE_MODES)})"
        )
    if mode == "zone" or (mode == "auto" and os.name == "nt"):
        return ZoneIdentifierReader()
    return NullProvenanceReader()
