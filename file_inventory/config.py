"""
Configuration constants for the file inventory.
"""
import os
import re

# --- Sentinels ---
# Written wherever a field does not apply (folders) or could not be computed.
NOT_AVAILABLE = "N/A"
# Download URL when a marker exists but carries no referrer/host field.
UNKNOWN_URL = "unknown"

# --- Provenance (Mark of the Web) ---
ZONE_STREAM_NAME = "Zone.Identifier"
# First line matching this is treated as the source URL field
URL_FIELD_PATTERN = re.compile(r"ReferrerUrl|HostUrl", re.IGNORECASE)
PROVENANCE_MODES = ("auto", "zone", "none")

# --- Hashing & Performance ---
HASH_CHUNK_SIZE = 1024 * 1024  # 1 MB chunks for reading
# Entries allowed to sit in the pool queue per worker before traversal waits
INFLIGHT_PER_WORKER = 4


def default_worker_count() -> int:
    return os.cpu_count() or 1


# --- Report ---
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
REPORT_COLUMNS = [
    "Type",
    "FileName",
    "FolderName",
    "FullPath",
    "CreatedTimestamp",
    "LastModifiedTimestamp",
    "FileSizeBytes",
    "MD5Hash",
    "HasMarkOfTheWeb",
    "DownloadURL",
]
REPORT_NAME_PATTERN = "FileInventory_{stamp}.csv"
