"""
Custom exception hierarchy for the file inventory.

Only root validation and configuration problems are raised to callers.
Everything that goes wrong while walking or enriching individual entries is
absorbed into sentinel values by the scanning package.
"""


class FileInventoryError(Exception):
    """Base exception for all file inventory errors."""
    pass


class InvalidRootError(FileInventoryError):
    """Raised when the scan root is missing, not a directory, or unresolvable."""
    pass


class ConfigurationError(FileInventoryError):
    """Raised when scanner options (worker count, provenance mode) are invalid."""
    pass
