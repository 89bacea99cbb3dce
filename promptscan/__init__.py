"""Near-duplicate detection for a personal prompt library."""

from promptscan.dedup import DuplicateGroup, DuplicateScanner, Entry, find_duplicates
from promptscan.errors import (
    ScanCancelled,
    ScanError,
    ScanTimeout,
    SizeLimitExceeded,
    ValidationFailure,
)
from promptscan.scan_options import ScanOptions
from promptscan.similarity import BELOW_THRESHOLD, EXCEEDED, smart_similarity

__version__ = "0.1.0"

__all__ = [
    "BELOW_THRESHOLD",
    "DuplicateGroup",
    "DuplicateScanner",
    "EXCEEDED",
    "Entry",
    "ScanCancelled",
    "ScanError",
    "ScanOptions",
    "ScanTimeout",
    "SizeLimitExceeded",
    "ValidationFailure",
    "find_duplicates",
    "smart_similarity",
]
