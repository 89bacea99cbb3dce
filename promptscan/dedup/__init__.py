"""Near-duplicate detection over a prompt collection.

``DuplicateScanner`` compares entries pairwise using ``smart_similarity``,
pruned by content-length buckets and bounded by item-count and wall-clock
budgets.
"""

from promptscan.dedup.result import DuplicateGroup, Entry
from promptscan.dedup.scanner import DuplicateScanner, are_similar, find_duplicates
from promptscan.dedup.scheduling import NullYielder, SleepYielder, Yielder

__all__ = [
    "DuplicateGroup",
    "DuplicateScanner",
    "Entry",
    "NullYielder",
    "SleepYielder",
    "Yielder",
    "are_similar",
    "find_duplicates",
]
