"""Near-duplicate scan over a whole prompt collection.

``DuplicateScanner`` compares each entry only with later entries whose
content length falls in the same or an adjacent length bucket, groups
matches by first discovery, and governs the quadratic cost with an item
limit, a wall-clock timeout, cooperative yields, progress callbacks and an
optional cancellation signal.

The comparison loop is written once, as a generator that yields at every
yield point; ``scan`` drives it synchronously through a ``Yielder`` and
``scan_async`` drives it from an asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import math
import time
from bisect import bisect_right
from collections import defaultdict
from typing import Callable, Dict, Generator, Iterator, List, Optional, Sequence, Set

from promptscan.dedup.result import DuplicateGroup, Entry
from promptscan.dedup.scheduling import SleepYielder, Yielder
from promptscan.errors import ScanCancelled, ScanTimeout, SizeLimitExceeded, ValidationFailure
from promptscan.scan_options import ScanOptions
from promptscan.similarity.selector import smart_similarity
from promptscan.similarity.sentinels import score_exceeds
from promptscan.utils.logger import log_debug, log_error, log_info, log_warning, preview

BucketIndex = Dict[int, List[int]]


def are_similar(
    x: Entry,
    y: Entry,
    title_threshold: float = 0.8,
    content_threshold: float = 0.9,
) -> bool:
    """Whether two entries are duplicates of each other.

    Trimmed contents that are equal always match.  Otherwise both the title
    and the content similarity must be strictly above their thresholds.
    """
    if x.content.strip() == y.content.strip():
        return True
    title_score = smart_similarity(x.title, y.title, title_threshold)
    if not score_exceeds(title_score, title_threshold):
        return False
    content_score = smart_similarity(x.content, y.content, content_threshold)
    return score_exceeds(content_score, content_threshold)


def bucket_of(entry: Entry, bucket_size: int = 100) -> int:
    return len(entry.content) // bucket_size


def count_candidate_pairs(index: BucketIndex) -> int:
    """Pairs ``(i, j > i)`` whose buckets differ by at most one."""
    total = 0
    for bucket, members in index.items():
        size = len(members)
        total += size * (size - 1) // 2
        total += size * len(index.get(bucket + 1, ()))
    return total


def progress_percent(current: int, total: int) -> int:
    if total == 0:
        return 100
    return int(math.floor(100 * current / total + 0.5))


class DuplicateScanner:
    """Find groups of near-duplicate entries.

    Args:
        yielder: Yield primitive used by the synchronous driver.  Defaults to
            ``SleepYielder()``.
        clock: Monotonic clock in seconds; injectable for tests.

    Usage::

        scanner = DuplicateScanner()
        groups = scanner.scan(entries, ScanOptions(timeout_ms=5000))
        for group in groups:
            ...
    """

    def __init__(
        self,
        yielder: Optional[Yielder] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.yielder = yielder if yielder is not None else SleepYielder()
        self.clock = clock

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def scan(
        self, entries: Sequence[Entry], options: Optional[ScanOptions] = None
    ) -> List[DuplicateGroup]:
        """Run a scan to completion, yielding through ``self.yielder``.

        Raises:
            ValidationFailure: ``entries`` is not a list of ``Entry``.
            SizeLimitExceeded: Too many entries and large datasets not allowed.
            ScanTimeout: ``timeout_ms`` elapsed before completion.
            ScanCancelled: ``options.cancel_event`` was set.
        """
        steps = self._run(entries, options if options is not None else ScanOptions())
        while True:
            try:
                next(steps)
            except StopIteration as done:
                return done.value
            self.yielder.yield_now()

    async def scan_async(
        self, entries: Sequence[Entry], options: Optional[ScanOptions] = None
    ) -> List[DuplicateGroup]:
        """Same as ``scan`` but yields to the running event loop instead."""
        steps = self._run(entries, options if options is not None else ScanOptions())
        while True:
            try:
                next(steps)
            except StopIteration as done:
                return done.value
            await asyncio.sleep(0)

    # ------------------------------------------------------------------
    # Core loop
    # ------------------------------------------------------------------

    def _run(
        self, entries: Sequence[Entry], options: ScanOptions
    ) -> Generator[None, None, List[DuplicateGroup]]:
        self._validate(entries)

        n = len(entries)
        if n > options.max_items and not options.allow_large_datasets:
            log_warning(
                "Duplicate scan rejected by size guard",
                count=n,
                max_items=options.max_items,
            )
            raise SizeLimitExceeded(n, options.max_items)

        start = self.clock()
        buckets = [bucket_of(e, options.bucket_size) for e in entries]
        index = self._index_buckets(buckets)
        total = count_candidate_pairs(index)
        log_info(
            "Starting duplicate scan",
            entries=n,
            buckets=len(index),
            candidate_comparisons=total,
            allow_large_datasets=options.allow_large_datasets,
        )

        processed: Set[str] = set()
        groups: List[DuplicateGroup] = []
        current = 0
        last_yield = start

        for i, entry in enumerate(entries):
            self._enforce_limits(options, start, current, total)
            if entry.id in processed:
                continue

            duplicates: List[Entry] = []
            for j in self._candidates(i, buckets[i], index):
                other = entries[j]
                if other.id in processed:
                    continue

                if are_similar(entry, other, options.title_threshold, options.content_threshold):
                    duplicates.append(other)

                current += 1
                if options.on_progress is not None:
                    options.on_progress(progress_percent(current, total), current, total)

                self._enforce_limits(options, start, current, total)
                if (self.clock() - last_yield) * 1000 >= options.yield_interval_ms:
                    yield
                    last_yield = self.clock()

            if duplicates:
                groups.append(DuplicateGroup(original=entry, duplicates=duplicates))
                processed.add(entry.id)
                processed.update(d.id for d in duplicates)
                log_debug(
                    "Duplicate group found",
                    original_id=entry.id,
                    original_title=preview(entry.title),
                    duplicate_ids=[d.id for d in duplicates],
                )

        if options.on_progress is not None:
            options.on_progress(100, total, total)

        log_info(
            "Duplicate scan completed",
            groups=len(groups),
            comparisons=current,
            candidate_comparisons=total,
            elapsed_ms=round((self.clock() - start) * 1000, 2),
        )
        return groups

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(entries: Sequence[Entry]) -> None:
        if not isinstance(entries, (list, tuple)):
            raise ValidationFailure(
                "entries must be a list", details={"type": type(entries).__name__}
            )
        for position, entry in enumerate(entries):
            if not isinstance(entry, Entry):
                raise ValidationFailure(
                    f"entries[{position}] is not an Entry",
                    details={"index": position, "type": type(entry).__name__},
                )

    @staticmethod
    def _index_buckets(buckets: List[int]) -> BucketIndex:
        index: BucketIndex = defaultdict(list)
        for position, bucket in enumerate(buckets):
            index[bucket].append(position)
        return dict(index)

    @staticmethod
    def _candidates(i: int, bucket: int, index: BucketIndex) -> Iterator[int]:
        """Indices ``j > i`` in adjacent buckets, in input order."""
        runs = []
        for neighbour in (bucket - 1, bucket, bucket + 1):
            members = index.get(neighbour)
            if members:
                runs.append(members[bisect_right(members, i):])
        return heapq.merge(*runs)

    def _enforce_limits(
        self, options: ScanOptions, start: float, current: int, total: int
    ) -> None:
        elapsed_ms = (self.clock() - start) * 1000
        if options.cancel_event is not None and options.cancel_event.is_set():
            log_error(
                "Duplicate scan cancelled",
                processed_comparisons=current,
                total_comparisons=total,
            )
            raise ScanCancelled(elapsed_ms, current, total)
        if elapsed_ms > options.timeout_ms:
            log_error(
                "Duplicate scan timed out",
                elapsed_ms=round(elapsed_ms, 2),
                timeout_ms=options.timeout_ms,
                processed_comparisons=current,
                total_comparisons=total,
            )
            raise ScanTimeout(elapsed_ms, current, total)


def find_duplicates(
    entries: Sequence[Entry], options: Optional[ScanOptions] = None
) -> List[DuplicateGroup]:
    """Scan ``entries`` with a fresh ``DuplicateScanner``."""
    return DuplicateScanner().scan(entries, options)
