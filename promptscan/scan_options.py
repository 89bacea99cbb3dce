"""Immutable per-scan options.

``ScanOptions`` captures every knob a single scan reads.  It is built once
per call (directly, or from the process ``Config`` via ``from_config``) and
handed to ``DuplicateScanner``; the scanner never consults globals or
``os.environ``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, TYPE_CHECKING

from promptscan.errors import ValidationFailure
from promptscan.similarity.metrics import validate_threshold

if TYPE_CHECKING:
    from promptscan.config import Config

ProgressCallback = Callable[[int, int, int], None]


@dataclass(frozen=True)
class ScanOptions:
    """Immutable, per-scan configuration.

    Attributes:
        max_items: Largest collection scanned unless ``allow_large_datasets``.
        allow_large_datasets: Skip the size guard; the timeout still applies.
        timeout_ms: Wall-clock budget for the whole scan.
        yield_interval_ms: Minimum time between cooperative yields.
        on_progress: Called as ``(percent, current, total)`` after every
            comparison and once more at completion with ``(100, total, total)``.
        title_threshold: Titles must score strictly above this.
        content_threshold: Contents must score strictly above this.
        bucket_size: Content-length bucket width used for pruning.
        cancel_event: Optional object with ``is_set()`` (e.g.
            ``threading.Event``) checked at every yield point.
    """

    max_items: int = 1000
    allow_large_datasets: bool = False
    timeout_ms: int = 10000
    yield_interval_ms: int = 50
    on_progress: Optional[ProgressCallback] = None
    title_threshold: float = 0.8
    content_threshold: float = 0.9
    bucket_size: int = 100
    cancel_event: Optional[Any] = None

    def __post_init__(self) -> None:
        _require_positive_int("max_items", self.max_items)
        _require_positive_int("timeout_ms", self.timeout_ms)
        _require_positive_int("bucket_size", self.bucket_size)
        if isinstance(self.yield_interval_ms, bool) or not isinstance(self.yield_interval_ms, (int, float)) \
                or self.yield_interval_ms < 0:
            raise ValidationFailure(
                "yield_interval_ms must be a non-negative number",
                details={"yield_interval_ms": self.yield_interval_ms},
            )
        validate_threshold(self.title_threshold, "title_threshold")
        validate_threshold(self.content_threshold, "content_threshold")
        if self.on_progress is not None and not callable(self.on_progress):
            raise ValidationFailure("on_progress must be callable")
        if self.cancel_event is not None and not callable(getattr(self.cancel_event, "is_set", None)):
            raise ValidationFailure("cancel_event must provide is_set()")

    # ------------------------------------------------------------------
    # Factory helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_config(cls, config: Config, **overrides: Any) -> ScanOptions:
        """Build options from the global ``Config``, applying per-call overrides."""
        options = cls(
            max_items=config.max_items,
            allow_large_datasets=config.allow_large_datasets,
            timeout_ms=config.timeout_ms,
            yield_interval_ms=config.yield_interval_ms,
            title_threshold=config.title_threshold,
            content_threshold=config.content_threshold,
            bucket_size=config.bucket_size,
        )
        return replace(options, **overrides) if overrides else options


def _require_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationFailure(f"{name} must be a positive integer", details={name: value})
