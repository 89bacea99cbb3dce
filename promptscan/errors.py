"""Errors raised by the duplicate scanner and the similarity functions.

Every failure is all-or-nothing: a scan that raises returns no groups.
Each error carries a typed payload for programmatic callers plus a
``user_message()`` suitable for showing in the library UI.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ScanError(Exception):
    """Base class for expected scanner failures."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        super().__init__(self.message)

    def user_message(self) -> str:
        return self.message


class ValidationFailure(ScanError, ValueError):
    """Malformed options or arguments; raised before any comparison work."""

    def user_message(self) -> str:
        return f"Invalid duplicate scan settings: {self.message}"


class SizeLimitExceeded(ScanError):
    """Collection is larger than ``max_items`` and large datasets are not allowed."""

    def __init__(self, count: int, max_items: int):
        self.count = count
        self.max_items = max_items
        self.estimated_comparisons = count * (count - 1) // 2
        super().__init__(
            f"Duplicate detection limited to {max_items} prompts. "
            f"You have {count} prompts ({self.estimated_comparisons} comparisons).",
            details={
                "count": count,
                "max_items": max_items,
                "estimated_comparisons": self.estimated_comparisons,
            },
        )

    def user_message(self) -> str:
        return (
            f"Too many prompts to compare safely ({self.count} > {self.max_items}); "
            "continue anyway?"
        )


class _ProgressError(ScanError):
    """Failure raised mid-scan; carries how far the scan got."""

    def __init__(
        self,
        message: str,
        elapsed_ms: float,
        processed_comparisons: int,
        total_comparisons: int,
    ):
        self.elapsed_ms = elapsed_ms
        self.processed_comparisons = processed_comparisons
        self.total_comparisons = total_comparisons
        super().__init__(
            message,
            details={
                "elapsed_ms": elapsed_ms,
                "processed_comparisons": processed_comparisons,
                "total_comparisons": total_comparisons,
            },
        )


class ScanTimeout(_ProgressError):
    """Wall-clock budget exhausted before the scan completed."""

    def __init__(self, elapsed_ms: float, processed_comparisons: int, total_comparisons: int):
        super().__init__(
            f"Duplicate detection timed out after {round(elapsed_ms)}ms "
            f"({processed_comparisons} of {total_comparisons} comparisons done)",
            elapsed_ms,
            processed_comparisons,
            total_comparisons,
        )

    def user_message(self) -> str:
        return (
            f"Duplicate check stopped after {self.processed_comparisons} of "
            f"{self.total_comparisons} comparisons. Try again with a longer "
            "timeout or fewer prompts."
        )


class ScanCancelled(_ProgressError):
    """The caller set the cancellation signal while the scan was running."""

    def __init__(self, elapsed_ms: float, processed_comparisons: int, total_comparisons: int):
        super().__init__(
            f"Duplicate detection cancelled after {processed_comparisons} of "
            f"{total_comparisons} comparisons",
            elapsed_ms,
            processed_comparisons,
            total_comparisons,
        )

    def user_message(self) -> str:
        return "Duplicate check cancelled."
