"""Cooperative yield primitives for the synchronous scan driver.

The scanner calls ``yield_now()`` every ``yield_interval_ms`` so the host can
service other work between chunks.  Hosts pick the primitive that suits
them; the asyncio driver (``DuplicateScanner.scan_async``) awaits
``asyncio.sleep(0)`` instead and needs no yielder.
"""

from __future__ import annotations

import abc
import time


class Yielder(abc.ABC):
    """Abstract base for "give the scheduler a turn" capabilities."""

    @abc.abstractmethod
    def yield_now(self) -> None:
        """Suspend briefly so other work can run."""


class SleepYielder(Yielder):
    """Yield via ``time.sleep``; releases the GIL so other threads can run."""

    def __init__(self, seconds: float = 0.0):
        self.seconds = seconds

    def yield_now(self) -> None:
        time.sleep(self.seconds)


class NullYielder(Yielder):
    """Never yields.  Useful for batch tools and tests."""

    def yield_now(self) -> None:
        return None
