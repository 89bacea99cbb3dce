"""Data classes for duplicate scan inputs and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Entry:
    """A saved prompt as seen by the scanner.

    Attributes:
        id: Stable identifier assigned by the prompt library.
        title: Short user-visible title.
        content: Prompt body; its length decides the comparison bucket.
    """

    id: str
    title: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "title": self.title, "content": self.content}


@dataclass
class DuplicateGroup:
    """An entry and every later entry judged to duplicate it.

    Attributes:
        original: The earliest entry of the group in input order.
        duplicates: Later entries, in input order.  Each entry id appears in
            at most one group per scan.
    """

    original: Entry
    duplicates: List[Entry] = field(default_factory=list)

    @property
    def ids(self) -> List[str]:
        return [self.original.id] + [d.id for d in self.duplicates]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original.to_dict(),
            "duplicates": [d.to_dict() for d in self.duplicates],
        }
