"""Entry sources for the scanner.

The scanner only needs a list of ``Entry`` values; storage belongs to the
prompt library.  These repositories adapt the two shapes we see in practice:
an in-memory list and the library's JSON export
(``{"prompts": [...], "categories": [...], "settings": {...}}``), or a bare
list of prompt objects.
"""

from __future__ import annotations

import abc
import json
import pathlib
from typing import Any, Iterable, List, Union

from pydantic import BaseModel, ValidationError

from promptscan.dedup.result import Entry
from promptscan.errors import ValidationFailure
from promptscan.utils.logger import log_debug, log_info


class PromptRecord(BaseModel):
    """One prompt as stored by the library; unknown keys are ignored."""

    id: str
    title: str
    content: str

    model_config = {"extra": "ignore"}

    def to_entry(self) -> Entry:
        return Entry(id=self.id, title=self.title, content=self.content)


class EntryRepository(abc.ABC):
    """Read-only source of entries for a scan."""

    @abc.abstractmethod
    def get_all(self) -> List[Entry]:
        """Return a snapshot of every entry, in library order."""


class InMemoryEntryRepository(EntryRepository):
    def __init__(self, entries: Iterable[Entry] = ()):
        self._entries = list(entries)

    def get_all(self) -> List[Entry]:
        return list(self._entries)


class JsonFileEntryRepository(EntryRepository):
    """Load entries from a prompt-library export file.

    Args:
        path: Path to the JSON document.

    Raises:
        ValidationFailure: The document is not valid JSON, has no prompt
            list, or a record is missing ``id``/``title``/``content``.
    """

    def __init__(self, path: Union[str, pathlib.Path]):
        self.path = pathlib.Path(path)

    def get_all(self) -> List[Entry]:
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                document = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationFailure(
                    f"{self.path} is not valid JSON: {e}", details={"path": str(self.path)}
                ) from e

        entries = parse_entries(document)
        log_info("Entries loaded", path=str(self.path), count=len(entries))
        return entries


def parse_entries(document: Any) -> List[Entry]:
    """Convert an export document or a bare list into entries."""
    if isinstance(document, dict):
        records = document.get("prompts")
    else:
        records = document
    if not isinstance(records, list):
        raise ValidationFailure(
            "expected a list of prompts or an object with a 'prompts' list",
            details={"type": type(document).__name__},
        )

    entries: List[Entry] = []
    for position, raw in enumerate(records):
        try:
            entries.append(PromptRecord.model_validate(raw).to_entry())
        except ValidationError as e:
            raise ValidationFailure(
                f"prompt #{position} is invalid: {e.errors()[0]['msg']}",
                details={"index": position},
            ) from e
    log_debug("Parsed prompt records", count=len(entries))
    return entries
