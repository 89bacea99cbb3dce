"""Pytest configuration and fixtures for promptscan tests."""

import pytest

# Add the project root to the Python path
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from promptscan.dedup import DuplicateScanner, Entry, NullYielder


class FakeClock:
    """Monotonic clock that advances by ``step`` seconds on every read."""

    def __init__(self, start: float = 0.0, step: float = 0.0):
        self.now = start
        self.step = step
        self.reads = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.reads += 1
        return value


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def scanner():
    """Scanner that never sleeps."""
    return DuplicateScanner(yielder=NullYielder())


@pytest.fixture
def unique_entries():
    """Six unrelated prompts whose contents all fall in the first length bucket."""
    samples = [
        ("Alpha", "Summarize the following article in three bullet points."),
        ("Bravo", "Translate this paragraph into formal German."),
        ("Charlie", "Write a haiku about autumn rain."),
        ("Delta", "Explain recursion to a ten year old."),
        ("Echo", "List five risks of deploying on Fridays."),
        ("Foxtrot", "Draft a polite reminder email for an unpaid invoice."),
    ]
    return [Entry(id=str(i), title=t, content=c) for i, (t, c) in enumerate(samples)]


@pytest.fixture
def sample_export():
    """Prompt-library export document as written by the extension."""
    return {
        "prompts": [
            {
                "id": "p-1",
                "title": "Code review",
                "content": "Review this diff for bugs and style issues.",
                "category": "Dev",
                "createdAt": 1700000000000,
                "updatedAt": 1700000000000,
            },
            {
                "id": "p-2",
                "title": "Code review",
                "content": "Review this diff for bugs and style issues.   ",
                "category": "Dev",
                "createdAt": 1700000001000,
                "updatedAt": 1700000001000,
            },
            {
                "id": "p-3",
                "title": "Recipe ideas",
                "content": "Suggest three dinners using chickpeas.",
                "category": "Home",
                "createdAt": 1700000002000,
                "updatedAt": 1700000002000,
            },
        ],
        "categories": [{"id": "c-1", "name": "Dev"}, {"id": "c-2", "name": "Home"}],
        "settings": {"theme": "dark"},
    }
