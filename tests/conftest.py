"""
Pytest configuration and shared fixtures.
"""

import threading
import time
from pathlib import Path

import pytest

from mastermind.adapters.outbound.memory_store import InMemoryDocumentStore
from mastermind.core.domain.exceptions import DocumentReadError


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP API, filesystem)")
    config.addinivalue_line("markers", "slow: Slow tests (timeouts, sleeps)")


class FlakyStore(InMemoryDocumentStore):
    """In-memory store whose reads fail, stall or hang for selected paths.

    Hung reads block until ``release`` is set.

    Every read is recorded in ``reads`` so tests can assert how much of the
    vault an operation touched.
    """

    def __init__(self, notes=None, failing=(), slow=None, hang=(), active_path=None):
        super().__init__(notes, active_path=active_path)
        self.failing = set(failing)
        self.slow = dict(slow or {})
        self.hang = set(hang)
        self.release = threading.Event()
        self.reads = []

    def read(self, path):
        self.reads.append(path)
        if path in self.hang:
            self.release.wait(10)
        if path in self.slow:
            time.sleep(self.slow[path])
        if path in self.failing:
            raise DocumentReadError(f"Failed to read note: {path}", context={"path": path})
        return super().read(path)


@pytest.fixture
def sample_notes():
    """A small vault, in enumeration order."""
    return {
        "A.md": "the quick fox",
        "B.md": "fox jumps",
        "recipes/bread.md": "Flour, water, salt. Knead for ten minutes.",
        "projects/garden.md": "Plant tomatoes near the fence.",
    }


@pytest.fixture
def memory_store(sample_notes):
    """In-memory store seeded with ``sample_notes``."""
    return InMemoryDocumentStore(sample_notes)


@pytest.fixture
def flaky_store():
    """Factory for stores with failing or slow notes."""
    return FlakyStore


@pytest.fixture
def vault_dir(tmp_path) -> Path:
    """An on-disk vault with notes, hidden folders and attachments."""
    root = tmp_path / "vault"
    (root / "projects").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "attachments").mkdir()

    (root / "Inbox.md").write_text("Remember to water the garden.", encoding="utf-8")
    (root / "projects" / "garden.md").write_text("Plant tomatoes near the fence.", encoding="utf-8")
    (root / "projects" / "budget.md").write_text("Seeds: 12 EUR", encoding="utf-8")
    (root / ".obsidian" / "workspace.md").write_text("hidden", encoding="utf-8")
    (root / "attachments" / "photo.png").write_bytes(b"\x89PNG")
    (root / "todo.txt").write_text("not a note", encoding="utf-8")
    return root
