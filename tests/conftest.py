"""
Shared pytest fixtures and configuration for CountCraft tests.

This module provides sample documents, temporary vaults, in-memory
collaborators and isolation of global configuration and logging state.
"""

import sys
from pathlib import Path
from typing import List

import pytest

# Put `src/` first so `import countcraft` uses workspace code.
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT / "src"))

from countcraft.core.counters.models import CounterConfig, CounterType
from countcraft.core.utils.config import reset_config
from countcraft.core.utils.logger import reset_logging

from tests.fixtures.store_fixtures import SAMPLE_DOCUMENT, InMemoryStore, make_config


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep settings, environment and logging state local to each test."""
    for name in (
        "COUNTCRAFT_LOG_LEVEL",
        "COUNTCRAFT_LOG_FILE",
        "COUNTCRAFT_DEBUG",
        "COUNTCRAFT_AUTO_CALCULATE",
        "COUNTCRAFT_COUNT_MODE",
        "COUNTCRAFT_DEBOUNCE_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv(
        "COUNTCRAFT_SETTINGS_FILE", str(tmp_path / ".countcraft" / "settings.json")
    )
    reset_config()
    yield
    reset_config()
    reset_logging()


@pytest.fixture
def sample_document() -> str:
    return SAMPLE_DOCUMENT


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore({"note.md": SAMPLE_DOCUMENT})


@pytest.fixture
def all_counters() -> List[CounterConfig]:
    """One enabled counter per type."""
    return [
        make_config(CounterType.WORD_COUNT, "words"),
        make_config(CounterType.CHAR_COUNT_WITH_SPACES, "chars"),
        make_config(CounterType.CHAR_COUNT_WITHOUT_SPACES, "chars-no-spaces"),
        make_config(CounterType.LINE_COUNT, "lines"),
        make_config(CounterType.HEADING_COUNT, "headings"),
        make_config(CounterType.HEADING_LEVEL_COUNT, "h2", parameter=2),
    ]


@pytest.fixture
def vault_dir(tmp_path) -> Path:
    """A small vault: two notes, a nested note, and files that are skipped."""
    root = tmp_path / "vault"
    (root / "sub").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "note.md").write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    (root / "plain.md").write_text("Just some words\n", encoding="utf-8")
    (root / "sub" / "nested.md").write_text("# Nested\n\nBody text\n", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG")
    (root / ".obsidian" / "workspace.md").write_text("ignored\n", encoding="utf-8")
    return root
