import pytest
from pathlib import Path
from typing import Generator
from datetime import datetime, timezone

from honoka.db import CardStore


# each test runs on cwd to its temp dir
@pytest.fixture(autouse=True)
def go_to_tmpdir(request):
    """
    Temporarily change the process working directory to the test's tmpdir.

    Keeps a stray `.env` in the repository from leaking into Settings.
    """
    tmpdir = request.getfixturevalue("tmpdir")
    with tmpdir.as_cwd():
        yield


# --- Database Fixtures ---
@pytest.fixture
def db_path_memory() -> str:
    return ":memory:"


@pytest.fixture
def db_path_file(tmp_path: Path) -> Path:
    """
    Provide the filesystem path for a temporary test database file.

    The parent directory does not exist yet, so opening the store also
    exercises directory creation.
    """
    return tmp_path / "share" / "honoka" / "test_data.db"


@pytest.fixture(params=["memory", "file"])
def store(
    request, db_path_memory: str, db_path_file: Path
) -> Generator[CardStore, None, None]:
    """
    Provide a CardStore instance for tests, either in-memory or file-backed, and ensure proper teardown.
    """
    if request.param == "memory":
        card_store = CardStore(db_path_memory)
    else:
        card_store = CardStore(db_path_file)
    try:
        yield card_store
    finally:
        card_store.close()


@pytest.fixture
def initialized_store(store: CardStore) -> CardStore:
    store.initialize()
    return store


@pytest.fixture
def t0() -> datetime:
    """A fixed, whole-second UTC instant used as the clock in tests."""
    return datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
