import pytest
from fastapi.testclient import TestClient

from quickjot.config import Settings
from quickjot.main import create_app
from quickjot.storage.notes_store import NotesStore


@pytest.fixture()
def settings(tmp_path):
    # isolate data dir per test
    return Settings(data_dir=tmp_path)


@pytest.fixture()
def store(settings):
    return NotesStore(settings.data_dir)


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
