import httpx
import pytest

from quickjot.client import NotesClient
from quickjot.errors import AllocationExhausted, DuplicateId, InvalidInput, NotFound, StorageUnavailable


@pytest.fixture()
def notes(client):
    return NotesClient(http=client)


def test_publish_get_update_roundtrip(notes):
    published = notes.publish("  hello world  ")
    assert len(published.id) == 6

    note = notes.get(published.id)
    assert note.content == "hello world"
    assert note.created_at is not None
    assert note.last_edited_at is None

    notes.update(published.id, "  edited ")
    note = notes.get(published.id)
    assert note.content == "edited"
    assert note.last_edited_at >= note.created_at


def test_exists(notes):
    assert notes.exists("A1b2C3") is False
    notes.create("A1b2C3", "hello")
    assert notes.exists("A1b2C3") is True


def test_errors_are_mapped_back(notes):
    with pytest.raises(NotFound):
        notes.get("ZZZZZZ")
    with pytest.raises(InvalidInput):
        notes.create("A1b2C3", "")
    notes.create("A1b2C3", "hello")
    with pytest.raises(DuplicateId):
        notes.create("A1b2C3", "again")


def test_publish_rejects_blank_content_locally(notes, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(notes.http, "request", fail)
    with pytest.raises(InvalidInput):
        notes.publish("   ")
    with pytest.raises(InvalidInput):
        notes.publish("x" * 401)


def test_publish_exhausts_when_checks_keep_failing(client, monkeypatch):
    notes = NotesClient(http=client, max_attempts=3)
    monkeypatch.setattr(notes, "exists", lambda note_id: True)
    with pytest.raises(AllocationExhausted):
        notes.publish("hello")


def test_unreachable_server_is_storage_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://notes.invalid", transport=httpx.MockTransport(handler))
    notes = NotesClient(http=http, max_attempts=2)
    with pytest.raises(StorageUnavailable):
        notes.exists("A1b2C3")
    # unreachable checks are collisions, so publishing gives up
    with pytest.raises(AllocationExhausted):
        notes.publish("hello")


def test_server_error_is_storage_unavailable():
    http = httpx.Client(
        base_url="http://notes.invalid",
        transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"detail": "boom"})),
    )
    with pytest.raises(StorageUnavailable):
        NotesClient(http=http).get("A1b2C3")


@pytest.mark.parametrize(
    "body",
    [
        {"text": "<html>portal</html>"},
        {"json": ["not", "an", "object"]},
        {"json": {"unexpected": True}},
    ],
)
def test_unreadable_success_body_is_storage_unavailable(body):
    http = httpx.Client(
        base_url="http://notes.invalid",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, **body)),
    )
    notes = NotesClient(http=http, max_attempts=2)
    with pytest.raises(StorageUnavailable):
        notes.get("A1b2C3")
    with pytest.raises(StorageUnavailable):
        notes.update("A1b2C3", "hello")


def test_publish_treats_unreadable_check_as_collision():
    http = httpx.Client(
        base_url="http://notes.invalid",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>portal</html>")),
    )
    with pytest.raises(AllocationExhausted):
        NotesClient(http=http, max_attempts=3).publish("hello")


@pytest.mark.parametrize("note_id", ["abc#de", "ab?c=d", "a b%20"])
def test_ids_with_url_characters_are_looked_up_verbatim(notes, note_id):
    with pytest.raises(NotFound):
        notes.get(note_id)
    with pytest.raises(NotFound):
        notes.update(note_id, "hello")
    assert notes.exists(note_id) is False
