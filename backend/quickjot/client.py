"""HTTP client for the notes API.

``NotesClient`` mirrors the gateway's ``exists/create/get/update`` calls so
it can drive :func:`quickjot.allocator.allocate_and_create` remotely, the
same way a browser front end publishes a note.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from urllib.parse import quote

import httpx

from quickjot.allocator import DEFAULT_MAX_ATTEMPTS, allocate_and_create
from quickjot.errors import DuplicateId, InvalidInput, NotFound, StorageUnavailable
from quickjot.utils.validation import check_content, check_edit_content, check_note_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteNote:
    id: str
    content: Optional[str] = None
    created_at: Optional[datetime] = None
    last_edited_at: Optional[datetime] = None


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("message") or body)
    return str(body)


def _parse_dt(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # pydantic emits "Z" for UTC; fromisoformat only accepts it from 3.11 on
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _note_url(note_id: str) -> str:
    # lookups accept any 6 characters, including "/", "?" and "#"
    return f"/notes/{quote(note_id, safe='')}"


def _json_object(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise StorageUnavailable("Notes API returned an unreadable response")
    return body


def _remote_note(body: dict, content: Optional[str] = None) -> RemoteNote:
    try:
        return RemoteNote(
            id=str(body["id"]),
            content=content if content is not None else str(body["content"]),
            created_at=_parse_dt(body.get("createdAt")),
            last_edited_at=_parse_dt(body.get("lastEditedAt")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise StorageUnavailable("Notes API returned an unreadable response") from exc


class NotesClient:
    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        timeout: float = 10.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        http: Optional[httpx.Client] = None,
    ):
        self.max_attempts = max_attempts
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "NotesClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, url: str, note_id: str = "", **kwargs) -> dict:
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise StorageUnavailable(f"Notes API unreachable: {exc}") from exc

        if response.is_success:
            return _json_object(response)

        detail = _detail(response)
        if response.status_code == 400:
            raise InvalidInput(detail)
        if response.status_code == 404:
            raise NotFound(note_id)
        if response.status_code == 409:
            raise DuplicateId(note_id)
        raise StorageUnavailable(f"Notes API error {response.status_code}: {detail}")

    def exists(self, note_id: str) -> bool:
        check_note_id(note_id)
        body = self._request("GET", "/notes/check", note_id, params={"id": note_id})
        return body.get("exists") is True

    def create(self, note_id: str, content: str) -> RemoteNote:
        body = self._request("POST", "/notes", note_id, json={"id": note_id, "content": content})
        return _remote_note(body, content=content)

    def get(self, note_id: str) -> RemoteNote:
        check_note_id(note_id)
        body = self._request("GET", _note_url(note_id), note_id)
        return _remote_note(body)

    def update(self, note_id: str, content: str) -> RemoteNote:
        check_note_id(note_id)
        content = check_edit_content(content.strip())
        body = self._request("PUT", _note_url(note_id), note_id, json={"content": content})
        return _remote_note(body, content=content)

    def publish(self, content: str) -> RemoteNote:
        """Trim, allocate a fresh identifier, and create the note."""
        content = check_content(content.strip())
        note = allocate_and_create(self, content, max_attempts=self.max_attempts)
        logger.info("Published note %s", note.id)
        return note
