import json
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from quickjot.errors import DuplicateId, NotFound, StorageUnavailable
from quickjot.utils.validation import check_content, check_edit_content, check_new_note_id, check_note_id

logger = logging.getLogger(__name__)

_TICK = timedelta(microseconds=1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _note_path(base_dir: Path, note_id: str) -> Path:
    # ids are case-sensitive and only length-checked on lookup; hex keeps the
    # file name safe on case-insensitive filesystems and free of separators.
    return base_dir / "notes" / f"{note_id.encode('utf-8').hex()}.json"


def _tmp_path(path: Path) -> Path:
    return path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")


def _write_tmp_json(path: Path, data: dict[str, Any]) -> Path:
    tmp_path = _tmp_path(path)
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def _insert_json(path: Path, data: dict[str, Any]) -> None:
    """Publish `data` at `path` only if nothing is there yet.

    os.link fails with FileExistsError when the target exists, which makes
    the insert a single atomic insert-if-absent step.
    """
    tmp_path = _write_tmp_json(path, data)
    try:
        os.link(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    tmp_path = _write_tmp_json(path, data)
    try:
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def _parse_dt(s: Optional[str]) -> Optional[datetime]:
    if s is None:
        return None
    return datetime.fromisoformat(s)


@dataclass(frozen=True)
class Note:
    id: str
    content: str
    created_at: datetime
    last_edited_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
            "last_edited_at": self.last_edited_at.isoformat() if self.last_edited_at else None,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Note":
        return cls(
            id=str(raw["id"]),
            content=str(raw["content"]),
            created_at=_parse_dt(raw["created_at"]),
            last_edited_at=_parse_dt(raw.get("last_edited_at")),
        )


class NotesStore:
    """CRUD gateway over a directory of JSON note records.

    Every call validates its arguments before touching the filesystem and
    reports failures through the quickjot.errors taxonomy only.
    """

    def __init__(self, base_dir: Path, clock: Callable[[], datetime] = _utc_now):
        self.base_dir = Path(base_dir)
        self.clock = clock

    def _ensure_notes_dir(self) -> None:
        try:
            (self.base_dir / "notes").mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.exception("Cannot prepare notes directory under %s", self.base_dir)
            raise StorageUnavailable("Note storage is unavailable") from exc

    def _read(self, note_id: str) -> Note:
        path = _note_path(self.base_dir, note_id)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return Note.from_dict(raw)
        except FileNotFoundError:
            raise NotFound(note_id) from None
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.exception("Failed to read note %s", note_id)
            raise StorageUnavailable("Note storage is unavailable") from exc

    def exists(self, note_id: str) -> bool:
        check_note_id(note_id)
        try:
            os.stat(_note_path(self.base_dir, note_id))
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.exception("Existence check failed for note %s", note_id)
            raise StorageUnavailable("Note storage is unavailable") from exc
        return True

    def create(self, note_id: str, content: str) -> Note:
        check_new_note_id(note_id)
        check_content(content)

        note = Note(id=note_id, content=content, created_at=self.clock())
        self._ensure_notes_dir()
        try:
            _insert_json(_note_path(self.base_dir, note_id), note.to_dict())
        except FileExistsError:
            raise DuplicateId(note_id) from None
        except OSError as exc:
            logger.exception("Failed to create note %s", note_id)
            raise StorageUnavailable("Note storage is unavailable") from exc
        return note

    def get(self, note_id: str) -> Note:
        check_note_id(note_id)
        return self._read(note_id)

    def update(self, note_id: str, content: str) -> Note:
        check_note_id(note_id)
        check_edit_content(content)

        existing = self._read(note_id)

        # every update advances last_edited_at, even when the content is unchanged
        now = max(self.clock(), existing.created_at)
        if existing.last_edited_at is not None and now <= existing.last_edited_at:
            now = existing.last_edited_at + _TICK

        updated = Note(
            id=existing.id,
            content=content,
            created_at=existing.created_at,
            last_edited_at=now,
        )
        try:
            _atomic_write_json(_note_path(self.base_dir, note_id), updated.to_dict())
        except OSError as exc:
            logger.exception("Failed to update note %s", note_id)
            raise StorageUnavailable("Note storage is unavailable") from exc
        return updated
