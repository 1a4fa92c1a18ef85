import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from quickjot.errors import DuplicateId, InvalidInput, NoteError, NotFound
from quickjot.models.notes import ExistsOut, NoteAck, NoteCreate, NoteOut, NoteUpdate
from quickjot.storage.notes_store import NotesStore

router = APIRouter(prefix="/notes", tags=["notes"])

logger = logging.getLogger(__name__)


def get_store(request: Request) -> NotesStore:
    return request.app.state.notes_store


def _http_error(exc: NoteError) -> HTTPException:
    if isinstance(exc, InvalidInput):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, NotFound):
        return HTTPException(status_code=404, detail="Note not found.")
    if isinstance(exc, DuplicateId):
        return HTTPException(status_code=409, detail="Note ID already exists.")
    # StorageUnavailable and anything else on our side
    return HTTPException(status_code=500, detail="Internal server error. Please try again later.")


# declared before /{note_id} so "check" never reaches the single-note routes
@router.get("/check", response_model=ExistsOut)
def check_exists(id: str = Query(default=""), store: NotesStore = Depends(get_store)) -> ExistsOut:
    try:
        return ExistsOut(exists=store.exists(id))
    except NoteError as exc:
        raise _http_error(exc)


@router.post("", response_model=NoteAck, status_code=201)
def create_note(payload: NoteCreate, store: NotesStore = Depends(get_store)) -> NoteAck:
    try:
        note = store.create(payload.id, payload.content)
    except NoteError as exc:
        raise _http_error(exc)

    logger.info("Created note %s", note.id)
    return NoteAck(id=note.id, message="Note created successfully.")


@router.get("/{note_id}", response_model=NoteOut)
def get_note(note_id: str, store: NotesStore = Depends(get_store)) -> NoteOut:
    try:
        note = store.get(note_id)
    except NoteError as exc:
        raise _http_error(exc)
    return NoteOut(
        id=note.id,
        content=note.content,
        created_at=note.created_at,
        last_edited_at=note.last_edited_at,
    )


@router.put("/{note_id}", response_model=NoteAck)
def update_note(note_id: str, payload: NoteUpdate, store: NotesStore = Depends(get_store)) -> NoteAck:
    try:
        note = store.update(note_id, payload.content)
    except NoteError as exc:
        raise _http_error(exc)

    logger.info("Updated note %s", note.id)
    return NoteAck(id=note.id, message="Note updated successfully.")
