class NoteError(Exception):
    """Base class for every failure the note gateway reports."""


class InvalidInput(NoteError):
    """Malformed identifier or out-of-range content. Caller error."""


class NotFound(NoteError):
    def __init__(self, note_id: str):
        super().__init__(f"No note found with ID: {note_id}")
        self.note_id = note_id


class DuplicateId(NoteError):
    def __init__(self, note_id: str):
        super().__init__(f"Note ID already taken: {note_id}")
        self.note_id = note_id


class AllocationExhausted(NoteError):
    def __init__(self, attempts: int):
        super().__init__(f"Could not generate unique ID after {attempts} attempts")
        self.attempts = attempts


class StorageUnavailable(NoteError):
    """Transport or storage failure. Not retried within a request."""
