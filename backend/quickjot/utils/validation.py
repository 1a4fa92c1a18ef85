import string

from quickjot.errors import InvalidInput

ID_LENGTH = 6
ID_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
MAX_CONTENT_LENGTH = 400

_ID_CHARS = frozenset(ID_ALPHABET)


def check_note_id(note_id: str) -> str:
    """Lookups only enforce the length so older or hand-typed ids still resolve."""
    if not isinstance(note_id, str) or len(note_id) != ID_LENGTH:
        raise InvalidInput(f"Invalid or missing {ID_LENGTH}-character note ID.")
    return note_id


def check_new_note_id(note_id: str) -> str:
    check_note_id(note_id)
    if not _ID_CHARS.issuperset(note_id):
        raise InvalidInput("Note ID may only contain digits and ASCII letters.")
    return note_id


def check_content(content: str) -> str:
    if not isinstance(content, str) or not 1 <= len(content) <= MAX_CONTENT_LENGTH:
        raise InvalidInput(f"Content must be 1-{MAX_CONTENT_LENGTH} characters.")
    return content


def check_edit_content(content: str) -> str:
    check_content(content)
    if not content.strip():
        raise InvalidInput("Content must not be blank.")
    return content
