"""Short identifier allocation.

A candidate is drawn at random, checked against the store, and only then
handed to ``create``. The check and the insert are separate calls, so the
store's own duplicate rejection stays the final word: a ``DuplicateId`` from
``create`` just costs one more attempt.
"""
import logging
import random
import secrets
from typing import Callable, Iterator, Optional, Protocol

from quickjot.errors import AllocationExhausted, DuplicateId, StorageUnavailable
from quickjot.utils.validation import ID_ALPHABET, ID_LENGTH, check_content

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10

CandidateGenerator = Callable[[], str]
ExistsCheck = Callable[[str], bool]


class NoteGateway(Protocol):
    def exists(self, note_id: str) -> bool: ...

    def create(self, note_id: str, content: str): ...


def generate_candidate(rng: Optional[random.Random] = None) -> str:
    choice = rng.choice if rng is not None else secrets.choice
    return "".join(choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def _free_candidates(
    candidate_generator: CandidateGenerator,
    exists_check: ExistsCheck,
    max_attempts: int,
) -> Iterator[str]:
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt in range(1, max_attempts + 1):
        candidate = candidate_generator()
        try:
            taken = exists_check(candidate)
        except StorageUnavailable as exc:
            # an uncertain check counts as a collision
            logger.warning("Existence check for %s failed (attempt %d): %s", candidate, attempt, exc)
            continue
        if taken:
            logger.debug("Candidate %s collided (attempt %d)", candidate, attempt)
            continue
        yield candidate

    raise AllocationExhausted(max_attempts)


def allocate(
    exists_check: ExistsCheck,
    *,
    candidate_generator: CandidateGenerator = generate_candidate,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """Return an identifier that was absent from the store when checked."""
    return next(_free_candidates(candidate_generator, exists_check, max_attempts))


def allocate_and_create(
    gateway: NoteGateway,
    content: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    candidate_generator: CandidateGenerator = generate_candidate,
):
    """Allocate an identifier and create the note under it.

    Collisions found by the check and duplicates reported by ``create``
    draw from the same ``max_attempts`` budget.
    """
    check_content(content)

    for note_id in _free_candidates(candidate_generator, gateway.exists, max_attempts):
        try:
            return gateway.create(note_id, content)
        except DuplicateId:
            logger.info("Note ID %s was taken between check and create; retrying", note_id)
