"""
Diff session state and transitions.

A `DiffSession` is an immutable value.  Every transition function takes a session and
returns a new one, leaving the input untouched, so a host can keep, compare, or discard
session states freely.
"""

from dataclasses import dataclass, replace
from typing import Callable, Tuple

from diffreview.content_reconstructor import reconstruct_content
from diffreview.diff_exceptions import (
    HunkAlreadyResolvedError,
    InvalidHunkReferenceError,
    NoActiveSessionError,
)
from diffreview.diff_types import DiffHunk, HunkStatus
from diffreview.hunk_computation import compute_hunks
from diffreview.line_differ import normalize_line_endings


DEFAULT_SUMMARY = "Changes applied"


@dataclass(frozen=True)
class DiffSessionRequest:
    """Everything needed to open a diff session for a document."""

    document_id: str
    original_content: str
    modified_content: str
    summary: str | None = None


@dataclass(frozen=True)
class DiffSession:
    """An in-flight, multi-hunk proposed edit for a single document."""

    document_id: str
    original_content: str
    modified_content: str
    hunks: Tuple[DiffHunk, ...]
    content: str  # Reconstructed content for the current hunk decisions
    current_hunk_index: int = 0
    is_active: bool = True
    summary: str = DEFAULT_SUMMARY

    @property
    def pending_count(self) -> int:
        """Number of hunks still awaiting a decision."""
        return sum(1 for h in self.hunks if h.is_pending)

    @property
    def resolved(self) -> bool:
        """True once every hunk has been accepted or rejected."""
        return all(not h.is_pending for h in self.hunks)

    @property
    def current_hunk(self) -> DiffHunk | None:
        """The hunk currently focused for review, if any."""
        if 0 <= self.current_hunk_index < len(self.hunks):
            return self.hunks[self.current_hunk_index]

        return None

    def find_hunk(self, hunk_id: str) -> DiffHunk:
        """
        Look up a hunk by id.

        Raises:
            InvalidHunkReferenceError: If no hunk has this id
        """
        return self.hunks[_hunk_index(self, hunk_id)]


def create_session(
    request: DiffSessionRequest,
    merge_gap_threshold: int = 2,
    id_generator: Callable[[], str] | None = None,
    default_summary: str = DEFAULT_SUMMARY
) -> DiffSession:
    """
    Open a diff session for a proposed edit.

    Both snapshots are stored with normalized line endings.  No session is created unless
    at least one hunk is found.

    Args:
        request: Document identity, snapshots, and optional summary
        merge_gap_threshold: Maximum unchanged lines between hunks that get merged
        id_generator: Optional callable producing unique hunk ids
        default_summary: Summary used when the request carries none

    Returns:
        A new active session with every hunk pending

    Raises:
        NoChangeDetectedError: If the proposal does not change the document
        EmptyHunkSetError: If no hunks could be computed
    """
    original = normalize_line_endings(request.original_content)
    modified = normalize_line_endings(request.modified_content)
    hunks = compute_hunks(original, modified, merge_gap_threshold, id_generator)

    return DiffSession(
        document_id=request.document_id,
        original_content=original,
        modified_content=modified,
        hunks=tuple(hunks),
        content=original,
        current_hunk_index=0,
        is_active=True,
        summary=request.summary or default_summary
    )


def accept_hunk(session: DiffSession, hunk_id: str) -> DiffSession:
    """Accept one hunk, recompute content, and resolve the session if nothing is pending."""
    return _decide_hunk(session, hunk_id, HunkStatus.ACCEPTED)


def reject_hunk(session: DiffSession, hunk_id: str) -> DiffSession:
    """Reject one hunk, recompute content, and resolve the session if nothing is pending."""
    return _decide_hunk(session, hunk_id, HunkStatus.REJECTED)


def accept_all(session: DiffSession) -> DiffSession:
    """
    Accept every hunk and resolve the session.

    Accepting everything is the same as accepting the whole proposal, so the content is
    the proposed text verbatim rather than a reconstruction.  This includes hunks that
    were rejected earlier in the session.

    Raises:
        NoActiveSessionError: If the session is no longer active
    """
    _require_active(session)
    hunks = tuple(h.with_status(HunkStatus.ACCEPTED) for h in session.hunks)
    return replace(session, hunks=hunks, content=session.modified_content, is_active=False)


def end_session(session: DiffSession) -> DiffSession:
    """
    Cancel the session, restoring the original content regardless of any decisions made.

    Raises:
        NoActiveSessionError: If the session is no longer active
    """
    _require_active(session)
    return replace(session, content=session.original_content, is_active=False)


def navigate_to_hunk(session: DiffSession, index: int) -> DiffSession:
    """
    Focus a hunk by position, clamping the index to the available hunks.

    Raises:
        NoActiveSessionError: If the session is no longer active
    """
    _require_active(session)
    clamped = max(0, min(index, len(session.hunks) - 1))
    return replace(session, current_hunk_index=clamped)


def navigate_to_next_pending(session: DiffSession) -> DiffSession:
    """Focus the next pending hunk after the current one, wrapping around."""
    _require_active(session)
    index = find_next_pending_index(session.hunks, session.current_hunk_index + 1)
    if index < 0:
        return session

    return replace(session, current_hunk_index=index)


def navigate_to_previous_pending(session: DiffSession) -> DiffSession:
    """Focus the previous pending hunk before the current one, wrapping around."""
    _require_active(session)
    index = find_previous_pending_index(session.hunks, session.current_hunk_index - 1)
    if index < 0:
        return session

    return replace(session, current_hunk_index=index)


def find_next_pending_index(hunks: Tuple[DiffHunk, ...], from_index: int) -> int:
    """
    Find the first pending hunk at or after `from_index`, wrapping to the start.

    Returns:
        Index of the pending hunk, or -1 if none is pending
    """
    count = len(hunks)
    for offset in range(count):
        index = (max(from_index, 0) + offset) % count
        if hunks[index].is_pending:
            return index

    return -1


def find_previous_pending_index(hunks: Tuple[DiffHunk, ...], from_index: int) -> int:
    """
    Find the last pending hunk at or before `from_index`, wrapping to the end.

    Returns:
        Index of the pending hunk, or -1 if none is pending
    """
    count = len(hunks)
    for offset in range(count):
        index = (min(from_index, count - 1) - offset) % count
        if hunks[index].is_pending:
            return index

    return -1


def _decide_hunk(session: DiffSession, hunk_id: str, status: HunkStatus) -> DiffSession:
    _require_active(session)
    index = _hunk_index(session, hunk_id)
    hunk = session.hunks[index]

    if not hunk.is_pending:
        raise HunkAlreadyResolvedError(
            f"Hunk {hunk_id} has already been {hunk.status.value}",
            {
                'phase': 'review',
                'reason': 'Hunk decisions are final',
                'hunk_id': hunk_id,
                'status': hunk.status.value,
            }
        )

    hunks = session.hunks[:index] + (hunk.with_status(status),) + session.hunks[index + 1:]
    content = reconstruct_content(session.original_content, session.modified_content, hunks)
    next_index = find_next_pending_index(hunks, index)

    return replace(
        session,
        hunks=hunks,
        content=content,
        current_hunk_index=next_index if next_index >= 0 else session.current_hunk_index,
        is_active=next_index >= 0
    )


def _hunk_index(session: DiffSession, hunk_id: str) -> int:
    for index, hunk in enumerate(session.hunks):
        if hunk.id == hunk_id:
            return index

    raise InvalidHunkReferenceError(
        f"Hunk {hunk_id} is not part of the session for {session.document_id}",
        {
            'phase': 'review',
            'reason': 'Unknown hunk id',
            'hunk_id': hunk_id,
            'known_hunk_ids': [h.id for h in session.hunks],
        }
    )


def _require_active(session: DiffSession) -> None:
    if not session.is_active:
        raise NoActiveSessionError(
            f"No active diff session for {session.document_id}",
            {'phase': 'review', 'reason': 'Session already closed', 'document_id': session.document_id}
        )
