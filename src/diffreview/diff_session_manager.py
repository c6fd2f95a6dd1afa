"""Per-document registry of diff sessions for a host editor."""

import logging
from typing import Callable, Dict, List

from diffreview import diff_session
from diffreview.diff_exceptions import DiffError, DiffValidationError, NoActiveSessionError
from diffreview.diff_review_settings import DiffReviewSettings
from diffreview.diff_session import DiffSession, DiffSessionRequest
from diffreview.diff_types import DiffReviewResult, DiffViewLine
from diffreview.diff_view_lines import build_diff_lines
from diffreview.hunk_builder import HunkIdGenerator


ContentChangedCallback = Callable[[str, str], None]
SessionClosedCallback = Callable[[str, bool], None]


class DiffSessionManager:
    """
    Owns the diff sessions of a host editor, at most one per document.

    All operations return a `DiffReviewResult`.  Failures leave existing session state
    unchanged and are reported in the result rather than raised.  Callers must serialize
    calls against the same document.
    """

    def __init__(
        self,
        settings: DiffReviewSettings | None = None,
        on_content_changed: ContentChangedCallback | None = None,
        on_session_closed: SessionClosedCallback | None = None
    ) -> None:
        """
        Initialize the manager.

        Args:
            settings: Diff review settings; defaults are used if not provided
            on_content_changed: Called with (document_id, content) whenever a decision changes
                the document content
            on_session_closed: Called with (document_id, resolved) when a session closes;
                resolved is False when the session was cancelled
        """
        self._settings = settings if settings is not None else DiffReviewSettings()
        self._on_content_changed = on_content_changed
        self._on_session_closed = on_session_closed
        self._sessions: Dict[str, DiffSession] = {}
        self._logger = logging.getLogger("DiffSessionManager")

    def settings(self) -> DiffReviewSettings:
        """Get the diff review settings."""
        return self._settings

    def get_session(self, document_id: str) -> DiffSession | None:
        """Get the active session for a document, if there is one."""
        return self._sessions.get(document_id)

    def has_session(self, document_id: str) -> bool:
        """Check whether a document has an active session."""
        return document_id in self._sessions

    def open_session(
        self,
        document_id: str,
        original_content: str,
        modified_content: str,
        summary: str | None = None
    ) -> DiffReviewResult:
        """
        Open a diff session for a proposed replacement of a document.

        An existing session for the same document is cancelled once the new proposal has
        been diffed successfully.  The host is sent the old original content and a closed
        notification with resolved set to False, so none of the old decisions are kept.
        If the new proposal fails, the existing session is left untouched.

        Args:
            document_id: Identity of the document being edited
            original_content: Current document content
            modified_content: Proposed replacement content
            summary: Optional human-readable summary of the proposal

        Returns:
            DiffReviewResult with the hunk count and ids on success
        """
        request = DiffSessionRequest(document_id, original_content, modified_content, summary)
        try:
            session = diff_session.create_session(
                request,
                merge_gap_threshold=self._settings.merge_gap_threshold,
                id_generator=HunkIdGenerator(),
                default_summary=self._settings.default_summary
            )

        except DiffError as e:
            return self._failure(document_id, 'open', e)

        if document_id in self._sessions:
            self._logger.info("Replacing existing diff session for %s", document_id)
            self.end_session(document_id)

        self._sessions[document_id] = session
        self._logger.debug("Opened diff session for %s with %d hunk(s)", document_id, len(session.hunks))

        return DiffReviewResult(
            success=True,
            message=session.summary,
            content=session.content,
            hunk_count=len(session.hunks),
            hunk_ids=[h.id for h in session.hunks]
        )

    def accept_hunk(self, document_id: str, hunk_id: str) -> DiffReviewResult:
        """Accept a single hunk of a document's session."""
        return self._transition(
            document_id, 'accept_hunk', lambda s: diff_session.accept_hunk(s, hunk_id), f'Accepted hunk {hunk_id}'
        )

    def reject_hunk(self, document_id: str, hunk_id: str) -> DiffReviewResult:
        """Reject a single hunk of a document's session."""
        return self._transition(
            document_id, 'reject_hunk', lambda s: diff_session.reject_hunk(s, hunk_id), f'Rejected hunk {hunk_id}'
        )

    def accept_all(self, document_id: str) -> DiffReviewResult:
        """Accept every remaining hunk of a document's session and close it."""
        return self._transition(document_id, 'accept_all', diff_session.accept_all, 'Accepted all changes')

    def end_session(self, document_id: str) -> DiffReviewResult:
        """Cancel a document's session and restore its original content."""
        return self._transition(document_id, 'end_session', diff_session.end_session, 'Diff session cancelled')

    def navigate_to_hunk(self, document_id: str, index: int) -> DiffReviewResult:
        """Focus a hunk of a document's session by position."""
        return self._transition(
            document_id, 'navigate', lambda s: diff_session.navigate_to_hunk(s, index), 'Navigated to hunk'
        )

    def navigate_to_next_pending(self, document_id: str) -> DiffReviewResult:
        """Focus the next pending hunk of a document's session."""
        return self._transition(
            document_id, 'navigate', diff_session.navigate_to_next_pending, 'Navigated to next pending hunk'
        )

    def navigate_to_previous_pending(self, document_id: str) -> DiffReviewResult:
        """Focus the previous pending hunk of a document's session."""
        return self._transition(
            document_id, 'navigate', diff_session.navigate_to_previous_pending, 'Navigated to previous pending hunk'
        )

    def diff_lines(self, document_id: str) -> List[DiffViewLine]:
        """
        Get the display rows of a document's session.

        Returns:
            Display rows, or an empty list if the document has no session
        """
        session = self._sessions.get(document_id)
        if session is None:
            return []

        return build_diff_lines(session)

    def _transition(
        self,
        document_id: str,
        operation: str,
        transition: Callable[[DiffSession], DiffSession],
        message: str
    ) -> DiffReviewResult:
        session = self._sessions.get(document_id)
        try:
            if session is None:
                raise NoActiveSessionError(
                    f"No active diff session for {document_id}",
                    {'phase': 'review', 'reason': 'No session open', 'document_id': document_id}
                )

            new_session = transition(session)

        except DiffError as e:
            return self._failure(document_id, operation, e)

        closed = not new_session.is_active
        if closed:
            del self._sessions[document_id]

        else:
            self._sessions[document_id] = new_session

        if new_session.content != session.content or closed:
            self._logger.debug("%s on %s updated document content", operation, document_id)
            if self._on_content_changed is not None:
                self._on_content_changed(document_id, new_session.content)

        if closed:
            resolved = new_session.resolved and operation != 'end_session'
            self._logger.debug("Diff session for %s closed (resolved=%s)", document_id, resolved)
            if self._on_session_closed is not None:
                self._on_session_closed(document_id, resolved)

        return DiffReviewResult(
            success=True,
            message=message,
            content=new_session.content,
            session_closed=closed,
            hunk_count=len(new_session.hunks),
            hunk_ids=[h.id for h in new_session.hunks]
        )

    def _failure(self, document_id: str, operation: str, error: DiffError) -> DiffReviewResult:
        if isinstance(error, DiffValidationError):
            self._logger.error("Diff %s produced a malformed hunk list for %s: %s", operation, document_id, str(error))

        else:
            self._logger.warning("Diff %s failed for %s: %s", operation, document_id, str(error))

        details = dict(error.error_details) if error.error_details else {}
        details.setdefault('error_type', type(error).__name__)
        return DiffReviewResult(
            success=False,
            message=str(error),
            error_details=details
        )
