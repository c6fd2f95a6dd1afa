"""Qt-specific diff session handling for editor documents."""

import logging

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QTextCursor, QTextDocument

from diffreview import DiffReviewResult, DiffReviewSettings, DiffSession, DiffSessionManager


class EditorDiffSession(QObject):
    """
    Reviews an AI-proposed rewrite of a single Qt text document.

    The document always shows the content reconstructed from the current hunk decisions.
    Each content change is applied as one edit block, so it is a single undo step.
    """

    content_changed = Signal(str)
    session_closed = Signal(bool)  # True if resolved, False if cancelled
    error_occurred = Signal(str)

    def __init__(
        self,
        document: QTextDocument,
        document_id: str,
        settings: DiffReviewSettings | None = None,
        parent: QObject | None = None
    ) -> None:
        """
        Initialize the editor diff session.

        Args:
            document: Qt text document to keep in sync with the session
            document_id: Identity of the document in the host
            settings: Diff review settings
            parent: Optional parent object
        """
        super().__init__(parent)
        self._document = document
        self._document_id = document_id
        self._manager = DiffSessionManager(
            settings,
            on_content_changed=self._handle_content_changed,
            on_session_closed=self._handle_session_closed
        )
        self._logger = logging.getLogger("EditorDiffSession")

    def session(self) -> DiffSession | None:
        """Get the active session, if there is one."""
        return self._manager.get_session(self._document_id)

    def is_active(self) -> bool:
        """Check whether a review is in progress."""
        return self._manager.has_session(self._document_id)

    def start(self, modified_content: str, summary: str | None = None) -> DiffReviewResult:
        """
        Start reviewing a proposed replacement of the document's current content.

        A review already in progress is cancelled first, so the new proposal is diffed
        against the restored original rather than a partly reviewed document.

        Args:
            modified_content: Proposed replacement content
            summary: Optional human-readable summary of the proposal

        Returns:
            DiffReviewResult with operation status
        """
        if self.is_active():
            self._logger.debug("Cancelling review of %s before starting a new one", self._document_id)
            self.cancel()

        result = self._manager.open_session(
            self._document_id, self._document.toPlainText(), modified_content, summary
        )
        if not result.success:
            self.error_occurred.emit(result.message)
            return result

        # The document shows the original until the first decision
        self._set_document_text(result.content or "")
        return result

    def accept_hunk(self, hunk_id: str) -> DiffReviewResult:
        """Accept a single hunk."""
        return self._check(self._manager.accept_hunk(self._document_id, hunk_id))

    def reject_hunk(self, hunk_id: str) -> DiffReviewResult:
        """Reject a single hunk."""
        return self._check(self._manager.reject_hunk(self._document_id, hunk_id))

    def accept_all(self) -> DiffReviewResult:
        """Accept all remaining hunks and finish the review."""
        return self._check(self._manager.accept_all(self._document_id))

    def cancel(self) -> DiffReviewResult:
        """Abandon the review and restore the original content."""
        return self._check(self._manager.end_session(self._document_id))

    def _check(self, result: DiffReviewResult) -> DiffReviewResult:
        if not result.success:
            self.error_occurred.emit(result.message)

        return result

    def _handle_content_changed(self, document_id: str, content: str) -> None:
        if document_id != self._document_id:
            return

        self._set_document_text(content)
        self.content_changed.emit(content)

    def _handle_session_closed(self, document_id: str, resolved: bool) -> None:
        if document_id != self._document_id:
            return

        self._logger.debug("Review of %s finished (resolved=%s)", document_id, resolved)
        self.session_closed.emit(resolved)

    def _set_document_text(self, content: str) -> None:
        """
        Replace the whole document text in a single edit block.

        Args:
            content: New document content
        """
        if self._document.toPlainText() == content:
            return

        cursor = QTextCursor(self._document)
        cursor.beginEditBlock()
        try:
            cursor.select(QTextCursor.SelectionType.Document)
            cursor.insertText(content)

        finally:
            cursor.endEditBlock()
