"""Qt text document integration for diff review."""

from diffreview_qt.editor_diff_session import EditorDiffSession

__all__ = [
    'EditorDiffSession',
]
