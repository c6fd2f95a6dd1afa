"""
Hunk reconciliation for AI-proposed document rewrites.

This package computes line-level hunks between a document and a proposed replacement,
tracks a per-hunk accept/reject decision, and reconstructs the document content from
any combination of decisions.
"""

from diffreview.content_reconstructor import reconstruct_content, validate_hunks
from diffreview.diff_exceptions import (
    DiffError,
    DiffValidationError,
    EmptyHunkSetError,
    HunkAlreadyResolvedError,
    InvalidHunkReferenceError,
    NoActiveSessionError,
    NoChangeDetectedError,
)
from diffreview.diff_review_settings import DiffReviewSettings
from diffreview.diff_session import (
    DiffSession,
    DiffSessionRequest,
    accept_all,
    accept_hunk,
    create_session,
    end_session,
    navigate_to_hunk,
    navigate_to_next_pending,
    navigate_to_previous_pending,
    reject_hunk,
)
from diffreview.diff_session_manager import DiffSessionManager
from diffreview.diff_types import (
    DiffHunk,
    DiffOperation,
    DiffOperationType,
    DiffReviewResult,
    DiffViewLine,
    HunkStatus,
    HunkType,
)
from diffreview.diff_view_lines import build_diff_lines
from diffreview.hunk_builder import HunkBuilder, HunkIdGenerator
from diffreview.hunk_computation import compute_hunks
from diffreview.hunk_merger import HunkMerger
from diffreview.line_differ import LineDiffer, normalize_line_endings, split_lines

__all__ = [
    # Exceptions
    'DiffError',
    'NoChangeDetectedError',
    'EmptyHunkSetError',
    'InvalidHunkReferenceError',
    'HunkAlreadyResolvedError',
    'NoActiveSessionError',
    'DiffValidationError',
    # Types
    'DiffOperationType',
    'DiffOperation',
    'HunkType',
    'HunkStatus',
    'DiffHunk',
    'DiffViewLine',
    'DiffReviewResult',
    # Core classes and functions
    'LineDiffer',
    'normalize_line_endings',
    'split_lines',
    'HunkBuilder',
    'HunkIdGenerator',
    'HunkMerger',
    'compute_hunks',
    'reconstruct_content',
    'validate_hunks',
    'build_diff_lines',
    # Sessions
    'DiffSession',
    'DiffSessionRequest',
    'create_session',
    'accept_hunk',
    'reject_hunk',
    'accept_all',
    'end_session',
    'navigate_to_hunk',
    'navigate_to_next_pending',
    'navigate_to_previous_pending',
    'DiffSessionManager',
    'DiffReviewSettings',
]
