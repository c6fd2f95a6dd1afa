"""Shared fixtures and utilities for diff review tests."""

from typing import Dict, List, Sequence

import pytest

from diffreview.diff_session import DiffSessionRequest, create_session
from diffreview.diff_types import DiffHunk, HunkStatus, HunkType


class DiffReviewTestHelpers:
    """Helper utilities for diff review testing."""

    # Five well separated edits of a 20 line document, keyed by original line index
    MIXED_EDITS: Dict[int, List[str]] = {
        1: ["changed1"],           # modify
        5: [],                     # remove
        9: ["inserted", "line9"],  # add before line9
        13: ["changed13"],         # modify
        17: [],                    # remove
    }

    @staticmethod
    def numbered_lines(count: int, prefix: str = "line") -> List[str]:
        """Create distinct lines like 'line0', 'line1', ..."""
        return [f"{prefix}{i}" for i in range(count)]

    @staticmethod
    def to_text(lines: Sequence[str]) -> str:
        """Join lines into document text."""
        return '\n'.join(lines)

    @staticmethod
    def apply_edits(lines: Sequence[str], edits: Dict[int, List[str]]) -> str:
        """Replace the lines named in `edits` and return the resulting text."""
        result: List[str] = []
        for idx, line in enumerate(lines):
            if idx in edits:
                result.extend(edits[idx])

            else:
                result.append(line)

        return '\n'.join(result)

    @staticmethod
    def make_hunk(
        hunk_id: str,
        start_line: int,
        original_lines: Sequence[str],
        new_lines: Sequence[str],
        status: HunkStatus = HunkStatus.PENDING
    ) -> DiffHunk:
        """Create a hunk, deriving its type and end line from its contents."""
        if original_lines and new_lines:
            hunk_type = HunkType.MODIFY

        elif original_lines:
            hunk_type = HunkType.REMOVE

        else:
            hunk_type = HunkType.ADD

        end_line = start_line + len(original_lines) - 1 if original_lines else start_line
        return DiffHunk(
            id=hunk_id,
            start_line=start_line,
            end_line=end_line,
            original_lines=tuple(original_lines),
            new_lines=tuple(new_lines),
            type=hunk_type,
            status=status
        )


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return DiffReviewTestHelpers


@pytest.fixture
def mixed_documents(helpers):
    """Original and modified text with five separated hunks of mixed types."""
    lines = helpers.numbered_lines(20)
    return helpers.to_text(lines), helpers.apply_edits(lines, helpers.MIXED_EDITS)


@pytest.fixture
def mixed_session(mixed_documents):
    """An open session over the mixed documents."""
    original, modified = mixed_documents
    return create_session(DiffSessionRequest("doc-1", original, modified, "Mixed edits"))
