"""Flattened line model of a diff session for presentation layers."""

from typing import List

from diffreview.diff_session import DiffSession
from diffreview.diff_types import DiffViewLine, HunkStatus
from diffreview.line_differ import split_lines


def build_diff_lines(session: DiffSession) -> List[DiffViewLine]:
    """
    Flatten a session into display rows.

    Pending hunks show their original lines as removed rows followed by their new lines as
    added rows.  Decided hunks show the lines that the decision keeps as unchanged rows.

    Args:
        session: Session to flatten

    Returns:
        Display rows in document order
    """
    original_lines = split_lines(session.original_content)
    current = session.current_hunk
    current_id = current.id if current is not None else None
    rows: List[DiffViewLine] = []
    orig_idx = 0

    for hunk in session.hunks:
        rows.extend(DiffViewLine('unchanged', line) for line in original_lines[orig_idx:hunk.span_start])

        if hunk.status == HunkStatus.PENDING:
            is_current = hunk.id == current_id
            for i, line in enumerate(hunk.original_lines):
                rows.append(DiffViewLine(
                    'removed', line, hunk.id, hunk.status,
                    is_first_line_of_hunk=i == 0,
                    is_current_hunk=is_current
                ))

            for i, line in enumerate(hunk.new_lines):
                rows.append(DiffViewLine(
                    'added', line, hunk.id, hunk.status,
                    is_first_line_of_hunk=not hunk.original_lines and i == 0,
                    is_current_hunk=is_current
                ))

        else:
            kept = hunk.new_lines if hunk.status == HunkStatus.ACCEPTED else hunk.original_lines
            rows.extend(DiffViewLine('unchanged', line) for line in kept)

        orig_idx = hunk.span_end

    rows.extend(DiffViewLine('unchanged', line) for line in original_lines[orig_idx:])
    return rows
