"""Reconstruction of document content from per-hunk decisions."""

from typing import List, Sequence

from diffreview.diff_exceptions import DiffValidationError
from diffreview.diff_types import DiffHunk, HunkStatus, HunkType
from diffreview.line_differ import split_lines


def reconstruct_content(original: str, modified: str, hunks: Sequence[DiffHunk]) -> str:
    """
    Build document content from the original text and the decisions made for each hunk.

    Accepted hunks contribute their new lines; pending and rejected hunks contribute their
    original lines.  Text outside every hunk is copied from the original unchanged.  If no
    decision has been made, or all hunks share one decision, the matching snapshot is
    returned verbatim.

    Args:
        original: Original document text (LF-normalized)
        modified: Proposed document text (LF-normalized)
        hunks: Hunks computed between original and modified, sorted by start line

    Returns:
        Reconstructed document text

    Raises:
        DiffValidationError: If the hunk list is malformed
    """
    original_lines = split_lines(original)
    validate_hunks(hunks, original_lines)

    if not hunks or all(h.status == HunkStatus.PENDING for h in hunks):
        return original

    if all(h.status == HunkStatus.ACCEPTED for h in hunks):
        return modified

    if all(h.status == HunkStatus.REJECTED for h in hunks):
        return original

    result: List[str] = []
    orig_idx = 0

    for hunk in hunks:
        result.extend(original_lines[orig_idx:hunk.span_start])

        if hunk.status == HunkStatus.ACCEPTED:
            result.extend(hunk.new_lines)

        else:
            result.extend(hunk.original_lines)

        orig_idx = hunk.span_end

    result.extend(original_lines[orig_idx:])
    return '\n'.join(result)


def validate_hunks(hunks: Sequence[DiffHunk], original_lines: Sequence[str]) -> None:
    """
    Check that a hunk list is well formed against the original lines.

    Args:
        hunks: Hunks to check
        original_lines: Lines of the original text

    Raises:
        DiffValidationError: If any hunk breaks its type invariants, lies outside the
            original text, does not match the original text, or hunks are unsorted or overlap
    """
    previous: DiffHunk | None = None

    for idx, hunk in enumerate(hunks):
        _validate_hunk_shape(idx, hunk)

        if hunk.span_start < 0 or hunk.span_end > len(original_lines):
            raise DiffValidationError(
                f"Hunk {hunk.id} lies outside the original text",
                {
                    'phase': 'validation',
                    'reason': 'Hunk range out of bounds',
                    'hunk_id': hunk.id,
                    'hunk_range': [hunk.span_start, hunk.span_end],
                    'original_line_count': len(original_lines),
                }
            )

        actual_lines = tuple(original_lines[hunk.span_start:hunk.span_end])
        if actual_lines != hunk.original_lines:
            raise DiffValidationError(
                f"Hunk {hunk.id} does not match the original text",
                {
                    'phase': 'validation',
                    'reason': 'Original lines mismatch',
                    'hunk_id': hunk.id,
                    'expected_context': list(hunk.original_lines),
                    'actual_context': list(actual_lines),
                }
            )

        if previous is not None and (
            hunk.span_start < previous.span_end or
            (hunk.span_start == previous.span_start and hunk.span_end == previous.span_end)
        ):
            raise DiffValidationError(
                'Hunks are unsorted or overlap',
                {
                    'phase': 'validation',
                    'reason': 'Overlapping hunks detected',
                    'hunk1_range': [previous.span_start, previous.span_end],
                    'hunk2_range': [hunk.span_start, hunk.span_end],
                    'suggestion': 'Hunks must be sorted by start line and affect disjoint line ranges.'
                }
            )

        previous = hunk


def _validate_hunk_shape(idx: int, hunk: DiffHunk) -> None:
    """Check the per-type line count invariants of a single hunk."""
    reason = None

    if hunk.type == HunkType.ADD:
        if hunk.original_lines or not hunk.new_lines:
            reason = 'Add hunk must have new lines and no original lines'

        elif hunk.end_line != hunk.start_line:
            reason = 'Add hunk must be zero-width'

    elif hunk.type == HunkType.REMOVE:
        if hunk.new_lines or not hunk.original_lines:
            reason = 'Remove hunk must have original lines and no new lines'

    elif not hunk.original_lines or not hunk.new_lines:
        reason = 'Modify hunk must have both original and new lines'

    if reason is None and hunk.type != HunkType.ADD and \
            len(hunk.original_lines) != hunk.end_line - hunk.start_line + 1:
        reason = 'Original line count does not match hunk range'

    if reason is not None:
        raise DiffValidationError(
            f"Hunk {idx + 1} ({hunk.id}) is malformed",
            {
                'phase': 'validation',
                'reason': reason,
                'hunk_id': hunk.id,
                'hunk_type': hunk.type.value,
                'hunk_range': [hunk.start_line, hunk.end_line],
            }
        )
