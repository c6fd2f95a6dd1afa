"""Hunk computation pipeline: normalize, diff, build and merge."""

import logging
from typing import Callable, List

from diffreview.diff_exceptions import EmptyHunkSetError, NoChangeDetectedError
from diffreview.diff_types import DiffHunk
from diffreview.hunk_builder import HunkBuilder
from diffreview.hunk_merger import HunkMerger
from diffreview.line_differ import LineDiffer, normalize_line_endings, split_lines


logger = logging.getLogger("HunkComputation")


def compute_hunks(
    original: str,
    modified: str,
    merge_gap_threshold: int = 2,
    id_generator: Callable[[], str] | None = None
) -> List[DiffHunk]:
    """
    Compute the reviewable hunks between an original text and a proposed replacement.

    Args:
        original: Original document text
        modified: Proposed document text
        merge_gap_threshold: Maximum unchanged lines between hunks that get merged
        id_generator: Optional callable producing unique hunk ids

    Returns:
        Non-empty list of pending hunks, sorted by start line

    Raises:
        NoChangeDetectedError: If the texts are identical after line ending normalization
        EmptyHunkSetError: If the texts differ but no hunks were produced
    """
    original = normalize_line_endings(original)
    modified = normalize_line_endings(modified)

    if original == modified:
        raise NoChangeDetectedError(
            'No changes detected in proposed content',
            {'phase': 'computation', 'reason': 'Proposed content is identical to the original'}
        )

    original_lines = split_lines(original)
    operations = LineDiffer().diff(original_lines, split_lines(modified))
    hunks = HunkBuilder(id_generator).build(operations)
    merged = HunkMerger(merge_gap_threshold).merge(hunks, original_lines)

    if not merged:
        raise EmptyHunkSetError(
            'Differencing produced no hunks for differing content',
            {
                'phase': 'computation',
                'reason': 'Empty hunk set',
                'operation_count': len(operations),
            }
        )

    logger.debug(
        "Computed %d hunk(s) (%d before merging) over %d original line(s)",
        len(merged), len(hunks), len(original_lines)
    )
    return merged
