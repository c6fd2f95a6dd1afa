"""Fusion of closely spaced hunks into single review units."""

from dataclasses import replace
from typing import List, Sequence

from diffreview.diff_exceptions import DiffValidationError
from diffreview.diff_types import DiffHunk, HunkType


class HunkMerger:
    """Merges hunks separated by only a few unchanged lines."""

    def __init__(self, merge_gap_threshold: int = 2) -> None:
        """
        Initialize the merger.

        Args:
            merge_gap_threshold: Maximum number of unchanged lines between two hunks
                for them to be merged
        """
        if merge_gap_threshold < 0:
            raise ValueError(f"merge_gap_threshold must not be negative, got {merge_gap_threshold}")

        self._merge_gap_threshold = merge_gap_threshold

    def merge_gap_threshold(self) -> int:
        """Get the merge gap threshold."""
        return self._merge_gap_threshold

    def merge(self, hunks: Sequence[DiffHunk], original_lines: Sequence[str]) -> List[DiffHunk]:
        """
        Merge hunks whose unchanged gap is within the threshold.

        The unchanged lines bridging two merged hunks are copied into both the original and
        new lines of the merged hunk, so the merged hunk still describes exactly what the
        two separate hunks described.  The merged hunk keeps the id of its first hunk.

        Args:
            hunks: Unmerged hunks
            original_lines: Lines of the original text the hunks address

        Returns:
            Merged hunks sorted by start line

        Raises:
            DiffValidationError: If hunks overlap
        """
        if not hunks:
            return []

        ordered = sorted(hunks, key=lambda h: (h.start_line, h.span_end))
        merged: List[DiffHunk] = []
        accumulator = ordered[0]

        for hunk in ordered[1:]:
            gap = hunk.span_start - accumulator.span_end
            if gap < 0:
                raise DiffValidationError(
                    'Hunks overlap and cannot be merged',
                    {
                        'phase': 'merging',
                        'reason': 'Overlapping hunks detected',
                        'hunk1_range': [accumulator.span_start, accumulator.span_end],
                        'hunk2_range': [hunk.span_start, hunk.span_end],
                    }
                )

            if gap <= self._merge_gap_threshold:
                accumulator = self._merge_pair(accumulator, hunk, original_lines)
                continue

            merged.append(accumulator)
            accumulator = hunk

        merged.append(accumulator)
        return merged

    def _merge_pair(self, first: DiffHunk, second: DiffHunk, original_lines: Sequence[str]) -> DiffHunk:
        """
        Merge two hunks and the unchanged lines between them.

        Args:
            first: Earlier hunk
            second: Later hunk
            original_lines: Lines of the original text

        Returns:
            Combined hunk
        """
        bridge = tuple(original_lines[first.span_end:second.span_start])
        if len(bridge) != second.span_start - first.span_end:
            raise DiffValidationError(
                'Hunk range exceeds the original text',
                {
                    'phase': 'merging',
                    'reason': 'Bridge lines out of range',
                    'bridge_range': [first.span_end, second.span_start],
                    'original_line_count': len(original_lines),
                }
            )

        merged_original = first.original_lines + bridge + second.original_lines
        merged_new = first.new_lines + bridge + second.new_lines

        if merged_original and merged_new:
            hunk_type = HunkType.MODIFY

        elif merged_original:
            hunk_type = HunkType.REMOVE

        else:
            hunk_type = HunkType.ADD

        start_line = first.start_line
        end_line = start_line + len(merged_original) - 1 if merged_original else start_line

        return replace(
            first,
            start_line=start_line,
            end_line=end_line,
            original_lines=merged_original,
            new_lines=merged_new,
            type=hunk_type
        )
