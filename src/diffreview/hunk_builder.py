"""Conversion of diff operations into reviewable hunks."""

import itertools
from dataclasses import replace
from typing import Callable, Iterable, List

from diffreview.diff_exceptions import DiffValidationError
from diffreview.diff_types import DiffHunk, DiffOperation, DiffOperationType, HunkType


class HunkIdGenerator:
    """Generates hunk ids that are unique for the lifetime of one generator."""

    def __init__(self, prefix: str = "hunk") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


class HunkBuilder:
    """Builds typed, range-addressed hunks from a diff operation stream."""

    def __init__(self, id_generator: Callable[[], str] | None = None) -> None:
        """
        Initialize the builder.

        Args:
            id_generator: Callable returning a new unique hunk id on each call
        """
        self._id_generator = id_generator if id_generator is not None else HunkIdGenerator()

    def build(self, operations: Iterable[DiffOperation]) -> List[DiffHunk]:
        """
        Build hunks from diff operations.

        A deleted operation directly followed by an inserted operation becomes a single
        modify hunk.  Any other inserted operation becomes a zero-width add hunk at the
        current original line.

        Args:
            operations: Ordered operations from the line differ

        Returns:
            Hunks sorted by start line

        Raises:
            DiffValidationError: If an operation has an unknown type
        """
        hunks: List[DiffHunk] = []
        line_number = 0
        previous_type: DiffOperationType | None = None

        for operation in operations:
            count = len(operation.lines)

            if operation.type == DiffOperationType.EQUAL:
                line_number += count

            elif operation.type == DiffOperationType.DELETED:
                hunks.append(DiffHunk(
                    id=self._id_generator(),
                    start_line=line_number,
                    end_line=line_number + count - 1,
                    original_lines=operation.lines,
                    new_lines=(),
                    type=HunkType.REMOVE
                ))
                line_number += count

            elif operation.type == DiffOperationType.INSERTED:
                if previous_type == DiffOperationType.DELETED:
                    hunks[-1] = replace(hunks[-1], new_lines=operation.lines, type=HunkType.MODIFY)

                else:
                    hunks.append(DiffHunk(
                        id=self._id_generator(),
                        start_line=line_number,
                        end_line=line_number,
                        original_lines=(),
                        new_lines=operation.lines,
                        type=HunkType.ADD
                    ))

            else:
                raise DiffValidationError(
                    f"Unknown diff operation type: {operation.type}",
                    {'phase': 'building', 'reason': 'Unknown operation type'}
                )

            previous_type = operation.type

        return hunks
