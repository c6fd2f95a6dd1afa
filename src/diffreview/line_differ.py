"""Line-level differencing."""

import difflib
from typing import List, Sequence

from diffreview.diff_types import DiffOperation, DiffOperationType


def normalize_line_endings(text: str) -> str:
    """
    Convert all line ending variants to LF.

    Args:
        text: Text that may contain CRLF or CR line endings

    Returns:
        Text using only LF line endings
    """
    return text.replace('\r\n', '\n').replace('\r', '\n')


def split_lines(text: str) -> List[str]:
    """
    Split normalized text into lines.

    A trailing newline produces a final empty line, so joining the result with '\\n'
    always reproduces the input exactly.

    Args:
        text: LF-normalized text

    Returns:
        List of lines without their separators
    """
    return text.split('\n')


class LineDiffer:
    """Computes equal/inserted/deleted operations between two line sequences."""

    def diff(self, original_lines: Sequence[str], modified_lines: Sequence[str]) -> List[DiffOperation]:
        """
        Compute the edit operations that turn one line sequence into another.

        Concatenating the lines of the equal and deleted operations reproduces the original
        sequence; concatenating equal and inserted reproduces the modified sequence.  A replaced
        block is reported as a deleted operation immediately followed by an inserted one.

        Args:
            original_lines: Lines of the original text
            modified_lines: Lines of the proposed text

        Returns:
            Ordered list of operations
        """
        matcher = difflib.SequenceMatcher(None, original_lines, modified_lines, autojunk=False)
        operations: List[DiffOperation] = []

        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == 'equal':
                operations.append(DiffOperation(DiffOperationType.EQUAL, tuple(original_lines[i1:i2])))

            elif tag == 'delete':
                operations.append(DiffOperation(DiffOperationType.DELETED, tuple(original_lines[i1:i2])))

            elif tag == 'insert':
                operations.append(DiffOperation(DiffOperationType.INSERTED, tuple(modified_lines[j1:j2])))

            elif tag == 'replace':
                operations.append(DiffOperation(DiffOperationType.DELETED, tuple(original_lines[i1:i2])))
                operations.append(DiffOperation(DiffOperationType.INSERTED, tuple(modified_lines[j1:j2])))

        return operations
