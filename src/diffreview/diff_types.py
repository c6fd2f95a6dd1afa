"""Shared dataclasses and enums for diff review."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Tuple


class DiffOperationType(Enum):
    """Kind of edit operation emitted by the line differ."""
    EQUAL = "equal"
    INSERTED = "inserted"
    DELETED = "deleted"


class HunkType(Enum):
    """Kind of change a hunk represents."""
    ADD = "add"
    REMOVE = "remove"
    MODIFY = "modify"


class HunkStatus(Enum):
    """User decision for a hunk."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class DiffOperation:
    """A run of lines that are equal, inserted, or deleted."""

    type: DiffOperationType
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class DiffHunk:
    """
    A contiguous, independently reviewable unit of difference.

    Line numbers are 0-indexed positions in the original text.  For remove and modify
    hunks `end_line` is inclusive; add hunks are zero-width insertion points where
    `start_line == end_line` and no original lines are consumed.
    """

    id: str
    start_line: int
    end_line: int
    original_lines: Tuple[str, ...]
    new_lines: Tuple[str, ...]
    type: HunkType
    status: HunkStatus = HunkStatus.PENDING

    @property
    def span_start(self) -> int:
        """First original line occupied by this hunk."""
        return self.start_line

    @property
    def span_end(self) -> int:
        """One past the last original line occupied by this hunk (half-open)."""
        return self.start_line + len(self.original_lines)

    @property
    def is_pending(self) -> bool:
        """True if no decision has been made for this hunk."""
        return self.status == HunkStatus.PENDING

    def with_status(self, status: HunkStatus) -> "DiffHunk":
        """Return a copy of this hunk with a new status."""
        return replace(self, status=status)


@dataclass(frozen=True)
class DiffViewLine:
    """A single display row in a flattened diff view."""

    type: str  # 'unchanged', 'added' or 'removed'
    content: str
    hunk_id: str | None = None
    hunk_status: HunkStatus | None = None
    is_first_line_of_hunk: bool = False
    is_current_hunk: bool = False


@dataclass
class DiffReviewResult:
    """Result of a diff review operation."""

    success: bool
    message: str
    content: str | None = None
    session_closed: bool = False
    hunk_count: int = 0
    error_details: Dict[str, Any] | None = None
    hunk_ids: List[str] = field(default_factory=list)
