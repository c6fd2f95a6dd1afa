"""Tests for hunk building."""

import pytest

from diffreview.diff_exceptions import DiffValidationError
from diffreview.diff_types import DiffOperation, DiffOperationType, HunkStatus, HunkType
from diffreview.hunk_builder import HunkBuilder, HunkIdGenerator


def equal(*lines):
    return DiffOperation(DiffOperationType.EQUAL, lines)


def deleted(*lines):
    return DiffOperation(DiffOperationType.DELETED, lines)


def inserted(*lines):
    return DiffOperation(DiffOperationType.INSERTED, lines)


class TestHunkIdGenerator:
    """Test hunk id generation."""

    def test_ids_are_sequential(self):
        """Test ids count up from one."""
        generator = HunkIdGenerator()
        assert [generator(), generator(), generator()] == ["hunk-1", "hunk-2", "hunk-3"]

    def test_custom_prefix(self):
        """Test a custom id prefix."""
        generator = HunkIdGenerator("change")
        assert generator() == "change-1"

    def test_generators_are_independent(self):
        """Test each generator keeps its own counter."""
        first = HunkIdGenerator()
        second = HunkIdGenerator()
        first()
        assert second() == "hunk-1"


class TestHunkBuilderBasic:
    """Test building single hunks."""

    def test_no_operations(self):
        """Test an empty operation stream gives no hunks."""
        assert HunkBuilder().build([]) == []

    def test_equal_only(self):
        """Test equal operations never produce hunks."""
        assert HunkBuilder().build([equal("a", "b")]) == []

    def test_deletion_becomes_remove(self):
        """Test a deleted operation becomes a remove hunk over its lines."""
        hunks = HunkBuilder().build([equal("a"), deleted("b", "c"), equal("d")])

        assert len(hunks) == 1
        hunk = hunks[0]
        assert hunk.type == HunkType.REMOVE
        assert hunk.start_line == 1
        assert hunk.end_line == 2
        assert hunk.original_lines == ("b", "c")
        assert hunk.new_lines == ()
        assert hunk.status == HunkStatus.PENDING

    def test_insertion_becomes_zero_width_add(self):
        """Test an inserted operation becomes a zero-width add hunk."""
        hunks = HunkBuilder().build([equal("a", "b"), inserted("x"), equal("c")])

        assert len(hunks) == 1
        hunk = hunks[0]
        assert hunk.type == HunkType.ADD
        assert hunk.start_line == 2
        assert hunk.end_line == 2
        assert hunk.original_lines == ()
        assert hunk.new_lines == ("x",)
        assert hunk.span_start == hunk.span_end == 2

    def test_insertion_at_start(self):
        """Test an insertion before the first line."""
        hunks = HunkBuilder().build([inserted("x"), equal("a")])

        assert hunks[0].type == HunkType.ADD
        assert hunks[0].start_line == 0

    def test_delete_then_insert_becomes_modify(self):
        """Test an adjacent delete and insert pair collapses into one modify hunk."""
        hunks = HunkBuilder().build([equal("a"), deleted("b"), inserted("x", "y"), equal("c")])

        assert len(hunks) == 1
        hunk = hunks[0]
        assert hunk.type == HunkType.MODIFY
        assert hunk.start_line == 1
        assert hunk.end_line == 1
        assert hunk.original_lines == ("b",)
        assert hunk.new_lines == ("x", "y")


class TestHunkBuilderSeparation:
    """Test that non-adjacent changes stay separate."""

    def test_delete_equal_insert_stays_separate(self):
        """Test a deletion and insertion separated by equal lines give two hunks."""
        hunks = HunkBuilder().build([deleted("a"), equal("b"), inserted("x")])

        assert [h.type for h in hunks] == [HunkType.REMOVE, HunkType.ADD]
        assert hunks[0].start_line == 0
        assert hunks[1].start_line == 2

    def test_insert_then_delete_stays_separate(self):
        """Test an insertion followed by a deletion is not a modification."""
        hunks = HunkBuilder().build([equal("a"), inserted("x"), deleted("b")])

        assert [h.type for h in hunks] == [HunkType.ADD, HunkType.REMOVE]
        assert hunks[0].start_line == 1
        assert hunks[1].start_line == 1
        assert hunks[1].end_line == 1

    def test_line_numbers_track_original_space(self):
        """Test inserted lines do not advance original line numbers."""
        hunks = HunkBuilder().build([
            inserted("x", "y", "z"),
            equal("a"),
            deleted("b"),
            equal("c"),
            deleted("d"),
            inserted("w"),
        ])

        assert [(h.type, h.start_line, h.end_line) for h in hunks] == [
            (HunkType.ADD, 0, 0),
            (HunkType.REMOVE, 1, 1),
            (HunkType.MODIFY, 3, 3),
        ]

    def test_ids_are_unique(self):
        """Test each hunk gets its own id."""
        hunks = HunkBuilder().build([deleted("a"), equal("b"), inserted("x"), equal("c"), deleted("d")])

        assert len({h.id for h in hunks}) == 3

    def test_custom_id_generator(self):
        """Test hunk ids come from the supplied generator."""
        hunks = HunkBuilder(HunkIdGenerator("edit")).build([deleted("a"), equal("b"), inserted("x")])

        assert [h.id for h in hunks] == ["edit-1", "edit-2"]

    def test_modify_keeps_remove_id(self):
        """Test retyping a remove hunk to modify keeps its id."""
        hunks = HunkBuilder().build([deleted("a"), inserted("b")])

        assert hunks[0].id == "hunk-1"


class TestHunkBuilderErrors:
    """Test hunk builder error handling."""

    def test_unknown_operation_type(self):
        """Test an operation of unknown type is rejected."""
        with pytest.raises(DiffValidationError) as exc_info:
            HunkBuilder().build([DiffOperation("bogus", ("a",))])

        assert exc_info.value.error_details['phase'] == 'building'
