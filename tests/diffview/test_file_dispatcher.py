"""Tests for per-file processing."""

import pytest

from diffview.diffview_types import FileStatus, HighlightRegion
from diffview.file_dispatcher import process_file


class TestCreatedFiles:
    """Test processing of created files."""

    def test_all_additions(self, helpers):
        """Test every new line becomes a full-line addition."""
        diff_file = helpers.make_file(FileStatus.CREATED, path="new.rs")

        result = process_file(diff_file, [], ["a", "b"])

        assert len(result.rows) == 2
        for row, text in zip(result.rows, ["a", "b"]):
            assert row.left.is_filler
            assert row.left.content == ""
            assert not row.right.is_filler
            assert row.right.content == text
            assert row.right.highlights == [HighlightRegion.full_line()]

        assert result.additions == 2
        assert result.deletions == 0
        assert result.hunk_starts == [0]
        assert result.path == "new.rs"
        assert result.status == FileStatus.CREATED

    def test_empty_created_file(self, helpers):
        """Test an empty created file has no rows and no hunks."""
        result = process_file(helpers.make_file(FileStatus.CREATED), [], [])

        assert result.rows == []
        assert result.hunk_starts == []
        assert result.additions == 0

    def test_ignores_alignment_plan(self, helpers):
        """Test created files don't use an alignment plan."""
        diff_file = helpers.make_file(FileStatus.CREATED, aligned_lines=[(0, 0)] * 5)

        result = process_file(diff_file, ["old"], ["a"])

        assert len(result.rows) == 1


class TestDeletedFiles:
    """Test processing of deleted files."""

    def test_all_deletions(self, helpers):
        """Test every old line becomes a full-line deletion."""
        diff_file = helpers.make_file(FileStatus.DELETED, path="old.rs")

        result = process_file(diff_file, ["x", "y"], [])

        assert len(result.rows) == 2
        assert result.rows[0].left.content == "x"
        assert not result.rows[0].left.is_filler
        assert result.rows[0].left.highlights == [HighlightRegion.full_line()]
        assert result.rows[0].right.is_filler
        assert result.additions == 0
        assert result.deletions == 2
        assert result.hunk_starts == [0]

    def test_empty_deleted_file(self, helpers):
        """Test an empty deleted file has no hunks."""
        result = process_file(helpers.make_file(FileStatus.DELETED), [], [])

        assert result.rows == []
        assert result.hunk_starts == []


class TestChangedFiles:
    """Test processing of changed files."""

    def test_aligned_modification(self, helpers):
        """Test a modified line is highlighted and starts the only hunk."""
        diff_file = helpers.make_file(
            aligned_lines=[(0, 0), (1, 1)],
            chunks=[[helpers.entry(helpers.side(1, [helpers.change(0, 3)]), helpers.side(1, [helpers.change(0, 6)]))]]
        )

        result = process_file(diff_file, ["x", "foo"], ["x", "foobar"])

        assert len(result.rows) == 2
        assert result.rows[0].left.highlights == []
        assert result.rows[0].right.highlights == []
        assert result.rows[1].left.highlights
        assert result.rows[1].right.highlights
        assert result.hunk_starts == [1]

    def test_filler_insertion(self, helpers):
        """Test a pure addition produces a left filler."""
        diff_file = helpers.make_file(
            aligned_lines=[(0, 0), (None, 1), (1, 2)],
            chunks=[[helpers.entry(None, helpers.side(1, [helpers.change(0, 8)]))]]
        )

        result = process_file(diff_file, ["line 1", "line 3"], ["line 1", "new line", "line 3"])

        assert len(result.rows) == 3
        assert result.rows[1].left.is_filler
        assert result.rows[1].left.content == ""
        assert result.rows[1].right.content == "new line"
        assert not result.rows[1].right.is_filler
        assert result.hunk_starts == [1]

    def test_deletion_with_filler(self, helpers):
        """Test a pure deletion produces a right filler."""
        diff_file = helpers.make_file(
            aligned_lines=[(0, 0), (1, None), (2, 1)],
            chunks=[[helpers.entry(helpers.side(1, [helpers.change(0, 7)]), None)]]
        )

        result = process_file(diff_file, ["line 1", "deleted", "line 3"], ["line 1", "line 3"])

        assert result.rows[1].left.content == "deleted"
        assert not result.rows[1].left.is_filler
        assert result.rows[1].right.is_filler

    def test_expansion_to_multiple_lines(self, helpers):
        """Test one old line expanding into several new lines."""
        h = helpers
        diff_file = h.make_file(
            aligned_lines=[(0, 0), (None, 1), (None, 2), (None, 3), (None, 4)],
            chunks=[[
                h.entry(h.side(0, [h.change(0, 16)]), h.side(0, [h.change(0, 6)])),
                h.entry(None, h.side(1, [h.change(0, 6)])),
                h.entry(None, h.side(2, [h.change(0, 6)])),
                h.entry(None, h.side(3, [h.change(0, 6)])),
                h.entry(None, h.side(4, [h.change(0, 1)])),
            ]]
        )
        old_lines = ["Self { a, b, c }"]
        new_lines = ["Self {", "    a,", "    b,", "    c,", "}"]

        result = process_file(diff_file, old_lines, new_lines)

        assert len(result.rows) == 5
        assert result.rows[0].left.content == "Self { a, b, c }"
        assert result.rows[0].right.content == "Self {"
        assert result.rows[1].left.is_filler
        assert result.rows[1].right.content == "    a,"
        assert result.hunk_starts == [0]
        assert result.additions == 5
        assert result.deletions == 1

    def test_contraction_to_single_line(self, helpers):
        """Test several old lines contracting into one new line."""
        h = helpers
        diff_file = h.make_file(
            aligned_lines=[(0, None), (1, None), (2, None), (3, 0), (4, None)],
            chunks=[[
                h.entry(h.side(0, [h.change(0, 6)]), None),
                h.entry(h.side(1, [h.change(0, 6)]), None),
                h.entry(h.side(2, [h.change(0, 6)]), None),
                h.entry(h.side(3, [h.change(0, 6)]), h.side(0, [h.change(0, 16)])),
                h.entry(h.side(4, [h.change(0, 1)]), None),
            ]]
        )
        old_lines = ["Self {", "    a,", "    b,", "    c,", "}"]
        new_lines = ["Self { a, b, c }"]

        result = process_file(diff_file, old_lines, new_lines)

        assert len(result.rows) == 5
        assert result.rows[0].left.content == "Self {"
        assert result.rows[0].right.is_filler
        assert result.rows[3].left.content == "    c,"
        assert result.rows[3].right.content == "Self { a, b, c }"

    def test_hunk_starts(self, hunk_file, hunk_file_lines):
        """Test separate change regions give separate hunk starts."""
        old_lines, new_lines = hunk_file_lines

        result = process_file(hunk_file, old_lines, new_lines)

        assert result.hunk_starts == [1, 5]

    def test_unchanged_plan_has_no_hunks(self, helpers):
        """Test an all-unchanged plan has no hunks."""
        diff_file = helpers.make_file(aligned_lines=[(0, 0), (1, 1)])

        result = process_file(diff_file, ["a", "b"], ["a", "b"])

        assert result.hunk_starts == []
        assert result.additions == 0
        assert result.deletions == 0

    def test_row_count_matches_plan(self, hunk_file, hunk_file_lines):
        """Test changed files have one row per alignment entry."""
        old_lines, new_lines = hunk_file_lines

        result = process_file(hunk_file, old_lines, new_lines)

        assert len(result.rows) == len(hunk_file.aligned_lines)

    def test_counts_distinct_touched_lines(self, hunk_file, hunk_file_lines):
        """Test derived counts are the number of indexed lines per side."""
        old_lines, new_lines = hunk_file_lines

        result = process_file(hunk_file, old_lines, new_lines)

        assert result.additions == 3
        assert result.deletions == 2

    def test_missing_content_degrades_to_empty(self, hunk_file):
        """Test unavailable file content gives empty rows rather than errors."""
        result = process_file(hunk_file, [], [])

        assert len(result.rows) == 6
        assert all(row.left.content == "" and row.right.content == "" for row in result.rows)


class TestExternalStats:
    """Test overriding counts with external statistics."""

    @pytest.mark.parametrize("status", [FileStatus.CREATED, FileStatus.DELETED, FileStatus.CHANGED])
    def test_stats_override_counts(self, helpers, status):
        """Test supplied stats replace derived counts for every status."""
        diff_file = helpers.make_file(status, aligned_lines=[(0, 0)])

        result = process_file(diff_file, ["a"], ["b"], (7, 3))

        assert result.additions == 7
        assert result.deletions == 3

    def test_stats_do_not_change_rows(self, hunk_file, hunk_file_lines):
        """Test stats only affect the counts."""
        old_lines, new_lines = hunk_file_lines

        without_stats = process_file(hunk_file, old_lines, new_lines)
        with_stats = process_file(hunk_file, old_lines, new_lines, (1, 1))

        assert with_stats.rows == without_stats.rows
        assert with_stats.hunk_starts == without_stats.hunk_starts
