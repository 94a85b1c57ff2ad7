# Copyright (c) fsusage-analyzer Contributors.

"""Tests for entry filters."""

import unittest

from fsusage.parsing import parse_log_content
from fsusage.query import EntryFilter, filter_by_file_descriptor, filter_by_path
from tests.test_base import make_entry, SAMPLE_LOG


class TestFilterByFileDescriptor(unittest.TestCase):
    """Tests for filter_by_file_descriptor."""

    def setUp(self):
        self.entries = parse_log_content(SAMPLE_LOG)

    def test_basic(self):
        """Test only matching descriptors are kept."""
        result = filter_by_file_descriptor(self.entries, "3")
        self.assertEqual([e.operation for e in result], ["open", "read", "close"])
        self.assertTrue(all(e.file_descriptor == "3" for e in result))

    def test_string_equality(self):
        """Test "07" and "7" are different descriptors."""
        entries = [make_entry(file_descriptor="07"), make_entry(file_descriptor="7")]
        self.assertEqual(len(filter_by_file_descriptor(entries, "7")), 1)
        matched = filter_by_file_descriptor(entries, "07")
        self.assertEqual([e.file_descriptor for e in matched], ["07"])

    def test_idempotent(self):
        """Test applying the filter twice changes nothing."""
        once = filter_by_file_descriptor(self.entries, "5")
        self.assertEqual(filter_by_file_descriptor(once, "5"), once)

    def test_subset(self):
        """Test the result is a subset of the input."""
        result = filter_by_file_descriptor(self.entries, "5")
        for entry in result:
            self.assertIn(entry, self.entries)

    def test_empty(self):
        self.assertEqual(filter_by_file_descriptor([], "3"), [])


class TestFilterByPath(unittest.TestCase):
    """Tests for filter_by_path."""

    def setUp(self):
        self.entries = parse_log_content(SAMPLE_LOG)

    def test_case_insensitive_default(self):
        """Test matching ignores case by default."""
        result = filter_by_path(self.entries, "my documents")
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].operation, "stat64")

    def test_case_sensitive(self):
        """Test case-sensitive matching."""
        self.assertEqual(
            filter_by_path(self.entries, "my documents", case_sensitive=True), []
        )
        self.assertEqual(
            len(filter_by_path(self.entries, "My Documents", case_sensitive=True)), 1
        )

    def test_entries_without_path_excluded(self):
        """Test entries with no path never match, even an empty pattern."""
        result = filter_by_path(self.entries, "")
        self.assertEqual(len(result), 5)
        self.assertTrue(all(e.path is not None for e in result))

    def test_substring(self):
        result = filter_by_path(self.entries, "/Users/x/")
        self.assertEqual(len(result), 4)


class TestEntryFilter(unittest.TestCase):
    """Tests for the combined filter."""

    def setUp(self):
        self.entries = parse_log_content(SAMPLE_LOG)

    def test_inactive_filter_keeps_everything(self):
        """Test a filter with no parameters returns all entries."""
        entry_filter = EntryFilter()
        self.assertFalse(entry_filter.is_active)
        self.assertEqual(entry_filter.apply(self.entries), self.entries)

    def test_and_composition(self):
        """Test both predicates must hold."""
        result = EntryFilter(file_descriptor="5", path="users").apply(self.entries)
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].path, "/Users/x/other.txt")

    def test_order_independent(self):
        """Test fd-then-path equals path-then-fd."""
        by_fd = filter_by_file_descriptor(self.entries, "3")
        by_path = filter_by_path(self.entries, "file")
        fd_first = filter_by_path(by_fd, "file")
        path_first = filter_by_file_descriptor(by_path, "3")
        self.assertEqual(fd_first, path_first)
        self.assertEqual(EntryFilter("3", "file").apply(self.entries), fd_first)

    def test_recompute_from_full_collection(self):
        """Test changing a parameter re-filters the full collection."""
        narrowed = EntryFilter(file_descriptor="3").apply(self.entries)
        self.assertEqual(len(narrowed), 3)
        widened = EntryFilter(file_descriptor="5").apply(self.entries)
        self.assertEqual(len(widened), 2)

    def test_does_not_mutate_input(self):
        before = list(self.entries)
        EntryFilter(file_descriptor="3").apply(self.entries)
        self.assertEqual(self.entries, before)

    def test_predicate_matches_apply(self):
        """Test the per-entry predicate agrees with apply()."""
        for entry_filter in (
            EntryFilter(),
            EntryFilter(file_descriptor="3"),
            EntryFilter(path="USERS"),
            EntryFilter(path="USERS", case_sensitive=True),
            EntryFilter(file_descriptor="5", path="tmp"),
        ):
            predicate = entry_filter.predicate()
            self.assertEqual(
                [e for e in self.entries if predicate(e)],
                entry_filter.apply(self.entries),
            )

    def test_empty_collection(self):
        self.assertEqual(EntryFilter(file_descriptor="3").apply([]), [])


if __name__ == "__main__":
    unittest.main()
