# Copyright (c) fsusage-analyzer Contributors.

"""Tests for per-descriptor path mapping."""

import unittest

from fsusage.analyze import map_descriptor_paths, select_descriptors
from fsusage.parsing import DescriptorKey, parse_log_content
from tests.test_base import make_entry, SAMPLE_LOG, ts


class TestMapDescriptorPaths(unittest.TestCase):
    """Tests for map_descriptor_paths."""

    def test_same_fd_different_processes(self):
        """Test descriptor 5 in two processes gives two groups."""
        entries = [
            make_entry(ts(12), file_descriptor="5", path="/a", process="A"),
            make_entry(ts(12, 0, 1), file_descriptor="5", path="/b", process="B"),
        ]
        mapping = map_descriptor_paths(entries)
        self.assertEqual(set(mapping), {("A", "5"), ("B", "5")})
        self.assertEqual([a.path for a in mapping[DescriptorKey("A", "5")]], ["/a"])
        self.assertEqual([a.path for a in mapping[DescriptorKey("B", "5")]], ["/b"])

    def test_sample_keys(self):
        mapping = map_descriptor_paths(parse_log_content(SAMPLE_LOG))
        self.assertEqual(
            list(mapping),
            [("processA", "3"), ("processB", "5"), ("processA", "5")],
        )
        self.assertEqual(
            mapping[DescriptorKey("processA", "3")][0].path, "/Users/x/file.txt"
        )

    def test_skips_entries_without_fd_or_path(self):
        entries = [
            make_entry(file_descriptor="3"),
            make_entry(path="/tmp/x"),
        ]
        self.assertEqual(map_descriptor_paths(entries), {})

    def test_counts_and_first_last_seen(self):
        """Test reuse of a path through one descriptor."""
        entries = [
            make_entry(ts(12, 0, 3), file_descriptor="4", path="/x"),
            make_entry(ts(12, 0, 1), file_descriptor="4", path="/x"),
            make_entry(ts(12, 0, 2), file_descriptor="4", path="/x"),
        ]
        activity = map_descriptor_paths(entries)[DescriptorKey("proc", "4")][0]
        self.assertEqual(activity.count, 3)
        self.assertEqual(activity.first_seen, ts(12, 0, 1))
        self.assertEqual(activity.last_seen, ts(12, 0, 3))

    def test_paths_ranked_by_count(self):
        """Test most used path first, ties in first-seen order."""
        entries = [
            make_entry(file_descriptor="4", path="/one"),
            make_entry(file_descriptor="4", path="/two"),
            make_entry(file_descriptor="4", path="/three"),
            make_entry(file_descriptor="4", path="/two"),
        ]
        paths = [a.path for a in map_descriptor_paths(entries)[("proc", "4")]]
        self.assertEqual(paths, ["/two", "/one", "/three"])

    def test_empty(self):
        self.assertEqual(map_descriptor_paths([]), {})


class TestSelectDescriptors(unittest.TestCase):
    """Tests for select_descriptors."""

    def setUp(self):
        entries = parse_log_content(SAMPLE_LOG)
        entries.append(
            make_entry(file_descriptor="7", path="/Applications", process="Finder.1234")
        )
        self.mapping = map_descriptor_paths(entries)

    def test_no_filter(self):
        self.assertEqual(select_descriptors(self.mapping), self.mapping)

    def test_by_fd(self):
        selected = select_descriptors(self.mapping, fd="5")
        self.assertEqual(list(selected), [("processB", "5"), ("processA", "5")])

    def test_by_process(self):
        selected = select_descriptors(self.mapping, process="processA")
        self.assertEqual(list(selected), [("processA", "3"), ("processA", "5")])

    def test_process_name_without_pid(self):
        """Test the PID suffix may be left off the process filter."""
        self.assertEqual(
            list(select_descriptors(self.mapping, process="Finder")),
            [("Finder.1234", "7")],
        )
        self.assertEqual(
            list(select_descriptors(self.mapping, process="Finder.1234")),
            [("Finder.1234", "7")],
        )

    def test_by_process_and_fd(self):
        selected = select_descriptors(self.mapping, process="processA", fd="5")
        self.assertEqual(list(selected), [("processA", "5")])

    def test_no_match(self):
        self.assertEqual(select_descriptors(self.mapping, fd="99"), {})


if __name__ == "__main__":
    unittest.main()
