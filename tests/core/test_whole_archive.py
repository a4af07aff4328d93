# SPDX-License-Identifier: MIT
"""Tests for nativecfg.core.whole_archive."""

from nativecfg.core.whole_archive import (
    FORCE_LOAD,
    NO_WHOLE_ARCHIVE,
    WHOLE_ARCHIVE,
    WholeArchiveBracketer,
    unique_archives,
    uses_force_load,
)

ARCHIVES = [
    ("x1", False),
    ("x2", True),
    ("x3", True),
    ("x4", False),
    ("x5", True),
]


class TestGnuBracketing:
    def test_regions_open_and_close_on_transitions(self):
        fragment = WholeArchiveBracketer("linux").process(ARCHIVES)
        assert fragment == [
            "x1",
            WHOLE_ARCHIVE,
            "x2",
            "x3",
            NO_WHOLE_ARCHIVE,
            "x4",
            WHOLE_ARCHIVE,
            "x5",
            NO_WHOLE_ARCHIVE,
        ]

    def test_no_alwayslink_no_markers(self):
        fragment = WholeArchiveBracketer("linux").process([("a", False), ("b", False)])
        assert fragment == ["a", "b"]

    def test_all_alwayslink_single_region(self):
        fragment = WholeArchiveBracketer("linux").process([("a", True), ("b", True)])
        assert fragment == [WHOLE_ARCHIVE, "a", "b", NO_WHOLE_ARCHIVE]

    def test_empty(self):
        assert WholeArchiveBracketer("linux").process([]) == []

    def test_groups_keep_regions_together(self):
        groups = WholeArchiveBracketer("linux").groups(ARCHIVES)
        assert groups == [
            ("x1",),
            (WHOLE_ARCHIVE, "x2", "x3", NO_WHOLE_ARCHIVE),
            ("x4",),
            (WHOLE_ARCHIVE, "x5", NO_WHOLE_ARCHIVE),
        ]


class TestAppleBracketing:
    def test_force_load_per_archive(self):
        fragment = WholeArchiveBracketer("darwin").process(ARCHIVES)
        assert fragment == [
            "x1",
            FORCE_LOAD,
            "x2",
            FORCE_LOAD,
            "x3",
            "x4",
            FORCE_LOAD,
            "x5",
        ]

    def test_no_region_markers(self):
        fragment = WholeArchiveBracketer("ios").process([("a", True)])
        assert WHOLE_ARCHIVE not in fragment
        assert NO_WHOLE_ARCHIVE not in fragment

    def test_platform_override(self):
        bracketer = WholeArchiveBracketer()
        assert bracketer.process([("a", True)], "darwin") == [FORCE_LOAD, "a"]
        assert bracketer.process([("a", True)]) == [
            WHOLE_ARCHIVE,
            "a",
            NO_WHOLE_ARCHIVE,
        ]

    def test_uses_force_load(self):
        assert uses_force_load("darwin")
        assert not uses_force_load("linux")
        assert not uses_force_load("windows")


class TestUniqueArchives:
    def test_first_position_kept(self):
        archives = [("a", True), ("y", True), ("z", False), ("y", True), ("z", False)]
        assert unique_archives(archives) == [("a", True), ("y", True), ("z", False)]

    def test_alwayslink_wins(self):
        assert unique_archives([("x", False), ("x", True)]) == [("x", True)]
