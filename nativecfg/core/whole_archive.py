# SPDX-License-Identifier: MIT
"""Whole-archive bracketing for alwayslink static archives.

A linker normally pulls only the archive members that resolve an undefined
symbol. Archives marked alwayslink must be linked in full, which needs
toolchain-specific directives:

- GNU-style linkers have a pair of toggles. Everything between
  ``-Wl,-whole-archive`` and ``-Wl,-no-whole-archive`` is linked whole, so
  consecutive alwayslink archives share one region.
- Apple's ld64 has no region form. ``-Wl,-force_load`` applies only to the
  archive immediately following it and is repeated per archive.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nativecfg.core.flags import flatten

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nativecfg.core.flags import Entry

WHOLE_ARCHIVE = "-Wl,-whole-archive"
NO_WHOLE_ARCHIVE = "-Wl,-no-whole-archive"
FORCE_LOAD = "-Wl,-force_load"

# Platforms whose linker uses -force_load instead of a whole-archive region
FORCE_LOAD_PLATFORMS: frozenset[str] = frozenset(["darwin", "ios"])


def uses_force_load(platform: str) -> bool:
    return platform in FORCE_LOAD_PLATFORMS


def unique_archives(archives: Iterable[tuple[str, bool]]) -> list[tuple[str, bool]]:
    """Collapse repeated archives to their first position.

    An archive reached through several dependencies is linked once. It is
    linked whole if any of its occurrences is alwayslink.
    """
    merged: dict[str, bool] = {}
    for path, alwayslink in archives:
        merged[path] = merged.get(path, False) or alwayslink
    return list(merged.items())


class WholeArchiveBracketer:
    """Turn (archive, alwayslink) pairs into an ordered linker fragment.

    The bracketer is a two-state machine (outside/inside a whole-archive
    region) driven by changes of the alwayslink flag between consecutive
    archives. The fragment always ends outside a region.

    Example:
        bracketer = WholeArchiveBracketer("linux")
        bracketer.process([("a.a", False), ("b.a", True)])
        # ['a.a', '-Wl,-whole-archive', 'b.a', '-Wl,-no-whole-archive']
    """

    def __init__(self, platform: str = "linux") -> None:
        self.platform = platform

    def groups(
        self, archives: Iterable[tuple[str, bool]], platform: str | None = None
    ) -> list[Entry]:
        """Return the fragment as entries for option de-duplication.

        A plain archive is its own entry, ``-force_load`` stays paired with
        its archive, and a whole-archive region is a single entry from its
        opening to its closing marker.

        Args:
            archives: (path, alwayslink) pairs in link order.
            platform: OS tag overriding the one given at construction.
        """
        if uses_force_load(platform or self.platform):
            return [
                (FORCE_LOAD, path) if alwayslink else (path,)
                for path, alwayslink in archives
            ]

        entries: list[Entry] = []
        region: list[str] | None = None
        for path, alwayslink in archives:
            if alwayslink:
                if region is None:
                    region = [WHOLE_ARCHIVE]
                region.append(path)
                continue
            if region is not None:
                region.append(NO_WHOLE_ARCHIVE)
                entries.append(tuple(region))
                region = None
            entries.append((path,))
        if region is not None:
            region.append(NO_WHOLE_ARCHIVE)
            entries.append(tuple(region))
        return entries

    def process(
        self, archives: Iterable[tuple[str, bool]], platform: str | None = None
    ) -> list[str]:
        """Return the bracketed fragment as a flat token list."""
        return flatten(self.groups(archives, platform))
