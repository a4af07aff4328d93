# SPDX-License-Identifier: MIT
"""Library artifact selection and classification.

A LibraryToLink may carry several artifacts for the same library. The
selector picks exactly one (static archives win over shared libraries) and
classifies it, which decides how the linker is told about it:

- SIMPLE_SHARED (``libfoo.so``): ``-L <dir> -l foo``. The loader finds the
  library through rpaths, so the binary does not hard-code its location.
- VERSIONED_SHARED (``libfoo.so.2``): ``-L <dir> -l :libfoo.so.2``. The
  linker only finds versioned names when given the exact filename.
- VERSIONED_DYLIB (``libfoo.2.dylib``, ``libfoo.dylib.12.1``): nothing.
  An unversioned symlink next to it is expected to be linked instead.
- STATIC_ARCHIVE (everything else): the path is passed positionally,
  wrapped by whole-archive bracketing when the library is alwayslink.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nativecfg.core.deps import LibraryToLink
    from nativecfg.core.flags import Entry

LIB_PREFIX = "lib"

# Unversioned shared library suffixes across platforms
SHARED_LIB_EXTENSIONS: tuple[str, ...] = (".so", ".dylib", ".dll")

# Suffixes of native headers; their presence among the sources turns on
# header-relative include paths
HEADER_EXTENSIONS: tuple[str, ...] = (".h", ".hh", ".hpp", ".hxx", ".inc")


class ArtifactKind(enum.Enum):
    SIMPLE_SHARED = "simple_shared"
    VERSIONED_SHARED = "versioned_shared"
    VERSIONED_DYLIB = "versioned_dylib"
    STATIC_ARCHIVE = "static_archive"


def has_header_extension(path: str) -> bool:
    return path.endswith(HEADER_EXTENSIONS)


def get_versioned_shared_lib_extension(basename: str) -> str:
    """Return the versioned shared library extension of a filename.

    Examples:
        >>> get_versioned_shared_lib_extension("libfoo.so.1.2")
        'so.1.2'
        >>> get_versioned_shared_lib_extension("libclntsh.dylib.12.1")
        'dylib.12.1'
        >>> get_versioned_shared_lib_extension("libfoo.so")
        ''
        >>> get_versioned_shared_lib_extension("foo.bar.1")
        ''
    """
    parts = basename.split(".")
    if not parts[-1].isdigit():
        return ""
    # parts[0] is the library name, never part of the extension
    for i in range(len(parts) - 1, 0, -1):
        if not parts[i].isdigit():
            if parts[i] in ("so", "dylib"):
                return ".".join(parts[i:])
            return ""
    return ""


def _has_dylib_version_before_suffix(basename: str) -> bool:
    # libfoo.2.dylib, libfoo.2.1.dylib
    parts = basename.split(".")
    return len(parts) >= 3 and parts[-1] == "dylib" and parts[-2].isdigit()


def has_simple_shared_lib_extension(basename: str) -> bool:
    """Check for an unversioned shared library suffix.

    Examples:
        >>> has_simple_shared_lib_extension("libfoo.so")
        True
        >>> has_simple_shared_lib_extension("libfoo.2.dylib")
        False
        >>> has_simple_shared_lib_extension("libfoo.a")
        False
    """
    if _has_dylib_version_before_suffix(basename):
        return False
    return basename.endswith(SHARED_LIB_EXTENSIONS)


def classify(path: str) -> ArtifactKind:
    """Classify a library file by its name."""
    basename = PurePosixPath(path).name
    if not basename.startswith(LIB_PREFIX):
        return ArtifactKind.STATIC_ARCHIVE
    if has_simple_shared_lib_extension(basename):
        return ArtifactKind.SIMPLE_SHARED
    if _has_dylib_version_before_suffix(basename):
        return ArtifactKind.VERSIONED_DYLIB
    extension = get_versioned_shared_lib_extension(basename)
    if extension.startswith("so"):
        return ArtifactKind.VERSIONED_SHARED
    if extension.startswith("dylib"):
        return ArtifactKind.VERSIONED_DYLIB
    return ArtifactKind.STATIC_ARCHIVE


@dataclass(frozen=True)
class Artifact:
    """The one file chosen to link for a LibraryToLink.

    Attributes:
        path: Path of the file.
        kind: How the file is passed to the linker.
        alwayslink: Copied from the LibraryToLink.
    """

    path: str
    kind: ArtifactKind
    alwayslink: bool = False

    @property
    def basename(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def dirname(self) -> str:
        return str(PurePosixPath(self.path).parent)

    @property
    def is_shared(self) -> bool:
        return self.kind is not ArtifactKind.STATIC_ARCHIVE

    def library_name(self) -> str:
        """Name passed to ``-l``.

        Simple shared libraries drop the ``lib`` prefix and the extension;
        versioned ones use ``:`` followed by the verbatim filename.
        """
        if self.kind is ArtifactKind.VERSIONED_SHARED:
            return f":{self.basename}"
        basename = self.basename
        return basename[len(LIB_PREFIX) : basename.rindex(".")]

    def link_entries(self) -> list[Entry]:
        """Search-path linker entries for a shared artifact.

        Static archives and versioned dylibs contribute none here; archives
        go through the whole-archive bracketer instead.
        """
        if self.kind in (ArtifactKind.SIMPLE_SHARED, ArtifactKind.VERSIONED_SHARED):
            return [("-L", self.dirname), ("-l", self.library_name())]
        return []


class LibraryArtifactSelector:
    """Pick the artifact to link for a LibraryToLink.

    When several artifacts are available the first of static archive,
    PIC static archive, interface stub and dynamic library wins.
    """

    def select(self, library: LibraryToLink) -> Artifact | None:
        """Return the chosen artifact, or None if the library has none."""
        for path in (
            library.static_library,
            library.pic_static_library,
            library.interface_library,
            library.dynamic_library,
        ):
            if path is not None:
                return Artifact(path, classify(path), library.alwayslink)
        return None
