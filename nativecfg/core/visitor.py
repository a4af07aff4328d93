# SPDX-License-Identifier: MIT
"""Extraction of compile and link information from native dependencies.

The DependencyVisitor dispatches on the capability variant of each
dependency and records what it contributes into an Accumulator. The
accumulator is created fresh for every resolution and threaded through the
visits explicitly, so dependency order fully determines output order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nativecfg.core.artifacts import ArtifactKind, LibraryArtifactSelector
from nativecfg.core.deps import CcDependency, ObjcDependency, Runfiles
from nativecfg.core.errors import UnknownDependencyShape
from nativecfg.core.flags import OptionSet

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nativecfg.core.deps import LinkingContext, NativeDependency

logger = logging.getLogger(__name__)

# Include kinds, each de-duplicated by path independently of the others
INCLUDE = "include"
QUOTE_INCLUDE = "quote_include"
SYSTEM_INCLUDE = "system_include"


@dataclass
class Accumulator:
    """Mutable state of a single resolution.

    Attributes:
        cppopts: Preprocessor options (defines and include paths).
        clinkopts: Linker options other than the static archive fragment.
        archives: (path, alwayslink) pairs for the whole-archive bracketer,
            in link order.
        inputs: Files that must be available to the build (ordered set).
        deps: Library files of the dependencies (ordered set).
        runfiles: Merged runtime data.
    """

    cppopts: OptionSet
    clinkopts: OptionSet
    archives: list[tuple[str, bool]] = field(default_factory=list)
    inputs: dict[str, None] = field(default_factory=dict)
    deps: dict[str, None] = field(default_factory=dict)
    runfiles: Runfiles = field(default_factory=Runfiles)

    def add_define(self, define: str) -> None:
        self.cppopts.append(f"-D{define}")

    def add_include(self, path: str) -> None:
        self.cppopts.add_unique(INCLUDE, path, f"-I{path}")

    def add_quote_include(self, path: str) -> None:
        self.cppopts.add_unique(QUOTE_INCLUDE, path, "-iquote", path)

    def add_system_include(self, path: str) -> None:
        self.cppopts.add_unique(SYSTEM_INCLUDE, path, "-isystem", path)

    def add_inputs(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.inputs.setdefault(path, None)

    def add_library_file(self, path: str) -> None:
        self.inputs.setdefault(path, None)
        self.deps.setdefault(path, None)

    def merge_runfiles(self, runfiles: Runfiles) -> None:
        self.runfiles = self.runfiles.merge(runfiles)


class DependencyVisitor:
    """Record the contribution of each dependency into an Accumulator.

    Raises UnknownDependencyShape for a dependency that is neither a
    CcDependency nor an ObjcDependency.
    """

    def __init__(self, selector: LibraryArtifactSelector | None = None) -> None:
        self.selector = selector or LibraryArtifactSelector()

    def visit(self, dep: NativeDependency, acc: Accumulator) -> None:
        if isinstance(dep, CcDependency):
            self._visit_cc(dep, acc)
        elif isinstance(dep, ObjcDependency):
            self._visit_objc(dep, acc)
        else:
            raise UnknownDependencyShape(getattr(dep, "label", repr(dep)))
        acc.merge_runfiles(dep.runfiles)

    def _visit_cc(self, dep: CcDependency, acc: Accumulator) -> None:
        ctx = dep.compilation_context
        acc.add_inputs(ctx.headers)
        for define in ctx.defines:
            acc.add_define(define)
        for inc in ctx.includes:
            acc.add_include(inc)
        for inc in ctx.quote_includes:
            acc.add_quote_include(inc)
        for inc in ctx.system_includes:
            acc.add_system_include(inc)
        self._visit_linking(dep.label, dep.linking_context, acc)

    def _visit_objc(self, dep: ObjcDependency, acc: Accumulator) -> None:
        for define in dep.defines:
            acc.add_define(define)
        for inc in dep.includes:
            acc.add_include(inc)
        for inc in dep.iquotes:
            acc.add_quote_include(inc)
        for inc in dep.system_includes:
            acc.add_system_include(inc)
        # Objective-C dependencies are linked as fully linked archives
        # elsewhere; nothing to add to the link line here.

    def _visit_linking(
        self, label: str, linking: LinkingContext, acc: Accumulator
    ) -> None:
        user_link_flags: list[str] = []
        for linker_input in linking.linker_inputs:
            user_link_flags.extend(linker_input.user_link_flags)
            for library in linker_input.libraries:
                artifact = self.selector.select(library)
                if artifact is None:
                    logger.warning(
                        "Library in '%s' has no artifact to link, skipping", label
                    )
                    continue

                acc.add_library_file(artifact.path)
                if artifact.kind is ArtifactKind.STATIC_ARCHIVE:
                    acc.archives.append((artifact.path, artifact.alwayslink))
                elif artifact.kind is ArtifactKind.VERSIONED_DYLIB:
                    logger.debug(
                        "Not linking versioned dylib %s; expecting an "
                        "unversioned symlink to be linked instead",
                        artifact.path,
                    )
                else:
                    acc.clinkopts.extend_entries(artifact.link_entries())
        acc.clinkopts.extend(user_link_flags)
