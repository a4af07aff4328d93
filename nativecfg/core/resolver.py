# SPDX-License-Identifier: MIT
"""Native build configuration resolution.

The ConfigurationResolver computes everything needed to compile and link a
unit that mixes managed code with C, C++ and Objective-C sources:

1. Merge toolchain baseline options with the caller's options
2. Apply link-mode and runtime-library fixups
3. Add include paths for the unit's own sources
4. Visit every native dependency (defines, includes, libraries)
5. Order the link line: static archives first, then everything else
6. De-duplicate every option list

Resolution is a pure function of its inputs. Each call builds fresh
accumulators, so concurrent calls for independent units need no locking,
and identical inputs always produce identical outputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from nativecfg.core.artifacts import has_header_extension
from nativecfg.core.deps import Runfiles, dependencies_from_list
from nativecfg.core.errors import ConfigError, ToolchainUnsupported
from nativecfg.core.flags import OptionSet
from nativecfg.core.visitor import Accumulator, DependencyVisitor
from nativecfg.core.whole_archive import WholeArchiveBracketer, unique_archives

if TYPE_CHECKING:
    from nativecfg.core.deps import NativeDependency
    from nativecfg.tools.toolchain import ToolchainDescriptor

logger = logging.getLogger(__name__)

LINKMODE_NORMAL = "normal"
LINKMODE_SHARED = "shared"
LINKMODE_PIE = "pie"
LINKMODE_PLUGIN = "plugin"
LINKMODE_C_SHARED = "c-shared"
LINKMODE_C_ARCHIVE = "c-archive"

LINK_MODES: tuple[str, ...] = (
    LINKMODE_NORMAL,
    LINKMODE_SHARED,
    LINKMODE_PIE,
    LINKMODE_PLUGIN,
    LINKMODE_C_SHARED,
    LINKMODE_C_ARCHIVE,
)

PIC_FLAG = "-fPIC"
STATIC_LIBSTDCXX_FLAG = "-static-libstdc++"
# Spellings of the dynamic C++ runtime dropped when it is linked statically
DYNAMIC_LIBSTDCXX_FLAGS: tuple[str, ...] = ("-lstdc++", "-lc++")


@dataclass(frozen=True)
class CompilationRequest:
    """The unit being compiled and its native dependencies.

    Attributes:
        srcs: Source files of the unit (managed and native).
        link_mode: How the final binary is linked; anything other than
            'normal' requires position-independent code.
        cppopts: Caller preprocessor options.
        copts: Caller C options (also used for Objective-C).
        cxxopts: Caller C++ options (also used for Objective-C++).
        clinkopts: Caller linker options.
        cdeps: Direct native dependencies, in link order.
    """

    srcs: tuple[str, ...] = ()
    link_mode: str = LINKMODE_NORMAL
    cppopts: tuple[str, ...] = ()
    copts: tuple[str, ...] = ()
    cxxopts: tuple[str, ...] = ()
    clinkopts: tuple[str, ...] = ()
    cdeps: tuple[NativeDependency, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompilationRequest:
        """Create a request from a dictionary (e.g. parsed JSON).

        Raises:
            ConfigError: If the link mode is unknown or a value is malformed.
        """
        if not isinstance(data, dict):
            raise ConfigError("request must be a mapping")
        link_mode = data.get("link_mode", LINKMODE_NORMAL)
        if link_mode not in LINK_MODES:
            raise ConfigError(f"unknown link mode: {link_mode!r}")

        lists: dict[str, tuple[str, ...]] = {}
        for key in ("srcs", "cppopts", "copts", "cxxopts", "clinkopts"):
            value = data.get(key, [])
            if not isinstance(value, list) or not all(
                isinstance(v, str) for v in value
            ):
                raise ConfigError(f"'{key}' must be a list of strings")
            lists[key] = tuple(value)

        cdeps = data.get("cdeps", [])
        if not isinstance(cdeps, list):
            raise ConfigError("'cdeps' must be a list")

        return cls(
            srcs=lists["srcs"],
            link_mode=link_mode,
            cppopts=lists["cppopts"],
            copts=lists["copts"],
            cxxopts=lists["cxxopts"],
            clinkopts=lists["clinkopts"],
            cdeps=tuple(dependencies_from_list(cdeps)),
        )


@dataclass
class ResolvedConfiguration:
    """Complete compile and link configuration of a unit.

    Option lists are flat token lists ready to be passed to the compiler
    or linker, free of duplicate entries.

    Attributes:
        cppopts: Preprocessor options.
        copts: C compiler options.
        cxxopts: C++ compiler options.
        objcopts: Objective-C compiler options.
        objcxxopts: Objective-C++ compiler options.
        clinkopts: Linker options.
        inputs: Files that must be available at build time.
        deps: Library files of the dependencies.
        runfiles: Runtime data to stage next to the built artifact.
    """

    cppopts: list[str] = field(default_factory=list)
    copts: list[str] = field(default_factory=list)
    cxxopts: list[str] = field(default_factory=list)
    objcopts: list[str] = field(default_factory=list)
    objcxxopts: list[str] = field(default_factory=list)
    clinkopts: list[str] = field(default_factory=list)
    inputs: list[str] = field(default_factory=list)
    deps: list[str] = field(default_factory=list)
    runfiles: Runfiles = field(default_factory=Runfiles)

    def as_hashable_tuple(self) -> tuple:
        """Return hashable representation for caching.

        Returns:
            A tuple containing all resolved data in a hashable form.
        """
        return (
            tuple(self.cppopts),
            tuple(self.copts),
            tuple(self.cxxopts),
            tuple(self.objcopts),
            tuple(self.objcxxopts),
            tuple(self.clinkopts),
            tuple(self.inputs),
            tuple(self.deps),
            self.runfiles.files,
        )


class ConfigurationResolver:
    """Resolve a CompilationRequest against a toolchain.

    The resolver keeps no state between calls; one instance may serve any
    number of requests, from any number of threads.

    Example:
        resolver = ConfigurationResolver()
        config = resolver.resolve(gcc_toolchain(), request)
        compile(config.copts + config.cppopts, ...)
    """

    def __init__(self, visitor: DependencyVisitor | None = None) -> None:
        self.visitor = visitor or DependencyVisitor()

    def resolve(
        self, toolchain: ToolchainDescriptor, request: CompilationRequest
    ) -> ResolvedConfiguration:
        """Compute the resolved configuration.

        Raises:
            ToolchainUnsupported: If the toolchain cannot compile native code.
            UnknownDependencyShape: If a dependency has no known capability.
        """
        if not toolchain.supports_native:
            raise ToolchainUnsupported(toolchain.name)

        separated = toolchain.get_separated_arg_flags()

        def options(*parts: tuple[str, ...]) -> OptionSet:
            opts = OptionSet(separated_arg_flags=separated)
            for part in parts:
                opts.extend(part)
            return opts

        cppopts = options(request.cppopts)
        copts = options(toolchain.c_compile_options, request.copts)
        cxxopts = options(toolchain.cxx_compile_options, request.cxxopts)
        objcopts = options(toolchain.objc_compile_options, request.copts)
        objcxxopts = options(toolchain.objcxx_compile_options, request.cxxopts)
        clinkopts = options(toolchain.link_options, request.clinkopts)

        # Linking both the static and the dynamic C++ runtime produces
        # duplicate symbols
        if STATIC_LIBSTDCXX_FLAG in clinkopts:
            clinkopts.remove(DYNAMIC_LIBSTDCXX_FLAGS)

        if request.link_mode != LINKMODE_NORMAL:
            for opts in (copts, cxxopts, objcopts, objcxxopts):
                opts.ensure(PIC_FLAG)

        acc = Accumulator(cppopts=cppopts, clinkopts=clinkopts)

        # Sources of one unit may live in different directories; with headers
        # among them, every source directory becomes an include root so
        # either <> or "" includes resolve relative to any of them.
        if any(has_header_extension(src) for src in request.srcs):
            for src in request.srcs:
                acc.add_include(str(PurePosixPath(src).parent))

        # The execution root is not part of any dependency's include paths
        acc.add_quote_include(".")

        for dep in request.cdeps:
            self.visitor.visit(dep, acc)

        # Some linkers skip libraries (including -l ones) that appear before
        # the objects with undefined symbols they provide, so archives go first.
        bracketer = WholeArchiveBracketer(toolchain.platform)
        link_line = OptionSet(separated_arg_flags=separated)
        link_line.extend_entries(bracketer.groups(unique_archives(acc.archives)))
        link_line.extend_entries(clinkopts.entries())

        logger.debug(
            "Options before de-duplication: cppopts=%s copts=%s cxxopts=%s "
            "objcopts=%s objcxxopts=%s clinkopts=%s",
            cppopts.tokens(),
            copts.tokens(),
            cxxopts.tokens(),
            objcopts.tokens(),
            objcxxopts.tokens(),
            link_line.tokens(),
        )

        return ResolvedConfiguration(
            cppopts=cppopts.deduplicated(),
            copts=copts.deduplicated(),
            cxxopts=cxxopts.deduplicated(),
            objcopts=objcopts.deduplicated(),
            objcxxopts=objcxxopts.deduplicated(),
            clinkopts=link_line.deduplicated(),
            inputs=list(acc.inputs),
            deps=list(acc.deps),
            runfiles=acc.runfiles,
        )


def resolve(
    toolchain: ToolchainDescriptor, request: CompilationRequest
) -> ResolvedConfiguration:
    """Resolve a request with a default ConfigurationResolver."""
    return ConfigurationResolver().resolve(toolchain, request)
