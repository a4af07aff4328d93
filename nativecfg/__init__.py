# SPDX-License-Identifier: MIT
"""
nativecfg: native build configuration for mixed-language compilation units.

Given the sources of a unit and its C/C++/Objective-C dependencies, nativecfg
computes the de-duplicated preprocessor, compiler and linker options and the
files the build must stage. It only computes; running the compiler and
linker is left to the caller.
"""

from __future__ import annotations

from nativecfg.configure.config import load_request, load_toolchain
from nativecfg.core.deps import (
    CcDependency,
    CompilationContext,
    LibraryToLink,
    LinkerInput,
    LinkingContext,
    NativeDependency,
    ObjcDependency,
    Runfiles,
)
from nativecfg.core.errors import (
    ConfigError,
    NativeCfgError,
    ToolchainUnsupported,
    UnknownDependencyShape,
)
from nativecfg.core.resolver import (
    LINKMODE_NORMAL,
    CompilationRequest,
    ConfigurationResolver,
    ResolvedConfiguration,
    resolve,
)
from nativecfg.toolchains import apple_clang_toolchain, gcc_toolchain
from nativecfg.tools.toolchain import ToolchainDescriptor

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Resolution
    "resolve",
    "ConfigurationResolver",
    "CompilationRequest",
    "ResolvedConfiguration",
    "LINKMODE_NORMAL",
    # Dependencies
    "NativeDependency",
    "CcDependency",
    "ObjcDependency",
    "CompilationContext",
    "LinkingContext",
    "LinkerInput",
    "LibraryToLink",
    "Runfiles",
    # Toolchains
    "ToolchainDescriptor",
    "gcc_toolchain",
    "apple_clang_toolchain",
    # Configuration
    "load_toolchain",
    "load_request",
    # Errors
    "NativeCfgError",
    "ToolchainUnsupported",
    "UnknownDependencyShape",
    "ConfigError",
]
