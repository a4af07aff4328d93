# SPDX-License-Identifier: MIT
"""Apple Clang toolchain descriptor.

Apple's ld64 differs from GNU ld in the ways nativecfg cares about: it has
no whole-archive region (``-force_load`` is used per archive) and the C++
runtime is libc++.
"""

from __future__ import annotations

from nativecfg.toolchains.gcc import SEPARATED_ARG_FLAGS as GCC_SEPARATED_ARG_FLAGS
from nativecfg.tools.toolchain import ToolchainDescriptor

SEPARATED_ARG_FLAGS: frozenset[str] = GCC_SEPARATED_ARG_FLAGS | frozenset(
    [
        # Framework/library paths (macOS)
        "-F",
        "-framework",
        "-iframework",
        # Architecture
        "-arch",
        "-Wl,-install_name",
        "-Wl,-force_load",
    ]
)

CXX_OPTIONS: tuple[str, ...] = ("-std=c++17", "-stdlib=libc++")


def apple_clang_toolchain(platform: str = "darwin") -> ToolchainDescriptor:
    """Return a descriptor for Apple Clang.

    Args:
        platform: OS tag of the target ('darwin' or 'ios').
    """
    return ToolchainDescriptor(
        name="apple-clang",
        platform=platform,
        cxx_compile_options=CXX_OPTIONS,
        objc_compile_options=("-fobjc-exceptions",),
        objcxx_compile_options=CXX_OPTIONS + ("-fobjc-exceptions",),
        separated_arg_flags=SEPARATED_ARG_FLAGS,
    )
