# SPDX-License-Identifier: MIT
"""GCC toolchain descriptor.

A fixed descriptor for GCC on ELF platforms (Linux, the BSDs). It does not
probe the host; callers that detect their toolchain build a
ToolchainDescriptor themselves.
"""

from __future__ import annotations

from nativecfg.tools.toolchain import ToolchainDescriptor

# Flags that take their argument as a separate token (e.g., "-isystem path"
# not "-isystempath"). These are common GCC/Unix compiler/linker flags where
# the argument must be a separate element.
SEPARATED_ARG_FLAGS: frozenset[str] = frozenset(
    [
        # Linker flags that take arguments
        "-Wl,-rpath",
        "-Wl,-soname",
        # Output-related
        "-o",
        "-MF",
        "-MT",
        "-MQ",
        # Linker script
        "-T",
        # Target selection
        "-target",
        "--target",
        # Include/library search modifiers
        "-include",
        "-isystem",
        "-isysroot",
        "-iquote",
        "-idirafter",
        "-L",
        "-l",
        # Passthrough
        "-Xlinker",
        "-Xpreprocessor",
        "-Xassembler",
    ]
)

CXX_STANDARD = "-std=c++17"


def gcc_toolchain(platform: str = "linux") -> ToolchainDescriptor:
    """Return a descriptor for GCC targeting an ELF platform.

    Args:
        platform: OS tag of the target (default: 'linux').
    """
    return ToolchainDescriptor(
        name="gcc",
        platform=platform,
        cxx_compile_options=(CXX_STANDARD,),
        objcxx_compile_options=(CXX_STANDARD,),
        link_options=("-pthread",),
        separated_arg_flags=SEPARATED_ARG_FLAGS,
    )
