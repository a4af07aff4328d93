# SPDX-License-Identifier: MIT
"""Toolchain descriptors (GCC, Apple Clang)."""

from nativecfg.toolchains.gcc import gcc_toolchain
from nativecfg.toolchains.llvm import apple_clang_toolchain

__all__ = [
    "gcc_toolchain",
    "apple_clang_toolchain",
]
