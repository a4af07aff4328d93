# SPDX-License-Identifier: MIT
"""Toolchain description."""

from nativecfg.tools.toolchain import ToolchainDescriptor

__all__ = ["ToolchainDescriptor"]
